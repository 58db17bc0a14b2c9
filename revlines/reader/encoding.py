import codecs
import enum
import locale
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from revlines.reader.exceptions import UnsupportedEncodingError

ByteRanges = Tuple[Tuple[int, int], ...]


class ByteWidth(enum.Enum):
    FIXED1 = 1
    FIXED2_BE = 2
    FIXED2_LE = 3
    VARIABLE_DOUBLE = 4


@dataclass(frozen=True)
class EncodingProfile:
    """How a text encoding has to be scanned for line terminators.

    `name` is the Python codec used to decode lines. For VARIABLE_DOUBLE
    encodings `lead_bytes` and `trail_bytes` hold the inclusive byte ranges
    of the first and second byte of a two-byte character."""

    name: str
    width: ByteWidth
    lead_bytes: ByteRanges = ()
    trail_bytes: ByteRanges = ()

    @property
    def unitSize(self) -> int:
        """Bytes per code unit, the step of the backward scan"""
        if self.width in (ByteWidth.FIXED2_BE, ByteWidth.FIXED2_LE):
            return 2
        return 1

    def formsDoubleByteUnit(self, lead: int, byte: int) -> bool:
        """True if `byte` right after `lead` is the second half of a character,
        i.e. `byte` must not be read as a line terminator"""
        if self.width is not ByteWidth.VARIABLE_DOUBLE:
            return False
        return _inRanges(lead, self.lead_bytes) and _inRanges(byte, self.trail_bytes)

    def terminators(self) -> Tuple[bytes, ...]:
        """Encoded \\r\\n, \\n and \\r; the order is the matching order"""
        return tuple(sep.encode(self.name) for sep in ("\r\n", "\n", "\r"))


def _inRanges(byte: int, ranges: ByteRanges) -> bool:
    for low, high in ranges:
        if low <= byte <= high:
            return True
    return False


SHIFT_JIS_LEAD = ((0x81, 0x9F), (0xE0, 0xFC))
SHIFT_JIS_TRAIL = ((0x40, 0x7E), (0x80, 0xFC))
EUC_TRAIL = ((0xA1, 0xFE),)

# keyed by the codec name codecs.lookup() reports
SUPPORTED_ENCODINGS: Dict[str, EncodingProfile] = {
    profile.name: profile
    for profile in [
        EncodingProfile("ascii", ByteWidth.FIXED1),
        EncodingProfile("utf-8", ByteWidth.FIXED1),
        EncodingProfile("iso8859-1", ByteWidth.FIXED1),
        EncodingProfile("iso8859-2", ByteWidth.FIXED1),
        EncodingProfile("iso8859-15", ByteWidth.FIXED1),
        EncodingProfile("cp1250", ByteWidth.FIXED1),
        EncodingProfile("cp1251", ByteWidth.FIXED1),
        EncodingProfile("cp1252", ByteWidth.FIXED1),
        EncodingProfile("koi8-r", ByteWidth.FIXED1),
        EncodingProfile("utf-16-be", ByteWidth.FIXED2_BE),
        EncodingProfile("utf-16-le", ByteWidth.FIXED2_LE),
        EncodingProfile(
            "shift_jis", ByteWidth.VARIABLE_DOUBLE, SHIFT_JIS_LEAD, SHIFT_JIS_TRAIL
        ),
        EncodingProfile(
            "cp932", ByteWidth.VARIABLE_DOUBLE, SHIFT_JIS_LEAD, SHIFT_JIS_TRAIL
        ),
        EncodingProfile(
            "gbk",
            ByteWidth.VARIABLE_DOUBLE,
            ((0x81, 0xFE),),
            ((0x40, 0x7E), (0x80, 0xFE)),
        ),
        EncodingProfile(
            "cp949",
            ByteWidth.VARIABLE_DOUBLE,
            ((0x81, 0xFE),),
            ((0x41, 0x5A), (0x61, 0x7A), (0x81, 0xFE)),
        ),
        EncodingProfile(
            "cp950",
            ByteWidth.VARIABLE_DOUBLE,
            ((0x81, 0xFE),),
            ((0x40, 0x7E), (0xA1, 0xFE)),
        ),
        EncodingProfile(
            "euc_jp",
            ByteWidth.VARIABLE_DOUBLE,
            ((0x8E, 0x8F), (0xA1, 0xFE)),
            EUC_TRAIL,
        ),
        EncodingProfile("euc_kr", ByteWidth.VARIABLE_DOUBLE, ((0xA1, 0xFE),), EUC_TRAIL),
    ]
}

# Java charset names that Python spells differently
ALIASES = {
    "windows-31j": "cp932",
    "x-windows-949": "cp949",
    "x-windows-950": "cp950",
}


def defaultEncoding() -> str:
    """Platform default, the one open() would use"""
    return locale.getpreferredencoding(False)


def isSingleByteCodec(name: str) -> bool:
    """True when every byte decodes on its own to exactly one character,
    so no byte can be part of a longer sequence"""
    try:
        b"".decode(name)
    except LookupError:
        # bytes-to-bytes codecs such as hex or base64
        return False
    for byte in range(256):
        decoder = codecs.getincrementaldecoder(name)(errors="replace")
        try:
            text = decoder.decode(bytes([byte]))
        except (UnicodeError, ValueError):
            return False
        if not isinstance(text, str) or len(text) != 1:
            return False
    return True


def resolveEncoding(
    encoding: Optional[Union[str, EncodingProfile]] = None
) -> EncodingProfile:
    """Find the scan profile for an encoding name, None or "" for the platform default"""
    if isinstance(encoding, EncodingProfile):
        return encoding
    requested = encoding or defaultEncoding()
    try:
        codec = codecs.lookup(ALIASES.get(requested.lower(), requested))
    except LookupError:
        raise UnsupportedEncodingError(requested, "unknown encoding")

    if codec.name == "utf-16":
        raise UnsupportedEncodingError(
            requested,
            "for UTF-16 the byte order has to be given (use UTF-16BE or UTF-16LE)",
        )
    if codec.name in SUPPORTED_ENCODINGS:
        return SUPPORTED_ENCODINGS[codec.name]
    if isSingleByteCodec(codec.name):
        return EncodingProfile(codec.name, ByteWidth.FIXED1)
    raise UnsupportedEncodingError(requested, "it cannot be scanned backwards safely")
