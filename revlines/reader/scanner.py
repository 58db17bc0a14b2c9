import os
from typing import List, Optional, Tuple, Union

import requests

from revlines.reader.config import DEFAULT_BLOCK_SIZE, Config
from revlines.reader.encoding import ByteWidth, EncodingProfile, resolveEncoding
from revlines.reader.exceptions import IOFailure, UseAfterCloseError
from revlines.reader.http_source import HTTPByteSource
from revlines.reader.log import logerror
from revlines.reader.source import ByteSource, BytesByteSource, FileByteSource
from revlines.utils.session import newSession


class BackwardLineScanner:
    """Reads the lines of a file from the last one to the first.

    Blocks of `block_size` bytes are pulled from the end of `source` towards
    its start and prepended to a window of unconsumed bytes, which is
    searched backwards for \\r\\n, \\n and \\r. Nothing before the current
    block is ever read, so memory use is bounded by the longest line.

        with BackwardLineScanner(FileByteSource("dump.xml"), 4096, "utf-8") as scanner:
            last = scanner.readLine()
    """

    def __init__(
        self,
        source: ByteSource,
        block_size: int = DEFAULT_BLOCK_SIZE,
        encoding: Optional[Union[str, EncodingProfile]] = None,
        errors: str = "strict",
        config: Config = None,
    ):
        self.source = source
        self.config = config or Config()
        self.closed = False
        try:
            if block_size <= 0:
                raise ValueError(f"block_size must be positive, got {block_size}")
            self.profile = resolveEncoding(encoding)
            self.length = source.length()
        except Exception:
            self.close()
            raise
        self.errors = errors

        unit = self.profile.unitSize
        self.unit = unit
        # whole code units only, so every block starts on a unit boundary
        self.block_size = -(-block_size // unit) * unit
        self.terminators = self.profile.terminators()
        # head bytes that cannot be classified before the previous block is in
        self.carry = len(self.terminators[0])
        if self.profile.width is ByteWidth.VARIABLE_DOUBLE:
            self.carry += 1

        # unconsumed bytes are self.buffer[self.head:], free space before head
        self.buffer = bytearray()
        self.head = 0
        self.file_pos = self.length
        # a dangling half code unit at EOF is never a terminator candidate
        self.cursor = -(self.length % unit)
        self.finished = self.length == 0
        self.at_eof = True
        self.failure: Optional[IOFailure] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __iter__(self):
        while True:
            line = self.readLine()
            if line is None:
                return
            yield line

    def close(self) -> None:
        """Release the byte source; safe to call more than once"""
        if self.closed:
            return
        self.closed = True
        self.buffer = bytearray()
        self.head = 0
        try:
            self.source.close()
        except Exception as e:
            logerror(
                self.config,
                to_stdout=True,
                text=f"Closing {self.source!r} failed: {e}",
            )

    def checkReadable(self) -> None:
        if self.closed:
            raise UseAfterCloseError(self.source.name)
        if self.failure is not None:
            raise self.failure

    def readLine(self) -> Optional[str]:
        """Return the next line towards the start of the file, None when done"""
        self.checkReadable()

        while not self.finished:
            found = self.findTerminator()
            if found is None:
                if self.file_pos > 0:
                    self.loadBlock()
                    continue
                # start of file: what is left is the first line
                line = bytes(self.buffer[self.head :])
                self.buffer = bytearray()
                self.head = 0
                self.finished = True
                return self.decode(line)

            size, end = found
            line = bytes(self.buffer[end:])
            del self.buffer[end - size :]
            self.cursor = end - size
            if self.at_eof:
                self.at_eof = False
                if not line:
                    # the file ends with a terminator
                    continue
            return self.decode(line)
        return None

    def readLines(self, lineCount: int) -> List[str]:
        """Return up to `lineCount` lines, last line of the file first"""
        self.checkReadable()
        if lineCount < 0:
            raise ValueError("lineCount < 0")
        lines = []
        for _ in range(lineCount):
            line = self.readLine()
            if line is None:
                break
            lines.append(line)
        return lines

    def tailText(self, lineCount: int) -> str:
        """Return the last `lineCount` lines in file order, each ended by os.linesep"""
        lines = self.readLines(lineCount)
        lines.reverse()
        return "".join(line + os.linesep for line in lines)

    def findTerminator(self) -> Optional[Tuple[int, int]]:
        """Scan backwards from the cursor; (size, end) of the terminator found,
        None if the window holds no more that can be confirmed"""
        buffer = self.buffer
        head = self.head
        end = self.cursor
        # below `carry` a match may depend on bytes not loaded yet
        limit = head + (self.unit if self.file_pos == 0 else max(self.unit, self.carry))
        while end >= limit:
            last = buffer[end - 1]
            if (
                end - 2 >= head
                and last in (0x0A, 0x0D)
                and self.profile.formsDoubleByteUnit(buffer[end - 2], last)
            ):
                end -= 2
                continue
            for terminator in self.terminators:
                start = end - len(terminator)
                if start < head or buffer[start:end] != terminator:
                    continue
                if start > head and self.profile.formsDoubleByteUnit(
                    buffer[start - 1], buffer[start]
                ):
                    continue
                return len(terminator), end
            end -= self.unit
        self.cursor = end
        return None

    def loadBlock(self) -> None:
        """Put the block that precedes the window in front of it"""
        start = ((self.file_pos - 1) // self.block_size) * self.block_size
        size = self.file_pos - start
        try:
            block = self.source.readBlock(self.file_pos, size)
        except IOFailure as e:
            self.failure = e
            raise
        except OSError as e:
            self.failure = IOFailure(self.source.name, self.file_pos, str(e))
            raise self.failure from e
        if len(block) != size:
            self.failure = IOFailure(
                self.source.name,
                self.file_pos,
                f"expected {size} bytes, got {len(block)}",
            )
            raise self.failure
        if size > self.head:
            # at least double the buffer so a long line is copied O(log n) times
            spare = max(size, len(self.buffer))
            self.buffer = bytearray(spare) + self.buffer[self.head :]
            self.cursor += spare - self.head
            self.head = spare
        self.head -= size
        self.buffer[self.head : self.head + size] = block
        self.file_pos = start

    def decode(self, line: bytes) -> str:
        return line.decode(self.profile.name, self.errors)


def openSource(
    target: Union[str, bytes, os.PathLike],
    config: Config,
    session: requests.Session = None,
) -> ByteSource:
    if isinstance(target, (bytes, bytearray)):
        return BytesByteSource(target)
    if isinstance(target, str) and target.startswith(("http://", "https://")):
        if session is None:
            return HTTPByteSource(target, newSession(config), owns_session=True)
        return HTTPByteSource(target, session)
    return FileByteSource(target)


def openScanner(
    target: Union[str, bytes, os.PathLike, ByteSource],
    config: Config = None,
    session: requests.Session = None,
) -> BackwardLineScanner:
    """Open a path, an http(s) URL or a bytes buffer with the settings of `config`"""
    config = config or Config()
    if isinstance(target, ByteSource):
        source = target
    else:
        source = openSource(target, config, session)
    return BackwardLineScanner(
        source,
        block_size=config.block_size,
        encoding=config.encoding or None,
        errors=config.errors,
        config=config,
    )
