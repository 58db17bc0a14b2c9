from .config import Config, loadConfig, newConfig, saveConfig
from .encoding import ByteWidth, EncodingProfile, resolveEncoding
from .exceptions import IOFailure, UnsupportedEncodingError, UseAfterCloseError
from .scanner import BackwardLineScanner, openScanner
from .source import ByteSource, BytesByteSource, FileByteSource

__all__ = [Config, loadConfig, newConfig, saveConfig, ByteWidth, EncodingProfile, resolveEncoding, IOFailure, UnsupportedEncodingError, UseAfterCloseError, BackwardLineScanner, openScanner, ByteSource, BytesByteSource, FileByteSource]  # type: ignore
