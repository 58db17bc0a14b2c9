from revlines.reader import (
    BackwardLineScanner,
    EncodingProfile,
    IOFailure,
    UnsupportedEncodingError,
    UseAfterCloseError,
    openScanner,
    resolveEncoding,
)

__all__ = [BackwardLineScanner, EncodingProfile, IOFailure, UnsupportedEncodingError, UseAfterCloseError, openScanner, resolveEncoding]  # type: ignore
