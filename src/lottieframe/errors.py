from enum import Enum


class ErrorKind(Enum):
    NOT_FOUND = "not_found"
    IO = "io"
    DECODE = "decode"
    PARSE = "parse"
    CANCELLED = "cancelled"


class LottieError(Exception):
    kind = ErrorKind.PARSE

    def __init__(self, message, kind=None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class CompositionLoadError(LottieError):
    """The document could not be located, read or decoded."""
    kind = ErrorKind.IO


class CompositionParseError(LottieError):
    """The decoded document does not have the expected structure."""
    kind = ErrorKind.PARSE


class LoadCancelledError(LottieError):
    kind = ErrorKind.CANCELLED
