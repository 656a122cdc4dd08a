"""Error types raised while converting WordNet files."""

from enum import Enum


class ErrorKind(str, Enum):
    malformed_field = "malformed_field"
    unresolved_sense = "unresolved_sense"
    trailing_data = "trailing_data"


class LineParseError(ValueError):
    """A single line could not be turned into a record.

    Caught at the line boundary; the line is dropped and counted.
    """

    def __init__(self, kind: ErrorKind, message: str, remainder: str = "") -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.remainder = remainder


class UnresolvedSense(LineParseError):
    def __init__(self, message: str, remainder: str = "") -> None:
        super().__init__(ErrorKind.unresolved_sense, message, remainder)


class SenseIndexConflict(ValueError):
    """A sense index key was assigned a sense number twice."""


class SenseIndexFrozen(RuntimeError):
    """Write attempted after the index phase finished."""


class ErrorLimitExceeded(RuntimeError):
    def __init__(self, filename: str, errors: int) -> None:
        super().__init__(f"Too many errors in {filename} ({errors})")
        self.filename = filename
        self.errors = errors
