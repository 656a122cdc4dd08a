"""Per-line parse outcome: a record, or a failure describing why not."""

from collections.abc import Callable
from typing import TypeVar

from pydantic import BaseModel, ConfigDict

from wnlex.data_models.records import IndexRecord, MorphRecord, SynsetRecord
from wnlex.errors import ErrorKind, LineParseError

# How much of the unconsumed line a diagnostic shows
REMAINDER_PREVIEW = 20

R = TypeVar("R", IndexRecord, MorphRecord, SynsetRecord)


class ParseFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    remainder: str
    line_number: int

    def describe(self) -> str:
        return (
            f"{self.message} at '{self.remainder[:REMAINDER_PREVIEW]}...' "
            f"(line {self.line_number}) [{self.kind.value}]"
        )


class ParseResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    record: IndexRecord | MorphRecord | SynsetRecord | None = None
    failure: ParseFailure | None = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    def pair(self) -> tuple[str, str]:
        if self.record is None:
            raise ValueError("Failed parse has no record")
        return self.record.pair()


def run_line(fn: Callable[[], R], line_number: int) -> ParseResult:
    """Call a line parser, turning a LineParseError into a failure result."""
    try:
        return ParseResult(record=fn())
    except LineParseError as err:
        return ParseResult(
            failure=ParseFailure(
                kind=err.kind,
                message=err.message,
                remainder=err.remainder,
                line_number=line_number,
            )
        )
