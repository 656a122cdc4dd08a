"""Parse lines of the <pos>.exc morphological exception files."""

from wnlex.data_models.records import MorphRecord
from wnlex.errors import ErrorKind, LineParseError
from wnlex.parse.result import ParseResult, run_line


def _parse(line: str, pos: str) -> MorphRecord:
    tokens = line.split()
    if len(tokens) != 2:
        raise LineParseError(
            ErrorKind.malformed_field,
            f"expected 2 fields, found {len(tokens)}",
            line,
        )
    form, base = tokens
    return MorphRecord(form=form, pos=pos, base=base)


def parse_morph_line(line: str, line_number: int, pos: str) -> ParseResult:
    return run_line(lambda: _parse(line, pos), line_number)
