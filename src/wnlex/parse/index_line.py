"""Parse lines of the index.<pos> files.

Line layout::

    lemma pos synset_cnt p_cnt [ptr_symbol...] sense_cnt tagsense_cnt synset_offset...
"""

import re

from wnlex.data_models.records import IndexRecord
from wnlex.errors import ErrorKind, LineParseError
from wnlex.parse.result import ParseResult, run_line
from wnlex.scanner import Scanner
from wnlex.sense_index import SenseIndex

INDEX_ENTRY_RE = re.compile(r"(\S+)\s(\w)\s(\d+)\s(\d+)\s")
POINTER_SYMBOL_RE = re.compile(r"\S{1,2}\s")
SENSE_COUNTS_RE = re.compile(r"(\d+)\s(\d+)\s")
SYNSET_OFFSET_RE = re.compile(r"(\d{8})(?:\s+|$)")


def _parse(scanner: Scanner, senses: SenseIndex) -> IndexRecord:
    m = scanner.match(INDEX_ENTRY_RE)
    if m is None:
        raise LineParseError(
            ErrorKind.malformed_field, "couldn't parse entry", scanner.remainder()
        )
    lemma, pos, polycnt, pcnt = m.group(1), m.group(2), m.group(3), m.group(4)

    # Pointer symbols are repeated in the data files; only skip them here
    for i in range(int(pcnt)):
        if not scanner.skip(POINTER_SYMBOL_RE):
            raise LineParseError(
                ErrorKind.malformed_field,
                f"couldn't skip pointer {i}",
                scanner.remainder(),
            )

    m = scanner.match(SENSE_COUNTS_RE)
    if m is None:
        raise LineParseError(
            ErrorKind.malformed_field,
            "couldn't parse sense counts",
            scanner.remainder(),
        )
    sense_count = int(m.group(1))

    offsets: list[str] = []
    for i in range(sense_count):
        m = scanner.match(SYNSET_OFFSET_RE)
        if m is None:
            raise LineParseError(
                ErrorKind.malformed_field,
                f"couldn't parse synset {i}",
                scanner.remainder(),
            )
        offsets.append(m.group(1))

    # Only a fully parsed line touches the sense index
    for number, offset in enumerate(offsets):
        senses.put(offset, pos, lemma, number)

    return IndexRecord(
        lemma=lemma, pos=pos, polysemy_count=int(polycnt), offsets=offsets
    )


def parse_index_line(
    line: str, line_number: int, pos: str | None, senses: SenseIndex
) -> ParseResult:
    """Parse one index line and number its senses into ``senses``.

    ``pos`` is unused; the part of speech is read from the line itself.
    """
    scanner = Scanner(line)
    return run_line(lambda: _parse(scanner, senses), line_number)
