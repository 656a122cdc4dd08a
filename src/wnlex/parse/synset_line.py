"""Parse lines of the data.<pos> files into synset records.

Line layout::

    offset lex_filenum ss_type w_cnt word lex_id [word lex_id...] p_cnt
        [ptr...] [frames...] | gloss

Word sense numbers come from the sense index built from the index files, so
every index file must be parsed before any data file.
"""

import re

from wnlex.data_models.pos import PartOfSpeech, normalize_pos
from wnlex.data_models.records import Pointer, SynsetRecord, VerbFrame, WordSense
from wnlex.errors import ErrorKind, LineParseError, UnresolvedSense
from wnlex.parse.result import ParseResult, run_line
from wnlex.scanner import Scanner
from wnlex.sense_index import SenseIndex

SYNSET_RE = re.compile(r"(\d{8})\s(\d{2})\s(\w)\s([0-9a-fA-F]{2})\s")
SYN_WORD_RE = re.compile(r"(\S+)\s+(?:([0-9a-fA-F])(?:\s+|$))?")
SYN_PTR_CNT_RE = re.compile(r"(\d{3})(?:\s+|$)")
SYN_PTR_RE = re.compile(r"(\S{1,2})\s(\d{8})\s(\w)\s([0-9a-fA-F]{4})(?:\s+|$)")
SYN_FRAME_CNT_RE = re.compile(r"\s*(\d{2})(?:\s+|$)")
SYN_FRAME_RE = re.compile(r"\+\s(\d{2})\s([0-9a-fA-F]{2})(?:\s+|$)")
SYN_GLOSS_RE = re.compile(r"\s*\|(.*)$")


def _fail(scanner: Scanner, message: str) -> LineParseError:
    return LineParseError(ErrorKind.malformed_field, message, scanner.remainder())


def _parse(scanner: Scanner, pos: str, senses: SenseIndex) -> SynsetRecord:
    m = scanner.match(SYNSET_RE)
    if m is None:
        raise _fail(scanner, "unable to parse synset")
    offset, filenum, synset_type, word_count = m.groups()

    words: list[WordSense] = []
    for i in range(int(word_count, 16)):
        m = scanner.match(SYN_WORD_RE)
        if m is None:
            raise _fail(scanner, f"unable to parse word {i}")
        word = m.group(1)
        try:
            number = senses.get(offset, pos, word)
        except UnresolvedSense as err:
            raise UnresolvedSense(err.message, scanner.remainder()) from err
        words.append(WordSense(word=word, sense_number=number))

    m = scanner.match(SYN_PTR_CNT_RE)
    if m is None:
        raise _fail(scanner, "couldn't parse pointer count")
    pointers: list[Pointer] = []
    for i in range(int(m.group(1))):
        m = scanner.match(SYN_PTR_RE)
        if m is None:
            raise _fail(scanner, f"unable to parse synptr {i}")
        pointers.append(
            Pointer(
                symbol=m.group(1),
                target_offset=m.group(2),
                target_pos=m.group(3),
                lex_ids=m.group(4),
            )
        )

    frames: list[VerbFrame] = []
    if synset_type == PartOfSpeech.verb.value:
        m = scanner.match(SYN_FRAME_CNT_RE)
        if m is None:
            raise _fail(scanner, "couldn't parse frame count")
        for i in range(int(m.group(1))):
            m = scanner.match(SYN_FRAME_RE)
            if m is None:
                raise _fail(scanner, f"unable to parse frame {i}")
            frames.append(VerbFrame(frame_number=m.group(1), word_index=m.group(2)))

    gloss: str | None = None
    m = scanner.match(SYN_GLOSS_RE)
    if m is not None:
        gloss = m.group(1).strip() or None

    # The gloss pattern runs to end of line, so this should never trigger
    if not scanner.at_end():
        raise LineParseError(
            ErrorKind.trailing_data,
            "trailing miscellaneous found at end of entry",
            scanner.remainder(),
        )

    return SynsetRecord(
        offset=offset,
        pos=normalize_pos(synset_type),
        file_number=filenum,
        words=words,
        pointers=pointers,
        frames=frames,
        gloss=gloss,
    )


def parse_synset_line(
    line: str, line_number: int, pos: str, senses: SenseIndex
) -> ParseResult:
    """Parse one data line, resolving each word's sense through ``senses``.

    ``pos`` is the part of speech of the data file, which is what the sense
    index is keyed on; satellite synsets in data.adj therefore resolve
    against the adjective index.
    """
    scanner = Scanner(line)
    return run_line(lambda: _parse(scanner, pos, senses), line_number)
