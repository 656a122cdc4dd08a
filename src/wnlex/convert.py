"""Convert a WordNet dict/ directory into the lexicon database.

Index files are converted first so that the sense index is complete before
any data file is read. Morph files do not use the sense index.

Usage:
    python -m wnlex.convert \\
        --datadir /usr/share/wordnet/dict --db lexicon.db --error-limit 50
"""

import argparse
from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from pathlib import Path
import sys

import polars as pl
from pydantic import BaseModel, ConfigDict

from wnlex.data_models.lexicon_store import LexiconStore, LexiconTable
from wnlex.data_models.pos import PartOfSpeech
from wnlex.errors import ErrorKind, ErrorLimitExceeded
from wnlex.parse.index_line import parse_index_line
from wnlex.parse.morph_line import parse_morph_line
from wnlex.parse.result import ParseFailure, ParseResult
from wnlex.parse.synset_line import parse_synset_line
from wnlex.sense_index import SenseIndex

# Records buffered before each write to the store
COMMIT_THRESHOLD = 2000

LineParser = Callable[[str, int, str], ParseResult]

INDEX_FILES: dict[str, str] = {
    "index.noun": PartOfSpeech.noun.value,
    "index.verb": PartOfSpeech.verb.value,
    "index.adj": PartOfSpeech.adjective.value,
    "index.adv": PartOfSpeech.adverb.value,
}
MORPH_FILES: dict[str, str] = {
    "adj.exc": PartOfSpeech.adjective.value,
    "adv.exc": PartOfSpeech.adverb.value,
    "noun.exc": PartOfSpeech.noun.value,
    "verb.exc": PartOfSpeech.verb.value,
    "cousin.exc": "",  # older WordNet releases only
}
DATA_FILES: dict[str, str] = {
    "data.adj": PartOfSpeech.adjective.value,
    "data.adv": PartOfSpeech.adverb.value,
    "data.noun": PartOfSpeech.noun.value,
    "data.verb": PartOfSpeech.verb.value,
}

_DIAGNOSTIC_LABELS = {
    LexiconTable.index: "Index entry",
    LexiconTable.morph: "Morph entry",
    LexiconTable.data: "Synset",
}


class FileReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    file: str
    fileset: str
    entries: int = 0
    errors: int = 0
    skipped: bool = False  # file not present in the data directory


@dataclass
class Fileset:
    name: str
    table: LexiconTable
    files: dict[str, str]
    parser: LineParser


def filesets(senses: SenseIndex) -> list[Fileset]:
    """The file sets in conversion order."""
    return [
        Fileset(
            "index",
            LexiconTable.index,
            INDEX_FILES,
            partial(parse_index_line, senses=senses),
        ),
        Fileset("morph", LexiconTable.morph, MORPH_FILES, parse_morph_line),
        Fileset(
            "data",
            LexiconTable.data,
            DATA_FILES,
            partial(parse_synset_line, senses=senses),
        ),
    ]


def _undecodable(raw: bytes, exc: UnicodeDecodeError, line_number: int) -> ParseResult:
    return ParseResult(
        failure=ParseFailure(
            kind=ErrorKind.malformed_field,
            message=f"non-ASCII byte at column {exc.start}",
            remainder=raw.decode("ascii", errors="replace").rstrip("\r\n"),
            line_number=line_number,
        )
    )


def convert_file(
    path: Path,
    fileset: Fileset,
    pos: str,
    store: LexiconStore,
    error_limit: int = 0,
    verbose: bool = False,
) -> FileReport:
    """Convert one file into ``fileset.table``.

    Lines starting with whitespace (the license header) are skipped. A line
    that fails to parse, or is not ASCII, is reported and dropped;
    ErrorLimitExceeded is raised once ``error_limit`` (if non-zero) failures
    have been seen in this file.
    """
    label = _DIAGNOSTIC_LABELS[fileset.table]
    entries = errors = 0
    batch: list[tuple[str, str]] = []
    with open(path, "rb") as f:
        for line_number, raw in enumerate(f, 1):
            try:
                line = raw.decode("ascii").rstrip("\r\n")
            except UnicodeDecodeError as exc:
                result = _undecodable(raw, exc, line_number)
            else:
                if not line or line[0].isspace():
                    continue
                result = fileset.parser(line, line_number, pos)

            if result.failure is not None:
                errors += 1
                print(f"\n  {label} did not parse: {result.failure.describe()}")
                if error_limit and errors >= error_limit:
                    raise ErrorLimitExceeded(path.name, errors)
                continue

            batch.append(result.pair())
            entries += 1
            if len(batch) >= COMMIT_THRESHOLD:
                store.upsert_many(fileset.table, batch)
                batch = []
                if verbose:
                    print(f" {entries}", end="", flush=True)

    if batch:
        store.upsert_many(fileset.table, batch)
    return FileReport(
        file=path.name, fileset=fileset.name, entries=entries, errors=errors
    )


def convert(
    datadir: Path,
    store: LexiconStore,
    error_limit: int = 0,
    senses: SenseIndex | None = None,
    verbose: bool = False,
) -> list[FileReport]:
    """Convert every known file under ``datadir`` into ``store``.

    The sense index is frozen once the index files are done.
    """
    if senses is None:
        senses = SenseIndex()
    reports: list[FileReport] = []
    for fileset in filesets(senses):
        print(f"Converting {fileset.name} files...")
        store.truncate(fileset.table)
        for filename, pos in fileset.files.items():
            path = datadir / filename
            if not path.exists():
                print(f"    {filename}... missing: skipped")
                reports.append(
                    FileReport(file=filename, fileset=fileset.name, skipped=True)
                )
                continue
            print(f"    {filename}...", end="", flush=True)
            report = convert_file(path, fileset, pos, store, error_limit, verbose)
            print(f" done ({report.entries} entries, {report.errors} errors).")
            reports.append(report)
        if fileset.table is LexiconTable.index:
            senses.freeze()
            print(f"  Sense index holds {len(senses)} senses")
    return reports


def check_datadir(datadir: Path) -> str | None:
    """Return a reason ``datadir`` is unusable, or None if it looks right."""
    if not datadir.exists():
        return f"Directory '{datadir}' does not exist"
    if not datadir.is_dir():
        return f"'{datadir}' is not a directory"
    if not (datadir / "data.noun").exists():
        return f"'{datadir}' doesn't seem to contain the necessary files"
    return None


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Convert WordNet data files into a lexicon database"
    )
    parser.add_argument(
        "--datadir", required=True, help="WordNet dict/ directory with data.noun etc."
    )
    parser.add_argument("--db", default="lexicon.db", help="Output SQLite path")
    parser.add_argument(
        "--error-limit",
        type=int,
        default=0,
        help="Quit after this many errors in one file (0 = no limit)",
    )
    parser.add_argument(
        "--overwrite", action="store_true", help="Replace an existing database"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help=f"Print a running entry count every {COMMIT_THRESHOLD} records",
    )
    args = parser.parse_args()

    datadir = Path(args.datadir)
    problem = check_datadir(datadir)
    if problem is not None:
        sys.exit(problem)

    db_path = Path(args.db)
    if db_path.exists():
        if not args.overwrite:
            sys.exit(f"{db_path} already exists; pass --overwrite to replace it")
        print(f"Warning: existing data in {db_path} will be overwritten.")
        db_path.unlink()

    store = LexiconStore(db_path)
    try:
        reports = convert(
            datadir, store, error_limit=args.error_limit, verbose=args.verbose
        )
    except ErrorLimitExceeded as exc:
        sys.exit(f"\nAborted: {exc}")

    df = pl.DataFrame([r.model_dump() for r in reports])
    print(df)
    print(
        f"Done. {df['entries'].sum()} entries, {df['errors'].sum()} errors "
        f"written to {db_path}"
    )


if __name__ == "__main__":
    main()
