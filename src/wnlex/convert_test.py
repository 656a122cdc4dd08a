from pathlib import Path
import sys

import pytest

from wnlex import convert as convert_mod
from wnlex.convert import (
    FileReport,
    check_datadir,
    convert,
    convert_file,
    filesets,
    main,
)
from wnlex.data_models.lexicon_store import LexiconStore, LexiconTable
from wnlex.data_models.records import SynsetRecord
from wnlex.errors import ErrorLimitExceeded
from wnlex.sense_index import SenseIndex

_HEADER = "  1 This software and database is being provided to you, the LICENSEE,\n"

_FILES = {
    "index.verb": [
        "run v 2 0 2 1 00101742 00201234  ",
        "sprint v 1 0 1 0 00201234  ",
    ],
    "index.noun": [
        "dog n 1 1 @ 1 0 02086723  ",
        "broken n 1 0 3 0 02086723  ",
    ],
    "index.adj": ["big a 1 0 1 0 01382086  "],
    "verb.exc": ["ran run"],
    "noun.exc": ["geese goose", "too many tokens"],
    "data.verb": [
        "00101742 29 v 01 run 0 000 00 | to move fast  ",
        "00201234 38 v 02 run 0 sprint 0 000 01 + 02 00 | go quickly  ",
    ],
    "data.noun": [
        "02086723 05 n 01 dog 0 001 @ 02085998 n 0000 | a member of the genus Canis  ",
        "02086999 05 n 01 cat 0 000 | a feline  ",
    ],
    "data.adj": ["01382086 00 s 01 big 0 000 | above average in size  "],
}


def _write(datadir: Path, name: str, lines: list[str]) -> None:
    (datadir / name).write_text(_HEADER + "".join(f"{line}\n" for line in lines))


@pytest.fixture
def datadir(tmp_path: Path) -> Path:
    d = tmp_path / "dict"
    d.mkdir()
    for name, lines in _FILES.items():
        _write(d, name, lines)
    return d


@pytest.fixture
def store(tmp_path: Path) -> LexiconStore:
    return LexiconStore(tmp_path / "lexicon.db")


def _by_file(reports: list[FileReport]) -> dict[str, FileReport]:
    return {r.file: r for r in reports}


def test_convert_writes_all_tables(datadir: Path, store: LexiconStore) -> None:
    convert(datadir, store)
    assert store.get(LexiconTable.index, "run%v") == "2||00101742|00201234"
    assert store.get(LexiconTable.morph, "ran%v") == "run"
    assert store.get(LexiconTable.morph, "geese%n") == "goose"

    value = store.get(LexiconTable.data, "00101742%v")
    assert value is not None
    record = SynsetRecord.from_pair("00101742%v", value)
    assert [w.encode() for w in record.words] == ["run%0"]
    assert record.gloss == "to move fast"


def test_synset_senses_come_from_index(datadir: Path, store: LexiconStore) -> None:
    convert(datadir, store)
    value = store.get(LexiconTable.data, "00201234%v")
    assert value is not None
    record = SynsetRecord.from_pair("00201234%v", value)
    assert [w.encode() for w in record.words] == ["run%1", "sprint%0"]
    assert [f.encode() for f in record.frames] == ["02 00"]


def test_satellite_stored_under_adjective_key(
    datadir: Path, store: LexiconStore
) -> None:
    convert(datadir, store)
    assert store.get(LexiconTable.data, "01382086%a") is not None
    assert store.get(LexiconTable.data, "01382086%s") is None


def test_reports_counts_errors_and_missing_files(
    datadir: Path, store: LexiconStore
) -> None:
    reports = _by_file(convert(datadir, store))
    assert reports["index.noun"].entries == 1
    assert reports["index.noun"].errors == 1
    assert reports["noun.exc"].errors == 1
    assert reports["data.noun"].entries == 1
    assert reports["data.noun"].errors == 1  # "cat" is not in the index
    assert reports["index.adv"].skipped
    assert reports["cousin.exc"].skipped
    assert store.count(LexiconTable.data) == 4


def test_license_header_is_skipped(datadir: Path, store: LexiconStore) -> None:
    reports = _by_file(convert(datadir, store))
    assert reports["verb.exc"].entries == 1
    assert reports["verb.exc"].errors == 0


def test_sense_index_is_frozen_after_run(datadir: Path, store: LexiconStore) -> None:
    senses = SenseIndex()
    convert(datadir, store, senses=senses)
    assert senses.frozen
    assert senses.senses_for("run", "v") == {"00101742": 0, "00201234": 1}


def test_rerun_replaces_previous_tables(datadir: Path, store: LexiconStore) -> None:
    store.upsert_many(LexiconTable.morph, [("stale%n", "old")])
    convert(datadir, store)
    assert store.get(LexiconTable.morph, "stale%n") is None


def test_error_limit_aborts(datadir: Path, store: LexiconStore) -> None:
    with pytest.raises(ErrorLimitExceeded, match="index.noun") as exc_info:
        convert(datadir, store, error_limit=1)
    assert exc_info.value.errors == 1


def test_failure_does_not_stop_following_lines(
    tmp_path: Path, store: LexiconStore
) -> None:
    path = tmp_path / "noun.exc"
    _write(path.parent, path.name, ["bad line here", "mice mouse"])
    morph = filesets(SenseIndex())[1]
    report = convert_file(path, morph, "n", store)
    assert (report.entries, report.errors) == (1, 1)
    assert store.get(LexiconTable.morph, "mice%n") == "mouse"


def test_non_ascii_line_is_dropped_not_fatal(
    tmp_path: Path, store: LexiconStore, capsys: pytest.CaptureFixture[str]
) -> None:
    path = tmp_path / "noun.exc"
    path.write_bytes(b"ran\xff run\nmice mouse\n")
    morph = filesets(SenseIndex())[1]
    report = convert_file(path, morph, "n", store)
    assert (report.entries, report.errors) == (1, 1)
    assert store.get(LexiconTable.morph, "mice%n") == "mouse"
    assert store.count(LexiconTable.morph) == 1
    out = capsys.readouterr().out
    assert "non-ASCII byte at column 3" in out
    assert "(line 1)" in out


def test_crlf_line_endings(tmp_path: Path, store: LexiconStore) -> None:
    path = tmp_path / "verb.exc"
    path.write_bytes(b"ran run\r\n")
    morph = filesets(SenseIndex())[1]
    convert_file(path, morph, "v", store)
    assert store.get(LexiconTable.morph, "ran%v") == "run"


def test_batches_are_flushed(
    tmp_path: Path, store: LexiconStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(convert_mod, "COMMIT_THRESHOLD", 2)
    path = tmp_path / "verb.exc"
    _write(path.parent, path.name, [f"form{i} base{i}" for i in range(5)])
    morph = filesets(SenseIndex())[1]
    report = convert_file(path, morph, "v", store)
    assert report.entries == 5
    assert store.count(LexiconTable.morph) == 5


def test_check_datadir(tmp_path: Path, datadir: Path) -> None:
    assert check_datadir(datadir) is None
    assert "does not exist" in str(check_datadir(tmp_path / "nope"))
    assert "necessary files" in str(check_datadir(tmp_path))
    assert "not a directory" in str(check_datadir(datadir / "data.noun"))


def test_verbose_prints_running_count(
    tmp_path: Path,
    store: LexiconStore,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(convert_mod, "COMMIT_THRESHOLD", 2)
    path = tmp_path / "verb.exc"
    _write(path.parent, path.name, [f"form{i} base{i}" for i in range(5)])
    morph = filesets(SenseIndex())[1]
    convert_file(path, morph, "v", store, verbose=True)
    assert capsys.readouterr().out == " 2 4"
    convert_file(path, morph, "v", store)
    assert capsys.readouterr().out == ""


def _run_main(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["wnlex-convert", *args])
    main()


def test_main_converts_datadir(
    datadir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "out.db"
    _run_main(monkeypatch, "--datadir", str(datadir), "--db", str(db_path))
    assert LexiconStore(db_path).get(LexiconTable.morph, "ran%v") == "run"


def test_main_refuses_existing_db_without_overwrite(
    datadir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "out.db"
    LexiconStore(db_path).upsert_many(LexiconTable.morph, [("keep%n", "me")])
    with pytest.raises(SystemExit) as exc_info:
        _run_main(monkeypatch, "--datadir", str(datadir), "--db", str(db_path))
    assert "pass --overwrite" in str(exc_info.value.code)
    assert LexiconStore(db_path).get(LexiconTable.morph, "keep%n") == "me"


def test_main_overwrite_replaces_existing_db(
    datadir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "out.db"
    LexiconStore(db_path).upsert_many(LexiconTable.morph, [("keep%n", "me")])
    _run_main(
        monkeypatch, "--datadir", str(datadir), "--db", str(db_path), "--overwrite"
    )
    store = LexiconStore(db_path)
    assert store.get(LexiconTable.morph, "keep%n") is None
    assert store.get(LexiconTable.index, "run%v") == "2||00101742|00201234"


def test_main_exits_when_error_limit_hit(
    datadir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    db_path = tmp_path / "out.db"
    with pytest.raises(SystemExit) as exc_info:
        _run_main(
            monkeypatch,
            "--datadir",
            str(datadir),
            "--db",
            str(db_path),
            "--error-limit",
            "1",
        )
    assert "Aborted: Too many errors in index.noun (1)" in str(exc_info.value.code)


@pytest.mark.parametrize(
    ("relative", "message"),
    [("nope", "does not exist"), (".", "necessary files")],
)
def test_main_rejects_unusable_datadir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, relative: str, message: str
) -> None:
    db_path = tmp_path / "out.db"
    with pytest.raises(SystemExit) as exc_info:
        _run_main(
            monkeypatch, "--datadir", str(tmp_path / relative), "--db", str(db_path)
        )
    assert message in str(exc_info.value.code)
    assert not db_path.exists()
