"""SQLite-backed sink for converted lexicon records, one table per file set."""

from collections.abc import Iterable
from enum import Enum
from pathlib import Path
import sqlite3

import polars as pl

_SCHEMA = {"key": pl.String, "value": pl.String}


class LexiconTable(str, Enum):
    index = "index_entries"
    morph = "morph"
    data = "data"


class LexiconStore:
    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        with sqlite3.connect(db_path, timeout=30) as con:
            for table in LexiconTable:
                con.execute(
                    f"CREATE TABLE IF NOT EXISTS {table.value} ("
                    "key TEXT PRIMARY KEY, "
                    "value TEXT NOT NULL"
                    ")"
                )
            con.commit()

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path, timeout=30)

    def truncate(self, table: LexiconTable) -> None:
        with self._connect() as con:
            con.execute(f"DELETE FROM {table.value}")
            con.commit()

    def upsert_many(self, table: LexiconTable, pairs: Iterable[tuple[str, str]]) -> None:
        """Write a batch of (key, value) pairs in one transaction."""
        with self._connect() as con:
            con.executemany(
                f"INSERT OR REPLACE INTO {table.value} (key, value) VALUES (?, ?)",
                pairs,
            )
            con.commit()

    def get(self, table: LexiconTable, key: str) -> str | None:
        with self._connect() as con:
            row = con.execute(
                f"SELECT value FROM {table.value} WHERE key = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        return row[0]  # type: ignore[no-any-return]

    def count(self, table: LexiconTable) -> int:
        with self._connect() as con:
            row = con.execute(f"SELECT COUNT(*) FROM {table.value}").fetchone()
        return int(row[0])

    def to_polars(self, table: LexiconTable) -> pl.DataFrame:
        with self._connect() as con:
            rows = con.execute(
                f"SELECT key, value FROM {table.value} ORDER BY key"
            ).fetchall()
        if not rows:
            return pl.DataFrame(schema=_SCHEMA)
        return pl.DataFrame(rows, schema=_SCHEMA, orient="row")
