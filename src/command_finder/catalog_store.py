"""SQLite FTS5 catalog store - full-text index over command names and descriptions."""

from __future__ import annotations

import logging
import os
import re
import sqlite3
import tempfile
import threading
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from itertools import islice
from pathlib import Path

from command_finder.constants import DEFAULT_BATCH_SIZE, DEFAULT_QUERY_TIMEOUT
from command_finder.exceptions import BuildFailedError, StoreUnavailableError
from command_finder.types import CommandRecord

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE VIRTUAL TABLE IF NOT EXISTS catalog USING fts5(name, description);
"""

INSERT_SQL = "INSERT INTO catalog(name, description) VALUES (?, ?)"

FIELDS = ("name", "description")

# Letters and digits; unicode61 treats everything else, underscore included, as a separator.
_TOKEN_RE = re.compile(r"[^\W_]+")

# Progress handler granularity, in SQLite virtual machine instructions.
_PROGRESS_STEPS = 1000


def build_match_expression(query: str) -> str | None:
    """Turn free text into an FTS5 expression: every word as a prefix term, ANDed.

    Returns None when the query holds no searchable terms.
    """
    terms = _TOKEN_RE.findall(query)
    if not terms:
        return None
    return " AND ".join(f'"{term}"*' for term in terms)


def _batched(records: Iterable[CommandRecord], size: int) -> Iterator[list[CommandRecord]]:
    it = iter(records)
    while batch := list(islice(it, size)):
        yield batch


class CatalogStore:
    """Full-text searchable catalog of command records backed by one SQLite file.

    A rebuild writes a brand new database next to the target and swaps it in
    with ``os.replace``, so readers only ever open a complete catalog: the one
    before the rebuild or the one after it. Readers open a short-lived
    read-only connection per query.

    Usage:
        store = CatalogStore("/tmp/command_finder/catalog.db")
        store.replace(records)
        names = store.match("name", "save")
    """

    def __init__(
        self,
        path: str | Path,
        query_timeout: float = DEFAULT_QUERY_TIMEOUT,
    ) -> None:
        self._path = Path(path)
        self._query_timeout = query_timeout
        self._write_lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def exists(self) -> bool:
        return self._path.is_file()

    # ------------------------------------------------------------------
    # Writer side
    # ------------------------------------------------------------------

    def replace(
        self,
        records: Iterable[CommandRecord],
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> int:
        """Replace the whole catalog with *records*, inserting *batch_size* rows per transaction.

        Returns the number of rows written. Raises BuildFailedError if the
        new catalog cannot be written; the previous catalog is left in place.
        """
        if batch_size <= 0:
            raise BuildFailedError(f"batch size must be positive, got {batch_size}")

        with self._write_lock:
            tmp_path: str | None = None
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(
                    prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent,
                )
                os.close(fd)
                count = self._write(tmp_path, records, batch_size)
                os.replace(tmp_path, self._path)
            except (sqlite3.Error, OSError) as e:
                raise BuildFailedError(
                    f"Failed to build catalog at {self._path}: {e}"
                ) from e
            finally:
                if tmp_path is not None:
                    Path(tmp_path).unlink(missing_ok=True)

        logger.info("Catalog at %s rebuilt with %d records", self._path, count)
        return count

    def _write(
        self, tmp_path: str, records: Iterable[CommandRecord], batch_size: int,
    ) -> int:
        conn = sqlite3.connect(tmp_path)
        try:
            conn.execute("PRAGMA synchronous=NORMAL")
            conn.executescript(SCHEMA_SQL)
            count = 0
            for number, batch in enumerate(_batched(records, batch_size), start=1):
                with conn:
                    conn.executemany(
                        INSERT_SQL, [(r.name, r.description) for r in batch],
                    )
                count += len(batch)
                logger.debug("Inserted batch %d (%d records)", number, len(batch))
            return count
        finally:
            conn.close()

    def clear(self) -> None:
        """Remove the catalog file. Subsequent queries raise StoreUnavailableError."""
        with self._write_lock:
            self._path.unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Reader side
    # ------------------------------------------------------------------

    @contextmanager
    def _reader(self) -> Iterator[sqlite3.Connection]:
        """Open a read-only connection for one query and always close it."""
        if not self.exists:
            raise StoreUnavailableError(f"No catalog at {self._path}")
        try:
            conn = sqlite3.connect(
                f"{self._path.resolve().as_uri()}?mode=ro",
                uri=True,
                timeout=self._query_timeout,
            )
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Cannot open catalog {self._path}: {e}") from e

        deadline = time.monotonic() + self._query_timeout
        conn.set_progress_handler(
            lambda: 1 if time.monotonic() > deadline else 0, _PROGRESS_STEPS,
        )
        try:
            yield conn
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Catalog query failed: {e}") from e
        finally:
            conn.close()

    def match(self, field: str, query: str) -> list[str]:
        """Return names whose *field* matches *query*, in insertion order.

        A query without searchable terms matches every record.
        """
        if field not in FIELDS:
            raise ValueError(f"Unknown catalog field: {field!r}")

        expression = build_match_expression(query)
        if expression is None:
            return self.all_names()

        with self._reader() as conn:
            rows = conn.execute(
                f"SELECT name FROM catalog WHERE {field} MATCH ? ORDER BY rowid",
                (expression,),
            ).fetchall()
        return [row[0] for row in rows]

    def all_names(self) -> list[str]:
        """Return every indexed name in insertion order."""
        with self._reader() as conn:
            rows = conn.execute("SELECT name FROM catalog ORDER BY rowid").fetchall()
        return [row[0] for row in rows]

    def count(self) -> int:
        with self._reader() as conn:
            return conn.execute("SELECT count(*) FROM catalog").fetchone()[0]
