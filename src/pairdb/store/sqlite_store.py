"""SQLite key-value backend.

One table ``kv(key TEXT PRIMARY KEY, value BLOB)`` in a single database
file. Each transaction commit is one SQLite transaction.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Iterator, Optional, Tuple

from pairdb.contracts import CommitError, StoreOpenError
from pairdb.store.base import KeyValueStore, Transaction, StoreMode

__all__ = ['SQLiteStore']

logger = logging.getLogger(__name__)


class SQLiteTransaction(Transaction):

    def __init__(self, conn: sqlite3.Connection, location: Path):
        super().__init__()
        self._conn = conn
        self._location = location

    def commit(self) -> None:
        rows = [(k.decode("utf-8"), v) for k, v in self._pending]
        try:
            with self._conn:
                self._conn.executemany("INSERT INTO kv (key, value) VALUES (?, ?)", rows)
        except sqlite3.Error as e:
            raise CommitError(f"SQLite commit of {len(rows)} puts to {self._location} failed: {e}") from e
        logger.debug("Committed %d puts to %s", len(rows), self._location)
        self._pending.clear()


class SQLiteStore(KeyValueStore):
    """Key-value store in a single SQLite file.

    ``mode="new"`` refuses to open an existing path, ``mode="read"``
    requires one.
    """

    backend = "sqlite"

    def __init__(self, location, mode: StoreMode = "new"):
        super().__init__(Path(location), mode)
        if mode == "new":
            if self.location.exists():
                raise StoreOpenError(f"SQLite store already exists: {self.location}")
            self.location.parent.mkdir(parents=True, exist_ok=True)
        elif not self.location.is_file():
            raise StoreOpenError(f"SQLite store not found: {self.location}")

        try:
            self._conn = sqlite3.connect(str(self.location))
            if mode == "new":
                with self._conn:
                    self._conn.execute("CREATE TABLE kv (key TEXT PRIMARY KEY, value BLOB NOT NULL)")
        except sqlite3.Error as e:
            raise StoreOpenError(f"Could not open SQLite store {self.location}: {e}") from e
        logger.info("Opened sqlite %s", self.location)

    def new_transaction(self) -> SQLiteTransaction:
        return SQLiteTransaction(self._conn, self.location)

    def get(self, key: str) -> Optional[bytes]:
        row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return bytes(row[0]) if row else None

    def items(self) -> Iterator[Tuple[str, bytes]]:
        # Keys are compared with BINARY collation, matching byte order
        for key, value in self._conn.execute("SELECT key, value FROM kv ORDER BY key"):
            yield key, bytes(value)

    def __len__(self) -> int:
        return self._conn.execute("SELECT COUNT(*) FROM kv").fetchone()[0]

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
