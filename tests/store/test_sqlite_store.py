"""SQLite backend specifics."""

import sqlite3

import pytest

from pairdb.contracts import CommitError
from pairdb.store.sqlite_store import SQLiteStore

pytestmark = [pytest.mark.unit, pytest.mark.store]


def test_schema(tmp_path):
    path = tmp_path / "labels.db"
    SQLiteStore(path).close()
    conn = sqlite3.connect(str(path))
    cols = [row[1] for row in conn.execute("PRAGMA table_info(kv)")]
    conn.close()
    assert cols == ["key", "value"]


def test_duplicate_key_commit_fails_atomically(tmp_path):
    with SQLiteStore(tmp_path / "db") as store:
        txn = store.new_transaction()
        txn.put("a", b"1")
        txn.commit()

        txn = store.new_transaction()
        txn.put("b", b"2")
        txn.put("a", b"3")
        with pytest.raises(CommitError):
            txn.commit()

        assert store.keys() == ["a"]
        assert store.get("a") == b"1"


def test_creates_parent_directories(tmp_path):
    path = tmp_path / "nested" / "dir" / "images.db"
    SQLiteStore(path).close()
    assert path.is_file()
