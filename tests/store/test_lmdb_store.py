"""LMDB backend specifics."""

import pytest

from pairdb.store.lmdb_store import LMDBStore

pytestmark = [pytest.mark.unit, pytest.mark.store]


def test_creates_environment_directory(tmp_path):
    location = tmp_path / "images_lmdb"
    LMDBStore(location).close()
    assert (location / "data.mdb").is_file()


def test_map_grows_when_full(tmp_path):
    location = tmp_path / "db"
    payload = b"x" * 4096
    with LMDBStore(location, map_size=1 << 20) as store:
        txn = store.new_transaction()
        for i in range(600):
            txn.put(f"{i:08d}", payload)
        txn.commit()
        assert len(store) == 600
    with LMDBStore(location, mode="read") as store:
        assert store.get("00000599") == payload
