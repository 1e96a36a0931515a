"""LMDB key-value backend.

The store is an LMDB environment directory. Puts are buffered in memory and
written in one write transaction at commit; if the map fills up, the map is
doubled and the whole batch retried.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional, Tuple

import lmdb

from pairdb.contracts import CommitError, StoreOpenError
from pairdb.store.base import KeyValueStore, Transaction, StoreMode

__all__ = ['LMDBStore']

logger = logging.getLogger(__name__)

DEFAULT_MAP_SIZE = 1 << 30


class LMDBTransaction(Transaction):

    def __init__(self, env: lmdb.Environment, location: Path):
        super().__init__()
        self._env = env
        self._location = location

    def _double_map_size(self) -> None:
        new_size = self._env.info()["map_size"] * 2
        logger.info("Doubling LMDB map size to %d MB", new_size >> 20)
        self._env.set_mapsize(new_size)

    def commit(self) -> None:
        while True:
            try:
                with self._env.begin(write=True) as txn:
                    for key, value in self._pending:
                        txn.put(key, value)
                break
            except lmdb.MapFullError:
                # Aborted by the context manager; grow and retry the batch
                self._double_map_size()
            except lmdb.Error as e:
                raise CommitError(
                    f"LMDB commit of {len(self._pending)} puts to {self._location} failed: {e}"
                ) from e
        logger.debug("Committed %d puts to %s", len(self._pending), self._location)
        self._pending.clear()


class LMDBStore(KeyValueStore):
    """Key-value store in an LMDB environment directory.

    ``mode="new"`` refuses to open an existing path, ``mode="read"`` opens
    read-only.
    """

    backend = "lmdb"

    def __init__(self, location, mode: StoreMode = "new", map_size: int = DEFAULT_MAP_SIZE):
        super().__init__(Path(location), mode)
        if mode == "new" and self.location.exists():
            raise StoreOpenError(f"LMDB store already exists: {self.location}")
        if mode == "read" and not self.location.is_dir():
            raise StoreOpenError(f"LMDB store not found: {self.location}")

        try:
            if mode == "new":
                self._env = lmdb.open(str(self.location), map_size=map_size, subdir=True)
            else:
                self._env = lmdb.open(str(self.location), readonly=True, lock=False, subdir=True)
        except lmdb.Error as e:
            raise StoreOpenError(f"Could not open LMDB store {self.location}: {e}") from e
        logger.info("Opened lmdb %s", self.location)

    def new_transaction(self) -> LMDBTransaction:
        return LMDBTransaction(self._env, self.location)

    def get(self, key: str) -> Optional[bytes]:
        with self._env.begin() as txn:
            value = txn.get(key.encode("utf-8"))
        return bytes(value) if value is not None else None

    def items(self) -> Iterator[Tuple[str, bytes]]:
        with self._env.begin() as txn:
            for key, value in txn.cursor():
                yield bytes(key).decode("utf-8"), bytes(value)

    def __len__(self) -> int:
        return self._env.stat()["entries"]

    def close(self) -> None:
        if self._env is not None:
            self._env.close()
            self._env = None
