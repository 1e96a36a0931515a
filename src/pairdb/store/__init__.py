"""Key-value store backends.

- base: Store / transaction interface
- lmdb_store: LMDB environment backend (default)
- sqlite_store: Single-file SQLite backend
"""

from pathlib import Path
from typing import Union

from pairdb.store.base import KeyValueStore, Transaction, StoreMode
from pairdb.store.lmdb_store import LMDBStore, DEFAULT_MAP_SIZE
from pairdb.store.sqlite_store import SQLiteStore

__all__ = [
    "KeyValueStore",
    "Transaction",
    "LMDBStore",
    "SQLiteStore",
    "open_store",
    "BACKENDS",
]

BACKENDS = {
    "lmdb": LMDBStore,
    "sqlite": SQLiteStore,
}


def open_store(backend: str, location: Union[str, Path], mode: StoreMode = "new",
               map_size: int = DEFAULT_MAP_SIZE) -> KeyValueStore:
    """Open a store of the given backend kind.

    Raises
    ------
    ValueError
        If ``backend`` is unknown.
    StoreOpenError
        If the store cannot be opened in ``mode``.
    """
    try:
        store_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(f"Unknown backend {backend!r}, expected one of {sorted(BACKENDS)}") from None
    if store_cls is LMDBStore:
        return LMDBStore(location, mode, map_size=map_size)
    return store_cls(location, mode)
