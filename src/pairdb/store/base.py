"""Key-value store interface consumed by the conversion pipeline.

A store is opened once, hands out transactions, and is closed at the end
of the run. Transactions buffer puts until ``commit()``. Keys are str,
values are bytes.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Literal, Optional, Tuple

__all__ = ['KeyValueStore', 'Transaction', 'StoreMode']

StoreMode = Literal["new", "read"]


class Transaction(ABC):
    """A batch of puts applied atomically on commit."""

    def __init__(self):
        self._pending: List[Tuple[bytes, bytes]] = []

    def put(self, key: str, value: bytes) -> None:
        """Stage a write. Nothing reaches the store before commit()."""
        self._pending.append((key.encode("utf-8"), bytes(value)))

    def __len__(self) -> int:
        return len(self._pending)

    @abstractmethod
    def commit(self) -> None:
        """Apply all staged puts atomically.

        Raises
        ------
        CommitError
            If the backend rejects the batch.
        """


class KeyValueStore(ABC):
    """Backend-agnostic store handle."""

    backend: str = ""

    def __init__(self, location, mode: StoreMode):
        self.location = location
        self.mode = mode

    @abstractmethod
    def new_transaction(self) -> Transaction:
        ...

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        ...

    @abstractmethod
    def items(self) -> Iterator[Tuple[str, bytes]]:
        """Iterate ``(key, value)`` pairs in ascending key order."""

    @abstractmethod
    def close(self) -> None:
        ...

    def keys(self) -> List[str]:
        return [k for k, _ in self.items()]

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
