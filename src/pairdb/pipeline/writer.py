"""Batched transactional writer.

Buffers key/payload puts into a store transaction and commits every
``batch_size`` puts, then once more for a trailing partial batch. Each
writer owns its store's transaction and counters; the label store and the
image store each get their own instance.
"""

import logging

from pairdb.contracts import CommitError, ContractViolation
from pairdb.store.base import KeyValueStore

__all__ = ['BatchedTransactionWriter', 'DEFAULT_BATCH_SIZE']

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


class BatchedTransactionWriter:
    """Amortize store writes by committing in fixed-size batches.

    Use as a context manager so the trailing batch is committed on normal
    exit and discarded when the block raises::

        with BatchedTransactionWriter(store, batch_size=1000, name="labels") as writer:
            for key, value in items:
                writer.put(key, value)

    Attributes
    ----------
    puts : int
        Total puts staged since creation.
    commits : int
        Successful commits so far.
    pending : int
        Puts staged in the current, uncommitted transaction.
    """

    def __init__(self, store: KeyValueStore, batch_size: int = DEFAULT_BATCH_SIZE, name: str = "store"):
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")
        self.store = store
        self.batch_size = batch_size
        self.name = name
        self.puts = 0
        self.commits = 0
        self.pending = 0
        self._txn = store.new_transaction()
        self._finished = False

    def put(self, key: str, value: bytes) -> None:
        """Stage one write; commit if the batch is full."""
        if self._finished:
            raise ContractViolation(f"Writer contract violated: put after finish on {self.name}")
        self._txn.put(key, value)
        self.puts += 1
        self.pending += 1
        if self.pending == self.batch_size:
            self._commit()
            self._txn = self.store.new_transaction()

    def _commit(self) -> None:
        try:
            self._txn.commit()
        except CommitError:
            raise
        except Exception as e:
            raise CommitError(f"Commit to {self.name} failed after {self.puts} puts: {e}") from e
        self.commits += 1
        self.pending = 0
        logger.info("[%s] Processed %d files.", self.name, self.puts)

    def finish(self) -> None:
        """Commit the trailing partial batch, if any. Idempotent."""
        if self._finished:
            return
        if self.pending:
            self._commit()
        self._finished = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.finish()
        elif self.pending:
            logger.error("[%s] Discarding %d uncommitted puts after error", self.name, self.pending)
        return False
