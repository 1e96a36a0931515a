"""Final record order: optional shuffle, then key assignment.

The final order is computed exactly once and handed read-only to both the
label pass and the image pass. Keys embed the final position, so shuffling
must happen before keys are assigned.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pairdb.contracts import KeyOverflowError, assert_final_order
from pairdb.manifest.keys import make_key, key_capacity, DEFAULT_KEY_WIDTH, DEFAULT_SEPARATOR
from pairdb.manifest.reader import Record

__all__ = ['OrderedRecord', 'shuffle_records', 'build_final_order']

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrderedRecord:
    """A record bound to its final-order index and store key."""
    index: int
    key: str
    record: Record


def shuffle_records(records: Sequence[Record], seed: Optional[int] = None) -> List[Record]:
    """Return a uniformly random permutation of ``records``.

    The input is left untouched. The same seed always yields the same
    permutation; ``seed=None`` draws fresh entropy.
    """
    rng = np.random.default_rng(seed)
    permutation = rng.permutation(len(records))
    return [records[i] for i in permutation]


def build_final_order(records: Sequence[Record],
                      shuffle: bool = False,
                      seed: Optional[int] = None,
                      key_width: int = DEFAULT_KEY_WIDTH,
                      sep: str = DEFAULT_SEPARATOR) -> Tuple[OrderedRecord, ...]:
    """Shuffle (if requested), then assign indices and keys.

    Raises
    ------
    KeyOverflowError
        If there are more records than ``key_width`` digits can index.
        Raised before any key is built.
    """
    if len(records) > key_capacity(key_width):
        raise KeyOverflowError(
            f"{len(records)} records exceed the {key_width}-digit key capacity "
            f"of {key_capacity(key_width)}"
        )

    if shuffle:
        logger.info("Shuffling data")
        records = shuffle_records(records, seed)

    order = tuple(
        OrderedRecord(index=i, key=make_key(i, r.path_a, r.path_b, key_width, sep), record=r)
        for i, r in enumerate(records)
    )
    assert_final_order(order)
    return order
