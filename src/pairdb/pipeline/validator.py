"""Uniform image size check.

The first payload seen fixes the expected ``channels * height * width``;
every later payload must carry a raw buffer of exactly that length.
"""

import logging
from typing import Optional

from pairdb.contracts import SizeMismatchError
from pairdb.imaging.payload import ImagePayload

__all__ = ['SizeConsistencyValidator']

logger = logging.getLogger(__name__)


class SizeConsistencyValidator:
    """Per-run size baseline for image payloads."""

    def __init__(self):
        self.expected_size: Optional[int] = None
        self.checked = 0

    def check(self, payload: ImagePayload, key: str) -> None:
        """Record the baseline on first call, compare afterwards.

        Raises
        ------
        SizeMismatchError
            If ``len(payload.data)`` differs from the baseline.
        """
        if self.expected_size is None:
            self.expected_size = payload.expected_size
            logger.debug("Size baseline %d bytes from %s", self.expected_size, key)
        else:
            actual = len(payload.data)
            if actual != self.expected_size:
                raise SizeMismatchError(key, actual, self.expected_size)
        self.checked += 1
