"""Pipeline contracts and error kinds.

Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants. Error kinds carry a FailurePolicy telling the
pipeline whether to abort or skip the record.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Error kinds describe data and environment failures
"""

from pairdb.contracts.failure import (
    FailurePolicy,
    PairDBError,
    ContractViolation,
    ParseError,
    ManifestNotFoundError,
    KeyOverflowError,
    ImageBuildError,
    SizeMismatchError,
    StoreOpenError,
    CommitError,
)
from pairdb.contracts.base import require
from pairdb.contracts.order import assert_final_order
from pairdb.contracts.payload import assert_payload_tagged

__all__ = [
    "FailurePolicy",
    "PairDBError",
    "ContractViolation",
    "ParseError",
    "ManifestNotFoundError",
    "KeyOverflowError",
    "ImageBuildError",
    "SizeMismatchError",
    "StoreOpenError",
    "CommitError",
    "require",
    "assert_final_order",
    "assert_payload_tagged",
]
