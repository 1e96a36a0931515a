"""Manifest modules.

- reader: Manifest parsing into Records
- keys: Deterministic key derivation
- ordering: Shuffle and final-order construction
"""

from pairdb.manifest.reader import Record, read_manifest
from pairdb.manifest.keys import make_key
from pairdb.manifest.ordering import OrderedRecord, shuffle_records, build_final_order

__all__ = [
    "Record",
    "read_manifest",
    "make_key",
    "OrderedRecord",
    "shuffle_records",
    "build_final_order",
]
