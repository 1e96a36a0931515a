"""`pairdb` - paired-image manifest to mirrored key-value stores.

Subpackages:
- manifest: Manifest reading, record ordering, key derivation
- imaging: Label and image payloads, image pair builder
- store: LMDB and SQLite key-value backends
- pipeline: Batched writer, size validator, conversion pipeline, verifier
- schemas: Layered pydantic configuration
- contracts: Error kinds and fail-fast invariants
"""

__version__ = "0.1.0"
