"""Payload stage contract.

Enforces that a payload about to be written carries the index and key of the
record it was built for. This pairing is what keeps the two stores aligned.
"""

from pairdb.contracts.base import require


def assert_payload_tagged(payload, index: int, key: str) -> None:
    """Enforce payload tagging contract.

    Raises
    ------
    ContractViolation
        If payload.label != index or payload.param != key
    """
    require(
        payload.label == index,
        f"Payload contract violated: label {payload.label} != index {index} for {key}"
    )
    require(
        payload.param == key,
        f"Payload contract violated: param {payload.param!r} != key {key!r}"
    )
