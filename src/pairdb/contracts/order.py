"""Final-order stage contract.

Enforces that the keyed record sequence shared by both store passes is
well-formed before any store is opened.
"""

from typing import Sequence, TYPE_CHECKING
from pairdb.contracts.base import require

if TYPE_CHECKING:
    from pairdb.manifest.ordering import OrderedRecord


def assert_final_order(order: Sequence["OrderedRecord"]) -> None:
    """Enforce final-order contract.

    Parameters
    ----------
    order : sequence of OrderedRecord
        Output of build_final_order()

    Raises
    ------
    ContractViolation
        If indices are not 0..N-1 in sequence or a key repeats
    """
    for position, item in enumerate(order):
        require(
            item.index == position,
            f"Order contract violated: position {position} carries index {item.index}"
        )
    keys = [item.key for item in order]
    require(
        len(keys) == len(set(keys)),
        "Order contract violated: duplicate keys in final order"
    )
