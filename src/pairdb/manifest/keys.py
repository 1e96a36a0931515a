"""Deterministic store keys.

A key is the record's final-order index, zero-padded to a fixed width,
followed by both image paths::

    00000042_left/0042.png_right/0042.png

Lexicographic key order therefore equals final record order, which lets a
reader iterating either store recover the processing order.
"""

from pairdb.contracts import KeyOverflowError

__all__ = ['make_key', 'key_capacity', 'DEFAULT_KEY_WIDTH', 'DEFAULT_SEPARATOR']

DEFAULT_KEY_WIDTH = 8
DEFAULT_SEPARATOR = "_"


def key_capacity(width: int = DEFAULT_KEY_WIDTH) -> int:
    """Number of distinct indices a key of ``width`` digits can encode."""
    return 10 ** width


def make_key(index: int, path_a: str, path_b: str,
             width: int = DEFAULT_KEY_WIDTH, sep: str = DEFAULT_SEPARATOR) -> str:
    """Build the key for the record at final-order ``index``.

    Raises
    ------
    KeyOverflowError
        If ``index`` is negative or needs more than ``width`` digits.
    """
    if index < 0 or index >= key_capacity(width):
        raise KeyOverflowError(
            f"index {index} does not fit in a {width}-digit key (limit {key_capacity(width) - 1})"
        )
    return f"{index:0{width}d}{sep}{path_a}{sep}{path_b}"
