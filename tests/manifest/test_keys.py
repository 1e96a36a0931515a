"""Tests for key derivation."""

import pytest

from pairdb.contracts import KeyOverflowError
from pairdb.manifest.keys import key_capacity, make_key

pytestmark = pytest.mark.unit


def test_key_format():
    assert make_key(42, "left/a.png", "right/b.png") == "00000042_left/a.png_right/b.png"


def test_zero_index():
    assert make_key(0, "a", "b") == "00000000_a_b"


def test_last_index_that_fits():
    assert make_key(10 ** 8 - 1, "a", "b") == "99999999_a_b"


def test_index_overflow_raises():
    with pytest.raises(KeyOverflowError):
        make_key(10 ** 8, "a", "b")


def test_negative_index_raises():
    with pytest.raises(KeyOverflowError):
        make_key(-1, "a", "b")


def test_custom_width_and_separator():
    assert make_key(7, "a", "b", width=3, sep="|") == "007|a|b"
    assert key_capacity(3) == 1000


def test_lexicographic_order_matches_index_order():
    keys = [make_key(i, "z", "a") for i in (0, 9, 10, 99, 100, 12345)]
    assert keys == sorted(keys)
