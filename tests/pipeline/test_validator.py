"""Tests for the uniform size validator."""

import pytest

from pairdb.contracts import SizeMismatchError
from pairdb.imaging.payload import ImagePayload
from pairdb.pipeline.validator import SizeConsistencyValidator

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


def _payload(c, h, w, n=None):
    return ImagePayload(channels=c, height=h, width=w, data=bytes(c * h * w if n is None else n), label=0)


def test_first_payload_sets_baseline():
    validator = SizeConsistencyValidator()
    assert validator.expected_size is None
    validator.check(_payload(6, 4, 5), "k0")
    assert validator.expected_size == 120


def test_same_size_passes():
    validator = SizeConsistencyValidator()
    for i in range(5):
        validator.check(_payload(6, 4, 5), f"k{i}")
    assert validator.checked == 5


def test_different_size_fails():
    validator = SizeConsistencyValidator()
    validator.check(_payload(6, 4, 5), "k0")
    with pytest.raises(SizeMismatchError) as excinfo:
        validator.check(_payload(6, 4, 6), "k1")
    assert excinfo.value.key == "k1"
    assert excinfo.value.actual == 144
    assert excinfo.value.expected == 120


def test_compares_buffer_length_not_shape():
    validator = SizeConsistencyValidator()
    validator.check(_payload(6, 4, 5), "k0")
    # Same declared shape, truncated buffer
    with pytest.raises(SizeMismatchError):
        validator.check(_payload(6, 4, 5, n=100), "k1")


def test_independent_instances():
    a, b = SizeConsistencyValidator(), SizeConsistencyValidator()
    a.check(_payload(1, 1, 1), "k")
    b.check(_payload(2, 2, 2), "k")
    assert (a.expected_size, b.expected_size) == (1, 8)
