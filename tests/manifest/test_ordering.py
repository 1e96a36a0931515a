"""Tests for shuffling and final-order construction."""

import pytest

from pairdb.contracts import KeyOverflowError
from pairdb.manifest.ordering import build_final_order, shuffle_records
from pairdb.manifest.reader import Record

pytestmark = pytest.mark.unit


@pytest.fixture
def records():
    return [Record(f"a{i}", f"b{i}", float(i), i) for i in range(20)]


def test_unshuffled_index_matches_line(records):
    order = build_final_order(records)
    assert [item.index for item in order] == list(range(20))
    assert all(item.record.line_no == item.index for item in order)
    assert order[3].key == "00000003_a3_b3"


def test_final_order_is_immutable(records):
    order = build_final_order(records)
    assert isinstance(order, tuple)


def test_shuffle_is_permutation(records):
    shuffled = shuffle_records(records, seed=0)
    assert sorted(shuffled, key=lambda r: r.line_no) == records
    assert shuffled != records


def test_shuffle_does_not_mutate_input(records):
    before = list(records)
    shuffle_records(records, seed=1)
    assert records == before


def test_same_seed_same_keys(records):
    first = build_final_order(records, shuffle=True, seed=123)
    second = build_final_order(records, shuffle=True, seed=123)
    assert [i.key for i in first] == [i.key for i in second]


def test_different_seed_different_order(records):
    first = build_final_order(records, shuffle=True, seed=1)
    second = build_final_order(records, shuffle=True, seed=2)
    assert [i.record for i in first] != [i.record for i in second]


def test_shuffled_keys_embed_final_position(records):
    order = build_final_order(records, shuffle=True, seed=5)
    for item in order:
        assert item.key.startswith(f"{item.index:08d}_")
        assert item.key.endswith(f"_{item.record.path_a}_{item.record.path_b}")


def test_capacity_boundary():
    records = [Record("a", "b", 0.0, i) for i in range(10)]
    assert len(build_final_order(records, key_width=1)) == 10
    with pytest.raises(KeyOverflowError):
        build_final_order(records + [Record("a", "b", 0.0, 10)], key_width=1)


def test_empty_records():
    assert build_final_order([]) == ()
