"""Tests for the store alignment verifier."""

import pytest

from pairdb.imaging.payload import ImagePayload, build_label_payload
from pairdb.pipeline.verify import verify_alignment
from pairdb.store import open_store

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


def _fill(store, items):
    txn = store.new_transaction()
    for key, payload in items:
        txn.put(key, payload.to_bytes())
    txn.commit()


def _label(i, key):
    return key, build_label_payload(i, key, float(i))


def _image(i, key):
    return key, ImagePayload(channels=1, height=1, width=1, data=b"\x00", label=i, param=key)


@pytest.fixture
def stores(tmp_path):
    labels = open_store("sqlite", tmp_path / "labels.db")
    images = open_store("sqlite", tmp_path / "images.db")
    yield labels, images
    labels.close()
    images.close()


def test_aligned_stores(stores):
    labels, images = stores
    _fill(labels, [_label(i, f"{i:08d}_a_b") for i in range(3)])
    _fill(images, [_image(i, f"{i:08d}_a_b") for i in range(3)])
    report = verify_alignment(labels, images)
    assert report.aligned
    assert (report.labels, report.images) == (3, 3)


def test_orphan_labels_still_aligned(stores):
    labels, images = stores
    _fill(labels, [_label(i, f"{i:08d}_a_b") for i in range(3)])
    _fill(images, [_image(0, "00000000_a_b"), _image(2, "00000002_a_b")])
    report = verify_alignment(labels, images)
    assert report.aligned
    assert report.label_only == ["00000001_a_b"]


def test_image_without_label_misaligned(stores):
    labels, images = stores
    _fill(labels, [_label(0, "00000000_a_b")])
    _fill(images, [_image(0, "00000000_a_b"), _image(1, "00000001_a_b")])
    report = verify_alignment(labels, images)
    assert not report.aligned
    assert report.image_only == ["00000001_a_b"]


def test_index_mismatch_detected(stores):
    labels, images = stores
    _fill(labels, [_label(0, "00000000_a_b")])
    _fill(images, [_image(5, "00000000_a_b")])
    report = verify_alignment(labels, images)
    assert report.mismatched == ["00000000_a_b"]
    assert "mismatched=1" in report.summary()


def test_empty_stores(stores):
    report = verify_alignment(*stores)
    assert report.aligned
    assert report.labels == report.images == 0
