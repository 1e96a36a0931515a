"""Tests for the pairdb-convert command-line entry point."""

import pytest

from helpers.fake_images import make_dataset, write_manifest
from pairdb.cli.convert_pairs import build_parser, main, run_conversion
from pairdb.imaging.payload import ImagePayload
from pairdb.store import open_store

pytestmark = [pytest.mark.pipeline]


@pytest.fixture
def dataset(tmp_path):
    manifest, rows = make_dataset(tmp_path / "data", 3)
    return manifest, tmp_path / "data"


def test_main_success_creates_both_stores(dataset, tmp_path):
    manifest, root = dataset
    labels, images = tmp_path / "labels", tmp_path / "images"

    rc = main([str(manifest), str(labels), str(images), "--root-dir", str(root)])

    assert rc == 0
    with open_store("lmdb", labels, mode="read") as store:
        assert len(store) == 3
    with open_store("lmdb", images, mode="read") as store:
        assert len(store) == 3


def test_missing_positionals_exit_with_usage(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "pairs.txt")])
    assert excinfo.value.code == 2


def test_parse_error_returns_failure(tmp_path):
    manifest = tmp_path / "pairs.txt"
    manifest.write_text("a.png b.png\n")
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images")])
    assert rc == 1
    assert not (tmp_path / "labels").exists()


def test_missing_manifest_returns_failure(tmp_path):
    rc = main([str(tmp_path / "nope.txt"), str(tmp_path / "labels"), str(tmp_path / "images")])
    assert rc == 1


def test_existing_destination_returns_failure(dataset, tmp_path):
    manifest, root = dataset
    (tmp_path / "labels").mkdir()
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images"),
               "--root-dir", str(root)])
    assert rc == 1


def test_missing_user_config_returns_failure(dataset, tmp_path):
    manifest, _ = dataset
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images"),
               "--config", str(tmp_path / "missing_config.py")])
    assert rc == 1


def test_user_config_file_with_cli_override(dataset, tmp_path):
    manifest, root = dataset
    config_file = tmp_path / "my_config.py"
    config_file.write_text(
        f"CONFIG = {{'BACKEND': 'sqlite', 'ROOT_DIR': {str(root)!r}, 'BATCH_SIZE': 2}}\n"
    )
    labels, images = tmp_path / "labels.db", tmp_path / "images.db"

    summary = run_conversion(
        str(manifest), str(labels), str(images),
        user_config_path=str(config_file),
        cli_args={"gray": True},
    )

    assert summary.label_commits == 2
    with open_store("sqlite", images, mode="read") as store:
        payload = ImagePayload.from_bytes(store.get("00000000_left/0000.png_right/0000.png"))
    # Two grayscale images stacked
    assert payload.channels == 2


def test_verify_flag_reports_alignment(dataset, tmp_path):
    manifest, root = dataset
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images"),
               "--root-dir", str(root), "--verify", "--backend", "sqlite"])
    assert rc == 0


def test_invalid_option_combination_returns_failure(dataset, tmp_path):
    manifest, root = dataset
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images"),
               "--encoded", "--check-size"])
    assert rc == 1


def test_underscore_flag_aliases():
    args = build_parser().parse_args(["m", "l", "i", "--resize_width", "8", "--check_size"])
    assert args.resize_width == 8
    assert args.check_size is True
    assert args.gray is None


def test_empty_manifest_creates_empty_stores(tmp_path):
    manifest = write_manifest(tmp_path / "pairs.txt", [])
    rc = main([str(manifest), str(tmp_path / "labels"), str(tmp_path / "images"),
               "--backend", "sqlite"])
    assert rc == 0
    with open_store("sqlite", tmp_path / "labels", mode="read") as store:
        assert len(store) == 0
