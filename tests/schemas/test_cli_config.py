"""Tests for CLIConfig schema and conversion to internal overrides."""

import pytest
from pydantic import ValidationError

from pairdb.schemas.cli import CLIConfig

pytestmark = pytest.mark.unit


def test_cli_to_internal_overrides_empty():
    assert CLIConfig().to_internal_overrides() == {}


def test_cli_gray_maps_to_grayscale():
    overrides = CLIConfig(gray=True).to_internal_overrides()
    assert overrides["image"]["grayscale"] is True


def test_cli_shuffle_and_seed():
    overrides = CLIConfig(shuffle=True, seed=11).to_internal_overrides()
    assert overrides["manifest"] == {"shuffle": True, "seed": 11}


def test_cli_store_fields():
    overrides = CLIConfig(backend="sqlite", batch_size=5).to_internal_overrides()
    assert overrides["store"] == {"backend": "sqlite", "batch_size": 5}


def test_cli_negative_resize_clamped():
    cli = CLIConfig(resize_width=-3, resize_height=16)
    assert cli.resize_width == 0
    overrides = cli.to_internal_overrides()
    assert overrides["image"]["resize_width"] == 0
    assert overrides["image"]["resize_height"] == 16


def test_cli_pipeline_fields():
    overrides = CLIConfig(orphan_labels="drop", verify=True).to_internal_overrides()
    assert overrides["pipeline"] == {"orphan_labels": "drop", "verify": True}


def test_cli_log_fields():
    overrides = CLIConfig(log_level="DEBUG", log_file="run.log").to_internal_overrides()
    assert overrides["logging"] == {"level": "DEBUG", "file": "run.log"}


def test_cli_rejects_unknown_backend():
    with pytest.raises(ValidationError):
        CLIConfig(backend="leveldb")


def test_cli_rejects_unknown_field():
    with pytest.raises(ValidationError):
        CLIConfig(colour=True)


def test_negative_seed_rejected():
    with pytest.raises(ValidationError):
        CLIConfig(seed=-1)
