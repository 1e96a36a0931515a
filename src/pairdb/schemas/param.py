"""ParamConfig: Expert defaults for the pairdb conversion pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define
fallback values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field
from pairdb.schemas.base import PairDBBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ManifestConfig(PairDBBaseModel):
    """Manifest parsing and record ordering."""
    delimiter: Literal["space", "tab", "comma"] = "space"
    shuffle: bool = False
    seed: Optional[int] = Field(None, ge=0, description="Shuffle seed (None = fresh entropy)")


class KeyConfig(PairDBBaseModel):
    """Store key derivation."""
    width: int = Field(8, ge=1, le=18, description="Zero-padded index digits")
    separator: str = "_"


class ImageConfig(PairDBBaseModel):
    """Image pair decoding, resizing and encoding."""
    root_dir: str = ""
    grayscale: bool = False
    resize_height: int = Field(0, ge=0)
    resize_width: int = Field(0, ge=0)
    encoded: bool = False
    encode_type: str = ""
    check_size: bool = False


class StoreConfig(PairDBBaseModel):
    """Key-value store backend and batching."""
    backend: Literal["lmdb", "sqlite"] = "lmdb"
    batch_size: int = Field(1000, ge=1)
    lmdb_map_size: int = Field(1 << 30, ge=1 << 20, description="Initial LMDB map size in bytes")


class PipelineConfig(PairDBBaseModel):
    """Cross-store pipeline behaviour."""
    orphan_labels: Literal["keep", "drop"] = "keep"
    verify: bool = False


class LoggingConfig(PairDBBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(PairDBBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all pipeline parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    manifest: ManifestConfig = Field(default_factory=ManifestConfig)
    keys: KeyConfig = Field(default_factory=KeyConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
