"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

import logging
from typing import Literal, Optional
from pydantic import Field, ConfigDict, model_validator
from pairdb.schemas.base import PairDBBaseModel

logger = logging.getLogger(__name__)

DELIMITERS = {"space": " ", "tab": "\t", "comma": ","}


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalManifestConfig(PairDBBaseModel):
    """Runtime manifest configuration."""
    delimiter: Literal["space", "tab", "comma"]
    shuffle: bool
    seed: Optional[int] = Field(None, ge=0)

    @property
    def delimiter_char(self) -> str:
        return DELIMITERS[self.delimiter]


class InternalKeyConfig(PairDBBaseModel):
    """Runtime key derivation configuration."""
    width: int = Field(ge=1, le=18)
    separator: str = Field(min_length=1)

    @property
    def capacity(self) -> int:
        """Number of distinct indices the zero-padded width can hold."""
        return 10 ** self.width


class InternalImageConfig(PairDBBaseModel):
    """Runtime image configuration.

    A non-empty ``encode_type`` with ``encoded=False`` is read as an implicit
    request for encoded payloads. Size checking needs the raw pixel buffer,
    so it cannot be combined with encoded payloads.
    """
    root_dir: str
    grayscale: bool
    resize_height: int = Field(ge=0)
    resize_width: int = Field(ge=0)
    encoded: bool
    encode_type: str
    check_size: bool

    @model_validator(mode="before")
    @classmethod
    def infer_encoded_from_encode_type(cls, data):
        if isinstance(data, dict) and data.get("encode_type") and not data.get("encoded"):
            logger.warning("encode_type '%s' specified, assuming encoded=true", data["encode_type"])
            data = {**data, "encoded": True}
        return data

    @model_validator(mode="after")
    def reject_size_check_on_encoded(self):
        if self.check_size and self.encoded:
            raise ValueError("check_size requires raw payloads and cannot be combined with encoded=true")
        return self

    @property
    def is_color(self) -> bool:
        return not self.grayscale


class InternalStoreConfig(PairDBBaseModel):
    """Runtime store configuration."""
    backend: Literal["lmdb", "sqlite"]
    batch_size: int = Field(ge=1)
    lmdb_map_size: int = Field(ge=1 << 20)


class InternalPipelineConfig(PairDBBaseModel):
    """Runtime pipeline configuration."""
    orphan_labels: Literal["keep", "drop"]
    verify: bool


class InternalLoggingConfig(PairDBBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    file: Optional[str]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(PairDBBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that processing code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.batch_size = config.store.batch_size  # NOT .get()
            self.width = config.keys.width

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    manifest: InternalManifestConfig
    keys: InternalKeyConfig
    image: InternalImageConfig
    store: InternalStoreConfig
    pipeline: InternalPipelineConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
