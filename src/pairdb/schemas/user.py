"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., GRAYSCALE → grayscale, BACKEND → backend).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient: uppercase and
lowercase keys are both accepted, backend names are case-insensitive, and
negative resize dimensions are clamped to 0 (no resize).
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from pairdb.schemas.base import PairDBBaseModel


class UserImageConfig(PairDBBaseModel):
    """User-facing image config."""
    root_dir: Optional[str] = None
    grayscale: Optional[bool] = None
    resize_height: Optional[int] = None
    resize_width: Optional[int] = None
    encoded: Optional[bool] = None
    encode_type: Optional[str] = None
    check_size: Optional[bool] = None

    @field_validator("resize_height", "resize_width", mode="before")
    @classmethod
    def clamp_resize(cls, v):
        """Negative sizes mean no resize."""
        if v is not None:
            return max(0, int(v))
        return v


class UserStoreConfig(PairDBBaseModel):
    """User-facing store config."""
    backend: Optional[str] = None
    batch_size: Optional[int] = None
    lmdb_map_size: Optional[int] = None

    @field_validator("backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserConfig(PairDBBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            backend="sqlite",
            shuffle=True,
            seed=42,
            resize_height=64,
            resize_width=64,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Manifest and ordering
    delimiter: Optional[Literal["space", "tab", "comma"]] = Field(None, alias="DELIMITER")
    shuffle: Optional[bool] = Field(None, alias="SHUFFLE")
    seed: Optional[int] = Field(None, ge=0, alias="SEED")

    # Keys
    key_width: Optional[int] = Field(None, alias="KEY_WIDTH")

    # Image settings (flat aliases)
    root_dir: Optional[str] = Field(None, alias="ROOT_DIR")
    grayscale: Optional[bool] = Field(None, alias="GRAYSCALE")
    resize_height: Optional[int] = Field(None, alias="RESIZE_HEIGHT")
    resize_width: Optional[int] = Field(None, alias="RESIZE_WIDTH")
    encoded: Optional[bool] = Field(None, alias="ENCODED")
    encode_type: Optional[str] = Field(None, alias="ENCODE_TYPE")
    check_size: Optional[bool] = Field(None, alias="CHECK_SIZE")

    # Store settings (flat aliases)
    backend: Optional[str] = Field(None, alias="BACKEND")
    batch_size: Optional[int] = Field(None, alias="BATCH_SIZE")

    # Pipeline
    orphan_labels: Optional[Literal["keep", "drop"]] = Field(None, alias="ORPHAN_LABELS")
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")

    # Nested overrides (advanced users)
    image: Optional[UserImageConfig] = None
    store: Optional[UserStoreConfig] = None

    model_config = PairDBBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("resize_height", "resize_width", mode="before")
    @classmethod
    def clamp_resize(cls, v):
        """Negative sizes mean no resize."""
        if v is not None:
            return max(0, int(v))
        return v

    @field_validator("backend", "orphan_labels", "delimiter", mode="before")
    @classmethod
    def normalize_names(cls, v):
        """Normalize choice names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        manifest = {}
        if self.delimiter is not None:
            manifest["delimiter"] = self.delimiter
        if self.shuffle is not None:
            manifest["shuffle"] = self.shuffle
        if self.seed is not None:
            manifest["seed"] = self.seed
        if manifest:
            overrides["manifest"] = manifest

        if self.key_width is not None:
            overrides["keys"] = {"width": self.key_width}

        # Image section
        image = {}
        for name in ("root_dir", "grayscale", "resize_height", "resize_width",
                     "encoded", "encode_type", "check_size"):
            value = getattr(self, name)
            if value is not None:
                image[name] = value

        # Merge with explicit image config
        if self.image is not None:
            image.update(self.image.model_dump(exclude_none=True))

        if image:
            overrides["image"] = image

        # Store section
        store = {}
        if self.backend is not None:
            store["backend"] = self.backend
        if self.batch_size is not None:
            store["batch_size"] = self.batch_size

        if self.store is not None:
            store.update(self.store.model_dump(exclude_none=True))

        if store:
            overrides["store"] = store

        if self.orphan_labels is not None:
            overrides["pipeline"] = {"orphan_labels": self.orphan_labels}

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
