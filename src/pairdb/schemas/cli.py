"""CLIConfig: Command-line operational overrides.

Configuration for the flags that commonly change between conversion runs:
color mode, ordering, backend, resizing, encoding, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from pairdb.schemas.base import PairDBBaseModel


class CLIConfig(PairDBBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution. Every field is optional; only
    flags actually given on the command line are set.

    Notes
    -----
    Negative resize values are clamped to 0 here, so ``--resize-width -1``
    means "do not resize" rather than a validation error.

    Usage
    -----
        cli_cfg = CLIConfig(gray=True, shuffle=True, backend="sqlite")
        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    gray: Optional[bool] = None
    shuffle: Optional[bool] = None
    seed: Optional[int] = Field(None, ge=0)
    backend: Optional[Literal["lmdb", "sqlite"]] = None
    resize_width: Optional[int] = None
    resize_height: Optional[int] = None
    check_size: Optional[bool] = None
    encoded: Optional[bool] = None
    encode_type: Optional[str] = None
    root_dir: Optional[str] = None
    batch_size: Optional[int] = None
    orphan_labels: Optional[Literal["keep", "drop"]] = None
    verify: Optional[bool] = None
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None
    log_file: Optional[str] = None

    @field_validator("resize_width", "resize_height", mode="before")
    @classmethod
    def clamp_resize(cls, v):
        if v is not None:
            return max(0, int(v))
        return v

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        manifest = {}
        if self.shuffle is not None:
            manifest["shuffle"] = self.shuffle
        if self.seed is not None:
            manifest["seed"] = self.seed
        if manifest:
            overrides["manifest"] = manifest

        image = {}
        if self.gray is not None:
            image["grayscale"] = self.gray
        for name in ("resize_width", "resize_height", "check_size",
                     "encoded", "encode_type", "root_dir"):
            value = getattr(self, name)
            if value is not None:
                image[name] = value
        if image:
            overrides["image"] = image

        store = {}
        if self.backend is not None:
            store["backend"] = self.backend
        if self.batch_size is not None:
            store["batch_size"] = self.batch_size
        if store:
            overrides["store"] = store

        pipeline = {}
        if self.orphan_labels is not None:
            pipeline["orphan_labels"] = self.orphan_labels
        if self.verify is not None:
            pipeline["verify"] = self.verify
        if pipeline:
            overrides["pipeline"] = pipeline

        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
