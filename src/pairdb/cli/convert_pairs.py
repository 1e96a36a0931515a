"""Core conversion runner and command-line entry point.

This module contains the actual conversion runner, separated from argument
parsing. ``scripts/convert_image_pairs.py`` and the ``pairdb-convert``
console script are thin wrappers around :func:`main`.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from pydantic import ValidationError

from pairdb.contracts import PairDBError
from pairdb.pipeline.orchestrator import ConversionPipeline, ConversionSummary, setup_logging
from pairdb.schemas import resolve_config, load_user_config_dict, ParamConfig, UserConfig, CLIConfig

__all__ = ['run_conversion', 'build_parser', 'main']

logger = logging.getLogger(__name__)

USAGE = """Convert a manifest of image pairs into two mirrored key-value stores.

Each manifest line is:  PATH_A PATH_B SCALAR
The label store receives the scalars, the image store the image pairs,
both under the same key.
"""


def run_conversion(
    manifest: str,
    label_db: str,
    image_db: str,
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> ConversionSummary:
    """Resolve configuration and run one conversion.

    Parameters
    ----------
    manifest : str
        Path to the manifest file.
    label_db, image_db : str
        Destinations of the label and image stores. Both must not exist.
    user_config_path : str, optional
        Python file with a CONFIG dict (see scripts/user_config.py).
    cli_args : dict, optional
        CLIConfig fields given on the command line. None values are ignored.
    verbose : bool, optional
        If True, enable DEBUG logging and log the resolved config.

    Raises
    ------
    PairDBError
        On any fatal pipeline error.
    ValidationError
        If configuration validation fails.
    """
    param_cfg = ParamConfig()

    user_cfg = None
    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))

    cli_args = dict(cli_args or {})
    if verbose and "log_level" not in cli_args:
        cli_args["log_level"] = "DEBUG"
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    # Resolve to internal config (Param < User < CLI)
    config = resolve_config(param_cfg, user_cfg, cli_cfg)
    setup_logging(config.logging.level, config.logging.file)

    logger.info("Manifest: %s", manifest)
    logger.info("Labels:   %s (%s)", label_db, config.store.backend)
    logger.info("Images:   %s (%s)", image_db, config.store.backend)
    if verbose:
        logger.debug("Full internal configuration:\n%s", json.dumps(config.model_dump(), indent=2))

    return ConversionPipeline(config).run(manifest, label_db, image_db)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pairdb-convert",
        description=USAGE,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("manifest", help="Manifest file: PATH_A PATH_B SCALAR per line")
    parser.add_argument("label_db", help="Label store destination (must not exist)")
    parser.add_argument("image_db", help="Image store destination (must not exist)")
    parser.add_argument("--config", help="User config file (Python file with a CONFIG dict)")
    parser.add_argument("--gray", action="store_true", default=None,
                        help="Treat images as grayscale")
    parser.add_argument("--shuffle", action="store_true", default=None,
                        help="Randomly shuffle the order of records")
    parser.add_argument("--seed", type=int, help="Shuffle seed")
    parser.add_argument("--backend", choices=["lmdb", "sqlite"], help="Store backend")
    parser.add_argument("--resize-width", "--resize_width", dest="resize_width", type=int,
                        help="Width images are resized to")
    parser.add_argument("--resize-height", "--resize_height", dest="resize_height", type=int,
                        help="Height images are resized to")
    parser.add_argument("--check-size", "--check_size", dest="check_size", action="store_true", default=None,
                        help="Check that all image payloads have the same size")
    parser.add_argument("--encoded", action="store_true", default=None,
                        help="Store encoded images instead of raw pixels")
    parser.add_argument("--encode-type", "--encode_type", dest="encode_type",
                        help="Encoding for stored images ('png', 'jpg', ...)")
    parser.add_argument("--root-dir", dest="root_dir", help="Folder prepended to manifest paths")
    parser.add_argument("--batch-size", dest="batch_size", type=int, help="Puts per commit")
    parser.add_argument("--orphan-labels", dest="orphan_labels", choices=["keep", "drop"],
                        help="Keep or drop labels whose image pair fails to build")
    parser.add_argument("--verify", action="store_true", default=None,
                        help="Read both stores back and check alignment")
    parser.add_argument("--log-file", dest="log_file", help="Also log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


CLI_FIELDS = (
    "gray", "shuffle", "seed", "backend", "resize_width", "resize_height",
    "check_size", "encoded", "encode_type", "root_dir", "batch_size",
    "orphan_labels", "verify", "log_file",
)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        summary = run_conversion(
            args.manifest,
            args.label_db,
            args.image_db,
            user_config_path=args.config,
            cli_args={name: getattr(args, name) for name in CLI_FIELDS},
            verbose=args.verbose,
        )
    except PairDBError as e:
        logger.critical("Conversion failed (%s): %s", type(e).__name__, e)
        return 1
    except ValidationError as e:
        logger.critical("Invalid configuration:\n%s", e)
        return 1
    except (FileNotFoundError, ValueError) as e:
        logger.critical("Could not load configuration: %s", e)
        return 1

    if summary.alignment is not None and not summary.alignment.aligned:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
