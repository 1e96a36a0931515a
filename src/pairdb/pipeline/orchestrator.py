"""Single-pass conversion of a manifest into mirrored label and image stores.

Coordinates manifest reading, final-order construction, the label pass and
the image pass. Both passes consume the same frozen final order, which is
what keeps the two stores keyed identically.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple, Union

from pairdb.contracts import ImageBuildError, StoreOpenError, assert_payload_tagged
from pairdb.imaging.builder import ImagePairBuilder
from pairdb.imaging.payload import build_label_payload
from pairdb.manifest.ordering import OrderedRecord, build_final_order
from pairdb.manifest.reader import read_manifest
from pairdb.pipeline.validator import SizeConsistencyValidator
from pairdb.pipeline.verify import AlignmentReport, verify_alignment
from pairdb.pipeline.writer import BatchedTransactionWriter
from pairdb.schemas import InternalConfig
from pairdb.store import open_store

__all__ = ['ConversionPipeline', 'ConversionSummary', 'setup_logging']

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    """Configure the root logger with a console handler and optional file handler.

    Existing root handlers are replaced, so calling this twice does not
    duplicate output.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    logger.debug("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_file)


@dataclass
class ConversionSummary:
    """Counts reported at the end of a run."""
    records: int = 0
    lines_read: int = 0
    labels_written: int = 0
    images_written: int = 0
    label_commits: int = 0
    image_commits: int = 0
    failed_images: List[str] = field(default_factory=list)
    dropped_labels: int = 0
    alignment: Optional[AlignmentReport] = None


class ConversionPipeline:
    """Convert a paired-image manifest into a label store and an image store.

    **Passes:**

    1. **Label pass**: one LabelPayload per record (scalar, index, key).
       Needs no image decoding.
    2. **Image pass**: one ImagePayload per record whose image pair builds;
       failed pairs are logged and skipped. With ``check_size`` every
       payload must match the first one's size.

    With ``orphan_labels="keep"`` (default) the label pass runs first and
    writes a label for every record. With ``orphan_labels="drop"`` the image
    pass runs first and the label pass skips records whose image failed.

    **Failure handling:**

    Manifest and key errors abort before any store is opened. Store, commit
    and size errors abort the run; batches committed before the error stay,
    the pending batch is discarded.

    Example usage::

        config = resolve_config(ParamConfig(), None, CLIConfig(shuffle=True, seed=1))
        summary = ConversionPipeline(config).run("pairs.txt", "labels_db", "images_db")
    """

    def __init__(self, config: InternalConfig, builder: Optional[ImagePairBuilder] = None):
        self.config = config
        self.builder = builder if builder is not None else ImagePairBuilder(config)

    def _open(self, location):
        return open_store(
            self.config.store.backend, location, mode="new",
            map_size=self.config.store.lmdb_map_size,
        )

    def _check_destinations(self, label_location, image_location) -> None:
        """Refuse to start when either store location is taken."""
        label_path, image_path = Path(label_location), Path(image_location)
        if label_path.resolve() == image_path.resolve():
            raise StoreOpenError(f"Label and image stores share one location: {label_path}")
        for path in (label_path, image_path):
            if path.exists():
                raise StoreOpenError(f"Store destination already exists: {path}")

    def prepare(self, manifest) -> Tuple[Tuple[OrderedRecord, ...], int]:
        """Read the manifest and compute the final order. Writes nothing."""
        records, lines_read = read_manifest(manifest, self.config.manifest.delimiter_char)
        order = build_final_order(
            records,
            shuffle=self.config.manifest.shuffle,
            seed=self.config.manifest.seed,
            key_width=self.config.keys.width,
            sep=self.config.keys.separator,
        )
        return order, lines_read

    def write_labels(self, order: Sequence[OrderedRecord], location,
                     skip: Optional[Set[str]] = None) -> BatchedTransactionWriter:
        """Label pass: write one LabelPayload per record not in ``skip``."""
        skip = skip or set()
        logger.info("Writing labels db %s", location)
        with self._open(location) as store:
            with BatchedTransactionWriter(store, self.config.store.batch_size, name="labels") as writer:
                for item in order:
                    if item.key in skip:
                        continue
                    payload = build_label_payload(item.index, item.key, item.record.scalar)
                    assert_payload_tagged(payload, item.index, item.key)
                    writer.put(item.key, payload.to_bytes())
        return writer

    def write_images(self, order: Sequence[OrderedRecord], location) -> Tuple[BatchedTransactionWriter, List[str]]:
        """Image pass: write one ImagePayload per record whose pair builds.

        Returns the finished writer and the keys whose image build failed.
        """
        failed = []
        validator = SizeConsistencyValidator() if self.config.image.check_size else None
        logger.info("Writing images db %s", location)
        with self._open(location) as store:
            with BatchedTransactionWriter(store, self.config.store.batch_size, name="images") as writer:
                for item in order:
                    payload = self.builder.build(item.record.path_a, item.record.path_b, item.index, item.key)
                    if payload is None:
                        err = ImageBuildError(item.key, "Skipping image pair")
                        logger.warning("%s (policy=%s)", err, err.policy.value)
                        failed.append(item.key)
                        continue
                    if validator is not None:
                        validator.check(payload, item.key)
                    assert_payload_tagged(payload, item.index, item.key)
                    writer.put(item.key, payload.to_bytes())
        return writer, failed

    def verify(self, label_location, image_location) -> AlignmentReport:
        """Reopen both stores read-only and compare them."""
        backend = self.config.store.backend
        with open_store(backend, label_location, mode="read") as labels, \
                open_store(backend, image_location, mode="read") as images:
            return verify_alignment(labels, images)

    def run(self, manifest: Union[str, Path], label_location: Union[str, Path],
            image_location: Union[str, Path]) -> ConversionSummary:
        """Run the full conversion.

        Raises
        ------
        ParseError, ManifestNotFoundError, KeyOverflowError, StoreOpenError
            Before any store is opened; an existing destination is
            reported before anything is written.
        CommitError, SizeMismatchError
            During the passes; earlier committed batches are kept.
        """
        order, lines_read = self.prepare(manifest)
        self._check_destinations(label_location, image_location)
        summary = ConversionSummary(records=len(order), lines_read=lines_read)

        if self.config.pipeline.orphan_labels == "drop":
            images, failed = self.write_images(order, image_location)
            labels = self.write_labels(order, label_location, skip=set(failed))
            summary.dropped_labels = len(failed)
        else:
            labels = self.write_labels(order, label_location)
            images, failed = self.write_images(order, image_location)

        summary.labels_written = labels.puts
        summary.label_commits = labels.commits
        summary.images_written = images.puts
        summary.image_commits = images.commits
        summary.failed_images = failed

        logger.info(
            "Wrote %d labels (%d commits) and %d images (%d commits); %d image pairs skipped.",
            summary.labels_written, summary.label_commits,
            summary.images_written, summary.image_commits, len(failed),
        )

        if self.config.pipeline.verify:
            summary.alignment = self.verify(label_location, image_location)

        return summary
