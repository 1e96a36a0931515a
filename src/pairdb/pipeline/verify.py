"""Read both stores back and check that they are aligned.

Every image entry must have a label entry under the same key, and both
payloads must carry the same index and key. Label entries without an image
are reported separately: they are expected when image builds fail and
orphan labels are kept.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from pairdb.imaging.payload import ImagePayload, LabelPayload
from pairdb.store.base import KeyValueStore

__all__ = ['AlignmentReport', 'verify_alignment']

logger = logging.getLogger(__name__)


@dataclass
class AlignmentReport:
    """Outcome of a label/image store comparison."""
    labels: int = 0
    images: int = 0
    label_only: List[str] = field(default_factory=list)
    image_only: List[str] = field(default_factory=list)
    mismatched: List[str] = field(default_factory=list)

    @property
    def aligned(self) -> bool:
        return not self.image_only and not self.mismatched

    def summary(self) -> str:
        return (
            f"labels={self.labels} images={self.images} "
            f"label_only={len(self.label_only)} image_only={len(self.image_only)} "
            f"mismatched={len(self.mismatched)}"
        )


def verify_alignment(label_store: KeyValueStore, image_store: KeyValueStore) -> AlignmentReport:
    """Compare two stores written by the same run.

    Both stores are walked in ascending key order in a single merge pass,
    so memory use does not grow with the store size.
    """
    report = AlignmentReport()
    labels = iter(label_store.items())
    images = iter(image_store.items())
    label_item = next(labels, None)
    image_item = next(images, None)

    while label_item is not None or image_item is not None:
        if image_item is None or (label_item is not None and label_item[0] < image_item[0]):
            report.labels += 1
            report.label_only.append(label_item[0])
            label_item = next(labels, None)
        elif label_item is None or image_item[0] < label_item[0]:
            report.images += 1
            report.image_only.append(image_item[0])
            image_item = next(images, None)
        else:
            key = label_item[0]
            report.labels += 1
            report.images += 1
            label = LabelPayload.from_bytes(label_item[1])
            image = ImagePayload.from_bytes(image_item[1])
            if label.label != image.label or label.param != key or image.param != key:
                report.mismatched.append(key)
            label_item = next(labels, None)
            image_item = next(images, None)

    if report.aligned:
        logger.info("Stores aligned: %s", report.summary())
    else:
        logger.error("Stores misaligned: %s", report.summary())
    return report
