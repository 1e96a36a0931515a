"""Payload modules.

- payload: LabelPayload / ImagePayload schemas and serialization
- builder: OpenCV image pair loader
"""

from pairdb.imaging.payload import Datum, LabelPayload, ImagePayload, build_label_payload
from pairdb.imaging.builder import ImagePairBuilder

__all__ = [
    "Datum",
    "LabelPayload",
    "ImagePayload",
    "build_label_payload",
    "ImagePairBuilder",
]
