"""Build image payloads from pairs of image files.

Both images of a pair are read with OpenCV, optionally resized to a common
size, and stacked along the channel axis. In encoded mode the compressed
image files are stored instead of raw pixels.

Failures (missing file, undecodable data, mismatched shapes, failed
encoding) are logged and reported by returning None, so the caller can skip
the record without aborting the run.
"""

import logging
from pathlib import Path
from typing import Optional, TYPE_CHECKING

import cv2
import numpy as np

from pairdb.imaging.payload import ImagePayload

if TYPE_CHECKING:
    from pairdb.schemas import InternalConfig

__all__ = ['ImagePairBuilder']

logger = logging.getLogger(__name__)


class ImagePairBuilder:
    """Turn ``(path_a, path_b)`` into an ImagePayload.

    Configuration is read from ``config.image``:

    - ``root_dir``: prefix joined to every manifest path (empty = use as-is)
    - ``grayscale``: read single-channel images instead of BGR
    - ``resize_height`` / ``resize_width``: resize when both are > 0
    - ``encoded`` / ``encode_type``: store encoded files instead of pixels

    Examples
    --------
    >>> builder = ImagePairBuilder(config)
    >>> payload = builder.build("a.png", "b.png", index=0, key="00000000_a.png_b.png")
    >>> payload.channels  # 3 + 3 for a color pair
    6
    """

    def __init__(self, config: "InternalConfig"):
        image_cfg = config.image
        self.root_dir = Path(image_cfg.root_dir) if image_cfg.root_dir else None
        self.is_color = image_cfg.is_color
        self.resize_height = image_cfg.resize_height
        self.resize_width = image_cfg.resize_width
        self.encoded = image_cfg.encoded
        self.encode_type = image_cfg.encode_type.lower().lstrip(".")

    @property
    def resizing(self) -> bool:
        return self.resize_height > 0 and self.resize_width > 0

    def _resolve(self, path: str) -> Path:
        if self.root_dir is not None:
            return self.root_dir / path
        return Path(path)

    def _read(self, path: Path) -> Optional[np.ndarray]:
        """Read one image as (H, W, C) uint8, resized if configured."""
        flag = cv2.IMREAD_COLOR if self.is_color else cv2.IMREAD_GRAYSCALE
        img = cv2.imread(str(path), flag)
        if img is None:
            logger.error("Could not open or find file %s", path)
            return None
        if self.resizing:
            img = cv2.resize(img, (self.resize_width, self.resize_height))
        if img.ndim == 2:
            img = img[:, :, np.newaxis]
        return img

    def _encode(self, path: Path, img: np.ndarray) -> Optional[bytes]:
        """Encoded bytes for one image.

        The source file is stored verbatim when it needs no resize and no
        target format was requested.
        """
        if not self.resizing and not self.encode_type:
            return path.read_bytes()

        ext = self.encode_type or path.suffix.lower().lstrip(".")
        ok, buf = cv2.imencode(f".{ext}", img)
        if not ok:
            logger.error("Could not encode %s as %s", path, ext)
            return None
        return buf.tobytes()

    def build(self, path_a: str, path_b: str, index: int, key: str) -> Optional[ImagePayload]:
        """Build the image payload for one record.

        Returns
        -------
        ImagePayload or None
            None when either image cannot be read, the two images differ in
            shape, or encoding fails.
        """
        file_a = self._resolve(path_a)
        file_b = self._resolve(path_b)

        img_a = self._read(file_a)
        img_b = self._read(file_b)
        if img_a is None or img_b is None:
            return None

        if img_a.shape != img_b.shape:
            logger.error("Image pair shapes differ for %s: %s vs %s", key, img_a.shape, img_b.shape)
            return None

        height, width, channels = img_a.shape

        try:
            if self.encoded:
                enc_a = self._encode(file_a, img_a)
                enc_b = self._encode(file_b, img_b)
                if enc_a is None or enc_b is None:
                    return None
                return ImagePayload(
                    channels=2 * channels, height=height, width=width,
                    encoded=True, encoded_images=[enc_a, enc_b],
                    label=index, param=key,
                )
        except (OSError, cv2.error) as e:
            logger.error("Encoding failed for %s: %s", key, e)
            return None

        stacked = np.concatenate([img_a, img_b], axis=2)
        data = np.ascontiguousarray(stacked.transpose(2, 0, 1)).tobytes()
        return ImagePayload(
            channels=2 * channels, height=height, width=width,
            data=data, label=index, param=key,
        )
