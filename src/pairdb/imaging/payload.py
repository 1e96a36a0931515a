"""Label and image payloads written under each store key.

Both payloads share the fields a downstream reader uses to cross-check the
two stores: ``label`` (the record's final-order index) and ``param`` (the
record's key). Payloads serialize to JSON bytes; image bytes are base64
encoded inside the document.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

__all__ = ['Datum', 'LabelPayload', 'ImagePayload', 'build_label_payload']


class Datum(BaseModel):
    """Fixed-schema record shared by label and image payloads."""

    model_config = ConfigDict(
        extra='forbid',
        ser_json_bytes='base64',
        val_json_bytes='base64',
    )

    channels: int = Field(0, ge=0)
    height: int = Field(0, ge=0)
    width: int = Field(0, ge=0)
    data: bytes = b""
    float_data: List[float] = Field(default_factory=list)
    label: int
    param: str = ""
    encoded: bool = False

    @property
    def expected_size(self) -> int:
        """Raw buffer length implied by the shape fields."""
        return self.channels * self.height * self.width

    def to_bytes(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_bytes(cls, raw: bytes):
        return cls.model_validate_json(raw)


class LabelPayload(Datum):
    """A 1x1x1 datum carrying the record's scalar in ``float_data[0]``."""

    channels: int = 1
    height: int = 1
    width: int = 1

    @property
    def scalar(self) -> float:
        return self.float_data[0]


class ImagePayload(Datum):
    """Image pair stacked along channels.

    Raw mode: ``data`` holds uint8 pixels in channel-major (C, H, W) order,
    the first image's channels followed by the second's.
    Encoded mode: ``encoded_images`` holds one encoded file per image and
    ``data`` is empty.
    """

    encoded_images: List[bytes] = Field(default_factory=list)


def build_label_payload(index: int, key: str, scalar: float) -> LabelPayload:
    """Build the label payload for one record. Never fails."""
    return LabelPayload(float_data=[float(scalar)], label=index, param=key)
