"""
EXIF orientation correction.

Reads the orientation tag from the originating source and applies the
matching lossless flip or rotation so the buffer is upright. Reading the tag
is best-effort: a missing tag, unreadable metadata, or any error while reading
leaves the buffer unchanged.

Classes:
    OrientationTag: EXIF orientation values

Functions:
    read_orientation: Read the tag from a source, raising OrientationReadFailure
    safe_read_orientation: Same, but degrades to IDENTITY on any failure
    correct_orientation: Apply the correction for a source's tag
"""

import logging
from enum import IntEnum
from typing import Dict

from PIL import Image

from IP_Libs.errors import OrientationReadFailure
from IP_Libs.ImageEditingLib.geometry_ops import transpose
from IP_Libs.ImageEditingLib.image_models import PixelBuffer
from IP_Libs.PipelineLib.image_source import ImageSource

logger = logging.getLogger(__name__)

EXIF_ORIENTATION_TAG = 0x0112


class OrientationTag(IntEnum):
    IDENTITY = 1
    FLIP_HORIZONTAL = 2
    ROTATE_180 = 3
    FLIP_VERTICAL = 4
    TRANSPOSE = 5
    ROTATE_90 = 6
    TRANSVERSE = 7
    ROTATE_270 = 8

    @classmethod
    def from_exif(cls, value: object) -> "OrientationTag":
        """Map a raw EXIF value to a tag; unknown values map to IDENTITY."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.IDENTITY


# Rotations are clockwise; Pillow's ROTATE_* constants are counter-clockwise
_CORRECTIONS: Dict[OrientationTag, Image.Transpose] = {
    OrientationTag.FLIP_HORIZONTAL: Image.Transpose.FLIP_LEFT_RIGHT,
    OrientationTag.ROTATE_180: Image.Transpose.ROTATE_180,
    OrientationTag.FLIP_VERTICAL: Image.Transpose.FLIP_TOP_BOTTOM,
    OrientationTag.TRANSPOSE: Image.Transpose.TRANSPOSE,
    OrientationTag.ROTATE_90: Image.Transpose.ROTATE_270,
    OrientationTag.TRANSVERSE: Image.Transpose.TRANSVERSE,
    OrientationTag.ROTATE_270: Image.Transpose.ROTATE_90,
}


def read_orientation(source: ImageSource) -> OrientationTag:
    """
    Read the EXIF orientation tag of a source.

    Returns:
        The orientation tag (IDENTITY when the source carries none)

    Raises:
        OrientationReadFailure: If the source or its metadata cannot be read
    """
    try:
        with source.open() as stream:
            with Image.open(stream) as img:
                value = img.getexif().get(EXIF_ORIENTATION_TAG)
    except Exception as e:
        raise OrientationReadFailure(
            f"Cannot read orientation from {source.describe()}: {e}"
        ) from e

    if value is None:
        return OrientationTag.IDENTITY
    return OrientationTag.from_exif(value)


def safe_read_orientation(source: ImageSource) -> OrientationTag:
    try:
        return read_orientation(source)
    except OrientationReadFailure as e:
        logger.debug(f"Ignoring orientation read failure: {e}")
        return OrientationTag.IDENTITY


def apply_orientation(buffer: PixelBuffer, tag: OrientationTag) -> PixelBuffer:
    """Apply the correction for a tag; IDENTITY returns the same buffer."""
    method = _CORRECTIONS.get(tag)
    if method is None:
        return buffer
    return transpose(buffer, method)


def correct_orientation(buffer: PixelBuffer, source: ImageSource) -> PixelBuffer:
    """
    Normalize a decoded buffer to upright using the source's orientation tag.

    Never raises for metadata problems; the buffer is returned unchanged
    instead.
    """
    tag = safe_read_orientation(source)
    if tag != OrientationTag.IDENTITY:
        logger.debug(f"Correcting orientation {tag.name} for {source.describe()}")
    return apply_orientation(buffer, tag)
