"""
Geometric operations on pixel buffers.

Functions:
    resize_to_fit: Uniformly scale a buffer down to fit within a bounding box
    rotate: Rotate clockwise by an arbitrary angle, expanding to the bounding box
    crop_normalized: Extract a region given in normalized coordinates
    transpose: Apply a lossless flip/rotation (used for orientation correction)
"""

import logging
import math
from typing import Tuple

from PIL import Image

from IP_Libs.errors import FilterError, InvalidCropRegion, InvalidDimensions
from IP_Libs.ImageEditingLib.filter_specs import NormalizedRect
from IP_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


def fit_dimensions(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """
    Compute the dimensions of a uniform downscale into max_width x max_height.

    Args:
        width: Current width
        height: Current height
        max_width: Maximum allowed width (must be positive)
        max_height: Maximum allowed height (must be positive)

    Returns:
        (new_width, new_height), each rounded down and at least 1.
        Unchanged if the image already fits.

    Raises:
        InvalidDimensions: If any bound is not positive
    """
    if max_width < 1 or max_height < 1:
        raise InvalidDimensions(f"Resize bounds must be positive, got {max_width}x{max_height}")

    if width <= max_width and height <= max_height:
        return width, height

    ratio = min(max_width / width, max_height / height)
    return max(1, int(width * ratio)), max(1, int(height * ratio))


def resize_to_fit(buffer: PixelBuffer, max_width: int, max_height: int) -> PixelBuffer:
    """
    Scale a buffer down so it fits within max_width x max_height.

    Returns the same buffer object when it already fits.
    """
    new_size = fit_dimensions(buffer.width, buffer.height, max_width, max_height)
    if new_size == buffer.size:
        return buffer

    logger.debug(f"Resizing {buffer.width}x{buffer.height} -> {new_size[0]}x{new_size[1]}")
    resized = buffer.image.resize(new_size, resample=Image.Resampling.LANCZOS)
    return PixelBuffer(resized)


def rotate(buffer: PixelBuffer, degrees: float) -> PixelBuffer:
    """
    Rotate a buffer clockwise around its center.

    The output is sized to the rotated bounding box; uncovered corners are
    transparent. Multiples of 90 degrees are exact (no resampling).

    Args:
        buffer: Buffer to rotate
        degrees: Clockwise angle in degrees (any finite float)

    Returns:
        A new rotated buffer

    Raises:
        FilterError: If degrees is NaN or infinite
    """
    if not math.isfinite(degrees):
        raise FilterError(f"Rotation angle must be finite, got {degrees}")

    # Pillow rotates counter-clockwise
    angle = (-float(degrees)) % 360.0
    rotated = buffer.image.rotate(
        angle,
        resample=Image.Resampling.BICUBIC,
        expand=True,
        fillcolor=TRANSPARENT,
    )
    return PixelBuffer(rotated)


def normalized_to_pixel_box(
    rect: NormalizedRect,
    width: int,
    height: int,
) -> Tuple[int, int, int, int]:
    """
    Convert a normalized rectangle into a (left, top, right, bottom) pixel box.

    Each coordinate is multiplied by the current dimension and truncated.

    Raises:
        InvalidCropRegion: If the rectangle leaves the unit square or
                           resolves to a non-positive width or height
    """
    for name, value in zip(("left", "top", "right", "bottom"), rect.as_tuple()):
        if not 0.0 <= value <= 1.0:
            raise InvalidCropRegion(f"Crop {name} must be within [0, 1], got {value}")

    left = int(rect.left * width)
    top = int(rect.top * height)
    crop_width = min(int(rect.width * width), width - left)
    crop_height = min(int(rect.height * height), height - top)

    if crop_width <= 0 or crop_height <= 0:
        raise InvalidCropRegion(
            f"Crop region {rect.as_tuple()} resolves to {crop_width}x{crop_height} "
            f"pixels on a {width}x{height} image"
        )

    return left, top, left + crop_width, top + crop_height


def crop_normalized(buffer: PixelBuffer, rect: NormalizedRect) -> PixelBuffer:
    """Extract the sub-region described by a normalized rectangle."""
    box = normalized_to_pixel_box(rect, buffer.width, buffer.height)
    return PixelBuffer(buffer.image.crop(box))


def transpose(buffer: PixelBuffer, method: Image.Transpose) -> PixelBuffer:
    """Apply a lossless Pillow transpose and return a new buffer."""
    return PixelBuffer(buffer.image.transpose(method))
