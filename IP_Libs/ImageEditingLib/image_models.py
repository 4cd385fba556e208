"""
Image data models for the image pipeline.

This module defines the in-memory raster that flows between pipeline stages.

Classes:
    PixelBuffer: An 8-bit-per-channel RGBA raster backed by a Pillow image

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

from IP_Libs.constants import BYTES_PER_PIXEL, PIXEL_MODE
from IP_Libs.errors import InvalidDimensions

RgbaColor = Tuple[int, int, int, int]


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """An RGBA raster handed from one pipeline stage to the next.

    A stage either returns the buffer it received unchanged or returns a
    brand-new buffer; it never mutates the image it was given.

    Attributes:
        image: Pillow image in RGBA mode holding the pixel data
    """

    image: Image.Image

    def __post_init__(self):
        if self.image.mode != PIXEL_MODE:
            raise ValueError(f"PixelBuffer requires {PIXEL_MODE} image, got {self.image.mode}")
        if self.image.width < 1 or self.image.height < 1:
            raise InvalidDimensions(
                f"PixelBuffer dimensions must be positive, got {self.image.width}x{self.image.height}"
            )

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def data(self) -> bytes:
        """Row-major RGBA bytes; length is width * height * 4."""
        return self.image.tobytes()

    def to_array(self) -> np.ndarray:
        """Return a (height, width, 4) uint8 copy of the pixel data."""
        return np.array(self.image, dtype=np.uint8)

    def pixels_equal(self, other: "PixelBuffer") -> bool:
        return self.size == other.size and self.data == other.data

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Wrap a Pillow image, converting it to RGBA if needed."""
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if image.mode != PIXEL_MODE:
            image = image.convert(PIXEL_MODE)
        return cls(image)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a (height, width, 4) array, clipping to 0-255."""
        if array.ndim != 3 or array.shape[2] != BYTES_PER_PIXEL:
            raise InvalidDimensions(f"Expected (height, width, 4) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            array = np.clip(np.rint(array), 0, 255).astype(np.uint8)
        return cls(Image.fromarray(np.ascontiguousarray(array)))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> "PixelBuffer":
        """Build a buffer from raw row-major RGBA bytes."""
        if width < 1 or height < 1:
            raise InvalidDimensions(f"Dimensions must be positive, got {width}x{height}")
        expected = width * height * BYTES_PER_PIXEL
        if len(data) != expected:
            raise InvalidDimensions(
                f"Pixel data length {len(data)} does not match {width}x{height} RGBA ({expected} bytes)"
            )
        return cls(Image.frombytes(PIXEL_MODE, (width, height), bytes(data)))

    @classmethod
    def new(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 255)) -> "PixelBuffer":
        if width < 1 or height < 1:
            raise InvalidDimensions(f"Dimensions must be positive, got {width}x{height}")
        return cls(Image.new(PIXEL_MODE, (width, height), color))
