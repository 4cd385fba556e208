"""
Pytest configuration and shared fixtures for image pipeline tests.

This module provides shared test fixtures used across multiple test modules.
"""

import io
from typing import Callable, Optional, Tuple

import pytest
from PIL import Image

from IP_Libs.ImageEditingLib.image_models import PixelBuffer

from image_helpers import pattern_array


@pytest.fixture
def pattern_buffer() -> PixelBuffer:
    """
    Provide a 64x48 RGBA buffer with non-uniform content.

    Returns:
        PixelBuffer whose every effect produces a visible change
    """
    return PixelBuffer.from_array(pattern_array(64, 48))


@pytest.fixture
def encoded_image() -> Callable[..., bytes]:
    """
    Provide a factory producing encoded image bytes.

    Returns:
        Function (size, format="PNG", orientation=None) -> bytes
    """
    def factory(
        size: Tuple[int, int],
        image_format: str = "PNG",
        orientation: Optional[int] = None,
    ) -> bytes:
        width, height = size
        mode = "RGB" if image_format == "JPEG" else "RGBA"
        image = Image.fromarray(pattern_array(width, height)).convert(mode)
        kwargs = {}
        if orientation is not None:
            exif = Image.Exif()
            exif[0x0112] = orientation
            kwargs["exif"] = exif
        out = io.BytesIO()
        image.save(out, format=image_format, **kwargs)
        return out.getvalue()

    return factory
