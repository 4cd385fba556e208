"""
Memory-bounded image decoder.

Decoding happens in two passes over the source:

1. Bounds pass: only the header is parsed to read the declared dimensions.
   No pixel data is materialized.
2. Pixel pass: the source is re-opened and decoded at a power-of-two
   subsample factor chosen so neither axis exceeds the decode cap.

For JPEG sources the subsampling is done inside the decoder (DCT scaling via
Image.draft) so the full-resolution raster is never allocated. Any factor the
JPEG decoder cannot reach on its own (beyond 1/8) and all other formats are
reduced with Image.reduce after loading.

Functions:
    compute_subsample_factor: Smallest power-of-two factor meeting the cap
    read_image_bounds: Bounds pass
    decode_subsampled: Pixel pass at a given factor
    decode_image: Both passes, producing an RGBA PixelBuffer
"""

import logging
from typing import Tuple

from PIL import Image

from IP_Libs.constants import MAX_DECODE_HEIGHT, MAX_DECODE_WIDTH, PIXEL_MODE
from IP_Libs.errors import DecodeError
from IP_Libs.ImageEditingLib.image_models import PixelBuffer
from IP_Libs.PipelineLib.image_source import ImageSource

logger = logging.getLogger(__name__)

# Modes Image.reduce handles directly; anything else is converted to RGBA first
REDUCIBLE_MODES = {"L", "LA", "RGB", "RGBA", "CMYK"}

DECODE_FAILURES = (OSError, ValueError, SyntaxError, Image.DecompressionBombError)


def _ceil_div(value: int, divisor: int) -> int:
    return -(-value // divisor)


def compute_subsample_factor(
    width: int,
    height: int,
    max_width: int = MAX_DECODE_WIDTH,
    max_height: int = MAX_DECODE_HEIGHT,
) -> int:
    """
    Compute the smallest power-of-two subsample factor that fits the cap.

    Starting from 1, the factor doubles while the subsampled image
    (each axis rounded up, as the decoder does) is still larger than
    max_width x max_height.

    Args:
        width: Source width in pixels
        height: Source height in pixels
        max_width: Maximum decoded width
        max_height: Maximum decoded height

    Returns:
        Subsample factor (1, 2, 4, 8, ...)

    Raises:
        ValueError: If any dimension or bound is not positive

    Example:
        >>> compute_subsample_factor(8000, 6000)
        2
        >>> compute_subsample_factor(4096, 4096)
        1
    """
    if width < 1 or height < 1:
        raise ValueError(f"Source dimensions must be positive, got {width}x{height}")
    if max_width < 1 or max_height < 1:
        raise ValueError(f"Decode bounds must be positive, got {max_width}x{max_height}")

    factor = 1
    while _ceil_div(width, factor) > max_width or _ceil_div(height, factor) > max_height:
        factor *= 2
    return factor


def read_image_bounds(source: ImageSource) -> Tuple[int, int]:
    """
    Read the declared dimensions of an image without decoding pixels.

    Raises:
        DecodeError: If the source cannot be opened, is not a supported image,
                     or declares more pixels than Pillow's bomb limit allows
    """
    try:
        with source.open() as stream:
            with Image.open(stream) as img:
                return img.size
    except DECODE_FAILURES as e:
        raise DecodeError(f"Cannot read image bounds from {source.describe()}: {e}") from e


def decode_subsampled(source: ImageSource, factor: int) -> PixelBuffer:
    """
    Decode pixel data at 1/factor resolution in each axis.

    Args:
        source: Image source (re-opened for this pass)
        factor: Power-of-two subsample factor

    Returns:
        RGBA PixelBuffer of size ceil(width / factor) x ceil(height / factor)

    Raises:
        DecodeError: If the source cannot be opened or decoded
    """
    if factor < 1 or factor & (factor - 1):
        raise ValueError(f"factor must be a positive power of two, got {factor}")

    try:
        with source.open() as stream:
            with Image.open(stream) as img:
                source_width, source_height = img.size
                target_size = (_ceil_div(source_width, factor), _ceil_div(source_height, factor))

                if factor > 1 and img.format == "JPEG":
                    img.draft(img.mode, (max(1, source_width // factor), max(1, source_height // factor)))

                img.load()
                decoded = img

                if decoded.size != target_size:
                    # Residual factor left after any in-decoder scaling
                    applied = max(1, round(max(source_width, source_height) / max(decoded.size)))
                    remaining = max(1, factor // applied)
                    if decoded.mode not in REDUCIBLE_MODES:
                        decoded = decoded.convert(PIXEL_MODE)
                    decoded = decoded.reduce(remaining)

                # convert() always copies; img is closed when the block exits
                return PixelBuffer(decoded.convert(PIXEL_MODE))
    except DECODE_FAILURES as e:
        raise DecodeError(f"Cannot decode image from {source.describe()}: {e}") from e


def decode_image(
    source: ImageSource,
    max_width: int = MAX_DECODE_WIDTH,
    max_height: int = MAX_DECODE_HEIGHT,
) -> PixelBuffer:
    """
    Decode a source into a PixelBuffer no larger than max_width x max_height.

    Sources whose declared size exceeds Pillow's decompression-bomb limit
    (twice Image.MAX_IMAGE_PIXELS, about 179 megapixels by default) are
    rejected in the bounds pass with DecodeError, even though the subsampled
    decode would fit the cap. The limit is process-wide and is left as the
    application configured it.

    Args:
        source: Image source
        max_width: Decode cap for the width
        max_height: Decode cap for the height

    Returns:
        RGBA PixelBuffer

    Raises:
        DecodeError: If the source cannot be opened or decoded
    """
    width, height = read_image_bounds(source)
    factor = compute_subsample_factor(width, height, max_width, max_height)
    logger.debug(f"Decoding {source.describe()}: {width}x{height}, subsample factor {factor}")

    buffer = decode_subsampled(source, factor)
    logger.debug(f"Decoded buffer is {buffer.width}x{buffer.height}")
    return buffer
