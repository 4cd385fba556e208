"""
Atomic image encoder.

The buffer is saved to a hidden temporary file next to the target and then
renamed over it, so the target is either the complete new image or untouched.

Functions:
    temporary_path_for: Hidden sibling path used while writing
    encode_image: Serialize a PixelBuffer to a target path
"""

import logging
import os
import uuid
from pathlib import Path
from typing import Any, Optional, Union

from IP_Libs.constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX
from IP_Libs.errors import EncodeError
from IP_Libs.ImageEditingLib.image_models import PixelBuffer
from IP_Libs.PipelineLib.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)

# Formats that cannot store an alpha channel
OPAQUE_FORMATS = {"JPEG", "BMP"}


def temporary_path_for(target: Path) -> Path:
    return target.with_name(f"{TEMP_FILE_PREFIX}{target.name}.{uuid.uuid4().hex[:8]}{TEMP_FILE_SUFFIX}")


def encode_image(
    buffer: PixelBuffer,
    target: Union[str, Path],
    config: Optional[PipelineConfig] = None,
) -> Path:
    """
    Save a buffer to the target path, overwriting any existing file.

    Args:
        buffer: Final pixel buffer
        target: Output file path (its directory must already exist)
        config: Output format and quality (default: JPEG at quality 90)

    Returns:
        The target path

    Raises:
        EncodeError: If the target cannot be written
    """
    config = config or PipelineConfig()
    target = Path(target)
    kwargs = config.get_save_kwargs()

    image: Any = buffer.image
    # Convert RGBA to RGB for formats without alpha
    if kwargs["format"] in OPAQUE_FORMATS:
        image = image.convert("RGB")

    temp_path = temporary_path_for(target)
    replaced = False
    try:
        image.save(temp_path, **kwargs)
        os.replace(temp_path, target)
        replaced = True
    except (OSError, ValueError, KeyError) as e:
        raise EncodeError(f"Failed to save image to {target}: {e}") from e
    finally:
        # Also runs for unexpected errors and KeyboardInterrupt
        if not replaced:
            temp_path.unlink(missing_ok=True)

    logger.debug(f"Encoded {buffer.width}x{buffer.height} {kwargs['format']} to {target}")
    return target
