"""
Filter chain executor.

Applies filter specs in order, threading a single PixelBuffer through every
stage. The output of stage i is the only input of stage i + 1. The first
failing stage aborts the chain.

Functions:
    apply_filter: Dispatch one filter spec
    apply_filter_chain: Apply an ordered sequence of filter specs
"""

import logging
from typing import Iterable, Optional

from IP_Libs.errors import FilterError
from IP_Libs.ImageEditingLib.color_matrix import apply_color_adjust
from IP_Libs.ImageEditingLib.effect_filters import apply_effect
from IP_Libs.ImageEditingLib.filter_specs import (
    ColorAdjust,
    Crop,
    Effect,
    FilterSpec,
    Resize,
    Rotate,
    filter_name,
)
from IP_Libs.ImageEditingLib.geometry_ops import crop_normalized, resize_to_fit, rotate
from IP_Libs.ImageEditingLib.image_models import PixelBuffer
from IP_Libs.PipelineLib.pipeline_config import PipelineConfig

logger = logging.getLogger(__name__)


def apply_filter(
    buffer: PixelBuffer,
    spec: FilterSpec,
    config: Optional[PipelineConfig] = None,
) -> PixelBuffer:
    """
    Apply a single filter spec.

    Args:
        buffer: Input buffer
        spec: Filter to apply
        config: Effect parameters (default: PipelineConfig())

    Returns:
        The same buffer (no-op filters) or a new buffer

    Raises:
        FilterError: If the filter cannot be applied
        TypeError: If spec is not a known filter spec
    """
    if isinstance(spec, Resize):
        return resize_to_fit(buffer, spec.max_width, spec.max_height)

    elif isinstance(spec, Rotate):
        return rotate(buffer, spec.degrees)

    elif isinstance(spec, Crop):
        return crop_normalized(buffer, spec.rect)

    elif isinstance(spec, ColorAdjust):
        return apply_color_adjust(buffer, spec.brightness, spec.contrast, spec.saturation)

    elif isinstance(spec, Effect):
        config = config or PipelineConfig()
        try:
            return apply_effect(
                buffer,
                spec.effect,
                blur_radius=config.blur_radius,
                vignette_strength=config.vignette_strength,
            )
        except ValueError as e:
            raise FilterError(str(e)) from e

    raise TypeError(f"Unknown filter spec: {spec!r}")


def apply_filter_chain(
    buffer: PixelBuffer,
    filters: Iterable[FilterSpec],
    config: Optional[PipelineConfig] = None,
) -> PixelBuffer:
    """
    Apply filter specs left to right.

    Args:
        buffer: Buffer produced by the decoder
        filters: Ordered filter specs (a FilterChain or any iterable)
        config: Effect parameters

    Returns:
        Buffer produced by the last stage (the input buffer for an empty chain)

    Raises:
        FilterError: If a stage fails; the message names the stage index and
                     filter, and the original error is chained. The concrete
                     subclass (e.g. InvalidCropRegion) is preserved; a plain
                     ValueError from a stage becomes a FilterError.
    """
    for index, spec in enumerate(filters):
        name = filter_name(spec) if hasattr(spec, "to_dict") else type(spec).__name__
        try:
            buffer = apply_filter(buffer, spec, config)
        except FilterError as e:
            raise type(e)(f"Filter {index} ({name}) failed: {e}") from e
        except ValueError as e:
            # Pillow reports bad parameters as plain ValueError
            raise FilterError(f"Filter {index} ({name}) failed: {e}") from e

        logger.debug(f"Filter {index} ({name}) -> {buffer.width}x{buffer.height}")

    return buffer
