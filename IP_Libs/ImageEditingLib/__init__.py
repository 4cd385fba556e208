"""
ImageEditingLib - Core image editing functionality

This module provides the pixel buffer model, filter specifications and
the pixel operations used by the image pipeline.
"""

from IP_Libs.ImageEditingLib.image_models import PixelBuffer, RgbaColor
from IP_Libs.ImageEditingLib.filter_specs import (
    EffectKind,
    NormalizedRect,
    FULL_RECT,
    Resize,
    Rotate,
    Crop,
    ColorAdjust,
    Effect,
    FilterSpec,
    FilterChain,
    filter_spec_from_dict,
)
from IP_Libs.ImageEditingLib.color_matrix import ColorMatrix, apply_color_adjust
from IP_Libs.ImageEditingLib.geometry_ops import resize_to_fit, rotate, crop_normalized
from IP_Libs.ImageEditingLib.effect_filters import apply_effect

__all__ = [
    "PixelBuffer",
    "RgbaColor",
    "EffectKind",
    "NormalizedRect",
    "FULL_RECT",
    "Resize",
    "Rotate",
    "Crop",
    "ColorAdjust",
    "Effect",
    "FilterSpec",
    "FilterChain",
    "filter_spec_from_dict",
    "ColorMatrix",
    "apply_color_adjust",
    "resize_to_fit",
    "rotate",
    "crop_normalized",
    "apply_effect",
]
