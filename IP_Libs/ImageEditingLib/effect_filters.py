"""
Stylistic effect filters.

Provides one deterministic transform per effect kind:
- Blur: Gaussian blur with a fixed radius
- Vignette: Radial darkening of R, G, B towards the corners
- Grayscale: Luminance color matrix (saturation 0)
- Sepia: Classic sepia tone color matrix

Example:
    >>> from IP_Libs.ImageEditingLib.filter_specs import EffectKind
    >>> toned = apply_effect(buffer, EffectKind.SEPIA)
    >>> soft = apply_effect(buffer, EffectKind.BLUR, blur_radius=8.0)
"""

import logging

import numpy as np
from PIL import ImageFilter

from IP_Libs.constants import DEFAULT_BLUR_RADIUS, DEFAULT_VIGNETTE_STRENGTH
from IP_Libs.ImageEditingLib.color_matrix import ColorMatrix
from IP_Libs.ImageEditingLib.filter_specs import EffectKind
from IP_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


# ============================================================================
# Blur
# ============================================================================

def apply_blur(buffer: PixelBuffer, radius: float = DEFAULT_BLUR_RADIUS) -> PixelBuffer:
    """
    Apply Gaussian blur.

    Args:
        buffer: Buffer to blur
        radius: Blur radius in pixels (0 < r <= 100)

    Returns:
        Blurred buffer (same size)

    Raises:
        ValueError: If radius <= 0 or > 100
    """
    if not (0 < radius <= 100):
        raise ValueError(f"radius must be 0 < r <= 100, got {radius}")

    return PixelBuffer(buffer.image.filter(ImageFilter.GaussianBlur(radius=radius)))


# ============================================================================
# Vignette
# ============================================================================

def vignette_mask(width: int, height: int, strength: float = DEFAULT_VIGNETTE_STRENGTH) -> np.ndarray:
    """
    Build a (height, width) float32 brightness multiplier for the vignette.

    The multiplier is 1 - strength * (d / d_max)^2 where d is the distance of
    the pixel center from the image center and d_max the distance to a corner.
    """
    ys = np.arange(height, dtype=np.float32) + np.float32(0.5 - height / 2.0)
    xs = np.arange(width, dtype=np.float32) + np.float32(0.5 - width / 2.0)
    max_distance_sq = (width / 2.0) ** 2 + (height / 2.0) ** 2
    mask = np.square(ys)[:, None] + np.square(xs)[None, :]
    mask *= np.float32(-strength / max_distance_sq)
    mask += np.float32(1.0)
    return mask


def apply_vignette(buffer: PixelBuffer, strength: float = DEFAULT_VIGNETTE_STRENGTH) -> PixelBuffer:
    """
    Darken the image towards its corners.

    Channels are scaled one at a time so only one float32 plane is live
    next to the mask.

    Args:
        buffer: Buffer to process
        strength: Darkening at the corners (0 = none, 1 = black corners)

    Returns:
        New buffer; alpha is unchanged

    Raises:
        ValueError: If strength is outside 0-1
    """
    if not (0.0 <= strength <= 1.0):
        raise ValueError(f"strength must be 0-1, got {strength}")

    pixels = buffer.to_array()
    mask = vignette_mask(buffer.width, buffer.height, strength)
    for channel in range(3):
        scaled = np.multiply(pixels[:, :, channel], mask, dtype=np.float32)
        scaled += np.float32(0.5)
        np.floor(scaled, out=scaled)
        pixels[:, :, channel] = scaled
    return PixelBuffer.from_array(pixels)


# ============================================================================
# Color matrix effects
# ============================================================================

def apply_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    return ColorMatrix.saturation(0.0).apply(buffer)


def apply_sepia(buffer: PixelBuffer) -> PixelBuffer:
    return ColorMatrix.sepia().apply(buffer)


# ============================================================================
# Dispatch
# ============================================================================

def apply_effect(
    buffer: PixelBuffer,
    effect: EffectKind,
    blur_radius: float = DEFAULT_BLUR_RADIUS,
    vignette_strength: float = DEFAULT_VIGNETTE_STRENGTH,
) -> PixelBuffer:
    """
    Apply the effect identified by an EffectKind.

    Raises:
        ValueError: If the effect kind is unknown
    """
    logger.debug(f"Applying effect {effect} to {buffer.width}x{buffer.height} buffer")

    if effect == EffectKind.BLUR:
        return apply_blur(buffer, blur_radius)

    elif effect == EffectKind.VIGNETTE:
        return apply_vignette(buffer, vignette_strength)

    elif effect == EffectKind.GRAYSCALE:
        return apply_grayscale(buffer)

    elif effect == EffectKind.SEPIA:
        return apply_sepia(buffer)

    raise ValueError(
        f"Unknown effect: {effect}. "
        f"Valid effects: blur, vignette, grayscale, sepia"
    )
