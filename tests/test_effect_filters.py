"""
Tests for stylistic effect filters.

Tests cover:
- Every effect kind changes pixel data
- Determinism
- Per-effect visual properties
- Alpha preservation
- Parameter validation and dispatch
"""

import tracemalloc

import numpy as np
import pytest

from IP_Libs.ImageEditingLib.effect_filters import (
    apply_blur,
    apply_effect,
    apply_grayscale,
    apply_sepia,
    apply_vignette,
    vignette_mask,
)
from IP_Libs.ImageEditingLib.filter_specs import EffectKind
from IP_Libs.ImageEditingLib.image_models import PixelBuffer


@pytest.mark.parametrize("effect", list(EffectKind))
def test_every_effect_changes_pixels(pattern_buffer, effect):
    result = apply_effect(pattern_buffer, effect)

    assert result.size == pattern_buffer.size
    assert not result.pixels_equal(pattern_buffer)


@pytest.mark.parametrize("effect", list(EffectKind))
def test_every_effect_is_deterministic(pattern_buffer, effect):
    first = apply_effect(pattern_buffer, effect)
    second = apply_effect(pattern_buffer, effect)

    assert first.pixels_equal(second)


@pytest.mark.parametrize("effect", list(EffectKind))
def test_effects_do_not_mutate_input(pattern_buffer, effect):
    before = pattern_buffer.data

    apply_effect(pattern_buffer, effect)

    assert pattern_buffer.data == before


def test_effects_produce_distinct_results(pattern_buffer):
    outputs = [apply_effect(pattern_buffer, effect).data for effect in EffectKind]

    assert len(set(outputs)) == len(outputs)


def test_grayscale_equalizes_channels(pattern_buffer):
    pixels = apply_grayscale(pattern_buffer).to_array()

    np.testing.assert_array_equal(pixels[:, :, 0], pixels[:, :, 1])
    np.testing.assert_array_equal(pixels[:, :, 1], pixels[:, :, 2])


def test_sepia_is_warm(pattern_buffer):
    pixels = apply_sepia(pattern_buffer).to_array().astype(int)

    assert (pixels[:, :, 0] >= pixels[:, :, 1]).all()
    assert (pixels[:, :, 1] >= pixels[:, :, 2]).all()


@pytest.mark.parametrize("operation", [apply_grayscale, apply_sepia, apply_vignette])
def test_alpha_is_preserved(operation):
    array = np.full((10, 10, 4), 200, dtype=np.uint8)
    array[:, :, 3] = 77
    array[::2, :, 0] = 20

    result = operation(PixelBuffer.from_array(array)).to_array()

    assert (result[:, :, 3] == 77).all()


def test_vignette_darkens_corners_not_center():
    source = PixelBuffer.new(101, 101, (255, 255, 255, 255))

    result = apply_vignette(source, strength=0.6)

    assert result.image.getpixel((50, 50)) == (255, 255, 255, 255)
    corner = result.image.getpixel((0, 0))
    assert corner[0] < 150
    assert corner[3] == 255


def test_vignette_mask_range():
    mask = vignette_mask(40, 30, strength=0.5)

    assert mask.shape == (30, 40)
    assert mask.max() <= 1.0
    assert mask.min() >= 0.5


def test_vignette_rejects_invalid_strength(pattern_buffer):
    with pytest.raises(ValueError):
        apply_vignette(pattern_buffer, strength=1.5)


def test_blur_smooths_checkerboard(pattern_buffer):
    source_blue = pattern_buffer.to_array()[:, :, 2].astype(float)
    blurred_blue = apply_blur(pattern_buffer, radius=3.0).to_array()[:, :, 2].astype(float)

    assert blurred_blue.std() < source_blue.std()


@pytest.mark.parametrize("radius", [0, -1, 101])
def test_blur_rejects_invalid_radius(pattern_buffer, radius):
    with pytest.raises(ValueError):
        apply_blur(pattern_buffer, radius=radius)


def test_effect_parameters_are_forwarded(pattern_buffer):
    light = apply_effect(pattern_buffer, EffectKind.BLUR, blur_radius=1.0)
    heavy = apply_effect(pattern_buffer, EffectKind.BLUR, blur_radius=8.0)

    assert not light.pixels_equal(heavy)


def test_unknown_effect_raises(pattern_buffer):
    with pytest.raises(ValueError):
        apply_effect(pattern_buffer, "posterize")


def test_vignette_matches_radial_formula(pattern_buffer):
    strength = 0.6
    height, width = 48, 64
    ys = np.arange(height) + 0.5 - height / 2.0
    xs = np.arange(width) + 0.5 - width / 2.0
    distance_sq = ys[:, None] ** 2 + xs[None, :] ** 2
    factor = 1.0 - strength * distance_sq / ((width / 2.0) ** 2 + (height / 2.0) ** 2)
    source = pattern_buffer.to_array().astype(np.float64)
    expected = np.floor(source[:, :, :3] * factor[:, :, None] + 0.5)

    result = apply_vignette(pattern_buffer, strength).to_array()

    assert np.abs(result[:, :, :3].astype(int) - expected.astype(int)).max() <= 1
    np.testing.assert_array_equal(result[:, :, 3], source[:, :, 3])


@pytest.mark.parametrize("effect", [EffectKind.VIGNETTE, EffectKind.GRAYSCALE, EffectKind.SEPIA])
def test_effect_peak_numpy_memory_is_bounded(effect):
    buffer = PixelBuffer.new(512, 512, (90, 140, 200, 255))
    buffer_bytes = 512 * 512 * 4

    tracemalloc.start()
    try:
        apply_effect(buffer, effect)
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    assert peak < 8 * buffer_bytes
