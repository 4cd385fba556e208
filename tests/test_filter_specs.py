"""
Tests for filter specifications and filter chains.

Tests cover:
- Normalized rectangles
- Immutability of specs
- Dictionary conversion and parsing errors
- FilterChain ordering and equality
"""

import dataclasses
import unittest

from IP_Libs.ImageEditingLib.filter_specs import (
    ColorAdjust,
    Crop,
    Effect,
    EffectKind,
    FilterChain,
    FULL_RECT,
    NormalizedRect,
    Resize,
    Rotate,
    filter_name,
    filter_spec_from_dict,
)


class TestNormalizedRect(unittest.TestCase):

    def test_width_and_height(self):
        rect = NormalizedRect(0.25, 0.1, 0.75, 0.6)

        self.assertAlmostEqual(rect.width, 0.5)
        self.assertAlmostEqual(rect.height, 0.5)

    def test_full_rect(self):
        self.assertEqual(FULL_RECT.as_tuple(), (0.0, 0.0, 1.0, 1.0))


class TestFilterSpecs(unittest.TestCase):

    def test_specs_are_immutable(self):
        spec = Resize(100, 100)

        with self.assertRaises(dataclasses.FrozenInstanceError):
            spec.max_width = 50

    def test_color_adjust_defaults_are_identity(self):
        spec = ColorAdjust()

        self.assertEqual((spec.brightness, spec.contrast, spec.saturation), (0.0, 1.0, 1.0))

    def test_filter_name(self):
        self.assertEqual(filter_name(Resize(1, 1)), "resize")
        self.assertEqual(filter_name(Rotate(10)), "rotate")
        self.assertEqual(filter_name(Crop(FULL_RECT)), "crop")
        self.assertEqual(filter_name(ColorAdjust()), "color_adjust")
        self.assertEqual(filter_name(Effect(EffectKind.BLUR)), "effect")

    def test_effect_to_dict_uses_value(self):
        self.assertEqual(
            Effect(EffectKind.VIGNETTE).to_dict(),
            {"type": "effect", "effect": "vignette"},
        )


class TestFilterSpecFromDict(unittest.TestCase):

    def test_crop_accepts_mapping_rect(self):
        spec = filter_spec_from_dict({
            "type": "crop",
            "rect": {"left": 0.1, "top": 0.2, "right": 0.9, "bottom": 0.8},
        })

        self.assertEqual(spec, Crop(NormalizedRect(0.1, 0.2, 0.9, 0.8)))

    def test_type_is_case_insensitive(self):
        spec = filter_spec_from_dict({"type": "Effect", "effect": "SEPIA"})

        self.assertEqual(spec, Effect(EffectKind.SEPIA))

    def test_color_adjust_missing_fields_use_defaults(self):
        spec = filter_spec_from_dict({"type": "color_adjust", "brightness": 12})

        self.assertEqual(spec, ColorAdjust(brightness=12.0))

    def test_unknown_type_raises(self):
        with self.assertRaises(ValueError):
            filter_spec_from_dict({"type": "sharpen"})

    def test_missing_field_raises(self):
        with self.assertRaises(ValueError) as ctx:
            filter_spec_from_dict({"type": "resize", "max_width": 10})

        self.assertIn("max_height", str(ctx.exception))

    def test_unknown_effect_raises(self):
        with self.assertRaises(ValueError):
            filter_spec_from_dict({"type": "effect", "effect": "posterize"})

    def test_malformed_rect_raises(self):
        with self.assertRaises(ValueError):
            filter_spec_from_dict({"type": "crop", "rect": [0.0, 0.0, 1.0]})


class TestFilterChain(unittest.TestCase):

    def setUp(self):
        self.specs = [
            Resize(1024, 768),
            Rotate(90.0),
            Crop(NormalizedRect(0.0, 0.0, 0.5, 0.5)),
            ColorAdjust(brightness=5.0, contrast=1.2, saturation=0.8),
            Effect(EffectKind.GRAYSCALE),
        ]

    def test_preserves_order(self):
        chain = FilterChain(self.specs)

        self.assertEqual(len(chain), 5)
        self.assertEqual(list(chain), self.specs)
        self.assertEqual(chain[1], Rotate(90.0))

    def test_chain_is_a_snapshot(self):
        chain = FilterChain(self.specs)
        self.specs.append(Rotate(180.0))

        self.assertEqual(len(chain), 5)

    def test_dict_round_trip(self):
        chain = FilterChain(self.specs)

        self.assertEqual(FilterChain.from_dicts(chain.to_dicts()), chain)

    def test_order_affects_equality(self):
        first = FilterChain([Rotate(90.0), Resize(10, 10)])
        second = FilterChain([Resize(10, 10), Rotate(90.0)])

        self.assertNotEqual(first, second)
