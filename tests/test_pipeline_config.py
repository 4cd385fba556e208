"""
Tests for PipelineConfig.
"""

import unittest

from IP_Libs.PipelineLib.pipeline_config import PipelineConfig


class TestPipelineConfig(unittest.TestCase):
    """Test PipelineConfig defaults, validation and save kwargs."""

    def test_defaults(self):
        config = PipelineConfig()

        self.assertEqual(config.max_decode_width, 4096)
        self.assertEqual(config.max_decode_height, 4096)
        self.assertEqual(config.jpeg_quality, 90)
        self.assertEqual(config.output_format, "JPEG")

    def test_invalid_values(self):
        invalid = [
            {"max_decode_width": 0},
            {"max_decode_height": -5},
            {"jpeg_quality": 0},
            {"jpeg_quality": 101},
            {"blur_radius": 0},
            {"vignette_strength": 1.5},
        ]
        for kwargs in invalid:
            with self.subTest(**kwargs):
                with self.assertRaises(ValueError):
                    PipelineConfig(**kwargs)

    def test_dict_round_trip(self):
        config = PipelineConfig(max_decode_width=512, output_format="PNG")

        self.assertEqual(PipelineConfig.from_dict(config.to_dict()), config)

    def test_from_dict_ignores_unknown_keys(self):
        config = PipelineConfig.from_dict({"jpeg_quality": 75, "theme": "dark"})

        self.assertEqual(config.jpeg_quality, 75)

    def test_jpeg_save_kwargs(self):
        self.assertEqual(
            PipelineConfig().get_save_kwargs(),
            {"format": "JPEG", "quality": 90},
        )

    def test_jpg_alias(self):
        kwargs = PipelineConfig(output_format="jpg", jpeg_quality=70).get_save_kwargs()

        self.assertEqual(kwargs, {"format": "JPEG", "quality": 70})

    def test_png_has_no_quality(self):
        self.assertEqual(
            PipelineConfig(output_format="png").get_save_kwargs(),
            {"format": "PNG"},
        )

    def test_save_format_aliases(self):
        self.assertEqual(PipelineConfig(output_format="jpg").save_format, "JPEG")
        self.assertEqual(PipelineConfig(output_format="tif").save_format, "TIFF")
        self.assertEqual(PipelineConfig(output_format="Png").save_format, "PNG")

    def test_webp_takes_quality(self):
        kwargs = PipelineConfig(output_format="webp", jpeg_quality=60).get_save_kwargs()

        self.assertEqual(kwargs, {"format": "WEBP", "quality": 60})

    def test_from_dict_keeps_defaults_for_missing_keys(self):
        config = PipelineConfig.from_dict({"output_format": "PNG"})

        self.assertEqual(config.max_decode_width, 4096)
        self.assertEqual(config.output_format, "PNG")
