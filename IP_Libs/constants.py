"""
Constants and configuration values for the image pipeline.

This module centralizes all constant values, magic numbers, and
default settings used throughout the pipeline.
"""

# Decode limits
MAX_DECODE_WIDTH = 4096
MAX_DECODE_HEIGHT = 4096

# Encoding
DEFAULT_OUTPUT_FORMAT = "JPEG"
DEFAULT_JPEG_QUALITY = 90
TEMP_FILE_PREFIX = "."
TEMP_FILE_SUFFIX = ".part"

# Pixel format
PIXEL_MODE = "RGBA"
BYTES_PER_PIXEL = 4

# Effect defaults
DEFAULT_BLUR_RADIUS = 4.0
DEFAULT_VIGNETTE_STRENGTH = 0.6

# Rec. 709 luminance weights (R, G, B)
LUMINANCE_WEIGHTS = (0.213, 0.715, 0.072)

# Sepia tone matrix rows (R, G, B output from R, G, B input)
SEPIA_MATRIX = (
    (0.393, 0.769, 0.189),
    (0.349, 0.686, 0.168),
    (0.272, 0.534, 0.131),
)

# Filter dictionary field names
FIELD_FILTER_TYPE = "type"
FILTER_TYPE_RESIZE = "resize"
FILTER_TYPE_ROTATE = "rotate"
FILTER_TYPE_CROP = "crop"
FILTER_TYPE_COLOR_ADJUST = "color_adjust"
FILTER_TYPE_EFFECT = "effect"
