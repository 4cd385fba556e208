"""
Error taxonomy for the image pipeline.

Classes:
    ImageProcessingError: Base class for every pipeline failure
    DecodeError: Source cannot be opened or decoded
    OrientationReadFailure: Orientation metadata could not be read (never escapes)
    FilterError: A filter stage failed
    InvalidCropRegion: Crop rectangle resolves to an empty or out-of-range region
    InvalidDimensions: Requested or resulting dimensions are not positive
    EncodeError: Target cannot be written
"""


class ImageProcessingError(Exception):
    """Base class for all image pipeline errors."""


class DecodeError(ImageProcessingError):
    """Raised when a source cannot be opened or is not a supported image."""


class OrientationReadFailure(ImageProcessingError):
    """Raised when orientation metadata cannot be read."""


class FilterError(ImageProcessingError, ValueError):
    """Raised when a filter stage cannot be applied."""


class InvalidCropRegion(FilterError):
    """Raised when a crop rectangle has non-positive width or height."""


class InvalidDimensions(FilterError):
    """Raised when dimensions are zero, negative, or inconsistent."""


class EncodeError(ImageProcessingError):
    """Raised when the output image cannot be written."""
