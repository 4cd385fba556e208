"""
Configuration for the image pipeline.

Classes:
    PipelineConfig: Decode cap, output encoding and effect parameters
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict

from IP_Libs.constants import (
    DEFAULT_BLUR_RADIUS,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_VIGNETTE_STRENGTH,
    MAX_DECODE_HEIGHT,
    MAX_DECODE_WIDTH,
)

# Extensions callers tend to pass instead of Pillow format names
FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}

# Formats whose encoders take a quality setting
LOSSY_FORMATS = ("JPEG", "WEBP")


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for pipeline execution.

    Attributes:
        max_decode_width: Widest buffer the decoder may produce (default: 4096)
        max_decode_height: Tallest buffer the decoder may produce (default: 4096)
        jpeg_quality: Lossy encoding quality 1-100 (default: 90)
        output_format: Pillow format name for the output (default: JPEG)
        blur_radius: Gaussian radius used by the Blur effect
        vignette_strength: Corner darkening used by the Vignette effect (0-1)
    """
    max_decode_width: int = MAX_DECODE_WIDTH
    max_decode_height: int = MAX_DECODE_HEIGHT
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    output_format: str = DEFAULT_OUTPUT_FORMAT
    blur_radius: float = DEFAULT_BLUR_RADIUS
    vignette_strength: float = DEFAULT_VIGNETTE_STRENGTH

    def __post_init__(self):
        if self.max_decode_width < 1 or self.max_decode_height < 1:
            raise ValueError(
                f"Decode cap must be positive, got {self.max_decode_width}x{self.max_decode_height}"
            )
        if not (1 <= self.jpeg_quality <= 100):
            raise ValueError(f"jpeg_quality must be 1-100, got {self.jpeg_quality}")
        if not (0 < self.blur_radius <= 100):
            raise ValueError(f"blur_radius must be 0 < r <= 100, got {self.blur_radius}")
        if not (0.0 <= self.vignette_strength <= 1.0):
            raise ValueError(f"vignette_strength must be 0-1, got {self.vignette_strength}")

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict form of every field, suitable for JSON."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """
        Build a config from a dict produced by to_dict().

        Keys that are not config fields are dropped; missing keys keep their
        defaults. Values are validated as in the constructor.
        """
        known = cls.__dataclass_fields__
        return cls(**{key: value for key, value in data.items() if key in known})

    @property
    def save_format(self) -> str:
        """Canonical Pillow format name for output_format."""
        name = self.output_format.upper()
        return FORMAT_ALIASES.get(name, name)

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for Image.save(): the format, plus quality for lossy formats."""
        kwargs: Dict[str, Any] = {"format": self.save_format}
        if self.save_format in LOSSY_FORMATS:
            kwargs["quality"] = self.jpeg_quality
        return kwargs
