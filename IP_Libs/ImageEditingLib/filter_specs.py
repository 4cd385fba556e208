"""
Filter definitions for the image pipeline.

A filter chain is an ordered sequence of immutable filter specs. The set of
filter kinds is closed: Resize, Rotate, Crop, ColorAdjust and Effect.

Example:
    >>> chain = FilterChain([
    ...     Resize(max_width=1024, max_height=1024),
    ...     Rotate(degrees=90),
    ...     Effect(EffectKind.SEPIA),
    ... ])
    >>> FilterChain.from_dicts(chain.to_dicts()) == chain
    True
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union

from IP_Libs.constants import (
    FIELD_FILTER_TYPE,
    FILTER_TYPE_COLOR_ADJUST,
    FILTER_TYPE_CROP,
    FILTER_TYPE_EFFECT,
    FILTER_TYPE_RESIZE,
    FILTER_TYPE_ROTATE,
)


class EffectKind(str, Enum):
    BLUR = "blur"
    VIGNETTE = "vignette"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"


@dataclass(frozen=True)
class NormalizedRect:
    """Rectangle in coordinates relative to the image size (0.0-1.0).

    Attributes:
        left: Left edge as a fraction of the width
        top: Top edge as a fraction of the height
        right: Right edge as a fraction of the width
        bottom: Bottom edge as a fraction of the height
    """
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.right, self.bottom)


FULL_RECT = NormalizedRect(0.0, 0.0, 1.0, 1.0)


@dataclass(frozen=True)
class Resize:
    """Scale down uniformly so the image fits within max_width x max_height."""
    max_width: int
    max_height: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_FILTER_TYPE: FILTER_TYPE_RESIZE,
            "max_width": self.max_width,
            "max_height": self.max_height,
        }


@dataclass(frozen=True)
class Rotate:
    """Rotate clockwise by an arbitrary number of degrees."""
    degrees: float

    def to_dict(self) -> Dict[str, Any]:
        return {FIELD_FILTER_TYPE: FILTER_TYPE_ROTATE, "degrees": self.degrees}


@dataclass(frozen=True)
class Crop:
    """Extract the region described by a normalized rectangle."""
    rect: NormalizedRect

    def to_dict(self) -> Dict[str, Any]:
        return {FIELD_FILTER_TYPE: FILTER_TYPE_CROP, "rect": list(self.rect.as_tuple())}


@dataclass(frozen=True)
class ColorAdjust:
    """Saturation, then contrast scale, then brightness offset.

    Attributes:
        brightness: Offset added to R, G and B in 0-255 units (0 = unchanged)
        contrast: Multiplier for R, G and B (1 = unchanged)
        saturation: 0 = grayscale, 1 = unchanged, >1 = more saturated
    """
    brightness: float = 0.0
    contrast: float = 1.0
    saturation: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_FILTER_TYPE: FILTER_TYPE_COLOR_ADJUST,
            "brightness": self.brightness,
            "contrast": self.contrast,
            "saturation": self.saturation,
        }


@dataclass(frozen=True)
class Effect:
    """Apply a stylistic effect."""
    effect: EffectKind

    def to_dict(self) -> Dict[str, Any]:
        return {FIELD_FILTER_TYPE: FILTER_TYPE_EFFECT, "effect": self.effect.value}


FilterSpec = Union[Resize, Rotate, Crop, ColorAdjust, Effect]


def filter_name(spec: FilterSpec) -> str:
    """Short human-readable name of a filter spec ('resize', 'crop', ...)."""
    return spec.to_dict()[FIELD_FILTER_TYPE]


def filter_spec_from_dict(data: Dict[str, Any]) -> FilterSpec:
    """
    Create a filter spec from its dictionary form.

    Args:
        data: Dictionary with a 'type' key and the filter's parameters

    Returns:
        The matching filter spec

    Raises:
        ValueError: If the type is unknown or parameters are malformed
    """
    filter_type = str(data.get(FIELD_FILTER_TYPE, "")).strip().lower()

    try:
        if filter_type == FILTER_TYPE_RESIZE:
            return Resize(int(data["max_width"]), int(data["max_height"]))

        elif filter_type == FILTER_TYPE_ROTATE:
            return Rotate(float(data["degrees"]))

        elif filter_type == FILTER_TYPE_CROP:
            rect = data["rect"]
            if isinstance(rect, dict):
                return Crop(NormalizedRect(
                    float(rect["left"]), float(rect["top"]),
                    float(rect["right"]), float(rect["bottom"]),
                ))
            left, top, right, bottom = (float(value) for value in rect)
            return Crop(NormalizedRect(left, top, right, bottom))

        elif filter_type == FILTER_TYPE_COLOR_ADJUST:
            return ColorAdjust(
                brightness=float(data.get("brightness", 0.0)),
                contrast=float(data.get("contrast", 1.0)),
                saturation=float(data.get("saturation", 1.0)),
            )

        elif filter_type == FILTER_TYPE_EFFECT:
            return Effect(EffectKind(str(data["effect"]).lower()))

    except KeyError as e:
        raise ValueError(f"Filter '{filter_type}' is missing field {e}") from e
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid parameters for filter '{filter_type}': {e}") from e

    raise ValueError(
        f"Unknown filter type: {filter_type!r}. "
        f"Valid types: resize, rotate, crop, color_adjust, effect"
    )


class FilterChain:
    """Immutable, ordered sequence of filter specs applied left to right."""

    def __init__(self, filters: Iterable[FilterSpec] = ()):
        self._filters: Tuple[FilterSpec, ...] = tuple(filters)

    def __iter__(self) -> Iterator[FilterSpec]:
        return iter(self._filters)

    def __len__(self) -> int:
        return len(self._filters)

    def __getitem__(self, index: int) -> FilterSpec:
        return self._filters[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterChain):
            return NotImplemented
        return self._filters == other._filters

    def __hash__(self) -> int:
        return hash(self._filters)

    def __repr__(self) -> str:
        return f"FilterChain({list(self._filters)!r})"

    @property
    def filters(self) -> Tuple[FilterSpec, ...]:
        return self._filters

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [spec.to_dict() for spec in self._filters]

    @classmethod
    def from_dicts(cls, items: Iterable[Dict[str, Any]]) -> "FilterChain":
        return cls(filter_spec_from_dict(item) for item in items)
