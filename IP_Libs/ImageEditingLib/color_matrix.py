"""
4x5 color matrix operations.

A color matrix maps an RGBA pixel to a new RGBA pixel:

    R' = a*R + b*G + c*B + d*A + e
    G' = f*R + g*G + h*B + i*A + j
    B' = k*R + l*G + m*B + n*A + o
    A' = p*R + q*G + r*B + s*A + t

The fifth column holds offsets in 0-255 units. Matrices compose with
post_concat() so several adjustments collapse into a single per-pixel pass.

Example:
    >>> matrix = ColorMatrix.saturation(0.5)
    >>> matrix = matrix.post_concat(ColorMatrix.scale(1.2, 1.2, 1.2, 1.0))
    >>> matrix = matrix.post_concat(ColorMatrix.offset(10, 10, 10, 0))
    >>> result = matrix.apply(buffer)
"""

from typing import Sequence, Tuple

import numpy as np
from PIL import Image

from IP_Libs.constants import LUMINANCE_WEIGHTS, PIXEL_MODE, SEPIA_MATRIX
from IP_Libs.ImageEditingLib.image_models import PixelBuffer


class ColorMatrix:
    """Immutable 4x5 color transform."""

    def __init__(self, values: Sequence[Sequence[float]]):
        matrix = np.array(values, dtype=np.float64)
        if matrix.shape != (4, 5):
            raise ValueError(f"ColorMatrix requires 4x5 values, got shape {matrix.shape}")
        matrix.setflags(write=False)
        self._matrix = matrix

    @property
    def values(self) -> np.ndarray:
        return self._matrix

    def is_identity(self) -> bool:
        return np.array_equal(self._matrix, ColorMatrix.identity().values)

    def post_concat(self, other: "ColorMatrix") -> "ColorMatrix":
        """Return a matrix equivalent to applying self, then other."""
        lhs = _to_affine(other._matrix)
        rhs = _to_affine(self._matrix)
        return ColorMatrix((lhs @ rhs)[:4, :])

    def preserves_alpha(self) -> bool:
        """True if alpha passes through unchanged and R, G, B ignore it."""
        return (
            np.array_equal(self._matrix[3], [0.0, 0.0, 0.0, 1.0, 0.0])
            and not self._matrix[:3, 3].any()
        )

    def rgb_convert_matrix(self) -> Tuple[float, ...]:
        """The 12-tuple Image.convert("RGB", matrix=...) expects."""
        return tuple(float(v) for v in self._matrix[:3, [0, 1, 2, 4]].ravel())

    def apply(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Apply the matrix to every pixel in one pass and return a new buffer.

        Matrices that leave alpha alone run through Pillow's RGB matrix
        conversion, which works row by row without float copies of the
        image. Results are rounded half up and clipped to 0-255 on both
        paths.
        """
        if self.preserves_alpha():
            image = buffer.image
            rgb = image.convert("RGB").convert("RGB", matrix=self.rgb_convert_matrix())
            return PixelBuffer(Image.merge(PIXEL_MODE, (*rgb.split(), image.getchannel("A"))))

        pixels = buffer.to_array().astype(np.float32)
        transformed = pixels @ self._matrix[:, :4].T.astype(np.float32)
        del pixels
        transformed += self._matrix[:, 4].astype(np.float32) + np.float32(0.5)
        np.floor(transformed, out=transformed)
        np.clip(transformed, 0, 255, out=transformed)
        return PixelBuffer.from_array(transformed.astype(np.uint8))

    @classmethod
    def identity(cls) -> "ColorMatrix":
        return cls(np.hstack([np.eye(4), np.zeros((4, 1))]))

    @classmethod
    def scale(cls, red: float, green: float, blue: float, alpha: float) -> "ColorMatrix":
        return cls(np.hstack([np.diag([red, green, blue, alpha]), np.zeros((4, 1))]))

    @classmethod
    def offset(cls, red: float, green: float, blue: float, alpha: float) -> "ColorMatrix":
        values = np.hstack([np.eye(4), np.zeros((4, 1))])
        values[:, 4] = [red, green, blue, alpha]
        return cls(values)

    @classmethod
    def saturation(cls, amount: float) -> "ColorMatrix":
        """Saturation matrix: 0 maps to luminance gray, 1 is the identity."""
        inverse = 1.0 - amount
        weights = [w * inverse for w in LUMINANCE_WEIGHTS]
        values = np.zeros((4, 5))
        for row in range(3):
            values[row, :3] = weights
            values[row, row] += amount
        values[3, 3] = 1.0
        return cls(values)

    @classmethod
    def sepia(cls) -> "ColorMatrix":
        values = np.zeros((4, 5))
        values[:3, :3] = SEPIA_MATRIX
        values[3, 3] = 1.0
        return cls(values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorMatrix):
            return NotImplemented
        return np.allclose(self._matrix, other._matrix)

    def __repr__(self) -> str:
        return f"ColorMatrix({self._matrix.tolist()!r})"


def _to_affine(matrix: np.ndarray) -> np.ndarray:
    affine = np.eye(5)
    affine[:4, :] = matrix
    return affine


def build_color_adjust_matrix(brightness: float, contrast: float, saturation: float) -> ColorMatrix:
    """
    Combine saturation, contrast and brightness into a single matrix.

    Saturation is applied first, then a uniform contrast scale on R, G, B,
    then a brightness offset on R, G, B. Alpha is left untouched.

    Args:
        brightness: Offset in 0-255 units added to each color channel
        contrast: Multiplier applied to each color channel
        saturation: Saturation amount (1 = unchanged)

    Returns:
        The combined ColorMatrix
    """
    matrix = ColorMatrix.saturation(saturation)
    matrix = matrix.post_concat(ColorMatrix.scale(contrast, contrast, contrast, 1.0))
    return matrix.post_concat(ColorMatrix.offset(brightness, brightness, brightness, 0.0))


def apply_color_adjust(
    buffer: PixelBuffer,
    brightness: float = 0.0,
    contrast: float = 1.0,
    saturation: float = 1.0,
) -> PixelBuffer:
    """Apply a combined brightness/contrast/saturation transform."""
    matrix = build_color_adjust_matrix(brightness, contrast, saturation)
    if matrix.is_identity():
        return buffer
    return matrix.apply(buffer)
