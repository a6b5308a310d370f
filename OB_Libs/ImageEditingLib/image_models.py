"""
Image data models for Open Blend.

This module defines the core data structures shared by every pipeline stage.

Classes:
    RasterImage: RGBA, 8-bit-per-channel pixel grid backed by a numpy array
    TargetGeometry: Immutable (width, height) every image is resampled to

Functions:
    opacity_to_byte: Convert a [0, 1] opacity to its 8-bit alpha value

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
import math
from typing import Any, Tuple

import numpy as np
from PIL import Image

from OB_Libs.constants import CHANNEL_COUNT, MAX_CHANNEL_VALUE, ALPHA_CHANNEL_INDEX, RGBA_MODE

RgbaColor = Tuple[int, int, int, int]


def opacity_to_byte(alpha: float) -> int:
    """
    Convert an opacity scalar to an 8-bit alpha value.

    Values outside [0, 1] are clamped, then scaled to 0-255 and rounded
    half up.

    Args:
        alpha: Opacity (0.0 = transparent, 1.0 = opaque)

    Returns:
        Integer alpha in 0-255

    Raises:
        ValueError: If alpha is NaN
    """
    alpha = float(alpha)
    if math.isnan(alpha):
        raise ValueError("alpha must be a number, got NaN")

    clamped = min(max(alpha, 0.0), 1.0)
    return int(math.floor(clamped * MAX_CHANNEL_VALUE + 0.5))


@dataclass(frozen=True)
class TargetGeometry:
    """Output resolution shared by every resampled image of a run."""

    width: int
    height: int

    def __post_init__(self):
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(
                f"Target geometry must be positive, got {self.width}x{self.height}"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(eq=False)
class RasterImage:
    """RGBA pixel grid with 8 bits per channel.

    Pixels are stored row-major in a ``(height, width, 4)`` uint8 array.
    The row stride (``pitch``) comes from the array and may exceed
    ``width * 4`` when the buffer is a view into a wider one. Views with
    reversed rows or non-packed pixels are copied into a packed buffer.

    Attributes:
        pixels: numpy array of shape (height, width, 4), dtype uint8
    """

    pixels: Any

    def __post_init__(self):
        """Validate pixel buffer layout."""
        if not isinstance(self.pixels, np.ndarray):
            raise ValueError(f"pixels must be a numpy array, got {type(self.pixels)}")

        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")

        if self.pixels.ndim != 3 or self.pixels.shape[2] != CHANNEL_COUNT:
            raise ValueError(
                f"pixels must have shape (height, width, {CHANNEL_COUNT}), "
                f"got {self.pixels.shape}"
            )

        if self.pixels.shape[0] <= 0 or self.pixels.shape[1] <= 0:
            raise ValueError(f"Image must be non-empty, got shape {self.pixels.shape}")

        # Rows must run forward with packed pixels: pitch >= width * 4
        row_stride, pixel_stride, channel_stride = self.pixels.strides
        if (
            (pixel_stride, channel_stride) != (CHANNEL_COUNT, 1)
            or row_stride < self.pixels.shape[1] * CHANNEL_COUNT
        ):
            self.pixels = np.ascontiguousarray(self.pixels)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def channels(self) -> int:
        return CHANNEL_COUNT

    @property
    def pitch(self) -> int:
        """Row stride in bytes."""
        return int(self.pixels.strides[0])

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def alpha(self) -> Any:
        """Read-only view of the alpha channel, shape (height, width)."""
        view = self.pixels[:, :, ALPHA_CHANNEL_INDEX]
        view.flags.writeable = False
        return view

    @property
    def is_read_only(self) -> bool:
        return not self.pixels.flags.writeable

    def copy(self) -> "RasterImage":
        """Return an independent, writable copy."""
        return RasterImage(np.array(self.pixels, dtype=np.uint8, copy=True))

    def snapshot(self) -> "RasterImage":
        """Return an independent copy that cannot be modified."""
        frozen = np.array(self.pixels, dtype=np.uint8, copy=True)
        frozen.flags.writeable = False
        return RasterImage(frozen)

    def getpixel(self, xy: Tuple[int, int]) -> RgbaColor:
        """Return the RGBA tuple at (x, y)."""
        x, y = xy
        return tuple(int(c) for c in self.pixels[y, x])

    def to_pil(self) -> Any:
        """Convert to a Pillow RGBA image."""
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    @classmethod
    def from_pil(cls, image: Any) -> "RasterImage":
        """
        Create from a Pillow image.

        Args:
            image: PIL Image in RGBA mode

        Raises:
            TypeError: If image is not a PIL Image
            ValueError: If image is not RGBA
        """
        if not hasattr(image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        if image.mode != RGBA_MODE:
            raise ValueError(f"Expected {RGBA_MODE} image, got mode {image.mode}")

        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def new(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 0)) -> "RasterImage":
        """Create an image filled with a single color."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Image must be non-empty, got {width}x{height}")

        pixels = np.empty((height, width, CHANNEL_COUNT), dtype=np.uint8)
        pixels[:, :] = color
        return cls(pixels)
