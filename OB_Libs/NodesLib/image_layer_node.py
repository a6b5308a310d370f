"""
Running Image Layer Compositor.

Folds a sequence of same-size RGBA layers into one accumulator. The first
layer seeds the accumulator unchanged; every later layer is composited
over it with the alpha-over operator:

    out_rgb = fg_rgb * a + bg_rgb * (1 - a)        a = fg_alpha / 255
    out_a   = a + bg_a * (1 - a)

The operator is not commutative, so the order in which layers are fed
changes the result.

Example:
    >>> compositor = ImageLayerCompositor(TargetGeometry(100, 100))
    >>> seed = compositor.feed(RasterImage.new(100, 100, (255, 0, 0, 128)))
    >>> result = compositor.feed(RasterImage.new(100, 100, (0, 0, 255, 128)))
    >>> result.getpixel((0, 0))
    (127, 0, 128, 192)
"""

from typing import Optional

import numpy as np

from OB_Libs.constants import ALPHA_CHANNEL_INDEX, MAX_CHANNEL_VALUE
from OB_Libs.ImageEditingLib.errors import GeometryMismatchError
from OB_Libs.ImageEditingLib.image_models import RasterImage, TargetGeometry


def alpha_over(foreground: RasterImage, background: RasterImage) -> RasterImage:
    """
    Composite ``foreground`` over ``background`` across the full image.

    Color channels use straight alpha weighting by the foreground alpha;
    the output alpha follows the alpha-over rule. Results are rounded to
    the nearest integer, halves rounding up.

    Args:
        foreground: Layer drawn on top
        background: Layer underneath

    Returns:
        New RasterImage; neither input is modified

    Raises:
        TypeError: If inputs are not RasterImages
        GeometryMismatchError: If the two images differ in size
    """
    if not isinstance(foreground, RasterImage) or not isinstance(background, RasterImage):
        raise TypeError(
            f"Expected RasterImage inputs, got {type(foreground)} and {type(background)}"
        )

    if foreground.size != background.size:
        raise GeometryMismatchError(
            f"Cannot composite {foreground.width}x{foreground.height} over "
            f"{background.width}x{background.height}"
        )

    fg = foreground.pixels.astype(np.uint32)
    bg = background.pixels.astype(np.uint32)

    fg_alpha = fg[:, :, ALPHA_CHANNEL_INDEX:ALPHA_CHANNEL_INDEX + 1]
    inverse = MAX_CHANNEL_VALUE - fg_alpha
    half = MAX_CHANNEL_VALUE // 2

    blended = np.empty(fg.shape, dtype=np.uint8)
    blended[:, :, :ALPHA_CHANNEL_INDEX] = (
        fg[:, :, :ALPHA_CHANNEL_INDEX] * fg_alpha
        + bg[:, :, :ALPHA_CHANNEL_INDEX] * inverse
        + half
    ) // MAX_CHANNEL_VALUE

    bg_alpha = bg[:, :, ALPHA_CHANNEL_INDEX:ALPHA_CHANNEL_INDEX + 1]
    blended[:, :, ALPHA_CHANNEL_INDEX:] = (
        fg_alpha * MAX_CHANNEL_VALUE + bg_alpha * inverse + half
    ) // MAX_CHANNEL_VALUE

    return RasterImage(blended)


class ImageLayerCompositor:
    """Holds the running composite of a blend run.

    The compositor starts Empty. The first ``feed`` stores the image as
    the accumulator; each later ``feed`` builds a new blended buffer and
    swaps it in. Callers only ever receive read-only snapshots.
    """

    def __init__(self, geometry: TargetGeometry):
        self.geometry = geometry
        self._accumulator: Optional[RasterImage] = None
        self._count = 0

    @property
    def is_seeded(self) -> bool:
        return self._accumulator is not None

    @property
    def count(self) -> int:
        """Number of images fed since the last reset."""
        return self._count

    def feed(self, image: RasterImage) -> RasterImage:
        """
        Add one layer on top of the running composite.

        Args:
            image: RasterImage already resampled to the target geometry

        Returns:
            Read-only snapshot of the updated composite

        Raises:
            TypeError: If image is not a RasterImage
            GeometryMismatchError: If image size differs from the geometry
        """
        if not isinstance(image, RasterImage):
            raise TypeError(f"Expected RasterImage, got {type(image)}")

        if image.size != self.geometry.size:
            raise GeometryMismatchError(
                f"Compositor expects {self.geometry.width}x{self.geometry.height}, "
                f"got {image.width}x{image.height}"
            )

        if self._accumulator is None:
            self._accumulator = image.copy()
        else:
            blended = alpha_over(image, self._accumulator)
            self._accumulator = blended

        self._count += 1
        return self._accumulator.snapshot()

    def current(self) -> Optional[RasterImage]:
        """Snapshot of the composite, or None while Empty."""
        if self._accumulator is None:
            return None
        return self._accumulator.snapshot()

    def reset(self) -> None:
        """Drop the accumulator and return to the Empty state."""
        self._accumulator = None
        self._count = 0
