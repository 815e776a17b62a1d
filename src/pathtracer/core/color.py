"""Color accumulators for progressive sample averaging.

A Color is not a plain RGB triple: it is a running sum of linear-light
samples together with the number of samples that went into it. Merging two
accumulators adds both sums and both counts, which makes merging associative
and commutative so independent workers can be combined in any order.

ColorBuffer stores a whole image of accumulators as NumPy arrays, row 0 being
the top row of the image. It is what each render worker fills and what the
driver merges.

Output conversion gamma-corrects with a square root (gamma 2), clamps to
[0, 0.999] and quantizes by truncating ``256 * value``, so the largest byte
produced is 255.

Example:
    >>> from pathtracer.core.color import Color
    >>> a = Color.of(1.0, 0.0, 0.0)
    >>> b = Color.of(0.0, 0.0, 1.0)
    >>> (a + b).average()
    Vector(x=0.5, y=0.0, z=0.5)
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from pathtracer.core.vector import ZERO, Vector

# Upper clamp applied before quantizing; 256 * 0.999 truncates to 255
MAX_CHANNEL = 0.999


def _channel_to_byte(value: float) -> int:
    return int(min(max(math.sqrt(value), 0.0), MAX_CHANNEL) * 256.0)


@dataclass(frozen=True, slots=True)
class Color:
    """An accumulator of linear-light color samples.

    Attributes:
        value: Running sum of sample values.
        samples: Number of samples in the sum. An empty accumulator has 0.
    """

    value: Vector = ZERO
    samples: int = 0

    @classmethod
    def of(cls, r: float, g: float, b: float) -> Color:
        """Create a single-sample color from RGB components."""
        return cls(Vector(r, g, b), 1)

    @classmethod
    def from_vector(cls, value: Vector) -> Color:
        """Create a single-sample color from a linear-light vector."""
        return cls(value, 1)

    def merge(self, other: Color) -> Color:
        """Combine two accumulators by adding their sums and counts."""
        return Color(self.value + other.value, self.samples + other.samples)

    __add__ = merge

    def average(self) -> Vector:
        """Return the mean sample value, or black for an empty accumulator."""
        if self.samples == 0:
            return ZERO
        return self.value / self.samples

    def to_bytes(self) -> tuple[int, int, int]:
        """Gamma-correct, clamp and quantize the average to 8-bit RGB."""
        avg = self.average()
        return (_channel_to_byte(avg.x), _channel_to_byte(avg.y), _channel_to_byte(avg.z))

    def __str__(self) -> str:
        r, g, b = self.to_bytes()
        return f"{r} {g} {b}"


def linear_to_bytes(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert an array of averaged linear-light values to 8-bit RGB.

    Vectorized form of Color.to_bytes().

    Args:
        image: Array of linear values (any shape, typically (H, W, 3)).

    Returns:
        Array of the same shape with dtype uint8.
    """
    corrected = np.clip(np.sqrt(np.maximum(image, 0.0)), 0.0, MAX_CHANNEL)
    return (corrected * 256.0).astype(np.uint8)


class ColorBuffer:
    """A per-pixel grid of color accumulators.

    The buffer holds a (height, width, 3) array of sample sums and a
    (height, width) array of sample counts. Row 0 is the top image row and
    column 0 the leftmost pixel.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Buffer dimensions must be positive, got {width}x{height}")
        self._sums = np.zeros((height, width, 3), dtype=np.float64)
        self._counts = np.zeros((height, width), dtype=np.int64)

    @property
    def width(self) -> int:
        return self._counts.shape[1]

    @property
    def height(self) -> int:
        return self._counts.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """(height, width) of the buffer."""
        return (self.height, self.width)

    @property
    def sums(self) -> npt.NDArray[np.float64]:
        """Read-only view of the per-pixel sample sums."""
        view = self._sums.view()
        view.flags.writeable = False
        return view

    @property
    def counts(self) -> npt.NDArray[np.int64]:
        """Read-only view of the per-pixel sample counts."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    @property
    def total_samples(self) -> int:
        return int(self._counts.sum())

    def add(self, row: int, col: int, color: Color) -> None:
        """Merge an accumulator into one pixel.

        Args:
            row: Pixel row (0 = top).
            col: Pixel column (0 = left).
            color: Accumulator to merge into the pixel.
        """
        self._sums[row, col] += color.value
        self._counts[row, col] += color.samples

    def __getitem__(self, index: tuple[int, int]) -> Color:
        row, col = index
        x, y, z = self._sums[row, col].tolist()
        return Color(Vector(x, y, z), int(self._counts[row, col]))

    def merge(self, other: ColorBuffer) -> ColorBuffer:
        """Return a new buffer with this buffer's and another's samples merged.

        Applies the accumulator merge rule pixel by pixel. Neither input is
        modified.

        Raises:
            ValueError: If the buffer shapes differ.
        """
        if self.shape != other.shape:
            raise ValueError(f"Buffer shapes must match: {self.shape} vs {other.shape}")
        merged = ColorBuffer(self.width, self.height)
        merged._sums = self._sums + other._sums
        merged._counts = self._counts + other._counts
        return merged

    @classmethod
    def merge_all(cls, buffers: Iterable[ColorBuffer]) -> ColorBuffer:
        """Merge any number of equally-shaped buffers.

        Raises:
            ValueError: If no buffers are given or their shapes differ.
        """
        iterator = iter(buffers)
        try:
            result = next(iterator)
        except StopIteration:
            raise ValueError("At least one buffer is required") from None
        for buffer in iterator:
            result = result.merge(buffer)
        return result

    def average(self) -> npt.NDArray[np.float64]:
        """Return the per-pixel mean as a (height, width, 3) array.

        Pixels without samples are black.
        """
        counts = self._counts[..., np.newaxis]
        return np.divide(
            self._sums,
            counts,
            out=np.zeros_like(self._sums),
            where=counts > 0,
        )

    def to_bytes(self) -> npt.NDArray[np.uint8]:
        """Return the gamma-corrected 8-bit image, shape (height, width, 3)."""
        return linear_to_bytes(self.average())

    def __repr__(self) -> str:
        return (
            f"ColorBuffer(width={self.width}, height={self.height}, "
            f"samples={self.total_samples})"
        )
