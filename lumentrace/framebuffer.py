"""
RGBA8 framebuffer and PNG output.

Pixels are stored as packed 32-bit words ``(a << 24) | (b << 16) | (g << 8) | r``
in a flat row-major array. Rows are written flipped: camera-space row 0 is the
bottom scanline, while array row 0 is the top of the image so the buffer can
be handed to a PNG encoder as-is.
"""

from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import Tuple, Union

import numpy as np

from .vec3 import Color

logger = logging.getLogger(__name__)

CHANNELS = 4


class ImageWriteError(Exception):
    """The framebuffer could not be written to disk."""
    pass


def pack_rgba(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack four 8-bit channels into one 32-bit pixel word."""
    return (a << 24) | (b << 16) | (g << 8) | r


def unpack_rgba(word: int) -> Tuple[int, int, int, int]:
    """Split a packed pixel word back into (r, g, b, a)."""
    word = int(word)
    return (
        word & 0xFF,
        (word >> 8) & 0xFF,
        (word >> 16) & 0xFF,
        (word >> 24) & 0xFF
    )


def color_to_rgba(color: Color, samples: int = 1) -> Tuple[int, int, int, int]:
    """Convert an accumulated sample sum to 8-bit channels.

    Args:
        color: Sum of `samples` linear color samples
        samples: Number of samples in the sum

    Returns:
        (r, g, b, a) with gamma 2 applied and alpha fixed at 255
    """
    scale = 1.0 / samples
    channels = []
    for c in color:
        # Gamma 2; negative sums can only come from rounding noise
        c = math.sqrt(max(c * scale, 0.0))
        channels.append(int(256 * min(max(c, 0.0), 0.999)))
    return channels[0], channels[1], channels[2], 255


class Framebuffer:
    """A width x height image of packed RGBA8 pixels."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Framebuffer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros(width * height, dtype=np.uint32)

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        return x + (self.height - 1 - y) * self.width

    def set_pixel(self, x: int, y: int, r: int, g: int, b: int, a: int = 255) -> None:
        """Store a pixel given in camera space (y = 0 is the bottom row)."""
        self.pixels[self._index(x, y)] = pack_rgba(r, g, b, a)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Read back a pixel given in camera space."""
        return unpack_rgba(self.pixels[self._index(x, y)])

    def to_array(self) -> np.ndarray:
        """Return the image as a (height, width, 4) uint8 array, top row first."""
        words = self.pixels.reshape(self.height, self.width)
        rgba = np.empty((self.height, self.width, CHANNELS), dtype=np.uint8)
        for channel in range(CHANNELS):
            rgba[:, :, channel] = (words >> np.uint32(8 * channel)) & np.uint32(0xFF)
        return rgba

    @property
    def stride(self) -> int:
        """Bytes per row of the encoded image."""
        return self.width * CHANNELS

    def save_png(self, filename: Union[str, Path]) -> Path:
        """Write the framebuffer as an RGBA PNG file.

        Args:
            filename: Output path; missing parent directories are created

        Returns:
            The path written

        Raises:
            ImageWriteError: If the file cannot be written
        """
        from PIL import Image as PILImage

        path = Path(filename)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            PILImage.fromarray(self.to_array()).save(path, format='PNG')
        except (OSError, ValueError) as e:
            raise ImageWriteError(f"Cannot write image to {path}: {e}") from e

        logger.info(
            "Wrote %dx%d image (%d bytes per row) to %s",
            self.width, self.height, self.stride, path
        )
        return path

    def __repr__(self) -> str:
        return f"Framebuffer({self.width}x{self.height})"
