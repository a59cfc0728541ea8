from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Cell:
    """One terminal character: source pixels (x, y) on top and (x, y + 1) below."""

    top_lit: bool
    bottom_lit: bool
    top_colour: RGB | None = None
    bottom_colour: RGB | None = None


class PixelSource(Protocol):
    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def alpha(self, x: int, y: int) -> int:
        """Alpha of the pixel at (x, y), 0-255."""
        ...

    def colour(self, x: int, y: int) -> RGB | None:
        """RGB of the pixel at (x, y), or None for sources without colour."""
        ...

    def alpha_row(self, y: int) -> np.ndarray:
        """Alpha of every pixel in row y, shape (width,)."""
        ...

    def colour_row(self, y: int) -> np.ndarray | None:
        """RGB of every pixel in row y, shape (width, 3), or None without colour."""
        ...
