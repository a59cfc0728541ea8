import numpy as np
import pytest
from PIL import Image

from halfblock.source import GrayAlphaSource, RgbaSource


def rgba_source(rows):
    """Build an RgbaSource from nested lists of (r, g, b, a) tuples, top row first."""
    return RgbaSource(np.array(rows, dtype=np.uint8).reshape(len(rows), -1, 4))


def gray_source(rows):
    """Build a GrayAlphaSource from nested lists of (luma, alpha) tuples."""
    return GrayAlphaSource(np.array(rows, dtype=np.uint8).reshape(len(rows), -1, 2))


@pytest.fixture
def write_image(tmp_path):
    """Save a Pillow image under tmp_path and return its path."""

    def _write(image: Image.Image, name: str = "image.png"):
        path = tmp_path / name
        image.save(path)
        return path

    return _write
