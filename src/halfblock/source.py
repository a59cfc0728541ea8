from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from halfblock.engine import RGB


class HalfblockError(Exception):
    """Base class for errors reported to the user by the CLI."""


class ImageFileNotFound(HalfblockError):
    def __init__(self, path: str | Path):
        super().__init__("File does not exist.")
        self.path = Path(path)


class ImageDecodeError(HalfblockError):
    def __init__(self, path: str | Path):
        super().__init__("Could not read image.")
        self.path = Path(path)


def _as_pixels(pixels, channels: int) -> np.ndarray:
    arr = np.asarray(pixels, dtype=np.uint8)
    if arr.ndim != 3 or arr.shape[2] != channels:
        raise ValueError(f"Expected an (height, width, {channels}) array, got shape {arr.shape}")
    return arr


class GrayAlphaSource:
    """Luminance + alpha pixels. Carries no colour."""

    channels = 2

    def __init__(self, pixels):
        self.pixels = _as_pixels(pixels, self.channels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def alpha(self, x: int, y: int) -> int:
        return int(self.pixels[y, x, 1])

    def colour(self, x: int, y: int) -> RGB | None:
        return None

    def alpha_row(self, y: int) -> np.ndarray:
        return self.pixels[y, :, 1]

    def colour_row(self, y: int) -> np.ndarray | None:
        return None


class RgbaSource:
    """Red, green, blue + alpha pixels."""

    channels = 4

    def __init__(self, pixels):
        self.pixels = _as_pixels(pixels, self.channels)

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def alpha(self, x: int, y: int) -> int:
        return int(self.pixels[y, x, 3])

    def colour(self, x: int, y: int) -> RGB | None:
        r, g, b = self.pixels[y, x, :3]
        return (int(r), int(g), int(b))

    def alpha_row(self, y: int) -> np.ndarray:
        return self.pixels[y, :, 3]

    def colour_row(self, y: int) -> np.ndarray | None:
        return self.pixels[y, :, :3]


def _to_8bit(image: Image.Image) -> Image.Image:
    """Scale a 16/32-bit integer or float greyscale image down to mode L (or LA).

    Integer samples are treated as 16-bit and rounded to the nearest 8-bit
    value; float samples are taken as 0.0-1.0. A single-value transparency
    entry (PNG tRNS) becomes an alpha channel.
    """
    arr = np.asarray(image)
    if image.mode == "F":
        grey = np.rint(np.clip(arr, 0.0, 1.0) * 255.0)
    else:
        grey = (np.clip(arr, 0, 65535).astype(np.uint32) + 128) // 257
    scaled = Image.fromarray(grey.astype(np.uint8))
    transparency = image.info.get("transparency")
    if isinstance(transparency, int):
        scaled.putalpha(Image.fromarray(np.where(arr == transparency, 0, 255).astype(np.uint8)))
    return scaled


def source_from_image(image: Image.Image, colour: bool = True) -> GrayAlphaSource | RgbaSource:
    if image.mode == "F" or image.mode.startswith("I"):
        image = _to_8bit(image)
    # Going through RGBA first keeps palette transparency and makes alpha-less images opaque
    image = image.convert("RGBA")
    if colour:
        return RgbaSource(np.asarray(image, dtype=np.uint8))
    return GrayAlphaSource(np.asarray(image.convert("LA"), dtype=np.uint8))


def load_source(path: str | Path, colour: bool = True) -> GrayAlphaSource | RgbaSource:
    """Open and decode an image file into a pixel source.

    Raises ImageFileNotFound if the path cannot be opened for reading and
    ImageDecodeError if its contents are not an image Pillow understands.
    """
    path = Path(path)
    try:
        f = path.open("rb")
    except OSError as e:
        raise ImageFileNotFound(path) from e
    with f:
        try:
            with Image.open(f) as image:
                image.load()
                return source_from_image(image, colour=colour)
        except (UnidentifiedImageError, OSError, SyntaxError, EOFError, ValueError, Image.DecompressionBombError) as e:
            raise ImageDecodeError(path) from e
