"""Immutable RGBA pixel buffers and the pre-generation pixel filters.

AIDEV-NOTE: The PixelBuffer is the source of truth for every color the
engine samples, including re-sampling during palette edits. It is never
mutated; filters return a new buffer.
"""

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

# Working size the image is fitted into after loading
MAX_WORKING_WIDTH = 800
MAX_WORKING_HEIGHT = 600


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Row-major RGBA samples, origin top-left, shape (height, width, 4)."""

    data: np.ndarray

    def __post_init__(self):
        array = np.asarray(self.data)
        if array.dtype != np.uint8:
            raise ValueError(f"Pixel data must be uint8, got {array.dtype}")
        array = np.ascontiguousarray(array)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(
                f"Pixel data must have shape (height, width, 4), got {array.shape}"
            )
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError("Pixel buffer must not be empty")
        if array is self.data:
            array = array.copy()
        array.setflags(write=False)
        object.__setattr__(self, "data", array)

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    @classmethod
    def from_rgba_bytes(cls, width: int, height: int, rgba: bytes) -> "PixelBuffer":
        """Wrap a flat RGBA byte string (4 bytes per pixel, row-major)."""
        expected = width * height * 4
        if len(rgba) != expected:
            raise ValueError(
                f"Expected {expected} bytes for {width}x{height} RGBA, got {len(rgba)}"
            )
        array = np.frombuffer(rgba, dtype=np.uint8).reshape(height, width, 4)
        return cls(array)

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        # AIDEV-NOTE: Always convert to RGBA for consistent indexing
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image))

    @classmethod
    def solid(cls, width: int, height: int, rgb: "tuple[int, int, int]") -> "PixelBuffer":
        """Single-color opaque buffer."""
        array = np.empty((height, width, 4), dtype=np.uint8)
        array[..., :3] = rgb
        array[..., 3] = 255
        return cls(array)

    def rgb_at(self, x: int, y: int) -> "tuple[int, int, int]":
        """RGB of the pixel at integer coordinates (alpha ignored)."""
        r, g, b = self.data[y, x, :3]
        return (int(r), int(g), int(b))


def fit_image(
    image: Image.Image,
    max_width: int = MAX_WORKING_WIDTH,
    max_height: int = MAX_WORKING_HEIGHT,
) -> Image.Image:
    """Downscale an image to fit the working area, keeping aspect ratio.

    Images already inside the bounds are returned unchanged.
    """
    width, height = image.size
    if width > max_width:
        height = height * max_width / width
        width = max_width
    if height > max_height:
        width = width * max_height / height
        height = max_height

    new_size = (max(1, int(width)), max(1, int(height)))
    if new_size == image.size:
        return image
    return image.resize(new_size, Image.Resampling.LANCZOS)


def load_image(
    file_path: str | Path,
    max_width: int = MAX_WORKING_WIDTH,
    max_height: int = MAX_WORKING_HEIGHT,
) -> PixelBuffer:
    """Load an image file into a PixelBuffer fitted to the working area.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)
        max_width: Maximum working width in pixels
        max_height: Maximum working height in pixels

    Returns:
        PixelBuffer in RGBA

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        with Image.open(file_path) as image:
            image = image.convert("RGBA")
    except Exception as e:
        raise ValueError(f"Failed to load image: {e}") from e
    return PixelBuffer.from_image(fit_image(image, max_width, max_height))


def contrast_factor(contrast: float) -> float:
    """Multiplier for a contrast setting in the open range (-100, 100)."""
    if not -100 < contrast < 100:
        raise ValueError(f"Contrast must be within (-100, 100), got {contrast}")
    return (1 + contrast / 100) / (1 - contrast / 100)


def adjust_brightness_contrast(
    pixels: PixelBuffer, brightness: float = 0.0, contrast: float = 0.0
) -> PixelBuffer:
    """Return a new buffer with brightness/contrast applied to RGB.

    Each channel becomes clamp(factor * (v - 128) + 128 + brightness, 0, 255);
    alpha is copied through.
    """
    if brightness == 0 and contrast == 0:
        return pixels

    factor = contrast_factor(contrast)
    rgb = pixels.data[..., :3].astype(np.float64)
    adjusted = factor * (rgb - 128.0) + 128.0 + brightness

    out = np.array(pixels.data)
    out[..., :3] = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
    return PixelBuffer(out)
