"""Pixel color sampling at bead positions.

AIDEV-NOTE: Coordinates are floored to pixel indices. Rectangular (uniform
grid) positions are clamped into the buffer; radial positions are already
bounds-checked by the grid walk, so an out-of-range radial position is a
programming error and raises IndexError instead of wrapping around.
"""

import numpy as np

from models import BeadPosition, Color, SampledBead

from .pixels import PixelBuffer


def pixel_index(position: BeadPosition, pixels: PixelBuffer) -> "tuple[int, int]":
    """Integer (x, y) pixel coordinates under a bead position."""
    x = int(np.floor(position.x))
    y = int(np.floor(position.y))
    if position.is_rectangular:
        x = min(max(x, 0), pixels.width - 1)
        y = min(max(y, 0), pixels.height - 1)
    elif not (0 <= x < pixels.width and 0 <= y < pixels.height):
        raise IndexError(
            f"Bead position ({position.x:.2f}, {position.y:.2f}) lies outside "
            f"the {pixels.width}x{pixels.height} image"
        )
    return x, y


def sample_color(position: BeadPosition, pixels: PixelBuffer) -> Color:
    """Original image color under a single bead (alpha ignored)."""
    x, y = pixel_index(position, pixels)
    return Color(*pixels.rgb_at(x, y))


def sample_rgb_array(
    positions: "list[BeadPosition]", pixels: PixelBuffer
) -> np.ndarray:
    """Original image colors under many beads as an (N, 3) int64 array."""
    if not positions:
        return np.zeros((0, 3), dtype=np.int64)
    coords = np.array([pixel_index(p, pixels) for p in positions], dtype=np.intp)
    return pixels.data[coords[:, 1], coords[:, 0], :3].astype(np.int64)


def sample_positions(
    positions: "list[BeadPosition]", pixels: PixelBuffer
) -> "list[SampledBead]":
    """Pair every position with its sampled color, order preserved."""
    rgb = sample_rgb_array(positions, pixels)
    return [
        SampledBead(position=position, color=Color(int(r), int(g), int(b)))
        for position, (r, g, b) in zip(positions, rgb)
    ]
