"""Color similarity used throughout the pattern engine.

AIDEV-NOTE: Nearest-color and clustering comparisons use the squared
Euclidean RGB distance. Only diversity thresholds take the square root,
because they are expressed in linear RGB-distance units.
"""

import math
import re

import numpy as np

from models import MAX_RGB_DISTANCE, Color

_HEX_PATTERN = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)

# Sample/palette pairs per distance block in nearest_indices
NEAREST_BLOCK_PAIRS = 1_000_000


def color_distance(c1: Color, c2: Color) -> int:
    """Squared Euclidean distance between two colors."""
    dr = c1.r - c2.r
    dg = c1.g - c2.g
    db = c1.b - c2.b
    return dr * dr + dg * dg + db * db


def linear_distance(c1: Color, c2: Color) -> float:
    return math.sqrt(color_distance(c1, c2))


def diversity_threshold(diversity: float) -> float:
    """Minimum linear distance between selected colors for a diversity %."""
    return diversity / 100.0 * MAX_RGB_DISTANCE


def colors_to_array(colors: "list[Color]") -> np.ndarray:
    """Stack colors into an (N, 3) int64 array."""
    if not colors:
        return np.zeros((0, 3), dtype=np.int64)
    return np.array([c.rgb for c in colors], dtype=np.int64)


def squared_distances(samples: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """Pairwise squared distances, shape (len(samples), len(palette)).

    Integer arithmetic keeps equal distances exactly equal, so argmin
    resolves ties to the lowest palette index.
    """
    diff = samples[:, None, :].astype(np.int64) - palette[None, :, :].astype(np.int64)
    return (diff * diff).sum(axis=2)


def nearest_indices(samples: np.ndarray, palette: np.ndarray) -> np.ndarray:
    """Index of the nearest palette color for every sample (first index wins ties).

    AIDEV-NOTE: Samples are processed in blocks of at most
    NEAREST_BLOCK_PAIRS sample/palette pairs. An unlimited palette can hold
    every distinct sampled color, so the full distance matrix may not fit
    in memory.
    """
    if len(palette) == 0:
        raise ValueError("Cannot map colors onto an empty palette")
    indices = np.zeros(len(samples), dtype=np.int64)
    rows = max(1, NEAREST_BLOCK_PAIRS // len(palette))
    for start in range(0, len(samples), rows):
        block = samples[start : start + rows]
        indices[start : start + rows] = np.argmin(squared_distances(block, palette), axis=1)
    return indices


def find_nearest_color(color: Color, palette: "list[Color]") -> int:
    """Linear scan for the closest palette entry, strict `<` comparison."""
    if not palette:
        raise ValueError("Cannot map colors onto an empty palette")
    min_dist = math.inf
    nearest = 0
    for i, candidate in enumerate(palette):
        dist = color_distance(color, candidate)
        if dist < min_dist:
            min_dist = dist
            nearest = i
    return nearest


def hex_to_color(hex_code: str) -> Color:
    """Convert '#RRGGBB' (or 'RRGGBB') to a Color with count 0.

    Raises:
        ValueError: If the string is not a six-digit hex color
    """
    match = _HEX_PATTERN.match(hex_code.strip())
    if match is None:
        raise ValueError(f"Invalid hex code: {hex_code}")
    r, g, b = (int(part, 16) for part in match.groups())
    return Color(r, g, b)


def color_to_hex(color: Color) -> str:
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"
