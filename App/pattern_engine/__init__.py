"""Bead pattern generation engine.

AIDEV-NOTE: This package turns an image into a bead pattern and keeps the
pattern consistent through palette edits. Organized into modular components:
- processor: PatternGenerator orchestrator and PatternSession
- grid: Radial and uniform rectangular bead positions
- sampling: Pixel colors under bead positions
- quantization: K-means palette reduction with diversity selection
- mapping: Nearest-color assignment and per-color tallies
- editor: Palette edits that re-sample the original image
- pixels: Immutable RGBA buffer, loading and brightness/contrast
- color_metric: Color distance and hex helpers
"""

from .pixels import PixelBuffer, adjust_brightness_contrast, load_image
from .processor import PatternGenerator, PatternSession, generate_pattern

__all__ = [
    "PatternGenerator",
    "PatternSession",
    "PixelBuffer",
    "adjust_brightness_contrast",
    "generate_pattern",
    "load_image",
]
