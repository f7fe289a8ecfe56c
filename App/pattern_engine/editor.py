"""Post-generation palette and pattern edits.

AIDEV-NOTE: Every recolor re-samples the bead's ORIGINAL pixel color from
the immutable PixelBuffer and maps it against the current palette. Never
derive a new color from the bead's previously assigned palette entry,
that compounds quantization error across repeated edits.
"""

from typing import Optional, Tuple

import numpy as np

from models import (
    MIN_PALETTE_SIZE,
    BeadPattern,
    Color,
    DisplayTransform,
    Rect,
)

from .color_metric import colors_to_array, nearest_indices
from .pixels import PixelBuffer
from .sampling import sample_rgb_array


def _check_index(palette: "list[Color]", index: int) -> None:
    if not 0 <= index < len(palette):
        raise IndexError(
            f"Palette index {index} out of range for {len(palette)} colors"
        )


def apply_palette(
    pattern: BeadPattern, palette: "list[Color]", pixels: PixelBuffer
) -> BeadPattern:
    """Remap every bead to its nearest color in the current palette.

    Used after manual palette edits. Mutates and returns `pattern`.
    """
    if not pattern.beads:
        return pattern
    samples = sample_rgb_array([bead.position for bead in pattern.beads], pixels)
    indices = nearest_indices(samples, colors_to_array(palette))
    for bead, index in zip(pattern.beads, indices):
        bead.color_index = int(index)
    return pattern


def delete_color(
    pattern: BeadPattern | None,
    palette: "list[Color]",
    index: int,
    pixels: PixelBuffer | None,
) -> Tuple[bool, Optional[str]]:
    """Remove palette[index] and remap the beads that used it.

    Beads on the deleted color are re-sampled and moved to the nearest
    remaining color; beads above the index shift down by one; beads below
    are untouched. Without a pattern only the palette shrinks.

    Args:
        pattern: Pattern to remap in place, or None
        palette: Palette list, modified in place
        index: Palette index to delete
        pixels: Original image (required when a pattern is given)

    Returns:
        Tuple of (success: bool, error_message: Optional[str])

    Raises:
        IndexError: If index is outside the palette
    """
    _check_index(palette, index)
    if len(palette) <= MIN_PALETTE_SIZE:
        return False, f"Palette must keep at least {MIN_PALETTE_SIZE} colors"
    if pattern is not None and pattern.beads and pixels is None:
        raise ValueError("Original image is required to remap beads")

    del palette[index]
    if pattern is None or not pattern.beads:
        return True, None

    orphaned = [bead for bead in pattern.beads if bead.color_index == index]
    if orphaned:
        samples = sample_rgb_array([bead.position for bead in orphaned], pixels)
        replacements = nearest_indices(samples, colors_to_array(palette))
        for bead, replacement in zip(orphaned, replacements):
            bead.color_index = int(replacement)

    orphaned_ids = {id(bead) for bead in orphaned}
    for bead in pattern.beads:
        if id(bead) not in orphaned_ids and bead.color_index > index:
            bead.color_index -= 1

    return True, None


def exclude_color_in_region(
    pattern: BeadPattern,
    palette: "list[Color]",
    color_index: int,
    region: Rect,
    transform: DisplayTransform,
    pixels: PixelBuffer,
) -> int:
    """Move beads of one color inside a screen rectangle to other colors.

    Args:
        pattern: Pattern to edit in place
        palette: Current palette (not modified)
        color_index: Palette index to clear from the region
        region: Selection rectangle in display (screen) space
        transform: Pixel-to-display mapping the selection was drawn in
        pixels: Original image

    Returns:
        Number of beads that were recolored (0 when none qualify)

    AIDEV-NOTE: The excluded index is never a candidate. Among the other
    entries the lowest palette index wins ties.
    """
    _check_index(palette, color_index)
    others = [i for i in range(len(palette)) if i != color_index]
    if not others:
        return 0

    targets = [
        bead
        for bead in pattern.beads
        if bead.color_index == color_index
        and region.contains(*transform.apply(bead.x, bead.y))
    ]
    if not targets:
        return 0

    samples = sample_rgb_array([bead.position for bead in targets], pixels)
    candidates = colors_to_array([palette[i] for i in others])
    choices = nearest_indices(samples, candidates)
    remap = np.array(others)
    for bead, choice in zip(targets, choices):
        bead.color_index = int(remap[choice])

    return len(targets)


def add_colors(palette: "list[Color]", colors: "list[Color]") -> int:
    """Append colors whose RGB is not already in the palette.

    Beads keep their indices until the palette is re-applied.

    Returns:
        Number of colors actually added
    """
    added = 0
    for color in colors:
        if any(existing.same_rgb(color) for existing in palette):
            continue
        palette.append(Color(color.r, color.g, color.b))
        added += 1
    return added


def replace_color(palette: "list[Color]", index: int, color: Color) -> None:
    """Overwrite palette[index] with a new RGB value, keeping its count."""
    _check_index(palette, index)
    current = palette[index]
    palette[index] = Color(color.r, color.g, color.b, count=current.count)
