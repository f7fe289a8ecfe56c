"""Bead position generation for the radial and rectangular layouts.

AIDEV-NOTE: Both walks poll `should_cancel` once per ring / per row, never
per bead. A cancelled walk returns None and produces no positions.
"""

import math
from typing import Callable

from models import (
    MIN_RADIAL_RING_BEADS,
    BeadPosition,
    PatternConfig,
    Point,
)

CancelCheck = Callable[[], bool]


def _cancelled(should_cancel: CancelCheck | None) -> bool:
    return should_cancel is not None and should_cancel()


def _in_bounds(x: float, y: float, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def max_radius_to_corners(center: Point, width: int, height: int) -> float:
    """Largest distance from the center to any image corner."""
    return max(
        math.hypot(center.x, center.y),
        math.hypot(width - center.x, center.y),
        math.hypot(center.x, height - center.y),
        math.hypot(width - center.x, height - center.y),
    )


def beads_in_ring(radius: float, bead_spacing: float) -> int:
    """Number of beads placed on a ring, never fewer than six."""
    circumference = 2 * math.pi * radius
    return max(MIN_RADIAL_RING_BEADS, math.floor(circumference / bead_spacing))


def radial_positions(
    width: int,
    height: int,
    center: Point,
    bead_spacing: float,
    should_cancel: CancelCheck | None = None,
) -> "list[BeadPosition] | None":
    """Concentric rings of beads around a center point.

    Args:
        width: Image width in pixels
        height: Image height in pixels
        center: Ring center in pixel space (may lie outside the image)
        bead_spacing: Distance between rings and between beads on a ring
        should_cancel: Optional poll, checked at each ring boundary

    Returns:
        Ring-major list of positions clipped to the image, or None if cancelled

    AIDEV-NOTE: Ring k sits at exactly k * bead_spacing. The ring index
    advances even when every bead of a ring is clipped, so sparse or empty
    ring indices near the corners are expected.
    """
    if bead_spacing <= 0:
        raise ValueError(f"Bead spacing must be positive, got {bead_spacing}")

    positions: list[BeadPosition] = []
    if _in_bounds(center.x, center.y, width, height):
        positions.append(BeadPosition.radial(center.x, center.y, 0, 0, 0.0, 0.0))

    max_radius = max_radius_to_corners(center, width, height)
    ring_index = 1
    radius = bead_spacing

    while radius <= max_radius:
        if _cancelled(should_cancel):
            return None

        count = beads_in_ring(radius, bead_spacing)
        for i in range(count):
            angle = (i / count) * 2 * math.pi
            x = center.x + radius * math.cos(angle)
            y = center.y + radius * math.sin(angle)
            if _in_bounds(x, y, width, height):
                positions.append(
                    BeadPosition.radial(x, y, ring_index, i, angle, radius)
                )

        ring_index += 1
        radius = ring_index * bead_spacing

    return positions


def rectangular_positions(
    width: int,
    height: int,
    beads_horizontal: int,
    beads_vertical: int,
    should_cancel: CancelCheck | None = None,
) -> "list[BeadPosition] | None":
    """Uniform grid with one bead at the center of every cell.

    Returns:
        Row-major list of beads_horizontal * beads_vertical positions,
        or None if cancelled
    """
    if beads_horizontal < 1 or beads_vertical < 1:
        raise ValueError(
            f"Grid must have at least one cell, got {beads_horizontal}x{beads_vertical}"
        )

    step_x = width / beads_horizontal
    step_y = height / beads_vertical
    positions: list[BeadPosition] = []

    for row in range(beads_vertical):
        if _cancelled(should_cancel):
            return None
        y = row * step_y + step_y / 2
        for col in range(beads_horizontal):
            x = col * step_x + step_x / 2
            positions.append(BeadPosition.rectangular(x, y, row, col))

    return positions


def grid_dimensions(width: int, height: int, config: PatternConfig) -> "tuple[int, int]":
    """(beads_horizontal, beads_vertical) for the uniform rectangular grid.

    Explicit dimensions win; otherwise one cell per bead_spacing pixels.
    """
    cols = config.beads_horizontal
    rows = config.beads_vertical
    if cols is None:
        cols = max(1, math.floor(width / config.bead_spacing))
    if rows is None:
        rows = max(1, math.floor(height / config.bead_spacing))
    return cols, rows


def generate_positions(
    width: int,
    height: int,
    config: PatternConfig,
    should_cancel: CancelCheck | None = None,
) -> "list[BeadPosition] | None":
    """All positions for the configured layout, radial first for BOTH."""
    positions: list[BeadPosition] = []

    if config.layout.uses_radial:
        radial = radial_positions(
            width, height, config.start_point, config.bead_spacing, should_cancel
        )
        if radial is None:
            return None
        positions.extend(radial)

    if config.layout.uses_rectangular:
        cols, rows = grid_dimensions(width, height, config)
        rectangular = rectangular_positions(width, height, cols, rows, should_cancel)
        if rectangular is None:
            return None
        positions.extend(rectangular)

    return positions
