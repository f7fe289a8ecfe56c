"""Assigning sampled beads to their nearest palette color."""

from models import Bead, BeadPattern, Color, SampledBead

from .color_metric import colors_to_array, nearest_indices


def map_to_palette(sampled: "list[SampledBead]", palette: "list[Color]") -> BeadPattern:
    """Build the final pattern from sampled beads and a palette.

    Bead numbers are 1-based and follow the sampling order (ring-major for
    radial grids, row-major for rectangular grids). Ties between equally
    close palette entries go to the lowest index.
    """
    if not sampled:
        return BeadPattern()
    samples = colors_to_array([s.color for s in sampled])
    indices = nearest_indices(samples, colors_to_array(palette))
    beads = [
        Bead(position=s.position, bead_number=number, color_index=int(index))
        for number, (s, index) in enumerate(zip(sampled, indices), start=1)
    ]
    return BeadPattern(beads=beads)


def color_counts(pattern: BeadPattern, palette_size: int) -> "list[int]":
    """Number of beads using each palette index.

    Raises:
        IndexError: If a bead references an index outside the palette
    """
    counts = [0] * palette_size
    for bead in pattern.beads:
        if not 0 <= bead.color_index < palette_size:
            raise IndexError(
                f"Bead {bead.bead_number} uses color {bead.color_index}, "
                f"palette has {palette_size} entries"
            )
        counts[bead.color_index] += 1
    return counts
