import numpy as np
import pytest

from models import Bead, BeadPattern, BeadPosition, Color, SampledBead
from pattern_engine.color_metric import color_distance
from pattern_engine.mapping import color_counts, map_to_palette


def sampled(colors):
    return [
        SampledBead(BeadPosition.rectangular(i + 0.5, 0.5, 0, i), Color(*rgb))
        for i, rgb in enumerate(colors)
    ]


def test_beads_are_numbered_in_sampling_order():
    palette = [Color(0, 0, 0), Color(255, 255, 255)]
    beads = sampled([(10, 10, 10), (250, 250, 250), (0, 0, 0)])

    pattern = map_to_palette(beads, palette)

    assert [b.bead_number for b in pattern.beads] == [1, 2, 3]
    assert pattern.color_indices() == [0, 1, 0]
    assert [b.position for b in pattern.beads] == [s.position for s in beads]


def test_ties_go_to_lowest_palette_index():
    palette = [Color(10, 0, 0), Color(0, 10, 0)]
    pattern = map_to_palette(sampled([(0, 0, 0)]), palette)
    assert pattern.color_indices() == [0]


def test_no_palette_entry_is_strictly_closer():
    rng = np.random.RandomState(11)
    colors = [tuple(rgb) for rgb in rng.randint(0, 256, size=(150, 3)).tolist()]
    palette = [Color(*rgb) for rgb in rng.randint(0, 256, size=(6, 3)).tolist()]
    beads = sampled(colors)

    pattern = map_to_palette(beads, palette)

    for bead, source in zip(pattern.beads, beads):
        assigned = color_distance(source.color, palette[bead.color_index])
        for i, candidate in enumerate(palette):
            distance = color_distance(source.color, candidate)
            assert distance >= assigned
            if distance == assigned:
                assert i >= bead.color_index


def test_empty_input_gives_empty_pattern():
    assert len(map_to_palette([], [])) == 0


def test_color_counts_tally_beads_per_index():
    position = BeadPosition.rectangular(0.5, 0.5, 0, 0)
    pattern = BeadPattern(
        [Bead(position, n, index) for n, index in enumerate([0, 2, 2, 0, 2], start=1)]
    )

    assert color_counts(pattern, 4) == [2, 0, 3, 0]


def test_color_counts_rejects_dangling_index():
    pattern = BeadPattern([Bead(BeadPosition.rectangular(0.5, 0.5, 0, 0), 1, 3)])
    with pytest.raises(IndexError):
        color_counts(pattern, 2)
