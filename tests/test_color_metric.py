import numpy as np
import pytest

from models import MAX_RGB_DISTANCE, Color
from pattern_engine.color_metric import (
    color_distance,
    color_to_hex,
    colors_to_array,
    diversity_threshold,
    find_nearest_color,
    hex_to_color,
    linear_distance,
    nearest_indices,
)


def test_color_distance_is_squared_euclidean():
    assert color_distance(Color(10, 20, 30), Color(13, 24, 30)) == 25
    assert linear_distance(Color(10, 20, 30), Color(13, 24, 30)) == 5


def test_max_distance_spans_black_to_white():
    assert MAX_RGB_DISTANCE == pytest.approx(441.67, abs=0.01)
    assert linear_distance(Color(0, 0, 0), Color(255, 255, 255)) == pytest.approx(MAX_RGB_DISTANCE)


def test_diversity_threshold_is_linear_in_percent():
    assert diversity_threshold(0) == 0
    assert diversity_threshold(50) == pytest.approx(MAX_RGB_DISTANCE / 2)
    assert diversity_threshold(100) == pytest.approx(441.67, abs=0.01)


def test_find_nearest_color_prefers_lowest_index_on_ties():
    palette = [Color(10, 0, 0), Color(0, 10, 0), Color(0, 0, 0)]
    assert find_nearest_color(Color(0, 0, 5), palette) == 2
    assert find_nearest_color(Color(5, 5, 0), palette) == 0


def test_vectorised_nearest_matches_linear_scan():
    rng = np.random.RandomState(3)
    samples = rng.randint(0, 256, size=(200, 3))
    palette = [Color(*rgb) for rgb in rng.randint(0, 256, size=(7, 3)).tolist()]
    palette.append(Color(*palette[2].rgb))  # duplicate entry never wins

    indices = nearest_indices(samples, colors_to_array(palette))

    expected = [find_nearest_color(Color(*rgb), palette) for rgb in samples.tolist()]
    assert indices.tolist() == expected
    assert 7 not in indices.tolist()


def test_nearest_rejects_empty_palette():
    with pytest.raises(ValueError):
        find_nearest_color(Color(1, 2, 3), [])
    with pytest.raises(ValueError):
        nearest_indices(np.zeros((1, 3), dtype=np.int64), colors_to_array([]))


def test_hex_conversion():
    assert hex_to_color("#FF8000").rgb == (255, 128, 0)
    assert hex_to_color("0a0b0c").rgb == (10, 11, 12)
    assert color_to_hex(Color(255, 128, 0)) == "#ff8000"
    assert hex_to_color("#ffffff").count == 0


@pytest.mark.parametrize("bad", ["#fff", "zzzzzz", "#12345678", ""])
def test_hex_to_color_rejects_malformed_input(bad):
    with pytest.raises(ValueError):
        hex_to_color(bad)


def test_nearest_indices_across_block_boundaries(monkeypatch):
    import pattern_engine.color_metric as color_metric

    rng = np.random.RandomState(8)
    samples = rng.randint(0, 256, size=(53, 3))
    palette = rng.randint(0, 256, size=(6, 3))
    palette[4] = palette[1]
    colors = [Color(*p) for p in palette.tolist()]

    # 20 pairs per block -> 3 samples per block, last block partial
    monkeypatch.setattr(color_metric, "NEAREST_BLOCK_PAIRS", 20)
    indices = nearest_indices(samples, palette)

    assert indices.shape == (53,)
    assert indices.tolist() == [find_nearest_color(Color(*s), colors) for s in samples.tolist()]
    assert 4 not in indices.tolist()


def test_nearest_indices_palette_larger_than_block(monkeypatch):
    import pattern_engine.color_metric as color_metric

    palette = np.array([[0, 0, 0], [10, 10, 10], [200, 0, 0], [0, 200, 0]])
    monkeypatch.setattr(color_metric, "NEAREST_BLOCK_PAIRS", 2)

    assert nearest_indices(np.array([[190, 5, 0], [9, 9, 9]]), palette).tolist() == [2, 1]
