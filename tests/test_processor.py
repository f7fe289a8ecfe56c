import numpy as np
import pytest

from conftest import BLUE, RED
from models import (
    Color,
    GridLayout,
    InvalidConfigurationError,
    LayoutKind,
    PatternConfig,
    Point,
    Rect,
)
from pattern_engine import PatternGenerator, PatternSession, PixelBuffer, generate_pattern


def test_solid_image_single_color():
    pixels = PixelBuffer.solid(10, 10, RED)
    config = PatternConfig(color_count=1, bead_spacing=1, layout=GridLayout.RECTANGULAR)

    result = generate_pattern(pixels, config, random_state=0)

    assert result.bead_count == 100
    assert [c.rgb for c in result.palette] == [RED]
    assert result.palette[0].count == 100
    assert set(result.pattern.color_indices()) == {0}
    assert (result.image_width, result.image_height) == (10, 10)
    assert result.layout is GridLayout.RECTANGULAR


def test_solid_red_uniform_grid(red_buffer, grid_config):
    grid_config.color_count = 1

    result = generate_pattern(red_buffer, grid_config, random_state=0)

    assert result.bead_count == 100
    assert [c.rgb for c in result.palette] == [RED]
    assert set(result.pattern.color_indices()) == {0}
    first, last = result.pattern.beads[0], result.pattern.beads[-1]
    assert (first.x, first.y) == (5, 5)
    assert (last.x, last.y) == (95, 95)
    assert last.position.label == "9-9"


def test_unlimited_palette_on_noise_maps_every_bead():
    rng = np.random.RandomState(5)
    data = rng.randint(0, 256, size=(100, 100, 4)).astype(np.uint8)
    config = PatternConfig(limit_colors=False, bead_spacing=1, layout=GridLayout.RECTANGULAR)

    result = generate_pattern(PixelBuffer(data), config)

    assert result.bead_count == 10000
    assert len(result.palette) > 9000
    assert sum(c.count for c in result.palette) == 10000
    # every sampled color is in the palette, so each bead maps onto its own color
    for bead in result.pattern.beads[::97]:
        x, y = int(bead.x), int(bead.y)
        assert result.palette[bead.color_index].rgb == tuple(int(v) for v in data[y, x, :3])


def test_beads_numbered_and_indices_valid(gradient_pixels):
    config = PatternConfig(
        color_count=5, bead_spacing=15, start_point=Point(80, 60), layout=GridLayout.RADIAL
    )

    result = PatternGenerator(config, random_state=3).generate(gradient_pixels)

    assert [b.bead_number for b in result.pattern] == list(range(1, result.bead_count + 1))
    assert 1 <= len(result.palette) <= 5
    assert all(0 <= i < len(result.palette) for i in result.pattern.color_indices())


def test_both_layout_shares_one_palette(split_pixels):
    config = PatternConfig(
        color_count=2, bead_spacing=20, start_point=Point(50, 50), layout=GridLayout.BOTH
    )

    result = generate_pattern(split_pixels, config, random_state=1)

    kinds = [b.position.kind for b in result.pattern]
    radial_count = kinds.count(LayoutKind.RADIAL)
    assert radial_count > 0
    assert kinds[radial_count:] == [LayoutKind.RECTANGULAR] * 25
    assert sorted(c.rgb for c in result.palette) == sorted([RED, BLUE])
    assert sum(c.count for c in result.palette) == result.bead_count


def test_same_seed_same_pattern(gradient_pixels):
    config = PatternConfig(color_count=6, layout=GridLayout.RECTANGULAR, bead_spacing=8)

    first = generate_pattern(gradient_pixels, config, random_state=7)
    second = generate_pattern(gradient_pixels, config, random_state=7)

    assert first.palette == second.palette
    assert first.pattern.color_indices() == second.pattern.color_indices()


def test_unlimited_colors_keeps_every_sampled_color(gradient_pixels):
    config = PatternConfig(
        color_count=2, limit_colors=False, layout=GridLayout.RECTANGULAR, bead_spacing=20
    )

    result = generate_pattern(gradient_pixels, config)

    assert len(result.palette) > 2
    assert len({c.rgb for c in result.palette}) == len(result.palette)
    assert sum(c.count for c in result.palette) == result.bead_count


@pytest.mark.parametrize(
    "overrides",
    [
        {"bead_spacing": 0},
        {"bead_spacing": -5},
        {"color_count": 0},
        {"color_diversity": 150},
        {"start_point": None},
        {"layout": GridLayout.RECTANGULAR, "beads_horizontal": 0},
    ],
)
def test_invalid_configuration(red_buffer, overrides):
    values = {"start_point": Point(50, 50), **overrides}
    config = PatternConfig(**values)

    with pytest.raises(InvalidConfigurationError):
        generate_pattern(red_buffer, config)


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfigurationError, ValueError)


def test_cancelled_generation_returns_none(red_buffer):
    config = PatternConfig(start_point=Point(50, 50))
    assert generate_pattern(red_buffer, config, should_cancel=lambda: True) is None


class TestPatternSession:
    def test_generate_fills_session(self, split_pixels, grid_config):
        session = PatternSession(split_pixels, grid_config, random_state=0)
        assert not session.has_pattern
        assert session.total_beads == 0

        assert session.generate()

        assert session.has_pattern
        assert session.total_beads == 100
        assert sorted(c.rgb for c in session.palette) == sorted([RED, BLUE])
        assert sum(session.color_counts()) == 100

    def test_cancel_leaves_previous_state(self, split_pixels, grid_config):
        session = PatternSession(split_pixels, grid_config, random_state=0)
        session.generate()
        pattern, palette = session.pattern, session.palette

        assert session.generate(should_cancel=lambda: True) is False

        assert session.pattern is pattern
        assert session.palette is palette

    def test_color_counts_without_pattern(self, split_pixels):
        session = PatternSession(split_pixels)
        session.palette = [Color(*RED), Color(*BLUE)]
        assert session.color_counts() == [0, 0]

    def test_delete_color_through_session(self, split_pixels, grid_config, capsys):
        session = PatternSession(split_pixels, grid_config, random_state=0)
        session.generate()
        session.add_colors([Color(0, 255, 0)])

        success, error = session.delete_color(2)

        assert success and error is None
        assert len(session.palette) == 2
        assert "Deleted color #3" in capsys.readouterr().out

        success, error = session.delete_color(0)
        assert not success
        assert "Warning:" in capsys.readouterr().out

    def test_exclude_uses_pattern_view_transform(self, split_pixels, grid_config):
        session = PatternSession(split_pixels, grid_config, random_state=0)
        session.generate()
        red_index = [c.rgb for c in session.palette].index(RED)
        transform = session.display_transform()

        # whole pattern in screen space: pixel (0, 0)..(100, 100) shifted by the padding
        x0, y0 = transform.apply(0, 0)
        region = Rect(x0, y0, 100, 100)

        assert session.exclude_color_in_region(red_index, region) == 50
        assert red_index not in session.pattern.color_indices()

    def test_exclude_without_pattern(self, split_pixels):
        session = PatternSession(split_pixels)
        session.palette = [Color(*RED), Color(*BLUE)]
        assert session.exclude_color_in_region(0, Rect(0, 0, 100, 100)) == 0

    def test_add_and_reapply_palette(self, split_pixels, grid_config):
        session = PatternSession(split_pixels, grid_config, random_state=0)
        session.generate()
        blue_index = [c.rgb for c in session.palette].index(BLUE)

        session.replace_color(blue_index, Color(0, 0, 200))
        assert session.add_colors([Color(0, 0, 255), Color(*RED)]) == 1
        session.apply_palette()

        indices = session.pattern.color_indices()
        assert indices.count(len(session.palette) - 1) == 50
        assert blue_index not in indices

    def test_extract_colors_from_area(self, split_pixels):
        session = PatternSession(split_pixels)
        colors = session.extract_colors_from_area(Rect(40, 0, 20, 10))
        assert [c.rgb for c in colors] == [RED, BLUE]
