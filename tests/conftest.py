import numpy as np
import pytest

from models import Color, GridLayout, PatternConfig
from pattern_engine import PixelBuffer

RED = (255, 0, 0)
BLUE = (0, 0, 255)
ORANGE = (255, 128, 0)


def split_buffer(width: int = 100, height: int = 100, left=RED, right=BLUE) -> PixelBuffer:
    """Left half one color, right half another."""
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[:, : width // 2, :3] = left
    data[:, width // 2 :, :3] = right
    data[..., 3] = 255
    return PixelBuffer(data)


@pytest.fixture
def red_buffer():
    return PixelBuffer.solid(100, 100, RED)


@pytest.fixture
def split_pixels():
    return split_buffer()


@pytest.fixture
def gradient_pixels():
    """Smooth color gradient with many distinct colors."""
    ys, xs = np.mgrid[0:120, 0:160]
    data = np.empty((120, 160, 4), dtype=np.uint8)
    data[..., 0] = xs * 255 // 159
    data[..., 1] = ys * 255 // 119
    data[..., 2] = (xs + ys) * 255 // 278
    data[..., 3] = 255
    return PixelBuffer(data)


@pytest.fixture
def grid_config():
    return PatternConfig(
        color_count=2,
        layout=GridLayout.RECTANGULAR,
        beads_horizontal=10,
        beads_vertical=10,
    )


@pytest.fixture
def three_color_palette():
    return [Color(*RED), Color(*BLUE), Color(*ORANGE)]
