"""Data models and constants for the bead pattern generator."""

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

# AIDEV-NOTE: Quantizer constants - changing these changes generated palettes
MAX_RGB_DISTANCE = math.sqrt(255**2 * 3)  # ~441.67, linear RGB distance
KMEANS_ITERATIONS = 10
MAX_CANDIDATE_CLUSTERS = 50
MIN_RADIAL_RING_BEADS = 6
MIN_PALETTE_SIZE = 2

# Configuration file path
CONFIG_FILE = Path.home() / ".beadpattern_config.json"


class InvalidConfigurationError(ValueError):
    """Raised when a pattern configuration cannot be used for generation."""


class LayoutKind(Enum):
    """Addressing scheme of a single bead position."""

    RADIAL = "radial"
    RECTANGULAR = "rectangular"


class GridLayout(Enum):
    """Which grid(s) a generation pass walks.

    AIDEV-NOTE: BOTH concatenates radial positions then rectangular
    positions and quantizes them into one shared palette.
    """

    RADIAL = "radial"
    RECTANGULAR = "rectangular"
    BOTH = "both"

    @property
    def uses_radial(self) -> bool:
        return self in (GridLayout.RADIAL, GridLayout.BOTH)

    @property
    def uses_rectangular(self) -> bool:
        return self in (GridLayout.RECTANGULAR, GridLayout.BOTH)


@dataclass(frozen=True)
class Point:
    """Real-valued pixel-space coordinate."""

    x: float
    y: float


@dataclass
class Color:
    """RGB color (0-255). `count` is the cluster mass when used as a centroid."""

    r: int
    g: int
    b: int
    count: int = 0

    @property
    def rgb(self) -> "tuple[int, int, int]":
        return (self.r, self.g, self.b)

    def same_rgb(self, other: "Color") -> bool:
        return self.rgb == other.rgb


@dataclass(frozen=True)
class BeadPosition:
    """A grid position with layout-specific addressing.

    AIDEV-NOTE: Flat field set with an explicit `kind` discriminator.
    Radial positions fill ring_index/position_in_ring/angle/radius and leave
    row/col at 0; rectangular positions fill row_index/col_index and leave
    angle/radius at 0.
    """

    x: float
    y: float
    kind: LayoutKind
    ring_index: int = 0
    position_in_ring: int = 0
    angle: float = 0.0  # radians
    radius: float = 0.0  # pixels
    row_index: int = 0
    col_index: int = 0

    @classmethod
    def radial(
        cls,
        x: float,
        y: float,
        ring_index: int,
        position_in_ring: int,
        angle: float,
        radius: float,
    ) -> "BeadPosition":
        return cls(
            x=x,
            y=y,
            kind=LayoutKind.RADIAL,
            ring_index=ring_index,
            position_in_ring=position_in_ring,
            angle=angle,
            radius=radius,
        )

    @classmethod
    def rectangular(
        cls, x: float, y: float, row_index: int, col_index: int
    ) -> "BeadPosition":
        return cls(
            x=x,
            y=y,
            kind=LayoutKind.RECTANGULAR,
            row_index=row_index,
            col_index=col_index,
        )

    @property
    def is_rectangular(self) -> bool:
        return self.kind is LayoutKind.RECTANGULAR

    @property
    def label(self) -> str:
        """Grid address shown on the pattern: "ring-position" or "row-col"."""
        if self.is_rectangular:
            return f"{self.row_index}-{self.col_index}"
        return f"{self.ring_index}-{self.position_in_ring}"


@dataclass(frozen=True)
class SampledBead:
    """A bead position together with the pixel color sampled under it."""

    position: BeadPosition
    color: Color


@dataclass
class Bead:
    """One colored unit of the final pattern.

    Beads reference the palette by index, never by value.
    """

    position: BeadPosition
    bead_number: int  # 1-based assignment order
    color_index: int

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y


@dataclass
class BeadPattern:
    """Ordered beads produced by a single generation pass."""

    beads: "list[Bead]" = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.beads)

    def __iter__(self):
        return iter(self.beads)

    def color_indices(self) -> "list[int]":
        return [bead.color_index for bead in self.beads]


@dataclass
class PatternConfig:
    """Configuration for a pattern generation pass."""

    # Color quantization
    color_count: int = 10  # Target palette size (>= 1)
    color_diversity: float = 30.0  # Minimum palette spread, percent (0-100)
    color_diversity_enabled: bool = True
    limit_colors: bool = True  # False keeps every distinct sampled color

    # Grid
    bead_spacing: float = 20.0  # Distance between beads in pixels
    start_point: Point | None = None  # Radial center, chosen on the image
    layout: GridLayout = GridLayout.RADIAL

    # Uniform rectangular grid size; derived from bead_spacing when None
    beads_horizontal: int | None = None
    beads_vertical: int | None = None

    def validate(self) -> None:
        """Reject configurations that cannot produce a pattern.

        Raises:
            InvalidConfigurationError: On the first invalid setting found
        """
        if not self.bead_spacing > 0:
            raise InvalidConfigurationError(
                f"Bead spacing must be positive, got {self.bead_spacing}"
            )
        if self.color_count < 1:
            raise InvalidConfigurationError(
                f"Color count must be at least 1, got {self.color_count}"
            )
        if not 0 <= self.color_diversity <= 100:
            raise InvalidConfigurationError(
                f"Color diversity must be within 0-100, got {self.color_diversity}"
            )
        if self.layout.uses_radial and self.start_point is None:
            raise InvalidConfigurationError(
                "Radial layout requires a start point"
            )
        for name in ("beads_horizontal", "beads_vertical"):
            value = getattr(self, name)
            if value is not None and value < 1:
                raise InvalidConfigurationError(
                    f"{name} must be at least 1, got {value}"
                )


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, bounds inclusive."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_corners(cls, start: Point, end: Point) -> "Rect":
        """Build a rectangle from two drag corners given in any order."""
        return cls(
            x=min(start.x, end.x),
            y=min(start.y, end.y),
            width=abs(end.x - start.x),
            height=abs(end.y - start.y),
        )

    def contains(self, x: float, y: float) -> bool:
        return (
            self.x <= x <= self.x + self.width
            and self.y <= y <= self.y + self.height
        )


@dataclass(frozen=True)
class DisplayTransform:
    """Pixel-space to screen-space mapping used by the pattern view.

    AIDEV-NOTE: Must match the renderer exactly, otherwise region edits
    select different beads than the ones the user sees under the rectangle.
    """

    scale: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0

    @classmethod
    def for_pattern(
        cls,
        pattern: BeadPattern,
        bead_spacing: float,
        display_scale: float = 1.0,
    ) -> "DisplayTransform":
        """Transform that pads the pattern by three display bead sizes."""
        if not pattern.beads:
            return cls(scale=display_scale)
        min_x = min(bead.x for bead in pattern.beads)
        min_y = min(bead.y for bead in pattern.beads)
        padding = bead_spacing * display_scale * 3
        return cls(
            scale=display_scale,
            offset_x=padding - min_x * display_scale,
            offset_y=padding - min_y * display_scale,
        )

    def apply(self, x: float, y: float) -> "tuple[float, float]":
        return (x * self.scale + self.offset_x, y * self.scale + self.offset_y)


@dataclass
class GeneratedPattern:
    """Result of one generation pass."""

    pattern: BeadPattern
    palette: "list[Color]"
    layout: GridLayout

    # Source image dimensions (pixels)
    image_width: int = 0
    image_height: int = 0

    @property
    def bead_count(self) -> int:
        return len(self.pattern.beads)
