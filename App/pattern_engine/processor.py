"""Pattern generation orchestrator and the editing session around it.

AIDEV-NOTE: Generation is one blocking pass: grid walk -> sampling ->
quantization -> mapping. Cancellation is only observed during the grid
walk (ring/row boundaries); a cancelled pass returns None and leaves any
previous session state untouched.
"""

from models import (
    BeadPattern,
    Color,
    DisplayTransform,
    GeneratedPattern,
    PatternConfig,
    Rect,
)

from . import editor
from .grid import CancelCheck, generate_positions
from .mapping import color_counts, map_to_palette
from .pixels import PixelBuffer
from .quantization import extract_colors_from_area, quantize_colors
from .sampling import sample_positions


class PatternGenerator:
    """Turns a pixel buffer into a bead pattern and palette."""

    def __init__(self, config: PatternConfig | None = None, random_state=None):
        self.config = config or PatternConfig()
        self.random_state = random_state

    def generate(
        self,
        pixels: PixelBuffer,
        should_cancel: CancelCheck | None = None,
    ) -> GeneratedPattern | None:
        """Execute the complete generation pipeline.

        Args:
            pixels: Source image (already filtered, if filtering is wanted)
            should_cancel: Optional poll checked at each ring/row boundary

        Returns:
            GeneratedPattern, or None if the pass was cancelled

        Raises:
            InvalidConfigurationError: If the configuration is unusable
        """
        config = self.config
        config.validate()

        print(f"Generating {config.layout.value} pattern...")
        positions = generate_positions(
            pixels.width, pixels.height, config, should_cancel
        )
        if positions is None:
            print("Pattern generation cancelled.")
            return None
        print(f"Placed {len(positions)} bead positions.")

        sampled = sample_positions(positions, pixels)

        print("Quantizing colors...")
        palette = quantize_colors(
            [s.color for s in sampled],
            config.color_count,
            diversity=config.color_diversity,
            diversity_enabled=config.color_diversity_enabled,
            limit_colors=config.limit_colors,
            random_state=self.random_state,
        )
        print(f"Palette has {len(palette)} colors.")

        pattern = map_to_palette(sampled, palette)
        print(f"Pattern generation complete: {len(pattern)} beads.")

        return GeneratedPattern(
            pattern=pattern,
            palette=palette,
            layout=config.layout,
            image_width=pixels.width,
            image_height=pixels.height,
        )


def generate_pattern(
    pixels: PixelBuffer,
    config: PatternConfig,
    random_state=None,
    should_cancel: CancelCheck | None = None,
) -> GeneratedPattern | None:
    """One-shot generation; see PatternGenerator.generate."""
    return PatternGenerator(config, random_state).generate(pixels, should_cancel)


class PatternSession:
    """Image, configuration, palette and pattern for one editing session.

    AIDEV-NOTE: Single-writer. Callers that expose a session to more than
    one thread must serialise access themselves.
    """

    def __init__(
        self,
        pixels: PixelBuffer,
        config: PatternConfig | None = None,
        random_state=None,
    ):
        self.pixels = pixels
        self.config = config or PatternConfig()
        self.random_state = random_state
        self.palette: list[Color] = []
        self.pattern: BeadPattern | None = None

    @property
    def has_pattern(self) -> bool:
        return self.pattern is not None

    @property
    def total_beads(self) -> int:
        return len(self.pattern) if self.pattern is not None else 0

    def generate(self, should_cancel: CancelCheck | None = None) -> bool:
        """Replace pattern and palette with a fresh generation pass.

        Returns:
            True if a pattern was generated, False if cancelled
        """
        result = PatternGenerator(self.config, self.random_state).generate(
            self.pixels, should_cancel
        )
        if result is None:
            return False
        self.pattern = result.pattern
        self.palette = result.palette
        return True

    def display_transform(self, display_scale: float = 1.0) -> DisplayTransform:
        """Screen mapping the pattern view uses at the given zoom."""
        return DisplayTransform.for_pattern(
            self.pattern or BeadPattern(), self.config.bead_spacing, display_scale
        )

    def color_counts(self) -> "list[int]":
        """Beads per palette index (all zero without a pattern)."""
        if self.pattern is None:
            return [0] * len(self.palette)
        return color_counts(self.pattern, len(self.palette))

    def apply_palette(self) -> None:
        """Re-map every bead against the current palette."""
        if self.pattern is None:
            return
        print(f"Applying palette of {len(self.palette)} colors...")
        editor.apply_palette(self.pattern, self.palette, self.pixels)

    def delete_color(self, index: int) -> "tuple[bool, str | None]":
        success, error = editor.delete_color(
            self.pattern, self.palette, index, self.pixels
        )
        if success:
            print(f"✓ Deleted color #{index + 1}")
        else:
            print(f"Warning: {error}")
        return success, error

    def exclude_color_in_region(
        self,
        color_index: int,
        region: Rect,
        transform: DisplayTransform | None = None,
    ) -> int:
        """Clear a color from a screen-space selection.

        Args:
            color_index: Palette index to remove from the region
            region: Selection rectangle in display coordinates
            transform: Mapping the selection was drawn in; defaults to the
                pattern view at zoom 1.0

        Returns:
            Number of beads recolored
        """
        if self.pattern is None:
            return 0
        transform = transform or self.display_transform()
        replaced = editor.exclude_color_in_region(
            self.pattern, self.palette, color_index, region, transform, self.pixels
        )
        if replaced:
            print(f"Replaced {replaced} beads of color #{color_index + 1}")
        else:
            print(f"No beads of color #{color_index + 1} in the selected area")
        return replaced

    def add_colors(self, colors: "list[Color]") -> int:
        added = editor.add_colors(self.palette, colors)
        if added == 0:
            print("All selected colors are already in the palette")
        return added

    def replace_color(self, index: int, color: Color) -> None:
        editor.replace_color(self.palette, index, color)

    def extract_colors_from_area(
        self, area: Rect, limit: int = 10, diversity: float = 30.0
    ) -> "list[Color]":
        """Candidate palette colors picked from an image rectangle."""
        return extract_colors_from_area(self.pixels, area, limit, diversity)
