"""Bead pattern generator - command-line entry point."""

import argparse
import sys

from config_manager import ConfigManager
from models import GridLayout, PatternConfig, Point
from pattern_engine import PatternSession, adjust_brightness_contrast, load_image
from pattern_engine.color_metric import color_to_hex


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bead pattern generator - radial and rectangular bead layouts"
    )
    parser.add_argument("input", help="Input image path")
    parser.add_argument("--x", type=float, default=None,
                        help="Radial center X in working-image pixels")
    parser.add_argument("--y", type=float, default=None,
                        help="Radial center Y in working-image pixels")
    parser.add_argument("--layout", choices=[layout.value for layout in GridLayout],
                        default=None, help="Grid layout (default: saved or radial)")
    parser.add_argument("-c", "--colors", type=int, default=None,
                        help="Number of palette colors")
    parser.add_argument("-d", "--diversity", type=float, default=None,
                        help="Minimum palette spread in percent (0-100)")
    parser.add_argument("--no-diversity", action="store_true",
                        help="Disable diversity-aware color selection")
    parser.add_argument("--no-limit", action="store_true",
                        help="Keep every distinct sampled color")
    parser.add_argument("-s", "--spacing", type=float, default=None,
                        help="Bead spacing in pixels")
    parser.add_argument("--cols", type=int, default=None,
                        help="Rectangular grid columns (default: from spacing)")
    parser.add_argument("--rows", type=int, default=None,
                        help="Rectangular grid rows (default: from spacing)")
    parser.add_argument("--brightness", type=float, default=0.0,
                        help="Brightness offset applied before generation")
    parser.add_argument("--contrast", type=float, default=0.0,
                        help="Contrast adjustment in (-100, 100)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible palettes")
    parser.add_argument("--save-config", action="store_true",
                        help="Persist the effective settings as the new defaults")
    return parser


def merge_args(config: PatternConfig, args: argparse.Namespace) -> PatternConfig:
    """Overlay command-line values on a loaded configuration."""
    if args.colors is not None:
        config.color_count = args.colors
    if args.diversity is not None:
        config.color_diversity = args.diversity
    if args.no_diversity:
        config.color_diversity_enabled = False
    if args.no_limit:
        config.limit_colors = False
    if args.spacing is not None:
        config.bead_spacing = args.spacing
    if args.layout is not None:
        config.layout = GridLayout(args.layout)
    if args.cols is not None:
        config.beads_horizontal = args.cols
    if args.rows is not None:
        config.beads_vertical = args.rows
    if args.x is not None and args.y is not None:
        config.start_point = Point(args.x, args.y)
    return config


def main(argv: "list[str] | None" = None) -> int:
    """Generate a pattern and print its color legend."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if (args.x is None) != (args.y is None):
        parser.error("--x and --y must be given together")

    config_manager = ConfigManager()
    config = merge_args(config_manager.load(), args)

    print(f"Loading image: {args.input}")
    try:
        pixels = load_image(args.input)
        pixels = adjust_brightness_contrast(pixels, args.brightness, args.contrast)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print(f"  Working size: {pixels.width}x{pixels.height}")

    if config.layout.uses_radial and config.start_point is None:
        config.start_point = Point(pixels.width / 2, pixels.height / 2)
        print(f"  No start point given, using image center {config.start_point}")

    session = PatternSession(pixels, config, random_state=args.seed)
    try:
        session.generate()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    counts = session.color_counts()
    print(f"\nColor legend ({len(session.palette)} colors, {session.total_beads} beads total):")
    for index, (color, count) in enumerate(zip(session.palette, counts)):
        print(f"  #{index + 1:<3d} {color_to_hex(color)}  {count:5d} beads")

    if args.save_config:
        success, error = config_manager.save(config)
        if success:
            print(f"✓ Saved configuration to {config_manager.config_path}")
        else:
            print(f"Warning: Could not save config file: {error}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
