"""Configuration persistence manager for the bead pattern generator.

This module handles loading and saving of pattern configuration to/from JSON files.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional, Tuple

from models import CONFIG_FILE, GridLayout, PatternConfig, Point


def config_to_dict(config: PatternConfig) -> dict:
    """JSON-ready representation; start point as [x, y], layout by value."""
    data = asdict(config)
    data["layout"] = config.layout.value
    if config.start_point is not None:
        data["start_point"] = [config.start_point.x, config.start_point.y]
    return data


class ConfigManager:
    """Handles loading and saving of pattern configuration."""

    def __init__(self, config_path: Path = CONFIG_FILE):
        """Initialize config manager.

        Args:
            config_path: Path to configuration file (defaults to ~/.beadpattern_config.json)
        """
        self.config_path = config_path

    def load(self) -> PatternConfig:
        """Load configuration from file, returning defaults if not found.

        Returns:
            PatternConfig with loaded or default values
        """
        config = PatternConfig()

        try:
            if self.config_path.exists():
                with open(self.config_path, "r") as f:
                    data = json.load(f)
                    # Update config with loaded values (fallback to defaults)
                    config.color_count = data.get("color_count", config.color_count)
                    config.color_diversity = data.get("color_diversity", config.color_diversity)
                    config.color_diversity_enabled = data.get(
                        "color_diversity_enabled", config.color_diversity_enabled
                    )
                    config.limit_colors = data.get("limit_colors", config.limit_colors)
                    config.bead_spacing = data.get("bead_spacing", config.bead_spacing)
                    config.beads_horizontal = data.get("beads_horizontal", config.beads_horizontal)
                    config.beads_vertical = data.get("beads_vertical", config.beads_vertical)
                    if data.get("layout") is not None:
                        config.layout = GridLayout(data["layout"])
                    if data.get("start_point") is not None:
                        x, y = data["start_point"]
                        config.start_point = Point(float(x), float(y))
                print(f"✓ Loaded configuration from {self.config_path}")
        except Exception as e:
            print(f"Warning: Could not load config file: {e}")

        return config

    def save(self, config: PatternConfig) -> Tuple[bool, Optional[str]]:
        """Save configuration to file.

        Args:
            config: PatternConfig to save

        Returns:
            Tuple of (success: bool, error_message: Optional[str])
        """
        try:
            with open(self.config_path, "w") as f:
                json.dump(config_to_dict(config), f, indent=2)
            return True, None
        except Exception as e:
            return False, str(e)
