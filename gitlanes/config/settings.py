"""
Settings management for gitlanes
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from gitlanes.constants import (
    BEND_RATIO,
    DEFAULT_COMMIT_LIMIT,
    LANE_WIDTH,
    LEFT_PADDING,
    ROW_HEIGHT,
    SETTINGS_PATH,
)
from gitlanes.graph.edges import RowGeometry
from gitlanes.graph.palette import DEFAULT_PALETTE


class Settings:
    """Manages graph settings"""

    DEFAULT_SETTINGS: dict[str, Any] = {
        "graph": {
            "commit_limit": DEFAULT_COMMIT_LIMIT,  # Size of the history window
            "palette": list(DEFAULT_PALETTE),
            "branch_colors": {},  # branch name -> fixed color
            "row_height": ROW_HEIGHT,
            "lane_width": LANE_WIDTH,
            "left_padding": LEFT_PADDING,
            "bend_ratio": BEND_RATIO,
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path.home() / SETTINGS_PATH

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                # branch_colors is a free-form mapping, not a nested section
                if key == "branch_colors":
                    base[key] = dict(value_dict)
                else:
                    self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.commit_limit')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def get_commit_limit(self) -> int:
        """Get the number of commits to lay out.

        GITLANES_COMMIT_LIMIT overrides the file, so a huge repository can be
        capped without touching settings.json.
        """
        env_limit = os.environ.get("GITLANES_COMMIT_LIMIT", "")
        if env_limit:
            limit = int(env_limit)
        else:
            limit = int(self.get("graph.commit_limit", DEFAULT_COMMIT_LIMIT))
        if limit <= 0:
            raise ValueError(f"Commit limit must be positive, got {limit}")
        return limit

    def get_palette(self) -> tuple[str, ...]:
        """Get the lane palette, falling back to the default when empty"""
        palette = self.get("graph.palette") or DEFAULT_PALETTE
        return tuple(str(color) for color in palette)

    def get_branch_colors(self) -> dict[str, str]:
        """Get fixed colors by branch name"""
        colors = self.get("graph.branch_colors") or {}
        return {str(name): str(color) for name, color in colors.items()}

    def get_row_geometry(self) -> RowGeometry:
        """Get row and lane dimensions for connector geometry"""
        return RowGeometry(
            row_height=float(self.get("graph.row_height", ROW_HEIGHT)),
            lane_width=float(self.get("graph.lane_width", LANE_WIDTH)),
            left_padding=float(self.get("graph.left_padding", LEFT_PADDING)),
            bend_ratio=float(self.get("graph.bend_ratio", BEND_RATIO)),
        )
