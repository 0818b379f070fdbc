"""
Centralized constants for gitlanes.

This module contains hardcoded strings and magic numbers that are used
across the codebase. Centralizing them here makes them easier to find
and modify.
"""

# Branches that always get the leftmost lanes
TRUNK_BRANCH_NAMES = ("main", "master")

# History window
DEFAULT_COMMIT_LIMIT = 100
SHORT_SHA_LENGTH = 7

# Row geometry defaults (pixels)
ROW_HEIGHT = 60
LANE_WIDTH = 30
LEFT_PADDING = 20

# Fraction of the row height at which a lane-crossing connector starts to bend
BEND_RATIO = 0.75

# Settings file location, relative to the user's home
SETTINGS_PATH = ".config/gitlanes/settings.json"
