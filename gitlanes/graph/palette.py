"""Lane colors for git graph layout."""

from collections.abc import Sequence

# Colors for different columns (branches)
DEFAULT_PALETTE: tuple[str, ...] = (
    "#00D9FF",  # Cyan
    "#BD00FF",  # Purple
    "#FF006B",  # Magenta
    "#00FF94",  # Green
    "#FFB800",  # Orange
    "#FF4D4D",  # Red
    "#4D94FF",  # Blue
    "#FF69B4",  # Pink
)


def color_for_column(column: int, palette: Sequence[str] = DEFAULT_PALETTE) -> str:
    """Get color for a lane/column, cycling through the palette."""
    if not palette:
        raise ValueError("Palette must contain at least one color")
    return palette[column % len(palette)]
