"""Qt color conversion for git graph lanes."""

from PySide6.QtGui import QColor


def lane_color(color: str) -> QColor:
    """Get a QColor for a lane color from the layout."""
    qcolor = QColor(color)
    if not qcolor.isValid():
        raise ValueError(f"Invalid lane color: {color!r}")
    return qcolor
