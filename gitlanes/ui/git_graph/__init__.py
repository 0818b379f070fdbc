"""Git graph Qt value types - paths, pens and colors for a renderer."""

from gitlanes.ui.git_graph.edges import connector_path, connector_pen, row_paths
from gitlanes.ui.git_graph.types import lane_color

__all__ = ["connector_path", "connector_pen", "lane_color", "row_paths"]
