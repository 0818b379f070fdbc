"""Commit-graph lane layout for a git history view."""

from gitlanes.graph import GraphData, build_graph_data

__all__ = ["GraphData", "build_graph_data"]
