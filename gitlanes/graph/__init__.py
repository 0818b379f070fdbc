"""Git graph layout engine."""

from gitlanes.graph.edges import (
    Connector,
    ConnectorKind,
    RowConnectors,
    RowGeometry,
    build_connectors,
    build_row_connectors,
)
from gitlanes.graph.layout import build_graph_data
from gitlanes.graph.palette import DEFAULT_PALETTE
from gitlanes.graph.types import (
    EMPTY_GRAPH,
    GraphBranch,
    GraphCommit,
    GraphData,
    RawBranch,
    RawCommit,
)

__all__ = [
    "DEFAULT_PALETTE",
    "EMPTY_GRAPH",
    "Connector",
    "ConnectorKind",
    "GraphBranch",
    "GraphCommit",
    "GraphData",
    "RawBranch",
    "RawCommit",
    "RowConnectors",
    "RowGeometry",
    "build_connectors",
    "build_graph_data",
    "build_row_connectors",
]
