"""Painter paths for git graph connectors."""

from PySide6.QtCore import QPointF, Qt
from PySide6.QtGui import QPainterPath, QPen

from gitlanes.graph.edges import (
    Connector,
    Point,
    RowConnectors,
    RowGeometry,
    SegmentKind,
    absolute,
)
from gitlanes.ui.git_graph.types import lane_color

PEN_WIDTH = 2.5


def _qpoint(point: Point, row: int | None, geometry: RowGeometry) -> QPointF:
    if row is not None:
        point = absolute(point, row, geometry)
    return QPointF(point.x, point.y)


def connector_path(
    connector: Connector, geometry: RowGeometry, row: int | None = None
) -> QPainterPath:
    """
    Build a painter path for one connector.

    With `row` set the path is in whole-graph coordinates, otherwise it stays
    in the row's own coordinates (for a per-row delegate).
    """
    path = QPainterPath()
    path.moveTo(_qpoint(connector.start, row, geometry))

    for segment in connector.segments:
        end = _qpoint(segment.end, row, geometry)
        if segment.kind == SegmentKind.CURVE:
            assert segment.control1 is not None and segment.control2 is not None
            path.cubicTo(
                _qpoint(segment.control1, row, geometry),
                _qpoint(segment.control2, row, geometry),
                end,
            )
        else:
            path.lineTo(end)

    return path


def connector_pen(connector: Connector, width: float = PEN_WIDTH) -> QPen:
    """Pen for drawing a connector in its lane color."""
    pen = QPen(lane_color(connector.color), width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


def row_paths(
    row_connectors: RowConnectors, geometry: RowGeometry, absolute_coords: bool = False
) -> list[tuple[QPainterPath, QPen]]:
    """Paths and pens for everything drawn in a row."""
    row = row_connectors.row if absolute_coords else None
    return [
        (connector_path(connector, geometry, row), connector_pen(connector))
        for connector in row_connectors.connectors
    ]
