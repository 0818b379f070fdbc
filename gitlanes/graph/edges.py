"""Connector geometry for git graph - lines and curves between commits.

COORDINATE SYSTEM NOTE:
The graph is drawn newest-first, so children sit ABOVE their parents:
- Each row has its own local coordinates, y = 0 at the top boundary
  and y = row_height at the bottom boundary
- A commit's node is centred at (lane_x(column), row_height / 2)
- Edges run DOWN from child to parent

Every logical edge is split so each row can be drawn on its own:
1. OUTGOING half in the child's row: node down to the bottom boundary
2. PASS_THROUGH in every row between child and parent: a straight line
   across the whole row in the edge's travel lane
3. INCOMING half in the parent's row: top boundary down to the node

Where the lane change happens:
- Adjacent rows: the outgoing half bends into the parent's lane and the
  incoming half drops straight into the node
- Rows apart: the edge travels in the outer (higher) of the two lanes,
  so it stays clear of the inner lane's nodes. A fork travels in the
  child's lane and the incoming half mirrors the bend into the parent;
  a merge bends out of the child at once and travels in the parent's lane

All pieces of an edge use the same travel lane on every boundary, so they
meet exactly whatever the lane difference.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from gitlanes.constants import BEND_RATIO, LANE_WIDTH, LEFT_PADDING, ROW_HEIGHT
from gitlanes.graph.types import GraphCommit, GraphData


class SegmentKind(Enum):
    LINE = "line"
    CURVE = "curve"


class ConnectorKind(Enum):
    OUTGOING = "outgoing"
    PASS_THROUGH = "pass_through"
    INCOMING = "incoming"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Segment:
    """A straight line, or a cubic bezier when control points are set."""

    kind: SegmentKind
    start: Point
    end: Point
    control1: Point | None = None
    control2: Point | None = None


@dataclass(frozen=True)
class Connector:
    """One row's share of the edge from a child commit to a parent commit."""

    child_sha: str
    parent_sha: str
    kind: ConnectorKind
    color: str
    segments: tuple[Segment, ...]

    @property
    def start(self) -> Point:
        return self.segments[0].start

    @property
    def end(self) -> Point:
        return self.segments[-1].end


@dataclass(frozen=True)
class RowConnectors:
    """Everything needed to draw the lines of a single row."""

    row: int
    sha: str
    connectors: tuple[Connector, ...] = ()

    def of_kind(self, kind: ConnectorKind) -> list[Connector]:
        return [c for c in self.connectors if c.kind == kind]


@dataclass(frozen=True)
class RowGeometry:
    """Row and lane dimensions, in pixels."""

    row_height: float = ROW_HEIGHT
    lane_width: float = LANE_WIDTH
    left_padding: float = LEFT_PADDING
    bend_ratio: float = BEND_RATIO

    def __post_init__(self) -> None:
        if self.row_height <= 0 or self.lane_width <= 0:
            raise ValueError("Row height and lane width must be positive")
        # The bend has to start below the node and finish before the boundary
        if not 0.5 <= self.bend_ratio < 1.0:
            raise ValueError(f"bend_ratio must be in [0.5, 1.0), got {self.bend_ratio}")

    def lane_x(self, column: int) -> float:
        return self.left_padding + column * self.lane_width

    @property
    def node_y(self) -> float:
        return self.row_height / 2

    @property
    def bend_y(self) -> float:
        return self.row_height * self.bend_ratio

    @property
    def top_bend_y(self) -> float:
        """Where an incoming bend rejoins the parent's lane (mirror of bend_y)."""
        return self.row_height * (1 - self.bend_ratio)


def absolute(point: Point, row: int, geometry: RowGeometry) -> Point:
    """Convert a row-local point to whole-graph coordinates."""
    return Point(point.x, row * geometry.row_height + point.y)


def graph_size(graph: GraphData, geometry: RowGeometry) -> tuple[float, float]:
    """Width and height needed to draw the graph, overflow lane included."""
    width = (len(graph.branches) + 1) * geometry.lane_width + 2 * geometry.left_padding
    height = (len(graph.commits) + 1) * geometry.row_height
    return width, height


def _line(x1: float, y1: float, x2: float, y2: float) -> Segment:
    return Segment(SegmentKind.LINE, Point(x1, y1), Point(x2, y2))


def _edge_color(child: GraphCommit, parent: GraphCommit) -> str:
    # Lines crossing into a merged branch take that branch's color
    if child.is_merge and child.column != parent.column:
        return parent.color
    return child.color


def _edges(graph: GraphData) -> Iterator[tuple[GraphCommit, GraphCommit]]:
    """Yield (child, parent) pairs that can be drawn, in child row order.

    Parents outside the window are skipped; so are parents that do not sit
    below their child, which only happens when the backend breaks the
    newest-first contract.
    """
    for child in graph.commits:
        for parent_sha in dict.fromkeys(child.parent_shas):
            parent = graph.commit_for(parent_sha)
            if parent is None or parent.row <= child.row:
                continue
            yield child, parent


def travel_column(child: GraphCommit, parent: GraphCommit) -> int:
    """Lane an edge occupies on the row boundaries between child and parent."""
    if parent.row == child.row + 1:
        return parent.column
    return max(child.column, parent.column)


def _s_curve(x1: float, y1: float, x2: float, y2: float) -> Segment:
    mid_y = (y1 + y2) / 2
    return Segment(
        SegmentKind.CURVE,
        start=Point(x1, y1),
        end=Point(x2, y2),
        control1=Point(x1, mid_y),
        control2=Point(x2, mid_y),
    )


def outgoing_connector(
    child: GraphCommit, parent: GraphCommit, geometry: RowGeometry
) -> Connector:
    """Half-edge from the child's node to the bottom of the child's row."""
    x_child = geometry.lane_x(child.column)
    x_travel = geometry.lane_x(travel_column(child, parent))
    bottom = geometry.row_height

    if x_travel == x_child:
        segments: tuple[Segment, ...] = (_line(x_child, geometry.node_y, x_child, bottom),)
    else:
        # Straight down to the bend, then an S-curve into the travel lane
        bend_y = geometry.bend_y
        segments = (
            _line(x_child, geometry.node_y, x_child, bend_y),
            _s_curve(x_child, bend_y, x_travel, bottom),
        )

    return Connector(
        child.sha, parent.sha, ConnectorKind.OUTGOING, _edge_color(child, parent), segments
    )


def pass_through_connector(
    child: GraphCommit, parent: GraphCommit, geometry: RowGeometry
) -> Connector:
    """Full-height line in the travel lane for rows between child and parent."""
    x = geometry.lane_x(travel_column(child, parent))
    return Connector(
        child.sha,
        parent.sha,
        ConnectorKind.PASS_THROUGH,
        _edge_color(child, parent),
        (_line(x, 0, x, geometry.row_height),),
    )


def incoming_connector(
    child: GraphCommit, parent: GraphCommit, geometry: RowGeometry
) -> Connector:
    """Half-edge from the top of the parent's row down to the parent's node."""
    x_parent = geometry.lane_x(parent.column)
    x_travel = geometry.lane_x(travel_column(child, parent))

    if x_travel == x_parent:
        segments: tuple[Segment, ...] = (_line(x_parent, 0, x_parent, geometry.node_y),)
    else:
        # Mirror of the outgoing bend: S-curve into the parent's lane, then down
        top_bend_y = geometry.top_bend_y
        segments = (
            _s_curve(x_travel, 0, x_parent, top_bend_y),
            _line(x_parent, top_bend_y, x_parent, geometry.node_y),
        )

    return Connector(
        child.sha, parent.sha, ConnectorKind.INCOMING, _edge_color(child, parent), segments
    )


def _assemble(
    row: int,
    sha: str,
    outgoing: list[Connector],
    passing: list[Connector],
    incoming: list[Connector],
) -> RowConnectors:
    return RowConnectors(row=row, sha=sha, connectors=tuple(outgoing + passing + incoming))


def build_row_connectors(
    graph: GraphData, row: int, geometry: RowGeometry | None = None
) -> RowConnectors:
    """
    Compute the connectors drawn inside a single row.

    The row is self-contained: outgoing halves to each parent, pass-through
    lines for edges crossing the row, then incoming halves from each child.
    """
    geometry = geometry or RowGeometry()
    commit = graph.commits[row]

    outgoing: list[Connector] = []
    passing: list[Connector] = []
    incoming: list[Connector] = []
    for child, parent in _edges(graph):
        if child.row == row:
            outgoing.append(outgoing_connector(child, parent, geometry))
        elif parent.row == row:
            incoming.append(incoming_connector(child, parent, geometry))
        elif child.row < row < parent.row:
            passing.append(pass_through_connector(child, parent, geometry))

    return _assemble(row, commit.sha, outgoing, passing, incoming)


def build_connectors(graph: GraphData, geometry: RowGeometry | None = None) -> list[RowConnectors]:
    """Compute the connectors of every row in one pass over the edges."""
    geometry = geometry or RowGeometry()
    count = len(graph.commits)
    outgoing: list[list[Connector]] = [[] for _ in range(count)]
    passing: list[list[Connector]] = [[] for _ in range(count)]
    incoming: list[list[Connector]] = [[] for _ in range(count)]

    for child, parent in _edges(graph):
        outgoing[child.row].append(outgoing_connector(child, parent, geometry))
        for row in range(child.row + 1, parent.row):
            passing[row].append(pass_through_connector(child, parent, geometry))
        incoming[parent.row].append(incoming_connector(child, parent, geometry))

    return [
        _assemble(row, commit.sha, outgoing[row], passing[row], incoming[row])
        for row, commit in enumerate(graph.commits)
    ]
