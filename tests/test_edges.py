"""Tests for connector geometry between commits and their parents."""

import pytest

from gitlanes.graph.edges import (
    ConnectorKind,
    Point,
    RowGeometry,
    SegmentKind,
    absolute,
    build_connectors,
    build_row_connectors,
    graph_size,
)
from gitlanes.graph.layout import build_graph_data
from gitlanes.graph.types import RawBranch, RawCommit


def _commit(sha: str, *parents: str) -> RawCommit:
    return RawCommit(
        sha=sha,
        short_sha=sha[:7],
        message=f"commit {sha}",
        author="Test",
        email="test@example.com",
        timestamp=0,
        parent_shas=parents,
    )


def _merged_graph():
    """m3 merges f1 into main; f1 forks from m1."""
    commits = [
        _commit("m3", "m2", "f1"),
        _commit("f1", "m1"),
        _commit("m2", "m1"),
        _commit("m1"),
    ]
    branches = [RawBranch("main", is_current=True, tip_sha="m3"), RawBranch("feature", tip_sha="f1")]
    return build_graph_data(commits, branches)


def _assert_continuous(graph, geometry: RowGeometry) -> None:
    """Every edge's pieces join end to end in whole-graph coordinates."""
    rows = build_connectors(graph, geometry)
    pieces: dict[tuple[str, str], list] = {}
    for row_connectors in rows:
        for connector in row_connectors.connectors:
            pieces.setdefault((connector.child_sha, connector.parent_sha), []).append(
                (row_connectors.row, connector)
            )

    for (child_sha, parent_sha), parts in pieces.items():
        parts.sort(key=lambda part: part[0])
        child = graph.commit_for(child_sha)
        parent = graph.commit_for(parent_sha)

        first_row, first = parts[0]
        last_row, last = parts[-1]
        assert first.kind == ConnectorKind.OUTGOING
        assert last.kind == ConnectorKind.INCOMING
        assert absolute(first.start, first_row, geometry) == Point(
            geometry.lane_x(child.column), child.row * geometry.row_height + geometry.node_y
        )
        assert absolute(last.end, last_row, geometry) == Point(
            geometry.lane_x(parent.column), parent.row * geometry.row_height + geometry.node_y
        )

        for (row_a, a), (row_b, b) in zip(parts, parts[1:]):
            assert row_b == row_a + 1
            assert absolute(a.end, row_a, geometry) == absolute(b.start, row_b, geometry)


class TestOutgoing:
    """The child's half of an edge."""

    def test_same_lane_is_straight(self):
        graph = _merged_graph()
        geometry = RowGeometry()
        row = build_row_connectors(graph, 0, geometry)

        to_m2 = [c for c in row.of_kind(ConnectorKind.OUTGOING) if c.parent_sha == "m2"][0]
        assert len(to_m2.segments) == 1
        segment = to_m2.segments[0]
        assert segment.kind == SegmentKind.LINE
        assert segment.start == Point(geometry.lane_x(0), geometry.node_y)
        assert segment.end == Point(geometry.lane_x(0), geometry.row_height)

    def test_lane_change_bends_then_curves(self):
        graph = _merged_graph()
        geometry = RowGeometry(row_height=100, lane_width=40, left_padding=10)
        row = build_row_connectors(graph, 0, geometry)

        to_f1 = [c for c in row.of_kind(ConnectorKind.OUTGOING) if c.parent_sha == "f1"][0]
        line, curve = to_f1.segments
        assert line.kind == SegmentKind.LINE
        assert line.start == Point(10, 50)
        assert line.end == Point(10, 75)
        assert curve.kind == SegmentKind.CURVE
        assert curve.start == Point(10, 75)
        assert curve.end == Point(50, 100)
        assert curve.control1 == Point(10, 87.5)
        assert curve.control2 == Point(50, 87.5)

    def test_merge_edge_takes_parent_color(self):
        graph = _merged_graph()
        row = build_row_connectors(graph, 0)

        colors = {c.parent_sha: c.color for c in row.of_kind(ConnectorKind.OUTGOING)}
        assert colors["m2"] == graph.commit_for("m3").color
        assert colors["f1"] == graph.commit_for("f1").color

    def test_fork_edge_keeps_child_color(self):
        graph = _merged_graph()
        row = build_row_connectors(graph, 1)

        (to_m1,) = row.of_kind(ConnectorKind.OUTGOING)
        assert to_m1.parent_sha == "m1"
        assert to_m1.color == graph.commit_for("f1").color

    def test_parent_outside_window_omitted(self):
        commits = [_commit("c2", "c1", "gone"), _commit("c1", "older")]
        graph = build_graph_data(commits, [RawBranch("main", tip_sha="c2")])

        row0 = build_row_connectors(graph, 0)
        row1 = build_row_connectors(graph, 1)
        assert [c.parent_sha for c in row0.of_kind(ConnectorKind.OUTGOING)] == ["c1"]
        assert row1.of_kind(ConnectorKind.OUTGOING) == []

    def test_duplicate_parent_drawn_once(self):
        commits = [_commit("c2", "c1", "c1"), _commit("c1")]
        graph = build_graph_data(commits, [RawBranch("main", tip_sha="c2")])
        assert len(build_row_connectors(graph, 0).of_kind(ConnectorKind.OUTGOING)) == 1


class TestIncomingAndPassThrough:
    """The parent's half, and rows crossed on the way."""

    def test_incoming_from_every_child(self):
        graph = _merged_graph()
        geometry = RowGeometry()
        row = build_row_connectors(graph, 3, geometry)

        incoming = {c.child_sha: c for c in row.of_kind(ConnectorKind.INCOMING)}
        assert sorted(incoming) == ["f1", "m2"]

        # m2 sits in the same lane one row above
        (straight,) = incoming["m2"].segments
        assert straight.kind == SegmentKind.LINE
        assert straight.start == Point(geometry.lane_x(0), 0)
        assert straight.end == Point(geometry.lane_x(0), geometry.node_y)

        # f1 arrives in its own lane and bends into the parent's lane
        curve, line = incoming["f1"].segments
        assert curve.kind == SegmentKind.CURVE
        assert curve.start == Point(geometry.lane_x(1), 0)
        assert curve.end == Point(geometry.lane_x(0), geometry.top_bend_y)
        assert line.end == Point(geometry.lane_x(0), geometry.node_y)

    def test_fork_passes_through_in_child_lane(self):
        graph = _merged_graph()
        geometry = RowGeometry()
        # f1 (row 1) -> m1 (row 3) crosses row 2, where m2 sits in lane 0
        row = build_row_connectors(graph, 2, geometry)

        (passing,) = row.of_kind(ConnectorKind.PASS_THROUGH)
        assert (passing.child_sha, passing.parent_sha) == ("f1", "m1")
        assert passing.start == Point(geometry.lane_x(1), 0)
        assert passing.end == Point(geometry.lane_x(1), geometry.row_height)

        (outgoing,) = build_row_connectors(graph, 1, geometry).of_kind(ConnectorKind.OUTGOING)
        assert [s.kind for s in outgoing.segments] == [SegmentKind.LINE]

    def test_merge_passes_through_in_parent_lane(self):
        commits = [
            _commit("m3", "m2", "f1"),
            _commit("m2", "m1"),
            _commit("f1", "m1"),
            _commit("m1"),
        ]
        branches = [RawBranch("main", tip_sha="m3"), RawBranch("feature", tip_sha="f1")]
        graph = build_graph_data(commits, branches)
        geometry = RowGeometry()

        (passing,) = build_row_connectors(graph, 1, geometry).of_kind(ConnectorKind.PASS_THROUGH)
        assert (passing.child_sha, passing.parent_sha) == ("m3", "f1")
        assert passing.start.x == geometry.lane_x(1)

        incoming = build_row_connectors(graph, 2, geometry).of_kind(ConnectorKind.INCOMING)
        assert [s.kind for s in incoming[0].segments] == [SegmentKind.LINE]

    @pytest.mark.parametrize(
        "commits, branches",
        [
            (
                [_commit("f1", "m1"), _commit("m3", "m2"), _commit("m2", "m1"), _commit("m1")],
                [RawBranch("main", tip_sha="m3"), RawBranch("feature", tip_sha="f1")],
            ),
            (
                [
                    _commit("m3", "m2", "f1"),
                    _commit("m2", "m1"),
                    _commit("f1", "m1"),
                    _commit("m1"),
                ],
                [RawBranch("main", tip_sha="m3"), RawBranch("feature", tip_sha="f1")],
            ),
        ],
    )
    def test_pass_through_avoids_other_nodes(self, commits, branches):
        """Lines crossing a row never run over that row's commit."""
        graph = build_graph_data(commits, branches)
        geometry = RowGeometry()

        for row_connectors in build_connectors(graph, geometry):
            node_x = geometry.lane_x(graph.commits[row_connectors.row].column)
            for connector in row_connectors.of_kind(ConnectorKind.PASS_THROUGH):
                assert connector.start.x != node_x, (connector.child_sha, connector.parent_sha)

    def test_root_commit_has_no_outgoing(self):
        graph = _merged_graph()
        assert build_row_connectors(graph, 3).of_kind(ConnectorKind.OUTGOING) == []


class TestContinuity:
    """Halves meet exactly on shared row boundaries."""

    def test_merged_history(self):
        _assert_continuous(_merged_graph(), RowGeometry())

    def test_wide_lane_jump(self):
        commits = [
            _commit("m2", "m1", "c1"),
            _commit("c1", "a1"),
            _commit("b1", "a1"),
            _commit("m1", "a1"),
            _commit("a1"),
        ]
        branches = [
            RawBranch("main", tip_sha="m2"),
            RawBranch("b", tip_sha="b1"),
            RawBranch("c", tip_sha="c1"),
        ]
        graph = build_graph_data(commits, branches)
        assert graph.commit_for("c1").column == 2
        _assert_continuous(graph, RowGeometry(row_height=48, lane_width=24, bend_ratio=0.5))

    def test_overflow_lane(self):
        commits = [_commit("m2", "m1", "x1"), _commit("x1", "m1"), _commit("m1")]
        graph = build_graph_data(commits, [RawBranch("main", tip_sha="m2")])
        assert graph.commit_for("x1").column == graph.overflow_column
        _assert_continuous(graph, RowGeometry())


class TestBuildConnectors:
    """Whole-graph pass versus single rows."""

    def test_matches_row_by_row(self):
        graph = _merged_graph()
        geometry = RowGeometry()
        rows = build_connectors(graph, geometry)

        assert len(rows) == len(graph.commits)
        for row in rows:
            assert row == build_row_connectors(graph, row.row, geometry)

    def test_empty_graph(self):
        assert build_connectors(build_graph_data([], [])) == []


class TestRowGeometry:
    """Dimension validation and helpers."""

    def test_rejects_bend_outside_row(self):
        with pytest.raises(ValueError):
            RowGeometry(bend_ratio=1.0)
        with pytest.raises(ValueError):
            RowGeometry(bend_ratio=0.25)

    def test_rejects_non_positive_sizes(self):
        with pytest.raises(ValueError):
            RowGeometry(row_height=0)
        with pytest.raises(ValueError):
            RowGeometry(lane_width=-5)

    def test_graph_size_includes_overflow_lane(self):
        graph = _merged_graph()
        geometry = RowGeometry(row_height=60, lane_width=30, left_padding=20)
        assert graph_size(graph, geometry) == (3 * 30 + 40, 5 * 60)
