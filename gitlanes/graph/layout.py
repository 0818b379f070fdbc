"""Git graph layout - turns commits and branches into lanes."""

from collections.abc import Mapping, Sequence

from gitlanes.graph.branches import prioritize_branches
from gitlanes.graph.markers import branch_tips, build_children, is_branch_point, is_merge
from gitlanes.graph.ownership import resolve_ownership
from gitlanes.graph.palette import DEFAULT_PALETTE, color_for_column
from gitlanes.graph.types import (
    EMPTY_GRAPH,
    GraphBranch,
    GraphCommit,
    GraphData,
    RawBranch,
    RawCommit,
)


def build_graph_data(
    commits: Sequence[RawCommit],
    branches: Sequence[RawBranch],
    palette: Sequence[str] = DEFAULT_PALETTE,
    branch_colors: Mapping[str, str] | None = None,
) -> GraphData:
    """
    Compute the lane layout for a window of commits.

    Args:
        commits: Commits newest first, as returned by the git backend
        branches: All branches (remote ones are ignored)
        palette: Lane colors, cycled by column
        branch_colors: Optional fixed colors by branch name

    Returns:
        GraphData with one GraphCommit per input commit, in input order.
        Each prioritized branch gets the lane matching its priority index;
        commits no branch owns share a single overflow lane after them.
    """
    if not palette:
        raise ValueError("Palette must contain at least one color")
    if not commits:
        return EMPTY_GRAPH

    branch_colors = branch_colors or {}
    ordered = prioritize_branches(branches)
    ownership = resolve_ownership(commits, ordered)

    # Column & color per branch
    branch_column: dict[str, int] = {}
    branch_color: dict[str, str] = {}
    for column, branch in enumerate(ordered):
        branch_column[branch.name] = column
        branch_color[branch.name] = branch_colors.get(
            branch.name, color_for_column(column, palette)
        )

    overflow_column = len(ordered)
    overflow_color = color_for_column(overflow_column, palette)

    children = build_children(commits)
    tips = branch_tips(ordered)

    graph_commits: list[GraphCommit] = []
    owned_rows: dict[str, list[int]] = {b.name: [] for b in ordered}
    for row, commit in enumerate(commits):
        owner = ownership.commit_to_branch.get(commit.sha)
        if owner is not None:
            column = branch_column[owner]
            color = branch_color[owner]
            owned_rows[owner].append(row)
        else:
            column = overflow_column
            color = overflow_color

        tip_of = tuple(tips.get(commit.sha, ()))
        graph_commits.append(
            GraphCommit(
                sha=commit.sha,
                row=row,
                column=column,
                color=color,
                owner_branch=owner,
                is_merge=is_merge(commit),
                is_branch_tip=bool(tip_of),
                is_branch_point=is_branch_point(commit.sha, children),
                parent_shas=tuple(commit.parent_shas),
                tip_of=tip_of,
            )
        )

    graph_branches: list[GraphBranch] = []
    for branch in ordered:
        rows = owned_rows[branch.name]
        graph_branches.append(
            GraphBranch(
                name=branch.name,
                color=branch_color[branch.name],
                column=branch_column[branch.name],
                tip_sha=branch.tip_sha or "",
                is_current=branch.is_current,
                start_row=rows[0] if rows else None,
                end_row=rows[-1] if rows else None,
                commits=tuple(commits[row].sha for row in rows),
            )
        )

    return GraphData(
        commits=tuple(graph_commits),
        branches=tuple(graph_branches),
        max_column=max(len(ordered) - 1, 0),
    )
