"""Branch ownership - which branch a commit is drawn on."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from gitlanes.graph.types import RawBranch, RawCommit

# Marker for "no row" in the index arrays
NO_ROW = -1


@dataclass
class Ownership:
    """Result of claiming commits for branches."""

    commit_to_branch: dict[str, str] = field(default_factory=dict)
    branch_commits: dict[str, set[str]] = field(default_factory=dict)


def index_rows(commits: Sequence[RawCommit]) -> dict[str, int]:
    """Map sha -> row. The first occurrence wins for repeated shas."""
    rows: dict[str, int] = {}
    for row, commit in enumerate(commits):
        rows.setdefault(commit.sha, row)
    return rows


def resolve_ownership(
    commits: Sequence[RawCommit],
    branches: Sequence[RawBranch],
) -> Ownership:
    """
    Claim commits for branches by walking first-parent chains.

    `branches` must already be in priority order. Each branch walks from its
    tip along first parents only, claiming every commit not yet claimed by a
    higher-priority branch; reaching a commit claimed by an earlier branch
    stops the walk. Commits reachable only through merge second parents (or
    not at all) stay unclaimed and end up in the overflow lane.

    The walk works on row indices with an explicit stack, so arbitrarily long
    histories never touch the recursion limit, and every commit is claimed
    at most once across all branches.
    """
    rows = index_rows(commits)

    # Arena: first parent of each row as a row index (NO_ROW if outside window)
    first_parent_row = [
        rows.get(c.first_parent, NO_ROW) if c.first_parent is not None else NO_ROW
        for c in commits
    ]
    # Owner of each row as an index into `branches`
    owner = [NO_ROW] * len(commits)

    ownership = Ownership()
    for branch_index, branch in enumerate(branches):
        claimed: set[str] = set()
        ownership.branch_commits[branch.name] = claimed

        tip_row = rows.get(branch.tip_sha, NO_ROW) if branch.tip_sha else NO_ROW
        if tip_row == NO_ROW:
            continue

        stack = [tip_row]
        while stack:
            row = stack.pop()
            if owner[row] == branch_index:
                # Already visited in this branch's own walk
                continue
            if owner[row] != NO_ROW:
                # Claimed by an earlier branch - history above is theirs
                continue

            owner[row] = branch_index
            sha = commits[row].sha
            claimed.add(sha)
            ownership.commit_to_branch[sha] = branch.name

            parent_row = first_parent_row[row]
            if parent_row != NO_ROW:
                stack.append(parent_row)

    return ownership
