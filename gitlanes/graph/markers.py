"""Merge, branch tip and branch point markers."""

from collections.abc import Iterable, Sequence

from gitlanes.graph.types import RawBranch, RawCommit


def build_children(commits: Sequence[RawCommit]) -> dict[str, list[str]]:
    """
    Build the reverse adjacency map: sha -> shas of commits listing it as a parent.

    Only parents inside the window get an entry. A child that names the same
    parent twice is counted once.
    """
    present = {c.sha for c in commits}
    children: dict[str, list[str]] = {}
    for commit in commits:
        for parent_sha in dict.fromkeys(commit.parent_shas):
            if parent_sha == commit.sha or parent_sha not in present:
                continue
            children.setdefault(parent_sha, []).append(commit.sha)
    return children


def branch_tips(branches: Iterable[RawBranch]) -> dict[str, list[str]]:
    """Map tip sha -> names of local branches pointing at it."""
    tips: dict[str, list[str]] = {}
    for branch in branches:
        if branch.is_remote or branch.tip_sha is None:
            continue
        tips.setdefault(branch.tip_sha, []).append(branch.name)
    return tips


def is_merge(commit: RawCommit) -> bool:
    return len(commit.parent_shas) > 1


def is_branch_point(sha: str, children: dict[str, list[str]]) -> bool:
    """History diverges here - more than one child in the window."""
    return len(children.get(sha, ())) > 1
