"""Branch ordering for lane assignment."""

from collections.abc import Iterable

from gitlanes.constants import TRUNK_BRANCH_NAMES
from gitlanes.graph.types import RawBranch


def _priority(branch: RawBranch) -> tuple[int, str]:
    if branch.name in TRUNK_BRANCH_NAMES:
        return (0, branch.name)
    if branch.is_current:
        return (1, branch.name)
    return (2, branch.name)


def prioritize_branches(branches: Iterable[RawBranch]) -> list[RawBranch]:
    """
    Order local branches for lane assignment.

    Remote branches and branches without a tip are dropped. The trunk
    (main/master) comes first, then the checked-out branch, then the rest
    by name, so the most stable lines keep the leftmost lanes.
    """
    local = [b for b in branches if not b.is_remote and b.tip_sha is not None]
    return sorted(local, key=_priority)
