"""Tests for branch ordering used by lane assignment."""

from gitlanes.graph.branches import prioritize_branches
from gitlanes.graph.types import RawBranch


def _branch(name: str, **kwargs) -> RawBranch:
    kwargs.setdefault("tip_sha", f"tip-{name}")
    return RawBranch(name=name, **kwargs)


class TestPrioritizeBranches:
    """Trunk first, then the current branch, then alphabetical."""

    def test_main_sorts_first(self):
        branches = [_branch("zeta"), _branch("alpha"), _branch("main")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["main", "alpha", "zeta"]

    def test_master_sorts_first(self):
        branches = [_branch("develop"), _branch("master")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["master", "develop"]

    def test_trunk_beats_current(self):
        """main stays leftmost even when another branch is checked out."""
        branches = [_branch("feature", is_current=True), _branch("main")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["main", "feature"]

    def test_current_before_others(self):
        branches = [_branch("alpha"), _branch("zulu", is_current=True), _branch("beta")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["zulu", "alpha", "beta"]

    def test_main_and_master_both_trunk(self):
        branches = [_branch("master"), _branch("a"), _branch("main")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["main", "master", "a"]

    def test_remote_branches_dropped(self):
        branches = [_branch("origin/main", is_remote=True), _branch("feature")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["feature"]

    def test_branches_without_tip_dropped(self):
        branches = [RawBranch(name="main", tip_sha=None), _branch("feature")]
        names = [b.name for b in prioritize_branches(branches)]
        assert names == ["feature"]

    def test_input_not_mutated(self):
        branches = [_branch("b"), _branch("a")]
        prioritize_branches(branches)
        assert [b.name for b in branches] == ["b", "a"]

    def test_empty(self):
        assert prioritize_branches([]) == []
