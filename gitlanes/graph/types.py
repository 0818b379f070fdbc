"""Types for git graph layout.

Everything here is an immutable value. A layout is rebuilt from scratch
whenever the repository state changes, so nothing carries identity.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawCommit:
    """A commit as supplied by the git backend (newest first)."""

    sha: str
    short_sha: str
    message: str
    author: str
    email: str
    timestamp: int
    parent_shas: tuple[str, ...] = ()

    @property
    def first_parent(self) -> str | None:
        return self.parent_shas[0] if self.parent_shas else None


@dataclass(frozen=True)
class RawBranch:
    """A branch reference as supplied by the git backend."""

    name: str
    is_remote: bool = False
    is_current: bool = False
    upstream: str | None = None
    ahead: int = 0
    behind: int = 0
    tip_sha: str | None = None


@dataclass(frozen=True)
class GraphCommit:
    """A commit with its layout position and markers."""

    sha: str
    row: int
    column: int
    color: str
    owner_branch: str | None
    is_merge: bool
    is_branch_tip: bool
    is_branch_point: bool
    parent_shas: tuple[str, ...] = ()
    # Local branches pointing at this commit
    tip_of: tuple[str, ...] = ()


@dataclass(frozen=True)
class GraphBranch:
    """A tracked local branch with its lane."""

    name: str
    color: str
    column: int
    tip_sha: str
    is_current: bool
    # Row span of the owned commits, None when the branch owns nothing in the window
    start_row: int | None = None
    end_row: int | None = None
    commits: tuple[str, ...] = ()


@dataclass(frozen=True)
class GraphData:
    """Complete layout of a commit window."""

    commits: tuple[GraphCommit, ...] = ()
    branches: tuple[GraphBranch, ...] = ()
    max_column: int = 0
    _by_sha: dict[str, GraphCommit] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        # First occurrence wins if the backend ever repeats a sha
        index: dict[str, GraphCommit] = {}
        for commit in self.commits:
            index.setdefault(commit.sha, commit)
        object.__setattr__(self, "_by_sha", index)

    @property
    def overflow_column(self) -> int:
        """Lane shared by commits no branch owns."""
        return len(self.branches)

    def commit_for(self, sha: str) -> GraphCommit | None:
        """Look up a laid-out commit by sha."""
        return self._by_sha.get(sha)

    def branch_for(self, name: str) -> GraphBranch | None:
        """Look up a tracked branch by name."""
        for branch in self.branches:
            if branch.name == name:
                return branch
        return None


EMPTY_GRAPH = GraphData()
