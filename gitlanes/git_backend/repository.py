"""
Git repository access for the graph using pygit2
"""

import itertools
import time
from pathlib import Path

import pygit2

from gitlanes.config.settings import Settings
from gitlanes.constants import DEFAULT_COMMIT_LIMIT, SHORT_SHA_LENGTH
from gitlanes.graph.edges import RowConnectors, build_connectors
from gitlanes.graph.layout import build_graph_data
from gitlanes.graph.types import GraphData, RawBranch, RawCommit

# Relative time thresholds, in seconds
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2629746
YEAR = 31556952


class GraphRepository:
    """Reads commits and branches from a git repository for graph layout"""

    def __init__(self, repo_path: str | None = None) -> None:
        """Initialize repository"""
        if repo_path is None:
            repo_path = self._find_repo()

        self.repo = pygit2.Repository(repo_path)

    def _find_repo(self) -> str:
        """Find git repository in current directory or parents"""
        current = Path.cwd()
        while current != current.parent:
            if (current / ".git").exists():
                return str(current)
            current = current.parent
        raise ValueError("Not in a git repository")

    def _walk_roots(self) -> list[pygit2.Oid]:
        """HEAD plus every local branch tip, deduplicated"""
        roots: list[pygit2.Oid] = []
        if not self.repo.head_is_unborn:
            roots.append(self.repo.head.peel(pygit2.Commit).id)

        for branch_name in self.repo.branches.local:
            branch = self.repo.branches.local[branch_name]
            try:
                roots.append(branch.peel(pygit2.Commit).id)
            except (pygit2.GitError, ValueError) as e:
                print(f"[Git Graph] Skipping branch {branch_name}: {e}")

        return list(dict.fromkeys(roots))

    def list_commits(self, limit: int = DEFAULT_COMMIT_LIMIT, skip: int = 0) -> list[RawCommit]:
        """
        List commits reachable from HEAD and the local branches, newest first.

        Args:
            limit: Maximum number of commits to return (the history window)
            skip: Number of commits to skip, for paging further back

        Returns:
            Commits in time order with parents always after their children
        """
        if limit <= 0:
            raise ValueError(f"limit must be positive, got {limit}")

        roots = self._walk_roots()
        if not roots:
            return []

        # Topological order wins over timestamps: with clock skew a parent can
        # be newer than its child and must still come after it
        walker = self.repo.walk(
            roots[0], pygit2.enums.SortMode.TOPOLOGICAL | pygit2.enums.SortMode.TIME
        )
        for oid in roots[1:]:
            walker.push(oid)

        return [_commit_to_raw(c) for c in itertools.islice(walker, skip, skip + limit)]

    def list_branches(self) -> list[RawBranch]:
        """List local branches (with tracking info) followed by remote branches"""
        branches: list[RawBranch] = []

        for branch_name in self.repo.branches.local:
            branch = self.repo.branches.local[branch_name]
            try:
                tip = branch.peel(pygit2.Commit).id
            except (pygit2.GitError, ValueError) as e:
                print(f"[Git Graph] Skipping branch {branch_name}: {e}")
                continue

            upstream, ahead, behind = self._tracking_info(branch, tip)
            branches.append(
                RawBranch(
                    name=branch_name,
                    is_remote=False,
                    is_current=branch.is_head(),
                    upstream=upstream,
                    ahead=ahead,
                    behind=behind,
                    tip_sha=str(tip),
                )
            )

        for branch_name in self.repo.branches.remote:
            branch = self.repo.branches.remote[branch_name]
            try:
                tip_sha: str | None = str(branch.peel(pygit2.Commit).id)
            except (pygit2.GitError, ValueError):
                tip_sha = None
            branches.append(RawBranch(name=branch_name, is_remote=True, tip_sha=tip_sha))

        return branches

    def _tracking_info(
        self, branch: pygit2.Branch, tip: pygit2.Oid
    ) -> tuple[str | None, int, int]:
        """Get upstream name and ahead/behind counts for a local branch"""
        try:
            upstream = branch.upstream
        except (pygit2.GitError, KeyError):
            # Upstream configured but the remote branch is gone
            return None, 0, 0

        if upstream is None:
            return None, 0, 0

        try:
            upstream_tip = upstream.peel(pygit2.Commit).id
            ahead, behind = self.repo.ahead_behind(tip, upstream_tip)
        except (pygit2.GitError, ValueError) as e:
            print(f"[Git Graph] No ahead/behind for {branch.branch_name}: {e}")
            return upstream.branch_name, 0, 0

        return upstream.branch_name, ahead, behind

    def load_graph(self, settings: Settings | None = None) -> GraphData:
        """Read the current repository state and lay it out using the graph settings"""
        if settings is None:
            settings = Settings()
        return build_graph_data(
            self.list_commits(settings.get_commit_limit()),
            self.list_branches(),
            palette=settings.get_palette(),
            branch_colors=settings.get_branch_colors(),
        )

    def load_layout(
        self, settings: Settings | None = None
    ) -> tuple[GraphData, list[RowConnectors]]:
        """Lay out the repository and compute every row's connectors"""
        if settings is None:
            settings = Settings()
        graph = self.load_graph(settings)
        return graph, build_connectors(graph, settings.get_row_geometry())


def _commit_to_raw(commit: pygit2.Commit) -> RawCommit:
    """Convert a pygit2 commit to a RawCommit"""
    sha = str(commit.id)
    author = commit.author
    return RawCommit(
        sha=sha,
        short_sha=sha[:SHORT_SHA_LENGTH],
        message=commit.message.strip(),
        author=author.name or "Unknown",
        email=author.email or "",
        timestamp=commit.commit_time,
        parent_shas=tuple(str(oid) for oid in commit.parent_ids),
    )


def _plural(count: int, unit: str) -> str:
    return f"1 {unit} ago" if count == 1 else f"{count} {unit}s ago"


def format_relative_time(timestamp: int, now: int | None = None) -> str:
    """Format a commit timestamp as '3 hours ago' style text"""
    if now is None:
        now = int(time.time())
    diff = now - timestamp

    if diff < MINUTE:
        return "just now"
    if diff < HOUR:
        return _plural(diff // MINUTE, "minute")
    if diff < DAY:
        return _plural(diff // HOUR, "hour")
    if diff < WEEK:
        return _plural(diff // DAY, "day")
    if diff < MONTH:
        return _plural(diff // WEEK, "week")
    if diff < YEAR:
        return _plural(diff // MONTH, "month")
    return _plural(diff // YEAR, "year")
