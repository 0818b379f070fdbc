"""Git backend supplying commits and branches to the graph"""

from gitlanes.git_backend.repository import GraphRepository, format_relative_time

__all__ = ["GraphRepository", "format_relative_time"]
