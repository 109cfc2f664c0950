"""Git-related services for sprout."""

from .worktrees import WorktreeService

__all__ = [
    "WorktreeService",
]
