"""Data models for sprout."""

from .worktree import Metadata, WorktreeEntry, WorktreeRow

__all__ = ["Metadata", "WorktreeEntry", "WorktreeRow"]
