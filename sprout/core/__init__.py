"""Worktree lifecycle management."""

from .worktree_manager import WorktreeManager, derive_branch

__all__ = ["WorktreeManager", "derive_branch"]
