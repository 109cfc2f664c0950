"""Worktree data models."""

from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class WorktreeEntry:
    """A worktree tracked by sprout."""

    name: str
    path: str
    source_repo: str
    branch: str
    created_at: int  # Seconds since epoch

    def __str__(self) -> str:
        """String representation of worktree."""
        return f"{self.name} ({self.branch}) @ {self.path}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Metadata:
    """Ordered collection of tracked worktrees, in creation order."""

    worktrees: List[WorktreeEntry] = field(default_factory=list)

    def find(self, name: str) -> Optional[WorktreeEntry]:
        """Look up an entry by name."""
        for entry in self.worktrees:
            if entry.name == name:
                return entry
        return None

    def names(self) -> List[str]:
        return [entry.name for entry in self.worktrees]

    def add(self, entry: WorktreeEntry) -> None:
        self.worktrees.append(entry)

    def remove(self, name: str) -> Optional[WorktreeEntry]:
        """Drop an entry by name, returning it if it was tracked."""
        for index, entry in enumerate(self.worktrees):
            if entry.name == name:
                return self.worktrees.pop(index)
        return None

    def to_dict(self) -> dict:
        return {"worktrees": [entry.to_dict() for entry in self.worktrees]}


@dataclass
class WorktreeRow:
    """One line of ``sprout list`` output."""

    name: str
    source_repo: str
    path: str
    branch: str
    last_commit: Optional[int]  # None when git could not tell
