"""Core functionality for sprout"""

import time
from pathlib import Path
from typing import Callable, List, Optional

from sprout.config import Config, ConfigStore
from sprout.exceptions import (
    AlreadyExistsError,
    InvalidNameError,
    UnknownWorktreeError,
)
from sprout.logging_config import get_logger
from sprout.models.worktree import WorktreeEntry, WorktreeRow
from sprout.paths import SproutPaths, canonicalize, display_path
from sprout.services.git import WorktreeService
from sprout.services.metadata_store import JsonMetadataStore, MetadataStore
from sprout.services.seed_service import SeedService

logger = get_logger(__name__)


def derive_branch(prefix: str, name: str) -> str:
    """Branch name for a worktree: the prefix followed by the worktree name."""
    if not prefix:
        return name
    return f"{prefix}{name}"


def validate_name(name: str) -> None:
    """Reject names that cannot be used as a single directory name.

    Raises:
        InvalidNameError: If the name is empty, a dot entry, or contains a separator
    """
    if not name or not name.strip() or name in (".", ".."):
        raise InvalidNameError(name)
    if "/" in name or "\\" in name or "\0" in name:
        raise InvalidNameError(name)


def sort_rows(rows: List[WorktreeRow]) -> List[WorktreeRow]:
    """Most recently committed first; rows with an unknown commit time go last."""
    return sorted(
        rows,
        key=lambda row: (row.last_commit is None, -(row.last_commit or 0)),
    )


class WorktreeManager:
    """Creates, locates, lists and deletes sprout worktrees."""

    def __init__(
        self,
        paths: SproutPaths,
        git_service: Optional[WorktreeService] = None,
        metadata_store: Optional[MetadataStore] = None,
        config_store: Optional[ConfigStore] = None,
        seed_service: Optional[SeedService] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the manager.

        Args:
            paths: Layout of the sprout root directory
            git_service: Git command layer
            metadata_store: Persistence for tracked worktrees
            config_store: Persistence for user configuration
            seed_service: Copier used to seed new worktrees
            clock: Source of the creation timestamp
        """
        self.paths = paths
        self.git_service = git_service or WorktreeService()
        self.metadata_store = metadata_store or JsonMetadataStore(paths.metadata_path)
        self.config_store = config_store or ConfigStore(paths.config_path)
        self.seed_service = seed_service or SeedService()
        self.clock = clock

    def _current_repo_root(self) -> Path:
        return canonicalize(self.git_service.repo_root())

    def create(self, name: str) -> WorktreeEntry:
        """Create a worktree named ``name`` off the current repository.

        The new branch is ``<branch_prefix><name>``. The entry is persisted
        as soon as git has created the worktree; configured copy paths are
        seeded afterwards.

        Returns:
            The new entry

        Raises:
            InvalidNameError: If the name cannot be used as a directory name
            AlreadyExistsError: If the destination path or the name is taken
            GitOperationError: If git fails to create the worktree
            MetadataError: If the metadata file is malformed or cannot be written
            CopyError: If seeding hits an I/O failure
        """
        validate_name(name)
        repo_root = self._current_repo_root()

        self.paths.worktrees_dir.mkdir(parents=True, exist_ok=True)
        worktree_path = self.paths.worktrees_dir / name
        if worktree_path.exists():
            raise AlreadyExistsError(f"worktree already exists at {worktree_path}")

        config: Config = self.config_store.load()
        metadata = self.metadata_store.load()
        if metadata.find(name) is not None:
            raise AlreadyExistsError(f"worktree name already exists: {name}")

        branch = derive_branch(config.effective_branch_prefix, name)
        logger.info(f"Creating worktree '{name}' on branch {branch} from {repo_root}")
        self.git_service.add_worktree(repo_root, branch, worktree_path)

        worktree_path = canonicalize(worktree_path)
        entry = WorktreeEntry(
            name=name,
            path=str(worktree_path),
            source_repo=str(repo_root),
            branch=branch,
            created_at=int(self.clock()),
        )
        metadata.add(entry)
        self.metadata_store.save(metadata)

        if config.seed_paths:
            self.seed_service.seed(repo_root, worktree_path, config.seed_paths)

        return entry

    def locate(self, name: str) -> Path:
        """Canonical path of a tracked worktree.

        Raises:
            UnknownWorktreeError: If no worktree by that name is tracked
            PathError: If the worktree directory no longer exists
        """
        entry = self.metadata_store.load().find(name)
        if entry is None:
            raise UnknownWorktreeError(name)
        return canonicalize(entry.path)

    def locate_base(self) -> Path:
        """Source repository of the worktree we are in.

        Outside a tracked worktree this is simply the current repository root.
        """
        repo_root = self._current_repo_root()
        for entry in self.metadata_store.load().worktrees:
            if display_path(entry.path) == str(repo_root):
                logger.debug(f"Inside worktree '{entry.name}', base is {entry.source_repo}")
                return Path(display_path(entry.source_repo))
        return repo_root

    def list(self) -> List[WorktreeRow]:
        """Tracked worktrees with their last commit time, newest first."""
        rows = []
        for entry in self.metadata_store.load().worktrees:
            rows.append(
                WorktreeRow(
                    name=entry.name,
                    source_repo=display_path(entry.source_repo),
                    path=display_path(entry.path),
                    branch=entry.branch,
                    last_commit=self.git_service.last_commit_timestamp(entry.path),
                )
            )
        return sort_rows(rows)

    def delete(self, name: str, force: bool = False) -> WorktreeEntry:
        """Remove a worktree and stop tracking it.

        Git removes the worktree first; the entry is dropped and metadata
        saved only once that has succeeded, so a refused removal leaves
        the entry tracked.

        Args:
            name: Worktree to delete
            force: Let git discard modified and untracked files

        Returns:
            The removed entry

        Raises:
            UnknownWorktreeError: If no worktree by that name is tracked
            GitOperationError: If git refuses to remove the worktree
        """
        metadata = self.metadata_store.load()
        entry = metadata.find(name)
        if entry is None:
            raise UnknownWorktreeError(name)

        self.git_service.remove_worktree(entry.source_repo, entry.path, force=force)

        metadata.remove(name)
        self.metadata_store.save(metadata)
        logger.info(f"Deleted worktree '{name}'")
        return entry
