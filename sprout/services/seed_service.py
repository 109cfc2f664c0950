"""Seeding of new worktrees with files from the source repository.

Files such as ``.env`` or local IDE settings are usually untracked, so a
fresh worktree does not get them. The seeder copies an allow-list of
repository-relative paths into the new worktree with a conservative
policy: it never follows symlinks, never overwrites, and never leaves the
repository tree.
"""

import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Iterable, List, Tuple

from sprout.exceptions import CopyError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


class LocalFileSystem:
    """Filesystem operations the seeder relies on, backed by the real disk."""

    def exists(self, path: Path) -> bool:
        return os.path.lexists(path)

    def is_symlink(self, path: Path) -> bool:
        return path.is_symlink()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def list_dir(self, path: Path) -> List[str]:
        return sorted(os.listdir(path))

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> None:
        shutil.copy2(source, destination, follow_symlinks=False)


@dataclass
class SeedResult:
    """What a seeding run did."""

    copied: List[str] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)  # (relative path, reason)

    def skip(self, relative: str, reason: str) -> None:
        logger.warning(f"Skipping {relative}: {reason}")
        self.skipped.append((relative, reason))


def _is_contained(relative: str) -> bool:
    """True if a relative entry stays inside the directory it is joined to."""
    depth = 0
    for part in PurePath(relative).parts:
        if part == "..":
            depth -= 1
            if depth < 0:
                return False
        elif part not in (".", ""):
            depth += 1
    return True


class SeedService:
    """Copies configured paths from a repository into a new worktree."""

    def __init__(self, fs=None):
        """Initialize the seeder.

        Args:
            fs: Filesystem implementation (defaults to LocalFileSystem)
        """
        self.fs = fs if fs is not None else LocalFileSystem()

    def seed(self, repo_root: Path, worktree_root: Path, relative_paths: Iterable[str]) -> SeedResult:
        """Copy each relative path from ``repo_root`` into ``worktree_root``.

        Benign problems (absolute or escaping entries, missing sources,
        symlinks, existing destination files) are logged and skipped.

        Returns:
            SeedResult listing copied files and skipped entries

        Raises:
            CopyError: If reading a source or writing a destination fails
        """
        result = SeedResult()
        repo_root = Path(repo_root)
        worktree_root = Path(worktree_root)

        for relative in relative_paths:
            # "a/.." names the repository root as much as "." does
            if not relative.strip() or os.path.normpath(relative) == ".":
                result.skip(relative, "empty path")
                continue
            if PurePath(relative).is_absolute() or os.path.isabs(relative):
                result.skip(relative, "absolute paths are not allowed")
                continue
            if not _is_contained(relative):
                result.skip(relative, "path escapes the repository")
                continue

            source = repo_root / relative
            if self._has_symlinked_parent(repo_root, relative):
                result.skip(relative, "path goes through a symlinked directory")
                continue
            if not self.fs.exists(source):
                result.skip(relative, "source does not exist")
                continue

            self._visit(source, worktree_root / relative, relative, result)

        logger.info(f"Seeded {len(result.copied)} file(s), skipped {len(result.skipped)}")
        return result

    def _has_symlinked_parent(self, repo_root: Path, relative: str) -> bool:
        current = repo_root
        for part in PurePath(relative).parts[:-1]:
            current = current / part
            if self.fs.is_symlink(current):
                return True
        return False

    def _visit(self, source: Path, destination: Path, relative: str, result: SeedResult) -> None:
        """Copy one node of the source tree, recursing into directories."""
        try:
            if self.fs.is_symlink(source):
                result.skip(relative, "symlinks are not copied")
            elif self.fs.is_dir(source):
                self._visit_dir(source, destination, relative, result)
            elif self.fs.is_file(source):
                self._visit_file(source, destination, relative, result)
            else:
                result.skip(relative, "not a regular file or directory")
        except OSError as e:
            raise CopyError(relative, str(e)) from e

    def _visit_dir(self, source: Path, destination: Path, relative: str, result: SeedResult) -> None:
        # An existing destination directory is merged into, not skipped
        if self.fs.exists(destination) and (
            self.fs.is_symlink(destination) or not self.fs.is_dir(destination)
        ):
            result.skip(relative, "destination exists and is not a directory")
            return
        self.fs.make_dirs(destination)
        for child in self.fs.list_dir(source):
            self._visit(
                source / child,
                destination / child,
                str(PurePath(relative) / child),
                result,
            )

    def _visit_file(self, source: Path, destination: Path, relative: str, result: SeedResult) -> None:
        if self.fs.exists(destination):
            result.skip(relative, "destination already exists")
            return
        self.fs.make_dirs(destination.parent)
        self.fs.copy_file(source, destination)
        logger.debug(f"Copied {relative}")
        result.copied.append(relative)
