"""Worktree operations service for sprout."""

import os
from pathlib import Path
from typing import Optional, Union

import git

from sprout.exceptions import GitOperationError
from sprout.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def _clean_stderr(raw: Optional[str]) -> str:
    """Strip GitPython's ``stderr: '...'`` decoration from captured output."""
    text = (raw or "").strip()
    if text.startswith("stderr: "):
        text = text[len("stderr: "):].strip()
        if len(text) >= 2 and text[0] == text[-1] == "'":
            text = text[1:-1].strip()
    return text


def _to_operation_error(operation: str, error: git.exc.CommandError) -> GitOperationError:
    """Translate a GitPython command error into a GitOperationError."""
    if isinstance(error, git.exc.GitCommandNotFound):
        # status holds the underlying OSError here, not an exit code
        return GitOperationError(operation, stderr=f"git executable not found: {error.status}")
    stderr = _clean_stderr(getattr(error, "stderr", None))
    status = getattr(error, "status", None)
    return GitOperationError(operation, status=status, stderr=stderr or None)


class WorktreeService:
    """Thin layer over the git command line for worktree management.

    Every method runs a single git command. Failures surface as
    GitOperationError, except last_commit_timestamp which degrades to None.
    """

    def _run(self, working_dir: PathLike, *args: str) -> str:
        """Run a git command against ``working_dir`` and return its stdout.

        Uses ``git -C`` so the directory is never silently swapped for the
        current one.
        """
        return git.Git().execute(["git", "-C", str(working_dir), *args])

    def repo_root(self, cwd: Optional[PathLike] = None) -> Path:
        """Find the top-level directory of the repository containing ``cwd``.

        Args:
            cwd: Directory to start from (defaults to the current directory)

        Returns:
            Repository root as reported by git

        Raises:
            GitOperationError: If ``cwd`` is not inside a git repository, or
                the current directory no longer exists
        """
        if cwd is not None:
            start = cwd
        else:
            try:
                start = os.getcwd()
            except OSError as e:
                raise GitOperationError(
                    "rev-parse --show-toplevel", stderr=f"cannot read current directory: {e}"
                ) from e
        try:
            output = self._run(start, "rev-parse", "--show-toplevel")
        except git.exc.CommandError as e:
            raise _to_operation_error("rev-parse --show-toplevel", e) from e

        root = output.strip()
        if not root:
            raise GitOperationError("rev-parse --show-toplevel", stderr="no repository root reported")
        logger.debug(f"Repository root for {start}: {root}")
        return Path(root)

    def add_worktree(self, repo_root: PathLike, branch: str, path: PathLike) -> None:
        """Create ``branch`` and check it out in a new worktree at ``path``.

        Raises:
            GitOperationError: If git refuses (branch exists, path taken, ...)
        """
        try:
            self._run(repo_root, "worktree", "add", "-b", branch, str(path))
        except git.exc.CommandError as e:
            error = _to_operation_error("worktree add", e)
            logger.error(f"Failed to add worktree at {path}: {error}")
            raise error from e
        logger.info(f"Added worktree at {path} on branch {branch}")

    def remove_worktree(self, repo_root: PathLike, path: PathLike, force: bool = False) -> None:
        """Remove the worktree at ``path``.

        Args:
            repo_root: Repository the worktree belongs to
            path: Worktree directory
            force: Discard modified and untracked files instead of refusing

        Raises:
            GitOperationError: If git refuses, e.g. because the worktree is dirty
        """
        args = ["worktree", "remove", str(path)]
        if force:
            args.append("--force")

        try:
            self._run(repo_root, *args)
        except git.exc.CommandError as e:
            error = _to_operation_error("worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error}")
            raise error from e
        logger.info(f"Removed worktree at {path}")

    def last_commit_timestamp(self, path: PathLike) -> Optional[int]:
        """Commit time of HEAD in the worktree at ``path``.

        Returns:
            Seconds since epoch, or None if git cannot tell for any reason
            (missing directory, empty history, unexpected output)
        """
        try:
            output = self._run(path, "log", "-1", "--format=%ct")
            return int(output.strip())
        except (git.exc.CommandError, ValueError) as e:
            logger.debug(f"Could not read last commit for {path}: {e}")
            return None
