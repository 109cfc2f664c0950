"""Path resolution and the sprout directory layout."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from sprout.constants import (
    CONFIG_FILE_NAME,
    LOG_FILE_NAME,
    METADATA_FILE_NAME,
    SPROUT_DIR_NAME,
    SPROUT_HOME_ENV,
    WORKTREES_DIR_NAME,
)
from sprout.exceptions import PathError
from sprout.logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]

_EXTENDED_PREFIX = "\\\\?\\"
_EXTENDED_UNC_PREFIX = "\\\\?\\UNC\\"


def strip_extended_prefix(path: str) -> str:
    """Turn a Windows extended-length path into its conventional form.

    ``\\\\?\\C:\\work`` becomes ``C:\\work`` and ``\\\\?\\UNC\\host\\share``
    becomes ``\\\\host\\share``. Other paths are returned unchanged.
    """
    if path.startswith(_EXTENDED_UNC_PREFIX):
        return "\\\\" + path[len(_EXTENDED_UNC_PREFIX):]
    if path.startswith(_EXTENDED_PREFIX):
        return path[len(_EXTENDED_PREFIX):]
    return path


def canonicalize(path: PathLike) -> Path:
    """Resolve a path to its absolute, symlink-free form.

    Args:
        path: Path to resolve; it must exist

    Returns:
        Canonical absolute path

    Raises:
        PathError: If the path does not exist or cannot be resolved
    """
    try:
        resolved = Path(path).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathError(str(path), str(e)) from e
    return Path(strip_extended_prefix(str(resolved)))


def display_path(path: PathLike) -> str:
    """Best-effort canonical form of a stored path, for output and comparison."""
    try:
        return str(canonicalize(path))
    except PathError as e:
        logger.debug(f"Keeping stored path as-is: {e}")
        return str(path)


@dataclass(frozen=True)
class SproutPaths:
    """Locations of everything sprout keeps on disk."""

    root: Path

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "SproutPaths":
        """Build the layout from ``SPROUT_HOME`` or the user's home directory."""
        environ = os.environ if environ is None else environ
        override = environ.get(SPROUT_HOME_ENV)
        if override:
            return cls(Path(override).expanduser())
        return cls(Path.home() / SPROUT_DIR_NAME)

    @property
    def worktrees_dir(self) -> Path:
        return self.root / WORKTREES_DIR_NAME

    @property
    def metadata_path(self) -> Path:
        return self.root / METADATA_FILE_NAME

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILE_NAME

    @property
    def log_path(self) -> Path:
        return self.root / LOG_FILE_NAME
