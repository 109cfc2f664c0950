"""Custom exceptions for sprout"""

from typing import Optional, Union


class SproutError(Exception):
    """Base exception for all sprout errors."""
    pass


class PathError(SproutError):
    """Exception raised when a path cannot be canonicalized."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Cannot resolve path '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConfigError(SproutError):
    """Exception raised when the config file is malformed."""
    pass


class MetadataError(SproutError):
    """Exception raised when the metadata file is malformed."""
    pass


class UnknownKeyError(SproutError):
    """Exception raised for a config key outside the known set."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"unknown config key: {key}")


class AlreadyExistsError(SproutError):
    """Exception raised when a worktree name or path is already taken."""
    pass


class UnknownWorktreeError(SproutError):
    """Exception raised when a worktree name is not tracked."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown worktree: {name}")


class InvalidNameError(SproutError):
    """Exception raised when a worktree name cannot be used as a directory name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"invalid worktree name: '{name}'")


class GitOperationError(SproutError):
    """Exception raised for errors in Git operations."""

    def __init__(
        self,
        operation: str,
        status: Union[int, str, None] = None,
        stderr: Optional[str] = None,
    ):
        self.operation = operation
        self.status = status
        self.stderr = stderr

        error_msg = f"Git operation '{operation}' failed"
        if status is not None:
            error_msg += f" (exit {status})"
        if stderr:
            error_msg += f": {stderr}"

        super().__init__(error_msg)


class CopyError(SproutError):
    """Exception raised when seeding hits an I/O failure."""

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = f"Failed to copy '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ShellError(SproutError):
    """Exception raised when the interactive shell cannot be started or fails."""
    pass
