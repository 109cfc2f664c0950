"""Shared constants for sprout."""

from dataclasses import dataclass
from typing import List


DEFAULT_BRANCH_PREFIX = "sprout/"

# Filesystem layout under the sprout root directory
SPROUT_HOME_ENV = "SPROUT_HOME"
SPROUT_DIR_NAME = ".sprout"
WORKTREES_DIR_NAME = "worktrees"
METADATA_FILE_NAME = "metadata.json"
CONFIG_FILE_NAME = "config.toml"
LOG_FILE_NAME = "sprout.log"

DEFAULT_SHELL = "/bin/sh"

# Shown in the Last Commit column when git cannot tell
UNKNOWN_TIMESTAMP = "-"


@dataclass
class ColumnDefinition:
    """Definition of a table column."""

    key: str
    label: str


COLUMNS: List[ColumnDefinition] = [
    ColumnDefinition("name", "Name"),
    ColumnDefinition("source_repo", "Repo"),
    ColumnDefinition("path", "Path"),
    ColumnDefinition("branch", "Branch"),
    ColumnDefinition("last_commit", "Last Commit"),
]
