"""Persistence for the list of tracked worktrees."""
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict

from sprout.exceptions import MetadataError
from sprout.logging_config import get_logger
from sprout.models.worktree import Metadata, WorktreeEntry
from sprout.utils.files import write_text_atomic

logger = get_logger(__name__)

# Field name -> accepted type
ENTRY_FIELDS: Dict[str, type] = {
    "name": str,
    "path": str,
    "source_repo": str,
    "branch": str,
    "created_at": int,
}


class MetadataStore(ABC):
    """Loads and saves the whole worktree collection at once."""

    @abstractmethod
    def load(self) -> Metadata:
        """Return the stored collection, empty if nothing was saved yet."""

    @abstractmethod
    def save(self, metadata: Metadata) -> None:
        """Replace the stored collection."""


def parse_metadata(data: Any) -> Metadata:
    """Build Metadata from decoded JSON, validating its structure.

    Args:
        data: Decoded JSON document

    Returns:
        Metadata with entries in file order

    Raises:
        MetadataError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise MetadataError("Metadata is not a JSON object")

    if "worktrees" not in data:
        raise MetadataError("Metadata missing 'worktrees' key")

    raw_entries = data["worktrees"]
    if not isinstance(raw_entries, list):
        raise MetadataError("Metadata 'worktrees' is not a list")

    entries = []
    for index, raw in enumerate(raw_entries):
        if not isinstance(raw, dict):
            raise MetadataError(f"Worktree entry #{index} is not an object")

        for field_name, field_type in ENTRY_FIELDS.items():
            if field_name not in raw:
                raise MetadataError(f"Worktree entry #{index} missing required field '{field_name}'")
            value = raw[field_name]
            # bool is an int subclass but never a valid timestamp
            if not isinstance(value, field_type) or isinstance(value, bool):
                raise MetadataError(
                    f"Worktree entry #{index} field '{field_name}' must be {field_type.__name__}"
                )

        entries.append(WorktreeEntry(**{name: raw[name] for name in ENTRY_FIELDS}))

    return Metadata(worktrees=entries)


class JsonMetadataStore(MetadataStore):
    """Metadata store backed by a JSON file."""

    def __init__(self, metadata_path: Path):
        """Initialize the store.

        Args:
            metadata_path: Location of metadata.json
        """
        self.metadata_path = metadata_path

    def load(self) -> Metadata:
        """Load metadata from disk.

        Raises:
            MetadataError: If the file cannot be read or is malformed
        """
        if not self.metadata_path.exists():
            logger.debug(f"No metadata file at {self.metadata_path}")
            return Metadata()

        try:
            with open(self.metadata_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise MetadataError(f"Invalid JSON in {self.metadata_path}: {e}") from e
        except OSError as e:
            raise MetadataError(f"Cannot read {self.metadata_path}: {e}") from e

        metadata = parse_metadata(data)
        logger.debug(f"Loaded {len(metadata.worktrees)} worktrees from {self.metadata_path}")
        return metadata

    def save(self, metadata: Metadata) -> None:
        """Rewrite the metadata file with the full collection."""
        contents = json.dumps(metadata.to_dict(), indent=2) + "\n"
        try:
            write_text_atomic(self.metadata_path, contents)
        except OSError as e:
            raise MetadataError(f"Cannot write {self.metadata_path}: {e}") from e
        logger.debug(f"Saved {len(metadata.worktrees)} worktrees to {self.metadata_path}")
