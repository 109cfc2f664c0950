"""File helpers shared by the config and metadata stores."""

from pathlib import Path

from sprout.logging_config import get_logger

logger = get_logger(__name__)


def write_text_atomic(path: Path, contents: str) -> None:
    """Write a whole file through a temp file and rename it into place.

    Parent directories are created as needed. There is no locking: two
    concurrent writers race and the later rename wins.

    Args:
        path: Destination file
        contents: Full text of the file
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_file = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(temp_file, 'w', encoding='utf-8') as f:
            f.write(contents)
            f.flush()
        # Atomic rename (POSIX systems guarantee atomicity)
        temp_file.replace(path)
        logger.debug(f"Wrote {path}")
    finally:
        if temp_file.exists():
            temp_file.unlink()
