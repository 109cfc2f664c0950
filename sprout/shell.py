"""Hand-off of a directory to an interactive shell."""

import os
import subprocess
from pathlib import Path
from typing import Optional

from sprout.constants import DEFAULT_SHELL
from sprout.exceptions import ShellError
from sprout.logging_config import get_logger

logger = get_logger(__name__)


def launch_shell(path: Path, environ: Optional[dict] = None) -> None:
    """Run ``$SHELL -i`` in ``path`` and wait for it to exit.

    Raises:
        ShellError: If the shell cannot be started or exits with an error
    """
    environ = os.environ if environ is None else environ
    shell = environ.get("SHELL") or DEFAULT_SHELL
    logger.debug(f"Launching {shell} in {path}")
    try:
        completed = subprocess.run([shell, "-i"], cwd=str(path))
    except OSError as e:
        raise ShellError(f"failed to launch shell {shell}: {e}") from e
    if completed.returncode != 0:
        raise ShellError(f"shell exited with status {completed.returncode}")
