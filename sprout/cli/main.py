"""Command-line entry point for sprout"""

import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from sprout.cli.args import create_parser
from sprout.config import ConfigKey
from sprout.core import WorktreeManager
from sprout.exceptions import SproutError
from sprout.logging_config import get_logger, setup_logging
from sprout.paths import SproutPaths
from sprout.services.display_service import DisplayService
from sprout.shell import launch_shell

err_console = Console(stderr=True)
logger = get_logger(__name__)


def _hand_off(path: Path, shell: bool) -> None:
    """Give a directory to the user: print it, or open a shell there."""
    if shell:
        launch_shell(path)
    else:
        print(path)


def run_command(args, manager: WorktreeManager) -> int:
    """Dispatch parsed arguments to the manager. Returns the exit status."""
    if args.command == "create":
        entry = manager.create(args.worktree)
        err_console.print(
            f"[green]Created worktree[/green] {escape(entry.name)} on branch {escape(entry.branch)}",
            highlight=False,
        )
        _hand_off(Path(entry.path), args.shell)
    elif args.command == "cd":
        _hand_off(manager.locate(args.worktree), args.shell)
    elif args.command == "base":
        _hand_off(manager.locate_base(), args.shell)
    elif args.command in ("list", "ls"):
        DisplayService().display_worktree_table(manager.list())
    elif args.command == "delete":
        entry = manager.delete(args.worktree, force=args.force)
        err_console.print(f"[green]Deleted worktree[/green] {escape(entry.name)}", highlight=False)
    elif args.command == "config":
        return run_config_command(args, manager)
    return 0


def run_config_command(args, manager: WorktreeManager) -> int:
    """Handle ``config get`` and ``config set``."""
    if args.config_action is None:
        err_console.print("[red]Error: config requires 'get' or 'set'[/red]")
        return 1

    key = ConfigKey.parse(args.key)
    if args.config_action == "get":
        print(manager.config_store.get(key))
    else:
        manager.config_store.set(key, args.value)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        return 1

    paths = SproutPaths.from_env()
    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, log_file=paths.log_path)

    try:
        manager = WorktreeManager(paths)
        return run_command(parsed_args, manager)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except SproutError as e:
        logger.debug(f"{type(e).__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1
    except Exception as e:
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}", highlight=False)
        if parsed_args.debug:
            err_console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
