"""Command-line argument parsing for sprout."""

import argparse
from typing import List, Optional

from sprout.__version__ import __version__
from sprout.config import ConfigKey


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sprout",
        description="Minimal git worktree manager",
        epilog="create, cd and base print the worktree path so a shell function can cd into it; "
        "pass --shell to open an interactive $SHELL there instead.",
    )
    parser.add_argument("--version", action="version", version=f"sprout {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information and write a debug log"
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    create_cmd = subparsers.add_parser("create", help="Create a worktree from the current repository")
    create_cmd.add_argument("worktree", help="Name of the new worktree")
    create_cmd.add_argument("--shell", action="store_true", help="Open a shell in the new worktree")

    cd_cmd = subparsers.add_parser("cd", help="Print the path of a worktree")
    cd_cmd.add_argument("worktree", help="Name of the worktree")
    cd_cmd.add_argument("--shell", action="store_true", help="Open a shell in the worktree")

    base_cmd = subparsers.add_parser("base", help="Print the source repository of the current worktree")
    base_cmd.add_argument("--shell", action="store_true", help="Open a shell in the source repository")

    subparsers.add_parser("list", aliases=["ls"], help="List tracked worktrees")

    delete_cmd = subparsers.add_parser("delete", help="Remove a worktree and stop tracking it")
    delete_cmd.add_argument("worktree", help="Name of the worktree")
    delete_cmd.add_argument(
        "--force", action="store_true", help="Remove even with modified or untracked files"
    )

    config_cmd = subparsers.add_parser("config", help="Read or change configuration")
    config_actions = config_cmd.add_subparsers(dest="config_action", metavar="ACTION")
    key_help = "One of: " + ", ".join(key.value for key in ConfigKey)

    get_cmd = config_actions.add_parser("get", help="Print a configuration value")
    get_cmd.add_argument("key", help=key_help)

    set_cmd = config_actions.add_parser("set", help="Set a configuration value")
    set_cmd.add_argument("key", help=key_help)
    set_cmd.add_argument(
        "value", help="New value; copy_paths takes a comma-separated list, empty to clear"
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return create_parser().parse_args(argv)
