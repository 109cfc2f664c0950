"""Display service for worktree listings"""
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sprout.constants import COLUMNS
from sprout.formatters import format_timestamp
from sprout.models.worktree import WorktreeRow

console = Console()


class DisplayService:
    def __init__(self, output: Optional[Console] = None):
        self.console = output or console

    def build_worktree_table(self, rows: List[WorktreeRow]) -> Table:
        """Build the ``sprout list`` table, keeping the order of ``rows``."""
        table = Table(box=box.MARKDOWN)

        for col in COLUMNS:
            table.add_column(col.label, overflow="fold")

        # Match COLUMNS order: Name, Repo, Path, Branch, Last Commit
        for row in rows:
            # Text cells so brackets in paths are not read as markup
            table.add_row(
                Text(row.name),
                Text(row.source_repo),
                Text(row.path),
                Text(row.branch),
                Text(format_timestamp(row.last_commit)),
            )

        return table

    def display_worktree_table(self, rows: List[WorktreeRow]) -> None:
        """Print the worktree table, or a note when nothing is tracked."""
        if not rows:
            self.console.print("No worktrees tracked.", highlight=False)
            return
        self.console.print(self.build_worktree_table(rows))
