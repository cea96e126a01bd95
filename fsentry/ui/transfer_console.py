"""Rich console output for safe transfers.

This module provides the TransferConsole class, which renders transfer
summaries, folder diffs and file progress with Rich.

Example:
    from fsentry.ui import TransferConsole

    ui = TransferConsole()
    progress, callback = ui.create_progress_callback("photos")
    with progress:
        result = await transfer.transfer(src, dest, TransferOptions(progress_callback=callback))
    ui.display_transfer_summary(result)
"""

from typing import Callable, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeRemainingColumn,
)
from rich.table import Table

from fsentry.models import FolderDiffResult, TransferResult


class TransferConsole:
    """Rich-based console output for transfers and folder comparisons.

    Args:
        console: Optional Rich Console instance for output. If None, creates
            a new Console. Pass a custom Console for testing (e.g., with
            StringIO file for output capture).

    Attributes:
        console: The Rich Console instance used for all output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def display_transfer_summary(self, result: TransferResult) -> None:
        """Display the counters of a finished transfer.

        Shows a header panel, a Metric/Value table and, if any occurred,
        the errors collected in best-effort mode.

        Args:
            result: TransferResult returned by SafeTransfer.transfer.
        """
        title = "Transfer Summary"
        if result.dry_run:
            title += " [yellow][DRY RUN][/yellow]"

        header_panel = Panel(
            f"{title}\n{result.source} -> {result.destination}",
            border_style="green" if not result.dry_run else "yellow",
        )
        self.console.print(header_panel)

        table = Table(show_header=True, header_style="bold")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Operation", "move" if result.move else "copy")
        table.add_row("Files copied", f"{result.files_copied:,}")
        table.add_row("Files moved", f"{result.files_moved:,}")
        table.add_row("Files skipped", f"{result.files_skipped:,}")
        table.add_row("Backups created", f"{result.backups_created:,}")
        table.add_row("Folders created", f"{result.folders_created:,}")
        table.add_row("Symlinks skipped", f"{result.symlinks_skipped:,}")
        if result.move:
            table.add_row("Source removed", "yes" if result.source_removed else "no")
        table.add_row("Duration", self._format_duration(result.duration_seconds))

        self.console.print(table)

        if result.errors:
            self._display_errors(result.errors)

    def display_diff(self, diff: FolderDiffResult, left: str, right: str) -> None:
        """Display a folder comparison as a table of differing file names.

        Args:
            diff: Result of FolderDiff.diff.
            left: Path of the reference folder.
            right: Path of the compared folder.
        """
        if diff.is_empty:
            self.console.print(
                Panel(f"{left}\n{right}", title="Folders match", border_style="green")
            )
            return

        table = Table(title=f"{left} <-> {right}", show_header=True, header_style="bold")
        table.add_column("Status", style="cyan")
        table.add_column("File")

        for name in diff.missing:
            table.add_row("[red]missing[/red]", name)
        for name in diff.added:
            table.add_row("[green]added[/green]", name)
        for name in diff.changed:
            table.add_row("[yellow]changed[/yellow]", name)

        self.console.print(table)

    def create_progress_callback(
        self, folder_name: str, total_files: Optional[int] = None
    ) -> tuple[Progress, Callable[[int, int], None]]:
        """Create a progress bar and callback function for file transfer tracking.

        The caller is responsible for using the returned Progress instance
        as a context manager around the transfer.

        Args:
            folder_name: Name of the folder being transferred (for display).
            total_files: Number of files, if known up front. The callback
                updates it with the count SafeTransfer reports.

        Returns:
            A (Progress, callback) tuple. The callback accepts the number of
            completed files and the total, matching
            TransferOptions.progress_callback.
        """
        progress = Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=self.console,
        )
        task_id = progress.add_task(f"Transferring {folder_name}...", total=total_files)

        def callback(completed: int, total: int) -> None:
            progress.update(task_id, completed=completed, total=total)

        return progress, callback

    def _display_errors(self, errors: List[str]) -> None:
        max_display = 10
        displayed_errors = errors[:max_display]
        remaining = len(errors) - max_display

        error_text = "\n".join(f"- {e}" for e in displayed_errors)
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more errors"

        error_panel = Panel(
            error_text,
            title=f"Errors ({len(errors)})",
            border_style="red",
        )
        self.console.print(error_panel)

    def _format_duration(self, seconds: float) -> str:
        """Convert seconds to a duration string such as "5m 23s"."""
        if seconds < 0:
            seconds = 0
        minutes = int(seconds // 60)
        secs = int(seconds % 60)
        return f"{minutes}m {secs}s"
