"""Terminal User Interface for the WordPress backup cleaner.

This module provides the CleanerTUI class, a Rich-based full-screen view of
a CleanupSession: the folder list with releasable and reclaimed space, and
the archive list of an opened folder.

Example:
    from wpclean.ui import CleanerTUI

    tui = CleanerTUI(root_path=Path("/var/www"))
    progress, callback = tui.create_scan_progress()
    with progress:
        folders = BackupScanner(progress_callback=callback).scan(root)
    tui.render(session)
"""

from pathlib import Path
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from wpclean.models import BackupFolder, DeletionResult, FolderDeletionResult, ScanProgress, ViewMode

from .formatting import format_age, format_size, shorten_path, truncate_name

if TYPE_CHECKING:
    from wpclean.orchestration.cleanup_session import CleanupSession

FOLDER_VIEW_HELP = " ↑↓ Navigate | ENTER Open folder | SPACE Delete all | Q Quit "
FILE_VIEW_HELP = " ↑↓ Navigate | SPACE Delete file | BACKSPACE/ESC Go back | Q Quit "

NO_BACKUPS_MESSAGE = "No ai1wm-backups folders with .wpress files found."


class CleanerTUI:
    """Rich-based Terminal User Interface for backup cleanup.

    Args:
        console: Optional Rich Console instance for output. Pass a Console
            writing to a StringIO for testing.
        root_path: Scanned root; folder paths are displayed relative to it.

    Attributes:
        console: The Rich Console instance used for all output.
    """

    PREVIEW_FILE_COUNT = 5
    PROGRESS_PATH_LENGTH = 60

    def __init__(
        self, console: Optional[Console] = None, root_path: Optional[Path] = None
    ) -> None:
        self.console = console or Console()
        self.root_path = root_path

    def create_scan_progress(self) -> Tuple[Progress, Callable[[ScanProgress], None]]:
        """Create a transient status line and a scanner progress callback.

        The caller must use the returned Progress as a context manager around
        the scan.

        Returns:
            Tuple of (Progress, callback accepting ScanProgress snapshots).
        """
        progress = Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=self.console,
            transient=True,
        )
        task_id = progress.add_task("Scanning...", total=None)

        def callback(snapshot: ScanProgress) -> None:
            current = escape(
                shorten_path(snapshot.current_path, max_length=self.PROGRESS_PATH_LENGTH)
            )
            progress.update(
                task_id,
                description=(
                    f"[dim]Scanned: [yellow]{snapshot.dirs_scanned}[/yellow] dirs | "
                    f"Found: [green]{snapshot.folders_found}[/green] backups | "
                    f"{current}[/dim]"
                ),
            )

        return progress, callback

    def render(self, session: "CleanupSession") -> None:
        """Clear the screen and draw the session's current view."""
        self.console.clear()
        self._display_header()
        if session.mode is ViewMode.FILES:
            self._render_file_view(session)
        else:
            self._render_folder_view(session)
        self._display_status(session)

    def display_no_backups(self) -> None:
        self.console.print(f"[yellow]{NO_BACKUPS_MESSAGE}[/yellow]")

    def display_goodbye(self, reclaimed_bytes: int) -> None:
        self.console.clear()
        self.console.print(f"[green]Space saved: {format_size(reclaimed_bytes)}[/green]")
        self.console.print("[cyan]Goodbye![/cyan]")

    def display_scan_errors(self, errors: List[str]) -> None:
        """Display scanner warnings in a separate panel.

        Args:
            errors: List of error messages to display.
        """
        max_display = 10
        error_text = "\n".join(f"- {e}" for e in errors[:max_display])
        remaining = len(errors) - max_display
        if remaining > 0:
            error_text += f"\n\n... and {remaining} more warnings"

        self.console.print(
            Panel(error_text, title=f"Scanner warnings ({len(errors)})", border_style="yellow")
        )

    def _display_header(self) -> None:
        self.console.print(
            Panel("[bold cyan]WordPress Backup Cleaner[/bold cyan]", border_style="cyan", expand=False)
        )

    def _render_folder_view(self, session: "CleanupSession") -> None:
        catalog = session.catalog
        self.console.print(
            f"  [dim]Releasable space:[/dim] [yellow]{format_size(catalog.releasable_bytes())}[/yellow]"
        )
        self.console.print(
            f"  [dim]Space saved:[/dim] [green]{format_size(catalog.reclaimed_bytes)}[/green]\n"
        )
        self.console.print(f"[white on blue]{FOLDER_VIEW_HELP}[/white on blue]\n")

        folders = session.visible_folders()
        if not folders:
            self.console.print(f"\n  [yellow]{NO_BACKUPS_MESSAGE}[/yellow]")
            return

        table = Table(show_header=True, header_style="dim", box=None)
        table.add_column("", width=1)
        table.add_column("PATH", style="cyan", no_wrap=True)
        table.add_column("SITE", style="white", no_wrap=True)
        table.add_column("FILES", justify="right", style="yellow")
        table.add_column("LAST_MOD", justify="right", style="dim")
        table.add_column("SIZE", justify="right", style="magenta")

        selected = session.selected_folder()
        for folder in folders:
            is_selected = folder is selected
            table.add_row(
                ">" if is_selected else "",
                escape(shorten_path(folder.path, self.root_path)),
                escape(truncate_name(folder.parent_site, max_length=24)),
                str(folder.visible_file_count),
                format_age(folder.last_modified),
                format_size(folder.total_size),
                style="reverse" if is_selected else None,
            )
        self.console.print(table)

        if selected is not None:
            self._display_file_preview(session, selected)

    def _display_file_preview(self, session: "CleanupSession", folder: BackupFolder) -> None:
        remaining = session.catalog.visible_files(folder)
        self.console.print(
            f"\n  [bold]Files in selected backup ({len(remaining)}):[/bold] "
            f"[dim]Press ENTER to manage[/dim]"
        )
        for entry in remaining[: self.PREVIEW_FILE_COUNT]:
            self.console.print(
                f"    [dim]{escape(truncate_name(entry.name, max_length=60))} "
                f"({format_size(entry.size)}, {format_age(entry.modified_at)})[/dim]"
            )
        if len(remaining) > self.PREVIEW_FILE_COUNT:
            self.console.print(
                f"    [dim]... and {len(remaining) - self.PREVIEW_FILE_COUNT} more files[/dim]"
            )

    def _render_file_view(self, session: "CleanupSession") -> None:
        folder = session.state.folder
        self.console.print(
            f"  [dim]Space saved:[/dim] [green]{format_size(session.catalog.reclaimed_bytes)}[/green]\n"
        )
        self.console.print(f"[white on magenta]{FILE_VIEW_HELP}[/white on magenta]\n")
        self.console.print(
            f"  [bold cyan]{escape(shorten_path(folder.path, self.root_path, max_length=200))}[/bold cyan]"
        )

        files = session.visible_files()
        if not files:
            self.console.print("\n  [yellow]No .wpress files remaining in this folder.[/yellow]")
            self.console.print("  [dim]Press BACKSPACE to go back.[/dim]")
            return

        table = Table(show_header=True, header_style="dim", box=None)
        table.add_column("", width=1)
        table.add_column("FILENAME", style="white", no_wrap=True)
        table.add_column("SIZE", justify="right", style="magenta")
        table.add_column("MODIFIED", justify="right", style="dim")

        selected = session.selected_file()
        for entry in files:
            is_selected = entry is selected
            table.add_row(
                ">" if is_selected else "",
                escape(truncate_name(entry.name)),
                format_size(entry.size),
                format_age(entry.modified_at),
                style="reverse" if is_selected else None,
            )
        self.console.print(table)

        total_size = sum(f.size for f in files)
        self.console.print(
            f"\n  [bold]Total: {len(files)} files, {format_size(total_size)}[/bold]"
        )

    def _display_status(self, session: "CleanupSession") -> None:
        """Show the outcome of the last delete when something went wrong."""
        result = session.last_result
        if isinstance(result, DeletionResult) and not result.success:
            self.console.print(f"\n[red]Could not delete:[/red] {escape(result.error or '')}")
        elif isinstance(result, FolderDeletionResult) and result.files_failed:
            self.console.print(
                f"\n[yellow]Folder hidden, {result.files_failed} file(s) could not be "
                f"deleted ({format_size(result.bytes_reclaimed)} reclaimed).[/yellow]"
            )
