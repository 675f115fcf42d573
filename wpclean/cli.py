"""
WordPress Backup Cleaner - CLI Interface.

Scans a directory tree for All-in-One WP Migration backup folders
(``ai1wm-backups``), lists them by size and lets you delete whole folders
or individual ``.wpress`` archives from an interactive terminal view.

Usage Examples:
    # Scan the default web root
    wpclean

    # Scan a specific directory
    wpclean /var/www

    # Record every deletion in a log file
    wpclean /var/www --log-file cleanup.log --verbose

    # Also remove backup directories left empty by a folder delete
    wpclean /var/www --remove-empty-dirs
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from wpclean.orchestration import CleanupOrchestrator

__version__ = "1.0.0"

DEFAULT_SCAN_PATH = Path("/mnt/c/laragon/www")

# Initialize Typer app
app = typer.Typer(
    name="wpclean",
    help="WordPress Backup Cleaner - Find and delete ai1wm-backups .wpress archives.",
    add_completion=False,
)

# Rich console for consistent output formatting
console = Console()


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"WordPress Backup Cleaner v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route the package loggers to stderr through Rich.

    Args:
        verbose: If True, log at DEBUG level; otherwise only warnings.
    """
    package_logger = logging.getLogger("wpclean")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


@app.command()
def clean(
    root_path: Path = typer.Argument(
        DEFAULT_SCAN_PATH,
        help="Directory tree to scan for ai1wm-backups folders.",
        envvar="WPCLEAN_ROOT",
        exists=False,  # A missing root just yields no results
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        "-l",
        help="Path for session log output.",
    ),
    remove_empty_dirs: bool = typer.Option(
        False,
        "--remove-empty-dirs",
        help="Remove backup directories left empty after deleting a whole folder.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose output.",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """
    Scan for WordPress migration backups and clean them up interactively.

    Folders are listed largest first. ENTER opens a folder, SPACE deletes
    the selected folder or archive, BACKSPACE/ESC goes back and Q quits.
    Deleting a whole folder hides it even if some archives could not be
    removed; only archives actually removed count as space saved.
    """
    configure_logging(verbose)
    console.print(f"[bold cyan]wpclean[/bold cyan] [dim]v{__version__}[/dim]\n")

    try:
        orchestrator = CleanupOrchestrator(
            root_path=root_path,
            log_file_path=log_file,
            verbose=verbose,
            remove_empty_dirs=remove_empty_dirs,
        )

        summary = orchestrator.run()

        if verbose and summary.errors:
            console.print(
                f"[yellow]Completed with {len(summary.errors)} warning(s).[/yellow]"
            )

        if log_file and summary.folders_found and log_file.exists():
            console.print(f"[dim]Log written to: {log_file}[/dim]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Cleanup interrupted by user.[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    app()
