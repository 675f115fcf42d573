"""wpclean - WordPress Backup Cleaner.

An interactive terminal tool that finds All-in-One WP Migration backup
folders under a directory tree, totals their disk usage and deletes backup
archives to reclaim space.
"""

__version__ = "1.0.0"

from .models import (
    BackupFolder,
    CleanupSummary,
    DeletionResult,
    FileEntry,
    FolderDeletionResult,
    Intent,
    ScanProgress,
    ViewMode,
)

__all__ = [
    "__version__",
    "BackupFolder",
    "CleanupSummary",
    "DeletionResult",
    "FileEntry",
    "FolderDeletionResult",
    "Intent",
    "ScanProgress",
    "ViewMode",
]


def main() -> None:
    """Entry point for the wpclean CLI application.

    This function is called when the `wpclean` command is invoked after
    package installation via pip. It imports and runs the Typer app
    from the wpclean.cli module.
    """
    from wpclean.cli import app
    app()
