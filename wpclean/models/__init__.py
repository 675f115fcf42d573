"""
Models package for the WordPress backup cleaner.

This package provides convenient imports for all data models:
- FileEntry: One discovered backup archive
- BackupFolder: One backup folder with rollup statistics
- ScanProgress: Scanner progress snapshot
- DeletionResult: Single archive deletion outcome
- FolderDeletionResult: Whole folder deletion outcome
- CleanupSummary: Session summary
- ViewMode / Intent: Session screens and operator actions
"""

from .navigation import Intent, ViewMode
from .data_models import (
    BackupFolder,
    CleanupSummary,
    DeletionResult,
    FileEntry,
    FolderDeletionResult,
    ScanProgress,
)

__all__ = [
    "Intent",
    "ViewMode",
    "BackupFolder",
    "CleanupSummary",
    "DeletionResult",
    "FileEntry",
    "FolderDeletionResult",
    "ScanProgress",
]
