"""
Core data models for the WordPress backup cleaner.

This module contains the following dataclasses:
- FileEntry: One discovered .wpress archive
- BackupFolder: One discovered ai1wm-backups directory and its archives
- ScanProgress: Snapshot of scanner progress for display
- DeletionResult: Outcome of removing a single archive
- FolderDeletionResult: Outcome of removing every archive in a folder
- CleanupSummary: Summary of a cleanup session
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

WP_CONTENT_DIR_NAME = "wp-content"


@dataclass
class FileEntry:
    """Represents one backup archive found inside a backup folder."""
    name: str                         # Base filename
    path: Path                        # Absolute path, identity for deletion
    size: int                         # Size in bytes
    modified_at: datetime             # Last modification time (UTC)
    deleted: bool = False             # Soft-delete flag


@dataclass
class BackupFolder:
    """Represents one backup folder and the archives it holds.

    ``total_size`` and ``last_modified`` are rollups over the non-deleted
    files and are kept current by BackupCatalog.recompute().
    """
    path: Path                        # Absolute path of the backup folder
    files: List[FileEntry]            # Archives, newest first
    total_size: int = 0               # Sum of non-deleted file sizes
    last_modified: Optional[datetime] = None  # Newest non-deleted mtime
    deleted: bool = False             # Soft-delete flag

    @property
    def parent_site(self) -> str:
        """Name of the WordPress site directory that owns this backup folder.

        Backups normally live in ``<site>/wp-content/ai1wm-backups``; when the
        folder sits anywhere else the immediate parent name is used.
        """
        parent = self.path.parent
        if parent.name == WP_CONTENT_DIR_NAME and parent.parent.name:
            return parent.parent.name
        return parent.name

    @property
    def visible_file_count(self) -> int:
        return sum(1 for f in self.files if not f.deleted)


@dataclass
class ScanProgress:
    """Progress snapshot passed to scan progress callbacks."""
    dirs_scanned: int                 # Directories visited so far
    folders_found: int                # Backup folders recorded so far
    current_path: Path                # Path being visited


@dataclass
class DeletionResult:
    """Result of a single archive deletion."""
    file: FileEntry                   # Archive the deletion was attempted on
    success: bool                     # Whether the file is gone from disk
    error: Optional[str] = None       # Error message on failure

    @property
    def bytes_reclaimed(self) -> int:
        return self.file.size if self.success else 0


@dataclass
class FolderDeletionResult:
    """Result of deleting every remaining archive in a backup folder."""
    folder: BackupFolder              # Folder the deletion was attempted on
    results: List[DeletionResult] = field(default_factory=list)
    directory_removed: bool = False   # Empty directory removed from disk

    @property
    def files_deleted(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def files_failed(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def bytes_reclaimed(self) -> int:
        return sum(r.bytes_reclaimed for r in self.results)

    @property
    def errors(self) -> List[str]:
        return [r.error for r in self.results if r.error]


@dataclass
class CleanupSummary:
    """Summary of the cleanup session returned by CleanupOrchestrator."""
    folders_found: int = 0            # Backup folders discovered by the scan
    files_deleted: int = 0            # Archives removed from disk
    files_failed: int = 0             # Archives that could not be removed
    bytes_reclaimed: int = 0          # Bytes freed by successful deletions
    errors: List[str] = field(default_factory=list)  # All error messages
    duration_seconds: float = 0.0     # Session duration in seconds
