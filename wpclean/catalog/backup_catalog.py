"""In-memory catalog of scanned backup folders.

The BackupCatalog holds the scan results ordered by size, answers which
folders and archives are still visible, keeps folder rollups in step with
soft deletes and tracks how many bytes the session has reclaimed.

Deleted folders and files are never removed from the catalog, only flagged.
Visible lists are rebuilt by filtering on every call, so callers must
re-derive them after each mutation before interpreting a selection index.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from wpclean.models import BackupFolder, FileEntry

logger = logging.getLogger(__name__)


class BackupCatalog:
    """Ordered collection of BackupFolder instances with rollup bookkeeping.

    Folders are sorted once by ``total_size`` descending when the catalog is
    built and never re-sorted, so their relative order is stable while
    deletions shrink them.

    Attributes:
        _folders: All folders in display order, including deleted ones.
        _owners: Maps archive paths to the folder that holds them.
        _reclaimed_bytes: Running total of bytes freed this session.
    """

    def __init__(self, folders: Sequence[BackupFolder]) -> None:
        """Build the catalog from scan results.

        Args:
            folders: Folders as produced by BackupScanner.scan().
        """
        self._folders: List[BackupFolder] = sorted(
            folders, key=lambda f: f.total_size, reverse=True
        )
        self._owners: Dict[Path, BackupFolder] = {
            entry.path: folder for folder in self._folders for entry in folder.files
        }
        self._reclaimed_bytes = 0

    @property
    def folders(self) -> List[BackupFolder]:
        """All folders in display order, deleted ones included."""
        return list(self._folders)

    @property
    def reclaimed_bytes(self) -> int:
        """Total bytes freed by successful deletions this session."""
        return self._reclaimed_bytes

    def __len__(self) -> int:
        return len(self._folders)

    def visible_folders(self) -> List[BackupFolder]:
        """Folders not marked deleted, in original size-descending order."""
        return [f for f in self._folders if not f.deleted]

    def visible_files(self, folder: BackupFolder) -> List[FileEntry]:
        """Archives of ``folder`` not marked deleted, newest first."""
        return [f for f in folder.files if not f.deleted]

    def releasable_bytes(self) -> int:
        """Bytes still held by visible folders."""
        return sum(f.total_size for f in self.visible_folders())

    def folder_of(self, entry: FileEntry) -> Optional[BackupFolder]:
        """Return the folder holding ``entry``, or None if it is not catalogued."""
        return self._owners.get(entry.path)

    def recompute(self, folder: BackupFolder) -> None:
        """Recalculate a folder's rollups from its non-deleted archives.

        When no archive remains the folder is marked deleted, its size drops
        to zero and ``last_modified`` keeps its previous value.
        """
        remaining = self.visible_files(folder)
        folder.total_size = sum(f.size for f in remaining)
        if remaining:
            folder.last_modified = max(f.modified_at for f in remaining)
        else:
            folder.deleted = True

    def mark_file_deleted(self, entry: FileEntry) -> None:
        """Record that ``entry`` was removed from disk.

        Flags the archive, credits its size to the reclaimed total and
        refreshes the owning folder's rollups. Must only be called after the
        physical removal succeeded.
        """
        if entry.deleted:
            return

        entry.deleted = True
        self._reclaimed_bytes += entry.size

        folder = self.folder_of(entry)
        if folder is not None:
            self.recompute(folder)
        logger.debug("Marked %s deleted (%d bytes)", entry.path, entry.size)

    def mark_folder_deleted(self, folder: BackupFolder) -> None:
        """Hide a folder after a whole-folder delete attempt.

        Rollups are refreshed first so they still describe any archives that
        could not be removed.
        """
        self.recompute(folder)
        folder.deleted = True
