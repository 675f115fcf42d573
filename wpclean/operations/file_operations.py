"""
File operations module for the WordPress backup cleaner.

This module contains the FileOperations class, which removes backup
archives from disk and then updates the BackupCatalog to match.
"""

import logging
import os
from pathlib import Path

from wpclean.catalog import BackupCatalog
from wpclean.models import BackupFolder, DeletionResult, FileEntry, FolderDeletionResult

# Configure module logger
logger = logging.getLogger(__name__)


class FileOperations:
    """
    Applies delete operations to the filesystem and the catalog.

    The catalog is only updated after the physical removal of an archive is
    known to have succeeded. A failed removal leaves every flag, rollup and
    the reclaimed total unchanged for that archive.
    """

    def __init__(self, catalog: BackupCatalog, remove_empty_dirs: bool = False) -> None:
        """
        Create a FileOperations instance bound to a catalog.

        Parameters:
            catalog (BackupCatalog): Catalog whose entries are being deleted.
            remove_empty_dirs (bool): If True, try to remove a backup directory
                from disk once a whole-folder delete has emptied it.
        """
        self.catalog = catalog
        self.remove_empty_dirs = remove_empty_dirs

    def delete_file(self, entry: FileEntry) -> DeletionResult:
        """
        Remove a single archive from disk and record it in the catalog.

        Parameters:
            entry (FileEntry): Archive to delete.

        Returns:
            DeletionResult: `success` is True only when the file was removed;
                on failure `error` describes why and nothing was mutated.
        """
        if entry.deleted:
            return DeletionResult(file=entry, success=False, error=f"Already deleted: {entry.path}")

        try:
            self._remove_file(entry.path)
        except FileNotFoundError:
            error_msg = f"File not found: {entry.path}"
            logger.warning(error_msg)
            return DeletionResult(file=entry, success=False, error=error_msg)
        except PermissionError as e:
            error_msg = f"Permission denied: {entry.path} - {e}"
            logger.warning(error_msg)
            return DeletionResult(file=entry, success=False, error=error_msg)
        except OSError as e:
            error_msg = f"Error deleting {entry.path}: {e}"
            logger.warning(error_msg)
            return DeletionResult(file=entry, success=False, error=error_msg)

        self.catalog.mark_file_deleted(entry)
        logger.debug(f"Deleted archive: {entry.path} ({entry.size} bytes)")
        return DeletionResult(file=entry, success=True)

    def delete_folder(self, folder: BackupFolder) -> FolderDeletionResult:
        """
        Remove every remaining archive in a backup folder, one at a time.

        Archives are attempted in the folder's stored order (newest first) and
        each one succeeds or fails on its own. Once all have been attempted
        the folder is marked deleted even if some removals failed; only the
        archives that were actually removed count towards reclaimed bytes.

        Parameters:
            folder (BackupFolder): Folder to clear.

        Returns:
            FolderDeletionResult: Per-archive results and whether the empty
                directory itself was removed.
        """
        outcome = FolderDeletionResult(folder=folder)

        for entry in folder.files:
            if entry.deleted:
                continue
            outcome.results.append(self.delete_file(entry))

        self.catalog.mark_folder_deleted(folder)

        if outcome.files_failed:
            logger.warning(
                f"Folder {folder.path} hidden with {outcome.files_failed} archive(s) not removed"
            )

        if self.remove_empty_dirs:
            outcome.directory_removed = self.remove_folder_directory(folder)

        return outcome

    def remove_folder_directory(self, folder: BackupFolder) -> bool:
        """
        Best-effort removal of a backup directory that no longer holds anything.

        Directories that still contain files (other plugin files, archives that
        could not be deleted) are left alone. Failures are logged, never raised.

        Parameters:
            folder (BackupFolder): Folder whose directory should be removed.

        Returns:
            bool: True if the directory was removed from disk.
        """
        try:
            with os.scandir(folder.path) as entries:
                has_entries = any(entries)
            if has_entries:
                logger.debug(f"Backup directory not empty, keeping: {folder.path}")
                return False
            folder.path.rmdir()
        except OSError as e:
            logger.debug(f"Could not remove backup directory {folder.path}: {e}")
            return False

        logger.debug(f"Removed empty backup directory: {folder.path}")
        return True

    def _remove_file(self, path: Path) -> None:
        """Unlink a file, raising OSError on failure."""
        path.unlink()

