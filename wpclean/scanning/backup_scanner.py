"""Backup folder discovery.

This module provides the BackupScanner class, which walks a directory tree
depth-first looking for All-in-One WP Migration backup folders
(``ai1wm-backups``) and collects the ``.wpress`` archives inside them.

Example:
    >>> from wpclean.scanning import BackupScanner
    >>> scanner = BackupScanner()
    >>> folders = scanner.scan(Path("/var/www"))
    >>> for folder in folders:
    ...     print(f"{folder.path}: {len(folder.files)} archives")
"""

import logging
import os
import stat
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

from wpclean.models import BackupFolder, FileEntry, ScanProgress

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ScanProgress], None]


class BackupScanner:
    """Finds backup folders and their archives under a root directory.

    A directory is a backup folder when its name is exactly
    ``BACKUP_FOLDER_NAME``. Backup folders are never descended into; they are
    listed shallowly for files ending in ``BACKUP_EXTENSION`` and recorded
    only when at least one archive is present. Directories named in
    ``EXCLUDED_DIRS`` are pruned.

    Per-entry failures (permission errors, entries vanishing mid-scan,
    broken symlinks) are recorded in the error list and the walk continues.

    Attributes:
        _progress_callback: Optional callable receiving ScanProgress updates.
        _errors: List of error messages encountered during scanning.
    """

    BACKUP_FOLDER_NAME = "ai1wm-backups"
    BACKUP_EXTENSION = ".wpress"
    EXCLUDED_DIRS = frozenset({"node_modules", ".git", "vendor"})

    # Directories deeper than this do not emit progress updates
    PROGRESS_MAX_DEPTH = 2

    def __init__(self, progress_callback: Optional[ProgressCallback] = None) -> None:
        """Initialize the BackupScanner.

        Args:
            progress_callback: Optional callable invoked with a ScanProgress
                snapshot while scanning. Purely advisory.
        """
        self._progress_callback = progress_callback
        self._errors: List[str] = []
        self._dirs_scanned = 0
        self._visited_dirs: Set[Tuple[int, int]] = set()

    def scan(self, root_path: Path) -> List[BackupFolder]:
        """Scan a directory tree for backup folders.

        Args:
            root_path: Directory to start from.

        Returns:
            BackupFolder instances in discovery order. An unreadable or
            missing root yields an empty list.
        """
        self._dirs_scanned = 0
        self._visited_dirs.clear()
        results: List[BackupFolder] = []

        root = Path(os.path.abspath(root_path))
        try:
            root_stat = os.stat(root)
        except OSError as e:
            self._errors.append(f"Cannot access root {root}: {e}")
            logger.debug("Root %s is not accessible: %s", root, e)
            return results

        if not stat.S_ISDIR(root_stat.st_mode):
            self._errors.append(f"Root is not a directory: {root}")
            return results

        self._visited_dirs.add((root_stat.st_dev, root_stat.st_ino))
        self._scan_directory(root, results, depth=0)
        logger.debug(
            "Scanned %d directories under %s, found %d backup folders",
            self._dirs_scanned, root, len(results),
        )
        return results

    def scan_backup_folder(self, folder_path: Path) -> List[FileEntry]:
        """List the archives directly inside a backup folder.

        Args:
            folder_path: Path to an ``ai1wm-backups`` directory.

        Returns:
            FileEntry instances sorted newest first, with UTC modification
            times. Archives with equal
            modification times keep directory listing order.
        """
        files: List[FileEntry] = []

        try:
            names = sorted(os.listdir(folder_path))
        except OSError as e:
            self._errors.append(f"Error listing {folder_path}: {e}")
            return files

        for name in names:
            if not name.endswith(self.BACKUP_EXTENSION):
                continue

            file_path = Path(folder_path) / name
            try:
                file_stat = os.stat(file_path)
            except OSError as e:
                self._errors.append(f"Error accessing {file_path}: {e}")
                continue

            if not stat.S_ISREG(file_stat.st_mode):
                continue

            files.append(
                FileEntry(
                    name=name,
                    path=file_path,
                    size=file_stat.st_size,
                    modified_at=datetime.fromtimestamp(file_stat.st_mtime, tz=timezone.utc),
                )
            )

        files.sort(key=lambda f: f.modified_at, reverse=True)
        return files

    def get_errors(self) -> List[str]:
        """Get list of errors encountered during scanning operations.

        Returns:
            List of error message strings.
        """
        return self._errors.copy()

    def clear_errors(self) -> None:
        """Clear the list of accumulated errors."""
        self._errors.clear()

    @property
    def dirs_scanned(self) -> int:
        """Number of directories visited by the last scan."""
        return self._dirs_scanned

    def _scan_directory(
        self, directory: Path, results: List[BackupFolder], depth: int
    ) -> None:
        """Depth-first walk of one directory, appending found folders to results."""
        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            self._errors.append(f"Error listing {directory}: {e}")
            return

        self._dirs_scanned += 1
        if depth <= self.PROGRESS_MAX_DEPTH:
            self._report_progress(directory, len(results))

        for name in names:
            full_path = directory / name
            try:
                entry_stat = os.stat(full_path)
            except OSError as e:
                self._errors.append(f"Error accessing {full_path}: {e}")
                continue

            if not stat.S_ISDIR(entry_stat.st_mode):
                continue

            # Symlinked directories can point back into the tree
            dir_id = (entry_stat.st_dev, entry_stat.st_ino)
            if dir_id in self._visited_dirs:
                logger.debug("Skipping already visited directory %s", full_path)
                continue
            self._visited_dirs.add(dir_id)

            if name == self.BACKUP_FOLDER_NAME:
                folder = self._build_backup_folder(full_path)
                if folder is not None:
                    results.append(folder)
                    self._report_progress(full_path, len(results))
            elif name not in self.EXCLUDED_DIRS:
                self._scan_directory(full_path, results, depth + 1)

    def _build_backup_folder(self, folder_path: Path) -> Optional[BackupFolder]:
        """Create a BackupFolder for a backup directory, or None if it has no archives."""
        files = self.scan_backup_folder(folder_path)
        if not files:
            logger.debug("Backup folder without archives: %s", folder_path)
            return None

        return BackupFolder(
            path=folder_path,
            files=files,
            total_size=sum(f.size for f in files),
            last_modified=max(f.modified_at for f in files),
        )

    def _report_progress(self, current_path: Path, folders_found: int) -> None:
        if self._progress_callback is None:
            return
        self._progress_callback(
            ScanProgress(
                dirs_scanned=self._dirs_scanned,
                folders_found=folders_found,
                current_path=current_path,
            )
        )
