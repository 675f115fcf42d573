"""CleanupOrchestrator for coordinating the scan and interactive cleanup.

This module provides the CleanupOrchestrator class, which runs the scan with
a progress display, builds the BackupCatalog, then drives the keyboard loop
of a CleanupSession until the operator quits. Every deletion is recorded in
the optional session log and in the returned CleanupSummary.

Example:
    from wpclean.orchestration import CleanupOrchestrator
    from pathlib import Path

    orchestrator = CleanupOrchestrator(root_path=Path("/var/www"))
    summary = orchestrator.run()
    print(summary.bytes_reclaimed)
"""

import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from wpclean.catalog import BackupCatalog
from wpclean.models import (
    BackupFolder,
    CleanupSummary,
    DeletionResult,
    FolderDeletionResult,
)
from wpclean.operations import FileOperations
from wpclean.orchestration.cleanup_logger import CleanupLogger
from wpclean.orchestration.cleanup_session import CleanupSession
from wpclean.scanning import BackupScanner
from wpclean.ui import CleanerTUI, KeyReader


class CleanupOrchestrator:
    """Orchestrates the scan phase and the interactive cleanup loop.

    Attributes:
        root_path: Directory tree to scan.
        log_file_path: Optional path for the session log file.
        verbose: Whether to display scanner warnings.
        remove_empty_dirs: Whether emptied backup directories are removed.
    """

    def __init__(
        self,
        root_path: Path,
        log_file_path: Optional[Path] = None,
        verbose: bool = False,
        remove_empty_dirs: bool = False,
        tui: Optional[CleanerTUI] = None,
        key_reader: Optional[KeyReader] = None,
    ) -> None:
        """Initialize the CleanupOrchestrator.

        Args:
            root_path: Directory tree to scan. A missing or unreadable root
                simply produces no results.
            log_file_path: Optional path for the session log file.
            verbose: If True, display scanner warnings after the scan.
            remove_empty_dirs: If True, remove a backup directory from disk
                once a whole-folder delete has emptied it.
            tui: Optional CleanerTUI; a default one is created otherwise.
            key_reader: Optional KeyReader; reads stdin by default.
        """
        self.root_path = Path(os.path.abspath(Path(root_path).expanduser()))
        self.log_file_path = log_file_path
        self.verbose = verbose
        self.remove_empty_dirs = remove_empty_dirs

        self._tui = tui or CleanerTUI(root_path=self.root_path)
        self._key_reader = key_reader or KeyReader()
        self._errors: List[str] = []

    def run(self) -> CleanupSummary:
        """Execute the full workflow.

        Returns:
            CleanupSummary with the session statistics. When no backup
            folders are found the summary is empty and no keys are read.
        """
        start_time = time.time()
        self._errors.clear()

        folders, dirs_scanned = self._execute_scan_phase()
        catalog = BackupCatalog(folders)

        if not len(catalog):
            self._tui.display_no_backups()
            return CleanupSummary(
                errors=self._errors.copy(),
                duration_seconds=time.time() - start_time,
            )

        # Try to create logger; if it fails, proceed without logging
        logger: Optional[CleanupLogger] = None
        if self.log_file_path is not None:
            try:
                logger = CleanupLogger(self.log_file_path, root_path=self.root_path)
            except OSError as e:
                print(f"Warning: Could not create log file: {e}", file=sys.stderr)

        if logger is not None:
            with logger:
                logger.log_header()
                logger.log_scan_phase(dirs_scanned, catalog.folders)
                summary = self._execute_cleanup_loop(catalog, logger, start_time)
                logger.log_summary(summary)
        else:
            summary = self._execute_cleanup_loop(catalog, None, start_time)

        self._tui.display_goodbye(catalog.reclaimed_bytes)
        return summary

    def _execute_scan_phase(self) -> Tuple[List[BackupFolder], int]:
        """Scan the root with a progress display.

        Returns:
            Tuple of (backup folders, number of directories visited).
        """
        progress, callback = self._tui.create_scan_progress()
        scanner = BackupScanner(progress_callback=callback)

        with progress:
            folders = scanner.scan(self.root_path)

        scanner_errors = scanner.get_errors()
        self._errors.extend(scanner_errors)

        if self.verbose and scanner_errors:
            self._tui.display_scan_errors(scanner_errors)

        return folders, scanner.dirs_scanned

    def _execute_cleanup_loop(
        self,
        catalog: BackupCatalog,
        logger: Optional[CleanupLogger],
        start_time: float,
    ) -> CleanupSummary:
        """Render, read one intent, apply it; repeat until the operator quits."""
        operations = FileOperations(catalog, remove_empty_dirs=self.remove_empty_dirs)
        session = CleanupSession(catalog, operations)
        summary = CleanupSummary(folders_found=len(catalog))

        while True:
            self._tui.render(session)
            intent = self._key_reader.read_intent()
            if not session.handle(intent):
                break
            self._record_result(session.last_result, summary, logger)

        summary.bytes_reclaimed = catalog.reclaimed_bytes
        summary.errors = self._errors.copy() + summary.errors
        summary.duration_seconds = time.time() - start_time
        return summary

    def _record_result(
        self,
        result,
        summary: CleanupSummary,
        logger: Optional[CleanupLogger],
    ) -> None:
        """Fold one deletion outcome into the summary and the session log."""
        if isinstance(result, FolderDeletionResult):
            results = result.results
            if logger is not None:
                logger.log_folder_deletion(result)
        elif isinstance(result, DeletionResult):
            results = [result]
            if logger is not None:
                logger.log_file_deletion(result)
        else:
            return

        for item in results:
            if item.success:
                summary.files_deleted += 1
            else:
                summary.files_failed += 1
                if item.error:
                    summary.errors.append(item.error)
