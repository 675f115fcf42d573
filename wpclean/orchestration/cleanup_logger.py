"""CleanupLogger for recording cleanup sessions in a readable log file.

This module provides the CleanupLogger class that writes a structured log
with a header, the scan results, one entry per deletion and a summary.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from wpclean.models import (
    BackupFolder,
    CleanupSummary,
    DeletionResult,
    FolderDeletionResult,
)
from wpclean.ui.formatting import format_size


class CleanupLogger:
    """Logger for cleanup sessions with structured output format.

    Usage:
        with CleanupLogger(Path("cleanup.log"), root_path=root) as log:
            log.log_header()
            log.log_scan_phase(dirs_scanned, folders)
            log.log_file_deletion(result)
            log.log_folder_deletion(folder_result)
            log.log_summary(summary)

    Attributes:
        SEPARATOR: The 65-character separator line used between sections.
    """

    SEPARATOR = "=" * 65

    def __init__(self, log_file_path: Path, root_path: Optional[Path] = None) -> None:
        """Initialize the CleanupLogger.

        Args:
            log_file_path: Path of the log file to write.
            root_path: Scanned root directory (used in header).

        Raises:
            OSError: If the log file path is not writable.
        """
        self._log_file_path = Path(log_file_path)
        self._root_path = root_path
        self._start_timestamp = datetime.now()
        self._file_handle: Optional[TextIO] = None
        self._deletion_counter = 0

        self._validate_path()

    def _validate_path(self) -> None:
        """Validate that the log file's parent directory exists.

        Raises:
            OSError: If the parent directory doesn't exist or is not a directory.
        """
        parent = self._log_file_path.parent
        if not parent.exists():
            raise OSError(f"Parent directory does not exist: {parent}")
        if not parent.is_dir():
            raise OSError(f"Parent path is not a directory: {parent}")

    def __enter__(self) -> "CleanupLogger":
        """Enter the context manager, opening the log file.

        Raises:
            OSError: If the file cannot be opened for writing.
        """
        try:
            self._file_handle = open(self._log_file_path, "w", encoding="utf-8")
        except OSError as e:
            raise OSError(f"Cannot open log file for writing: {e}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit the context manager, closing the log file."""
        if self._file_handle is not None:
            try:
                self._file_handle.close()
            except OSError as e:
                print(f"Warning: Error closing log file: {e}", file=sys.stderr)
            finally:
                self._file_handle = None

    def get_log_path(self) -> Path:
        return self._log_file_path

    def log_header(self) -> None:
        """Write the title, timestamp and scanned root."""
        self._write_separator()
        self._write_line("WordPress Backup Cleaner - Session Log")
        self._write_separator()
        self._write_line(f"Timestamp: {self._format_timestamp(self._start_timestamp)}")
        if self._root_path is not None:
            self._write_line(f"Root: {self._root_path}")
        self._write_line("")

    def log_scan_phase(self, dirs_scanned: int, folders: List[BackupFolder]) -> None:
        """Write the scan phase section.

        Args:
            dirs_scanned: Number of directories visited.
            folders: Backup folders in display order.
        """
        self._write_separator()
        self._write_line("SCAN PHASE")
        self._write_separator()
        self._write_line(f"Directories scanned: {dirs_scanned:,}")
        self._write_line(f"Backup folders found: {len(folders)}")
        self._write_line(f"Releasable space: {format_size(sum(f.total_size for f in folders))}")
        self._write_line("")

        for folder in folders:
            self._write_line(
                f"- {folder.path} ({len(folder.files)} files, {format_size(folder.total_size)})"
            )
        if folders:
            self._write_line("")

    def log_file_deletion(self, result: DeletionResult) -> None:
        """Write one archive deletion entry."""
        self._start_deletion_phase()
        now = self._format_timestamp(datetime.now())
        if result.success:
            self._write_line(
                f"[{now}] Deleted file: {result.file.path} ({format_size(result.file.size)})"
            )
        else:
            self._write_line(f"[{now}] ! Failed: {result.error}")

    def log_folder_deletion(self, outcome: FolderDeletionResult) -> None:
        """Write a whole-folder deletion entry with per-archive outcomes."""
        self._start_deletion_phase()
        now = self._format_timestamp(datetime.now())
        self._write_line(f"[{now}] Deleting folder: {outcome.folder.path}")
        for result in outcome.results:
            if result.success:
                self._write_line(
                    f"- {result.file.name} ({format_size(result.file.size)})", indent=2
                )
            else:
                self._write_line(f"! {result.error}", indent=2)
        self._write_line(f"Files deleted: {outcome.files_deleted}", indent=2)
        self._write_line(f"Files failed: {outcome.files_failed}", indent=2)
        self._write_line(f"Space reclaimed: {format_size(outcome.bytes_reclaimed)}", indent=2)
        if outcome.directory_removed:
            self._write_line("Empty directory removed", indent=2)
        self._write_line("")

    def log_summary(self, summary: CleanupSummary) -> None:
        """Write the summary section."""
        self._write_separator()
        self._write_line("SUMMARY")
        self._write_separator()
        self._write_line(f"Backup folders found: {summary.folders_found}")
        self._write_line(f"Files deleted: {summary.files_deleted:,}")
        self._write_line(f"Files failed: {summary.files_failed:,}")
        self._write_line(f"Space saved: {format_size(summary.bytes_reclaimed)}")

        if summary.errors:
            self._write_line(f"Total errors: {len(summary.errors)}")
            self._write_line("Errors:")
            for error in summary.errors:
                self._write_line(f"  - {error}")

        self._write_line(f"Duration: {self._format_duration(summary.duration_seconds)}")
        self._write_line("")
        self._write_line(f"Log file: {self._log_file_path}")
        self._write_separator()

    def _start_deletion_phase(self) -> None:
        if self._deletion_counter == 0:
            self._write_separator()
            self._write_line("DELETIONS")
            self._write_separator()
        self._deletion_counter += 1

    def _format_duration(self, seconds: float) -> str:
        """Format duration like "45s", "5m 23s" or "1h 5m 30s"."""
        total_seconds = int(seconds)

        if total_seconds < 60:
            return f"{total_seconds}s"

        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        secs = total_seconds % 60

        if hours > 0:
            return f"{hours}h {minutes}m {secs}s"
        return f"{minutes}m {secs}s"

    def _format_timestamp(self, dt: datetime) -> str:
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def _write_separator(self) -> None:
        self._write_line(self.SEPARATOR)

    def _write_line(self, text: str, indent: int = 0) -> None:
        """Write a line to the log file with optional indentation.

        Args:
            text: The text to write.
            indent: Number of spaces to indent the line.
        """
        if self._file_handle is None:
            print(
                f"Warning: Attempted to write to closed log file: {text}",
                file=sys.stderr,
            )
            return

        try:
            self._file_handle.write(" " * indent + text + "\n")
        except OSError as e:
            print(f"Warning: Error writing to log file: {e}", file=sys.stderr)
