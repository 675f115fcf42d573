"""
Unit tests for FileOperations deletion logic.

Tests cover:
- Single archive deletion and rollup updates
- Failure handling (missing file, permission denied)
- Whole folder deletion with partial failures
- Reclaimed byte accounting
- Optional empty directory removal
"""

import os
from pathlib import Path
from typing import Dict
from unittest.mock import patch

import pytest

from wpclean.catalog import BackupCatalog
from wpclean.operations import FileOperations
from wpclean.scanning import BackupScanner

from conftest import create_backup_folder


def scan_catalog(root: Path) -> BackupCatalog:
    return BackupCatalog(BackupScanner().scan(root))


def deleted_bytes(catalog: BackupCatalog) -> int:
    return sum(e.size for f in catalog.folders for e in f.files if e.deleted)


class TestDeleteFile:
    """Tests for deleting a single archive."""

    def test_delete_larger_file_keeps_folder_visible(self, temp_dir: Path) -> None:
        """Deleting the 200-byte archive of {100, 200} leaves 100 bytes and a visible folder."""
        folder_path = create_backup_folder(temp_dir / "site", [200, 100])
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog)
        folder = catalog.folders[0]
        larger = next(e for e in folder.files if e.size == 200)

        result = ops.delete_file(larger)

        assert result.success is True
        assert result.bytes_reclaimed == 200
        assert not larger.path.exists()
        assert larger.deleted is True
        assert folder.total_size == 100
        assert catalog.reclaimed_bytes == 200
        assert catalog.visible_folders() == [folder]
        assert (folder_path / "backup-1.wpress").exists()

    def test_delete_last_file_hides_folder(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [300])
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog)
        folder = catalog.folders[0]

        result = ops.delete_file(folder.files[0])

        assert result.success is True
        assert folder.deleted is True
        assert folder.total_size == 0
        assert catalog.visible_folders() == []
        assert catalog.reclaimed_bytes == 300

    def test_delete_updates_last_modified(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [10, 20])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        newest, older = folder.files

        FileOperations(catalog).delete_file(newest)

        assert folder.last_modified == older.modified_at

    def test_missing_file_leaves_state_unchanged(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [200, 100])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        entry = folder.files[0]
        entry.path.unlink()

        result = FileOperations(catalog).delete_file(entry)

        assert result.success is False
        assert "File not found" in result.error
        assert result.bytes_reclaimed == 0
        assert entry.deleted is False
        assert folder.total_size == 300
        assert catalog.reclaimed_bytes == 0

    def test_permission_error_leaves_state_unchanged(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [200])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        entry = folder.files[0]
        ops = FileOperations(catalog)

        with patch.object(ops, "_remove_file", side_effect=PermissionError(13, "Permission denied")):
            result = ops.delete_file(entry)

        assert result.success is False
        assert "Permission denied" in result.error
        assert entry.path.exists()
        assert entry.deleted is False
        assert folder.deleted is False
        assert catalog.reclaimed_bytes == 0

    def test_generic_os_error_is_reported(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [200])
        catalog = scan_catalog(temp_dir)
        entry = catalog.folders[0].files[0]
        ops = FileOperations(catalog)

        with patch.object(ops, "_remove_file", side_effect=OSError(16, "Device or resource busy")):
            result = ops.delete_file(entry)

        assert result.success is False
        assert "Error deleting" in result.error

    def test_already_deleted_entry_is_not_counted_again(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [200, 100])
        catalog = scan_catalog(temp_dir)
        entry = catalog.folders[0].files[0]
        ops = FileOperations(catalog)
        ops.delete_file(entry)

        result = ops.delete_file(entry)

        assert result.success is False
        assert "Already deleted" in result.error
        assert catalog.reclaimed_bytes == 200


class TestDeleteFolder:
    """Tests for deleting every archive in a folder."""

    def test_delete_folder_removes_all_archives(self, backup_tree: Dict[str, Path]) -> None:
        catalog = scan_catalog(backup_tree["root"])
        folder = next(f for f in catalog.folders if f.path == backup_tree["alpha"])

        outcome = FileOperations(catalog).delete_folder(folder)

        assert outcome.files_deleted == 2
        assert outcome.files_failed == 0
        assert outcome.bytes_reclaimed == 300
        assert folder.deleted is True
        assert folder.total_size == 0
        assert all(e.deleted for e in folder.files)
        assert not list(backup_tree["alpha"].glob("*.wpress"))
        assert catalog.reclaimed_bytes == 300
        assert folder not in catalog.visible_folders()

    def test_partial_failure_counts_only_successes(self, temp_dir: Path) -> None:
        """One of three archives fails: only the other two are reclaimed, folder still hidden."""
        create_backup_folder(temp_dir / "site", [100, 200, 400])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        failing = next(e for e in folder.files if e.size == 200)
        failing.path.unlink()

        outcome = FileOperations(catalog).delete_folder(folder)

        assert outcome.files_deleted == 2
        assert outcome.files_failed == 1
        assert outcome.bytes_reclaimed == 500
        assert catalog.reclaimed_bytes == 500
        assert failing.deleted is False
        assert folder.deleted is True
        assert folder.total_size == 200
        assert catalog.visible_folders() == []
        assert len(outcome.errors) == 1

    def test_files_attempted_in_stored_order(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [1, 2, 3])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]

        outcome = FileOperations(catalog).delete_folder(folder)

        assert [r.file for r in outcome.results] == folder.files

    def test_previously_deleted_archives_are_skipped(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "site", [100, 200])
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        ops = FileOperations(catalog)
        ops.delete_file(folder.files[0])

        outcome = ops.delete_folder(folder)

        assert len(outcome.results) == 1
        assert catalog.reclaimed_bytes == 300

    def test_other_folders_are_untouched(self, backup_tree: Dict[str, Path]) -> None:
        catalog = scan_catalog(backup_tree["root"])
        alpha = next(f for f in catalog.folders if f.path == backup_tree["alpha"])
        gamma = next(f for f in catalog.folders if f.path == backup_tree["gamma"])

        FileOperations(catalog).delete_folder(alpha)

        assert gamma.deleted is False
        assert gamma.total_size == 500
        assert catalog.visible_folders() == [gamma]


class TestReclaimedAccounting:
    """The reclaimed counter always equals the size of every deleted archive."""

    def test_conservation_over_mixed_operations(self, temp_dir: Path) -> None:
        create_backup_folder(temp_dir / "one", [100, 200, 300])
        create_backup_folder(temp_dir / "two", [50, 60])
        create_backup_folder(temp_dir / "three", [7])
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog)
        one, two, three = catalog.folders

        steps = [
            lambda: ops.delete_file(one.files[1]),
            lambda: ops.delete_file(three.files[0]),
            lambda: ops.delete_folder(two),
            lambda: ops.delete_file(one.files[1]),
            lambda: ops.delete_file(one.files[0]),
        ]
        for step in steps:
            step()
            assert catalog.reclaimed_bytes == deleted_bytes(catalog)

        assert catalog.reclaimed_bytes == 200 + 7 + 110 + 100


class TestRemoveFolderDirectory:
    """Tests for the optional empty directory removal."""

    def test_empty_directory_removed(self, temp_dir: Path) -> None:
        folder_path = temp_dir / "site" / "ai1wm-backups"
        folder_path.mkdir(parents=True)
        (folder_path / "only.wpress").write_bytes(b"x" * 10)
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog, remove_empty_dirs=True)

        outcome = ops.delete_folder(catalog.folders[0])

        assert outcome.directory_removed is True
        assert not folder_path.exists()

    def test_directory_with_other_files_kept(self, temp_dir: Path) -> None:
        folder_path = create_backup_folder(temp_dir / "site", [10])
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog, remove_empty_dirs=True)

        outcome = ops.delete_folder(catalog.folders[0])

        assert outcome.directory_removed is False
        assert folder_path.exists()
        assert (folder_path / "index.php").exists()
        assert catalog.folders[0].deleted is True

    def test_directory_kept_by_default(self, temp_dir: Path) -> None:
        folder_path = temp_dir / "site" / "ai1wm-backups"
        folder_path.mkdir(parents=True)
        (folder_path / "only.wpress").write_bytes(b"x" * 10)
        catalog = scan_catalog(temp_dir)

        outcome = FileOperations(catalog).delete_folder(catalog.folders[0])

        assert outcome.directory_removed is False
        assert folder_path.exists()

    def test_directory_listing_closed_before_return(self, temp_dir: Path) -> None:
        """The emptiness check closes its directory handle whether or not it removes."""
        folder_path = create_backup_folder(temp_dir / "site", [10])
        catalog = scan_catalog(temp_dir)
        ops = FileOperations(catalog, remove_empty_dirs=True)
        real_scandir = os.scandir
        closed = []

        class TrackedListing:
            def __init__(self, path):
                self._listing = real_scandir(path)

            def __enter__(self):
                return self._listing.__enter__()

            def __exit__(self, *exc_info):
                closed.append(True)
                return self._listing.__exit__(*exc_info)

        with patch("wpclean.operations.file_operations.os.scandir", TrackedListing):
            outcome = ops.delete_folder(catalog.folders[0])

        assert outcome.directory_removed is False
        assert folder_path.exists()
        assert closed == [True]

    def test_rmdir_failure_is_not_raised(self, temp_dir: Path) -> None:
        folder_path = temp_dir / "site" / "ai1wm-backups"
        folder_path.mkdir(parents=True)
        (folder_path / "only.wpress").write_bytes(b"x" * 10)
        catalog = scan_catalog(temp_dir)
        folder = catalog.folders[0]
        ops = FileOperations(catalog)
        ops.delete_folder(folder)

        with patch.object(Path, "rmdir", side_effect=PermissionError(13, "Permission denied")):
            assert ops.remove_folder_directory(folder) is False

        assert folder.deleted is True
