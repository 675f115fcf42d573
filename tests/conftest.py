"""Pytest fixtures for wpclean tests."""

import io
import os
import tempfile
import time
from datetime import datetime
from pathlib import Path
from typing import Dict, Generator, List, Optional, Sequence

import pytest
from rich.console import Console

from wpclean.catalog import BackupCatalog
from wpclean.models import BackupFolder, FileEntry, Intent
from wpclean.operations import FileOperations
from wpclean.scanning import BackupScanner
from wpclean.ui import CleanerTUI

DAY = 24 * 60 * 60


def create_archive(path: Path, size: int, age_days: float = 0.0) -> Path:
    """Create a file of ``size`` bytes whose mtime is ``age_days`` in the past.

    Args:
        path: File to create; parent directories are created as needed.
        size: Number of bytes to write.
        age_days: How many days ago the file was last modified.

    Returns:
        The created path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"w" * size)
    mtime = time.time() - age_days * DAY
    os.utime(path, (mtime, mtime))
    return path


def create_backup_folder(
    site_dir: Path, sizes: Sequence[int], prefix: str = "backup"
) -> Path:
    """Create ``<site>/wp-content/ai1wm-backups`` holding one archive per size.

    Archives are named ``<prefix>-<n>.wpress``; archive n is n days old, so
    the first size is the newest. The folder also gets the index.php stub
    the plugin writes.

    Returns:
        Path to the ai1wm-backups directory.
    """
    folder = site_dir / "wp-content" / BackupScanner.BACKUP_FOLDER_NAME
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "index.php").write_text("<?php // silence")
    for n, size in enumerate(sizes):
        create_archive(folder / f"{prefix}-{n}.wpress", size, age_days=n)
    return folder


def make_entry(
    name: str,
    size: int,
    base_dir: Path = Path("/srv/www/site/wp-content/ai1wm-backups"),
    modified_at: Optional[datetime] = None,
) -> FileEntry:
    """Build an in-memory FileEntry without touching the filesystem."""
    return FileEntry(
        name=name,
        path=base_dir / name,
        size=size,
        modified_at=modified_at or datetime(2024, 1, 1),
    )


def make_folder(path: Path, entries: List[FileEntry]) -> BackupFolder:
    """Build an in-memory BackupFolder with rollups matching its entries."""
    return BackupFolder(
        path=path,
        files=entries,
        total_size=sum(e.size for e in entries),
        last_modified=max(e.modified_at for e in entries) if entries else None,
    )


class ScriptedKeyReader:
    """KeyReader stand-in that replays a fixed list of intents, then quits."""

    def __init__(self, intents: Sequence[Intent]) -> None:
        self._intents = list(intents)
        self.reads = 0

    def read_intent(self) -> Intent:
        self.reads += 1
        if self._intents:
            return self._intents.pop(0)
        return Intent.QUIT


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for isolated test environments.

    Yields:
        Path to the temporary directory.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def backup_tree(temp_dir: Path) -> Dict[str, Path]:
    """Create a web root with a mix of backup folders.

    Creates:
        www/
        ├── alpha/wp-content/ai1wm-backups/    backup-0 (200), backup-1 (100)
        ├── beta/wp-content/ai1wm-backups/     index.php only
        ├── gamma/wp-content/ai1wm-backups/    backup-0 (500)
        └── project/
            ├── node_modules/pkg/wp-content/ai1wm-backups/  backup-0 (1000)
            ├── vendor/wp-content/ai1wm-backups/            backup-0 (1000)
            └── .git/wp-content/ai1wm-backups/              backup-0 (1000)

    Returns:
        Dictionary with the root and each backup folder path.
    """
    root = temp_dir / "www"
    root.mkdir()

    tree = {"root": root}
    tree["alpha"] = create_backup_folder(root / "alpha", [200, 100])
    tree["beta"] = create_backup_folder(root / "beta", [])
    tree["gamma"] = create_backup_folder(root / "gamma", [500])
    tree["node_modules"] = create_backup_folder(root / "project" / "node_modules" / "pkg", [1000])
    tree["vendor"] = create_backup_folder(root / "project" / "vendor", [1000])
    tree["git"] = create_backup_folder(root / "project" / ".git", [1000])
    return tree


@pytest.fixture
def backup_catalog(backup_tree: Dict[str, Path]) -> BackupCatalog:
    """Catalog built from a real scan of ``backup_tree``."""
    return BackupCatalog(BackupScanner().scan(backup_tree["root"]))


@pytest.fixture
def file_operations(backup_catalog: BackupCatalog) -> FileOperations:
    return FileOperations(backup_catalog)


@pytest.fixture
def tui_with_output(backup_tree: Dict[str, Path]):
    """Create a CleanerTUI writing to a StringIO.

    Returns:
        Tuple of (CleanerTUI instance, StringIO for reading output).
    """
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=200)
    return CleanerTUI(console=console, root_path=backup_tree["root"]), output
