"""Backup scanning package for wpclean.

This package provides the BackupScanner class, which walks a directory tree
for ``ai1wm-backups`` folders and collects the ``.wpress`` archives inside
them.

Example:
    >>> from wpclean.scanning import BackupScanner
    >>> from pathlib import Path
    >>>
    >>> scanner = BackupScanner()
    >>> folders = scanner.scan(Path("/var/www"))
"""

from .backup_scanner import BackupScanner

__all__ = ["BackupScanner"]
