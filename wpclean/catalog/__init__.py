"""Backup catalog package for wpclean.

Exports the BackupCatalog class, which holds scan results, answers
visibility queries and keeps folder rollups consistent with deletions.
"""

from .backup_catalog import BackupCatalog

__all__ = ["BackupCatalog"]
