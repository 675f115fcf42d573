"""File operations package for wpclean.

This package provides the FileOperations class for deleting backup archives
and whole backup folders, updating the BackupCatalog after each removal.

Example:
    >>> from wpclean.operations import FileOperations
    >>> ops = FileOperations(catalog)
    >>> result = ops.delete_folder(catalog.visible_folders()[0])
    >>> print(f"Deleted: {result.files_deleted}, Failed: {result.files_failed}")
"""

from .file_operations import FileOperations

__all__ = ["FileOperations"]
