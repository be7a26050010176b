"""
Storage Module

Local storage for uploaded data files.
"""

from .file_storage import FileStorage, FileStorageError, StoredFile, StoredFileNotFoundError

__all__ = ["FileStorage", "FileStorageError", "StoredFile", "StoredFileNotFoundError"]
