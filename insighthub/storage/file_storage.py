"""
Local file storage for uploaded data files.

Files are stored under a single upload directory with generated names.
A missing file is reported separately from an empty one: callers rely on
that to tell "nothing uploaded" apart from "valid but empty document".
"""

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from insighthub.core.config import settings
from insighthub.core.logging import setup_logger


class FileStorageError(RuntimeError):
    """Storage operation failed for a reason other than a missing file."""


class StoredFileNotFoundError(FileNotFoundError):
    """Requested file does not exist in the upload directory."""


@dataclass
class StoredFile:
    filename: str
    stored_path: str


_PREFIX_UNSAFE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


class FileStorage:
    """
    Store, read and delete uploaded files in one directory.
    """

    def __init__(
        self,
        upload_dir: Optional[Union[str, Path]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            upload_dir: Target directory (defaults to UPLOAD_DIR setting)
            logger: Injected logger (defaults to the application logger)
        """
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.logger = logger or setup_logger(settings.LOG_LEVEL)

    def ensure_upload_dir(self) -> Path:
        """
        Create the upload directory if needed.

        Raises:
            FileStorageError: If the directory cannot be created
        """
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"Failed to create upload directory {self.upload_dir}: {e}")
            raise FileStorageError("Failed to initialize file storage system") from e

        self.logger.info(f"Upload directory created/confirmed: {self.upload_dir}")
        return self.upload_dir

    def _resolve(self, filename: str) -> Path:
        # Only the final path component is honored
        return self.upload_dir / Path(filename).name

    def store_file(
        self,
        content: Union[bytes, str],
        original_name: str,
        prefix: str = ""
    ) -> StoredFile:
        """
        Write an uploaded file under a generated unique name.

        Args:
            content: File body (text is written as UTF-8)
            original_name: Client-side file name, used for the extension
            prefix: Optional name prefix; non-alphanumerics become '_'

        Returns:
            StoredFile with the generated filename and full path

        Raises:
            FileStorageError: If the file cannot be written
        """
        sanitized_prefix = _PREFIX_UNSAFE.sub("_", prefix)
        extension = Path(original_name).suffix
        filename = f"{sanitized_prefix + '_' if sanitized_prefix else ''}{uuid.uuid4()}{extension}"
        stored_path = self.upload_dir / filename

        data = content.encode("utf-8") if isinstance(content, str) else content
        self.logger.info(
            f"Storing file original_name={original_name} stored_filename={filename} size={len(data)}"
        )

        try:
            self.ensure_upload_dir()
            stored_path.write_bytes(data)
        except (OSError, FileStorageError) as e:
            self.logger.error(f"Error storing file {original_name}: {e}")
            raise FileStorageError("Failed to store file") from e

        return StoredFile(filename=filename, stored_path=str(stored_path))

    def get_file_content(self, filename: str) -> str:
        """
        Read a stored file as UTF-8 text.

        Raises:
            StoredFileNotFoundError: If the file does not exist
            FileStorageError: If the file exists but cannot be read
        """
        path = self._resolve(filename)

        if not path.is_file():
            self.logger.error(f"File not found: {filename}")
            raise StoredFileNotFoundError(f"File not found: {filename}")

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Error reading file {filename}: {e}")
            raise FileStorageError(f"Failed to read file: {e}") from e

        self.logger.info(f"Successfully read file: {filename} size={len(content)}")
        return content

    def delete_file(self, filename: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if deleted, False if it did not exist

        Raises:
            FileStorageError: If the file exists but cannot be removed
        """
        path = self._resolve(filename)

        if not path.is_file():
            self.logger.warning(f"File not found for deletion: {filename}")
            return False

        try:
            path.unlink()
        except OSError as e:
            self.logger.error(f"Error deleting file {filename}: {e}")
            raise FileStorageError("Failed to delete file") from e

        self.logger.info(f"File deleted: {filename}")
        return True
