"""Local disk storage for uploaded file contents."""

import logging
import os
import time
import uuid
from pathlib import Path
from typing import BinaryIO

from app.core.config import settings
from app.exceptions.base import StorageError

logger = logging.getLogger(__name__)


class LocalFileStorage:
    """
    Stores file contents under a single base directory.

    Every stored file gets a fresh random name that keeps only the extension of
    the uploaded filename, so concurrent uploads never need coordination and
    the original filename never reaches the disk.

    :ivar base_path: Absolute directory holding every stored file. A relative
        setting is resolved against the working directory at construction, so
        stored paths stay valid wherever they are read later.
    :type base_path: Path
    :ivar chunk_size: Number of bytes read from the source stream per copy step.
    :type chunk_size: int
    """

    def __init__(self, base_path: str | os.PathLike | None = None, chunk_size: int | None = None):
        self.base_path = Path(base_path or settings.upload_dir).resolve()
        self.chunk_size = chunk_size or settings.upload_chunk_size

    def ensure_base_dir(self) -> Path:
        """Create the base directory and any missing parents."""
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create upload directory: {str(e)}") from e
        return self.base_path

    @staticmethod
    def generate_stored_name(original_filename: str | None) -> str:
        """Random UUID name carrying over the extension of ``original_filename``."""
        basename = os.path.basename((original_filename or "").replace("\\", "/"))
        _, ext = os.path.splitext(basename)
        return f"{uuid.uuid4()}{ext}"

    def path_for(self, stored_name: str) -> Path:
        return self.base_path / stored_name

    def save(self, stream: BinaryIO, stored_name: str) -> tuple[str, int]:
        """
        Copy ``stream`` to ``base_path/stored_name``.

        :return: The path written to and the number of bytes written.
        :raises StorageError: If the file cannot be created or written. A partially
            written file is removed before raising.
        """
        path = self.path_for(stored_name)
        written = 0
        created = False
        try:
            # "x" refuses to overwrite an existing file
            with open(path, "xb") as dst:
                created = True
                while True:
                    chunk = stream.read(self.chunk_size)
                    if not chunk:
                        break
                    dst.write(chunk)
                    written += len(chunk)
        except OSError as e:
            if created:
                self._discard_partial(path)
            raise StorageError(f"Failed to save file: {str(e)}") from e

        return str(path), written

    def remove(self, stored_path: str) -> None:
        try:
            os.remove(stored_path)
        except OSError as e:
            raise StorageError(f"Failed to delete file from disk: {str(e)}") from e

    def exists(self, stored_path: str) -> bool:
        return os.path.isfile(stored_path)

    def list_stored_paths(self, older_than: float | None = None) -> list[str]:
        """
        Paths of every regular file in the base directory.

        :param older_than: If given, only files last modified at least this many
            seconds ago are listed.
        """
        if not self.base_path.is_dir():
            return []
        cutoff = time.time() - older_than if older_than is not None else None
        try:
            return sorted(
                str(entry)
                for entry in self.base_path.iterdir()
                if entry.is_file() and (cutoff is None or entry.stat().st_mtime <= cutoff)
            )
        except OSError as e:
            raise StorageError(f"Failed to list upload directory: {str(e)}") from e

    @staticmethod
    def _discard_partial(path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove partial file %s: %s", path, str(e))
