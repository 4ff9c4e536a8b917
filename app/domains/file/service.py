"""File service layer with business logic."""

import logging
import os
from typing import BinaryIO, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.domains.file.repository import FileRepository
from app.domains.file.storage import LocalFileStorage
from app.exceptions.base import PersistenceError, StorageError
from app.schemas.file import FileResponse, OrphanReport, to_file_response
from models.base import utcnow
from models.file import FileRecord

logger = logging.getLogger(__name__)


class FileService:
    """
    Orchestrates the disk and metadata sides of stored files.

    The service is the only component that writes or removes stored files and
    their metadata rows. Bytes always reach the disk before a row is inserted,
    and on deletion the disk file goes before the row. The two steps are not
    covered by one transaction: a row whose disk removal succeeded but whose
    delete failed is left behind and picked up by ``reconcile_orphans``.
    """

    def __init__(self, db: AsyncSession, storage: Optional[LocalFileStorage] = None):
        self.db = db
        self.repository = FileRepository(db)
        self.storage = storage or LocalFileStorage()

    async def upload_file(
        self,
        user_id: UUID,
        stream: BinaryIO,
        filename: Optional[str],
        content_type: Optional[str],
        size: Optional[int] = None,
        folder_id: Optional[UUID] = None,
    ) -> FileResponse:
        """Write ``stream`` to disk under a fresh name, then record its metadata."""

        await run_in_threadpool(self.storage.ensure_base_dir)

        stored_name = self.storage.generate_stored_name(filename)
        stored_path, written = await run_in_threadpool(self.storage.save, stream, stored_name)

        if size is not None and size != written:
            logger.warning(
                "Declared size %s for %s differs from %s bytes written", size, stored_name, written
            )

        record = FileRecord(
            user_id=user_id,
            folder_id=folder_id,
            stored_name=stored_name,
            stored_path=stored_path,
            content_type=content_type,
            size=written,
            uploaded_at=utcnow(),
        )

        try:
            record = await self.repository.create(record)
        except PersistenceError:
            # Leave no disk file without a row
            await self._discard_stored_file(stored_path)
            raise

        logger.info("Stored file %s (%s bytes) for user %s", record.id, written, user_id)
        return to_file_response(record)

    async def get_file_by_id(self, file_id: UUID) -> FileResponse:
        record = await self.repository.find_by_id(file_id)
        return to_file_response(record)

    async def list_user_files(self, user_id: UUID) -> List[FileResponse]:
        records = await self.repository.list_by_owner(user_id)
        return [to_file_response(record) for record in records]

    async def delete_file(self, file_id: UUID) -> None:
        """Remove the disk file, then its metadata row."""

        record = await self.repository.find_by_id(file_id)

        await run_in_threadpool(self.storage.remove, record.stored_path)
        await self.repository.delete(file_id)

        logger.info("Deleted file %s for user %s", file_id, record.user_id)

    async def reconcile_orphans(
        self, apply: bool = False, grace_seconds: Optional[float] = None
    ) -> OrphanReport:
        """
        Find rows whose disk file is gone and stored files with no row.

        Rows and disk entries are matched by stored name, so the sweep gives the
        same answer however the upload directory is spelled. A file younger than
        ``grace_seconds`` (``settings.orphan_grace_seconds`` by default) is never
        reported as untracked: it may belong to an upload whose row is not
        committed yet.

        With ``apply`` the orphaned rows are deleted and the untracked files
        removed; otherwise the sweep only reports.
        """

        if grace_seconds is None:
            grace_seconds = settings.orphan_grace_seconds

        records = await self.repository.list_all()
        on_disk = await run_in_threadpool(self.storage.list_stored_paths)
        settled = await run_in_threadpool(self.storage.list_stored_paths, grace_seconds)

        names_on_disk = {os.path.basename(path) for path in on_disk}
        missing = []
        for record in records:
            if record.stored_name in names_on_disk:
                continue
            if not await run_in_threadpool(self.storage.exists, record.stored_path):
                missing.append(record)

        tracked = {record.stored_name for record in records}
        untracked = [path for path in settled if os.path.basename(path) not in tracked]

        if missing or untracked:
            logger.warning(
                "Orphan sweep found %s rows without files and %s files without rows",
                len(missing),
                len(untracked),
            )

        if apply:
            for record in missing:
                await self.repository.delete(record.id)
            for path in untracked:
                await run_in_threadpool(self.storage.remove, path)

        return OrphanReport(
            missing_files=[record.id for record in missing],
            untracked_files=untracked,
            applied=apply,
        )

    # Private helper methods
    async def _discard_stored_file(self, stored_path: str) -> None:
        try:
            await run_in_threadpool(self.storage.remove, stored_path)
            logger.info("Removed %s after failed metadata insert", stored_path)
        except StorageError as e:
            logger.error("❌ Orphaned file %s could not be removed: %s", stored_path, e.message)
