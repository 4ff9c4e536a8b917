"""Persistence for file metadata rows."""

from typing import List
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions.base import PersistenceError
from app.exceptions.file import FileRecordNotFoundError
from models.file import FileRecord


class FileRepository:
    """CRUD over FileRecord rows."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, record: FileRecord) -> FileRecord:
        """Insert a new row and return it with its generated id."""
        try:
            self.db.add(record)
            await self.db.commit()
            await self.db.refresh(record)
            return record
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to store file metadata: {str(e)}") from e

    async def find_by_id(self, file_id: UUID) -> FileRecord:
        try:
            result = await self.db.execute(select(FileRecord).where(FileRecord.id == file_id))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch file metadata: {str(e)}") from e

        record = result.scalar_one_or_none()
        if record is None:
            raise FileRecordNotFoundError(f"File {file_id} not found")
        return record

    async def list_by_owner(self, user_id: UUID) -> List[FileRecord]:
        stmt = (
            select(FileRecord)
            .where(FileRecord.user_id == user_id)
            .order_by(FileRecord.uploaded_at, FileRecord.id)
        )
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch user files: {str(e)}") from e
        return list(result.scalars().all())

    async def list_all(self) -> List[FileRecord]:
        try:
            result = await self.db.execute(select(FileRecord).order_by(FileRecord.uploaded_at))
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to fetch file metadata: {str(e)}") from e
        return list(result.scalars().all())

    async def delete(self, file_id: UUID) -> None:
        try:
            await self.db.execute(delete(FileRecord).where(FileRecord.id == file_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Failed to delete file metadata: {str(e)}") from e
