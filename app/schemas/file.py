"""File schemas for request/response serialization."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from models.file import FileRecord

from .base import BaseSchema


class FileResponse(BaseSchema):
    """External representation of one stored file."""

    id: UUID
    user_id: UUID
    folder_id: UUID | None = None
    file_name: str
    file_path: str
    mime_type: str | None = None
    size: int = Field(..., ge=0)
    created_at: datetime


class FileListResponse(BaseSchema):
    """Schema for file list response."""

    files: list[FileResponse]
    total: int


class OrphanReport(BaseSchema):
    """Result of a storage reconciliation sweep."""

    missing_files: list[UUID] = []
    untracked_files: list[str] = []
    applied: bool = False

    @property
    def is_consistent(self) -> bool:
        return not self.missing_files and not self.untracked_files


def to_file_response(record: FileRecord) -> FileResponse:
    """Map a FileRecord row to its external representation."""
    return FileResponse(
        id=record.id,
        user_id=record.user_id,
        folder_id=record.folder_id,
        file_name=record.stored_name,
        file_path=record.stored_path,
        mime_type=record.content_type,
        size=record.size or 0,
        created_at=record.uploaded_at,
    )
