"""File API controller with FastAPI endpoints."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from fastapi.responses import FileResponse as FileDownload

from app.core.dependencies import get_current_user, get_file_service, validate_token
from app.domains.file.service import FileService
from app.exceptions.base import StorageError
from app.exceptions.file import FilePermissionError
from app.schemas.base import ResponseSchema
from app.schemas.file import FileListResponse, FileResponse
from models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/files",
    tags=["files"],
    dependencies=[Depends(validate_token)],  # Global token validation for all routes
)


async def _get_owned_file(service: FileService, file_id: UUID, user: User) -> FileResponse:
    stored = await service.get_file_by_id(file_id)
    if stored.user_id != user.id:
        raise FilePermissionError()
    return stored


@router.post("/", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def upload_file(
    file: UploadFile = File(..., description="File to store"),
    folder_id: Optional[UUID] = Form(None),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Upload a file for the current user."""

    return await service.upload_file(
        user_id=current_user.id,
        stream=file.file,
        filename=file.filename,
        content_type=file.content_type,
        size=file.size,
        folder_id=folder_id,
    )


@router.get("/", response_model=FileListResponse)
async def list_files(
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """List every file owned by the current user."""

    files = await service.list_user_files(current_user.id)
    return FileListResponse(files=files, total=len(files))


@router.get("/{file_id}", response_model=FileResponse)
async def get_file(
    file_id: UUID = Path(..., description="File ID"),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Get metadata for one of the current user's files."""

    return await _get_owned_file(service, file_id, current_user)


@router.get("/{file_id}/download")
async def download_file(
    file_id: UUID = Path(..., description="File ID"),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Stream the stored bytes back to their owner."""

    stored = await _get_owned_file(service, file_id, current_user)
    if not service.storage.exists(stored.file_path):
        raise StorageError(f"Stored content for file {file_id} is missing")
    return FileDownload(
        stored.file_path,
        media_type=stored.mime_type or "application/octet-stream",
        filename=stored.file_name,
    )


@router.delete("/{file_id}", response_model=ResponseSchema)
async def delete_file(
    file_id: UUID = Path(..., description="File ID"),
    current_user: User = Depends(get_current_user),
    service: FileService = Depends(get_file_service),
):
    """Delete a file from disk and its metadata."""

    await _get_owned_file(service, file_id, current_user)
    await service.delete_file(file_id)

    logger.info("User %s deleted file %s", current_user.id, file_id)
    return ResponseSchema(status="success", message="File deleted successfully")
