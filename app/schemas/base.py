"""Base schemas for the application."""

from datetime import datetime
from typing import Any, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """Base schema class with common configuration."""
    model_config = ConfigDict(from_attributes=True)


class BaseModelSchema(BaseSchema):
    """Base schema for rows carrying the standard id and timestamps."""
    id: UUID
    created_at: datetime
    updated_at: datetime


class ResponseSchema(BaseSchema):
    """Plain acknowledgement for operations without a resource body."""
    status: Literal["success", "error"]
    message: Optional[str] = None
    data: Optional[dict] = None


class ErrorResponseSchema(BaseSchema):
    """Body of every error response rendered by the global handlers."""
    status: Literal["error"] = "error"
    message: str
    error_code: Optional[str] = None
    details: Any = None
    timestamp: datetime
    request_id: Optional[str] = None
