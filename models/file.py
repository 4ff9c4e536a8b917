"""
File model for uploaded file metadata.
"""

from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from .base import UUID, BaseModel, utcnow


class FileRecord(BaseModel):
    """
    Metadata row describing one uploaded file.

    Each row points at exactly one file on disk (``stored_path``). Rows are
    written only after the bytes are on disk and are never updated; deletion
    removes the disk file first and the row second.
    """

    __tablename__ = "files"
    __table_args__ = (CheckConstraint("size >= 0", name="ck_files_size_non_negative"),)

    user_id = Column(UUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Folders are resolved by the caller; no foreign key on purpose
    folder_id = Column(UUID(), nullable=True)
    stored_name = Column(String(255), nullable=False, unique=True)
    stored_path = Column(String(1024), nullable=False)
    content_type = Column(String(255))
    size = Column(BigInteger, nullable=False, default=0)
    uploaded_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    user = relationship("User", back_populates="files")
