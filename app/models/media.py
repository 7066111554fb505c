# app/models/media.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import List, Optional

from app.models.enums import MediaType


class Media(SQLModel, table=True):
    __tablename__ = "event_media"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    media_type: MediaType = Field(
        sa_column=Column(PGEnum(MediaType, name="media_type"), nullable=False)
    )
    media_url: str = Field(sa_column=Column(Text, nullable=False))
    thumbnail_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    # Set only when the file lives in our storage bucket
    storage_path: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    department_id: str = Field(
        sa_column=Column(String(64), ForeignKey("departments.id"), nullable=False, index=True)
    )
    event_id: Optional[uuid.UUID] = Field(
        default=None,
        sa_column=Column(Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    )

    is_featured: bool = Field(default=False, sa_column=Column(Boolean, nullable=False, default=False))
    is_public: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))

    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    uploaded_by: Optional[uuid.UUID] = Field(default=None)

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
