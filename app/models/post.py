# app/models/post.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import PostType


class Post(SQLModel, table=True):
    """Club-wide announcements, event summaries and news items."""

    __tablename__ = "posts"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    title: str = Field(sa_column=Column(String(200), nullable=False))
    content: str = Field(sa_column=Column(Text, nullable=False))

    post_type: PostType = Field(
        default=PostType.announcement,
        sa_column=Column(PGEnum(PostType, name="post_type"), nullable=False)
    )
    image_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    is_public: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))

    created_by: Optional[uuid.UUID] = Field(default=None)

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
