from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import PostType


class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    post_type: PostType = PostType.announcement
    image_url: Optional[str] = None
    is_public: bool = True


class PostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    post_type: Optional[PostType] = None
    image_url: Optional[str] = None
    is_public: Optional[bool] = None


class PostRead(BaseModel):
    id: UUID
    title: str
    content: str
    post_type: PostType
    image_url: Optional[str] = None
    is_public: bool
    created_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
