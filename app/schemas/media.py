from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
from uuid import UUID
from datetime import datetime

from app.models.enums import MediaType


def split_tags(value: Union[str, List[str], None]) -> List[str]:
    """Accepts "a, b ,c" (form input) or a list; drops blanks."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [tag.strip() for tag in value if tag and tag.strip()]


class MediaCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    media_type: MediaType
    media_url: str = Field(min_length=1)
    thumbnail_url: Optional[str] = None
    department_id: str
    event_id: Optional[UUID] = None
    is_featured: bool = False
    is_public: bool = True
    tags: List[str] = []

    @field_validator("tags", mode="before")
    def split_tag_input(cls, v):
        return split_tags(v)


class MediaUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    media_type: Optional[MediaType] = None
    media_url: Optional[str] = Field(default=None, min_length=1)
    thumbnail_url: Optional[str] = None
    department_id: Optional[str] = None
    event_id: Optional[UUID] = None
    is_featured: Optional[bool] = None
    is_public: Optional[bool] = None
    tags: Optional[List[str]] = None

    @field_validator("tags", mode="before")
    def split_tag_input(cls, v):
        return None if v is None else split_tags(v)


class MediaRead(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    media_type: MediaType
    media_url: str
    thumbnail_url: Optional[str] = None
    department_id: str
    event_id: Optional[UUID] = None
    is_featured: bool
    is_public: bool
    tags: List[str] = []
    uploaded_by: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
