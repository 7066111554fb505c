from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
import datetime as dt

from app.models.enums import EventStatus

DEFAULT_EVENT_IMAGE = (
    "https://images.pexels.com/photos/1763075/pexels-photo-1763075.jpeg"
    "?auto=compress&cs=tinysrgb&w=600"
)


# ------------------------------------------------------------
# CREATE (admin / department admin)
# ------------------------------------------------------------
class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    date: dt.date
    time: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = DEFAULT_EVENT_IMAGE
    max_participants: Optional[int] = Field(default=None, ge=1)
    status: EventStatus = EventStatus.upcoming
    registration_deadline: Optional[dt.date] = None
    department_id: Optional[str] = None
    is_public: bool = True


# ------------------------------------------------------------
# UPDATE (partial)
# ------------------------------------------------------------
class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, ge=1)
    status: Optional[EventStatus] = None
    registration_deadline: Optional[dt.date] = None
    department_id: Optional[str] = None
    is_public: Optional[bool] = None


class EventRead(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    date: dt.date
    time: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    max_participants: Optional[int] = None
    status: EventStatus
    registration_deadline: Optional[dt.date] = None
    department_id: Optional[str] = None
    is_public: bool
    created_by: Optional[UUID] = None
    created_at: dt.datetime
    updated_at: dt.datetime

    class Config:
        from_attributes = True
