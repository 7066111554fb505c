# app/models/event.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy import Enum as PGEnum
import datetime as dt
import uuid
from typing import Optional

from app.models.enums import EventStatus


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    title: str = Field(sa_column=Column(String(200), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    date: dt.date = Field(sa_column=Column(Date, nullable=False))
    time: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))
    location: Optional[str] = Field(default=None, sa_column=Column(String(200), nullable=True))
    image_url: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    max_participants: Optional[int] = Field(default=None, sa_column=Column(Integer, nullable=True))
    registration_deadline: Optional[dt.date] = Field(default=None, sa_column=Column(Date, nullable=True))

    status: EventStatus = Field(
        default=EventStatus.upcoming,
        sa_column=Column(PGEnum(EventStatus, name="event_status"), nullable=False)
    )

    # NULL department = club-wide event, only admins manage it
    department_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(64), ForeignKey("departments.id"), nullable=True, index=True)
    )

    is_public: bool = Field(default=True, sa_column=Column(Boolean, nullable=False, default=True))

    # Weak reference: the creator account may be gone
    created_by: Optional[uuid.UUID] = Field(default=None)

    created_at: dt.datetime = Field(
        default_factory=dt.datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: dt.datetime = Field(
        default_factory=dt.datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
