# app/models/registration.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import RegistrationStatus


class Registration(SQLModel, table=True):
    __tablename__ = "registrations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    full_name: str = Field(sa_column=Column(String(128), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False, index=True))
    phone: str = Field(sa_column=Column(String(32), nullable=False))
    age: int = Field(sa_column=Column(Integer, nullable=False))
    city: str = Field(sa_column=Column(String(128), nullable=False))

    talent_category: str = Field(sa_column=Column(String(64), nullable=False))
    experience: str = Field(sa_column=Column(String(64), nullable=False))
    motivation: str = Field(sa_column=Column(Text, nullable=False))
    previous_events: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    social_media: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    emergency_contact: str = Field(sa_column=Column(String(128), nullable=False))
    emergency_phone: str = Field(sa_column=Column(String(32), nullable=False))

    status: RegistrationStatus = Field(
        default=RegistrationStatus.pending,
        sa_column=Column(PGEnum(RegistrationStatus, name="registration_status"), nullable=False)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
