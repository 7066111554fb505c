# app/models/sponsorship.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import List, Optional

from app.models.enums import SponsorshipStatus


class SponsorshipInquiry(SQLModel, table=True):
    __tablename__ = "sponsorship_inquiries"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    company_name: str = Field(sa_column=Column(String(200), nullable=False))
    contact_person: str = Field(sa_column=Column(String(128), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    phone: str = Field(sa_column=Column(String(32), nullable=False))
    website: Optional[str] = Field(default=None, sa_column=Column(String(255), nullable=True))

    sponsorship_type: str = Field(sa_column=Column(String(64), nullable=False))
    budget: str = Field(sa_column=Column(String(64), nullable=False))
    message: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    interests: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    status: SponsorshipStatus = Field(
        default=SponsorshipStatus.pending,
        sa_column=Column(PGEnum(SponsorshipStatus, name="sponsorship_status"), nullable=False)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
