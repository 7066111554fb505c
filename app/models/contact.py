from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, String, Text
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import ContactStatus


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contact_messages"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    name: str = Field(sa_column=Column(String(128), nullable=False))
    email: str = Field(sa_column=Column(String(255), nullable=False))
    subject: Optional[str] = Field(default=None, sa_column=Column(String(200), nullable=True))
    message: str = Field(sa_column=Column(Text, nullable=False))

    status: ContactStatus = Field(
        default=ContactStatus.new,
        sa_column=Column(PGEnum(ContactStatus, name="contact_status"), nullable=False)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
