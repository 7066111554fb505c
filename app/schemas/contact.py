from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import ContactStatus


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    subject: Optional[str] = Field(default=None, max_length=200)
    message: str = Field(min_length=1)


class ContactStatusUpdate(BaseModel):
    status: ContactStatus


class ContactRead(BaseModel):
    id: UUID
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    status: ContactStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
