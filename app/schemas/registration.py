from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import RegistrationStatus


# ------------------------------------------------------------
# PUBLIC REGISTRATION FORM
# ------------------------------------------------------------
class RegistrationCreate(BaseModel):
    full_name: str = Field(min_length=1, max_length=128)
    email: EmailStr
    phone: str = Field(min_length=5, max_length=32)
    age: int = Field(ge=16, le=80)
    city: str = Field(min_length=1, max_length=128)
    talent_category: str = Field(min_length=1, max_length=64)
    experience: str = Field(min_length=1, max_length=64)
    motivation: str = Field(min_length=1)
    previous_events: Optional[str] = None
    social_media: Optional[str] = Field(default=None, max_length=255)
    emergency_contact: str = Field(min_length=1, max_length=128)
    emergency_phone: str = Field(min_length=5, max_length=32)


class RegistrationStatusUpdate(BaseModel):
    status: RegistrationStatus


class RegistrationRead(BaseModel):
    id: UUID
    full_name: str
    email: str
    phone: str
    age: int
    city: str
    talent_category: str
    experience: str
    motivation: str
    previous_events: Optional[str] = None
    social_media: Optional[str] = None
    emergency_contact: str
    emergency_phone: str
    status: RegistrationStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
