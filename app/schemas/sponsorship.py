from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import SponsorshipStatus


class SponsorshipCreate(BaseModel):
    company_name: str = Field(min_length=1, max_length=200)
    contact_person: str = Field(min_length=1, max_length=128)
    email: EmailStr
    phone: str = Field(min_length=5, max_length=32)
    website: Optional[str] = Field(default=None, max_length=255)
    sponsorship_type: str = Field(min_length=1, max_length=64)
    budget: str = Field(min_length=1, max_length=64)
    message: Optional[str] = None
    interests: List[str] = []


class SponsorshipStatusUpdate(BaseModel):
    status: SponsorshipStatus


class SponsorshipRead(BaseModel):
    id: UUID
    company_name: str
    contact_person: str
    email: str
    phone: str
    website: Optional[str] = None
    sponsorship_type: str
    budget: str
    message: Optional[str] = None
    interests: List[str] = []
    status: SponsorshipStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
