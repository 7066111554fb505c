from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr
from app.models.enums import UserRole


# ---------------------------------------------------------
# READ USER (response)
# ---------------------------------------------------------
class UserRead(BaseModel):
    id: UUID
    email: EmailStr
    full_name: Optional[str] = None
    phone: Optional[str] = None
    role: UserRole = UserRole.user

    class Config:
        from_attributes = True
