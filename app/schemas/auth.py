from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

from app.models.enums import UserRole
from app.schemas.department import DepartmentRead
from app.schemas.user import UserRead


# -------------------------------------------------------------------
# SIGN-UP REQUEST (public; role is always `user`)
# -------------------------------------------------------------------
class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)
    full_name: str = Field(min_length=1, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=32)

    class Config:
        json_schema_extra = {
            "examples": [
                {
                    "email": "volunteer@example.com",
                    "password": "password123",
                    "full_name": "Asha Verma",
                    "phone": "9876543210",
                }
            ]
        }


# -------------------------------------------------------------------
# SIGN-IN REQUEST
# -------------------------------------------------------------------
class SignInRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# TOKEN + USER DETAILS (sign-in response)
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    user: UserRead


# -------------------------------------------------------------------
# CURRENT PRINCIPAL + AUTHORIZATION
# -------------------------------------------------------------------
class MeResponse(BaseModel):
    user: UserRead
    role: UserRole
    # None means every department (admin)
    department_ids: Optional[List[str]] = None
    departments: List[DepartmentRead] = []
