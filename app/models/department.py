from sqlmodel import SQLModel, Field
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from datetime import datetime
from typing import Optional
import uuid


class Department(SQLModel, table=True):
    __tablename__ = "departments"

    # Slug ids ("education", "environmental") are what the front-end routes on
    id: str = Field(
        sa_column=Column(String(64), primary_key=True)
    )

    name: str = Field(
        sa_column=Column(String(128), nullable=False, unique=True)
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True)
    )

    icon: Optional[str] = Field(
        default=None,
        sa_column=Column(String(16), nullable=True)
    )


class DepartmentAdminGrant(SQLModel, table=True):
    """
    Grants a department_admin access to one department.
    Revocation flips `is_active`; rows are kept for history.
    """

    __tablename__ = "department_admins"
    __table_args__ = (UniqueConstraint("user_id", "department_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )

    department_id: str = Field(
        sa_column=Column(String(64), ForeignKey("departments.id"), nullable=False, index=True)
    )

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
