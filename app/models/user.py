# app/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Boolean, DateTime, ForeignKey, String, Uuid
from sqlalchemy import Enum as PGEnum
from datetime import datetime
import uuid
from typing import Optional

from app.models.enums import UserRole


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    full_name: Optional[str] = Field(default=None, sa_column=Column(String(128), nullable=True))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(32), nullable=True))

    is_active: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, default=True)
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class RoleAssignment(SQLModel, table=True):
    """One global role per principal. A missing row means plain `user`."""

    __tablename__ = "user_roles"

    user_id: uuid.UUID = Field(
        sa_column=Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    )

    role: UserRole = Field(
        default=UserRole.user,
        sa_column=Column(PGEnum(UserRole, name="user_role"), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )


class RevokedToken(SQLModel, table=True):
    __tablename__ = "revoked_tokens"

    jti: str = Field(sa_column=Column(String(64), primary_key=True))
    user_id: Optional[uuid.UUID] = Field(default=None, index=True)

    revoked_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
    # Rows past this instant are purged on the next sign-out; the token is dead by then.
    expires_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True)
    )
