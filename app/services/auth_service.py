# app/services/auth_service.py

from datetime import datetime, timezone
import uuid

import jwt
from loguru import logger
from sqlalchemy import delete
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.errors import ValidationError
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from app.models.enums import UserRole
from app.models.user import RevokedToken, RoleAssignment, User
from app.schemas.auth import TokenWithUser
from app.schemas.user import UserRead


# ============================================================================
# FETCH USER BY EMAIL
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


# ============================================================================
# FETCH USER BY ID
# ============================================================================
async def get_user_by_id(session: AsyncSession, user_id: uuid.UUID) -> User | None:
    result = await session.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_role(session: AsyncSession, user_id: uuid.UUID) -> UserRole:
    result = await session.execute(
        select(RoleAssignment.role).where(RoleAssignment.user_id == user_id)
    )
    return result.scalar_one_or_none() or UserRole.user


# ============================================================================
# CREATE USER (sign-up always yields a plain `user`)
# ============================================================================
async def create_user(
    session: AsyncSession,
    email: str,
    password: str,
    full_name: str | None = None,
    phone: str | None = None,
    role: UserRole = UserRole.user,
) -> User:
    user = User(
        id=uuid.uuid4(),
        email=email.strip().lower(),
        password_hash=hash_password(password),
        full_name=full_name,
        phone=phone,
    )
    session.add(user)

    try:
        await session.flush()
        session.add(RoleAssignment(user_id=user.id, role=role))
        await session.commit()
        await session.refresh(user)
        return user

    except IntegrityError:
        await session.rollback()
        raise ValidationError.for_field("email", "An account with this email already exists")


# ============================================================================
# AUTHENTICATE
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user or not user.is_active:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


async def create_login_response(user: User, session: AsyncSession) -> TokenWithUser:
    role = await get_role(session, user.id)

    token = create_access_token(
        subject=str(user.id),
        data={"email": user.email},
    )

    user_read = UserRead.model_validate(user)
    user_read.role = role

    return TokenWithUser(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=user_read,
    )


# ============================================================================
# SIGN-OUT / TOKEN REVOCATION
# ============================================================================
async def is_token_revoked(session: AsyncSession, jti: str) -> bool:
    result = await session.execute(select(RevokedToken.jti).where(RevokedToken.jti == jti))
    return result.scalar_one_or_none() is not None


async def revoke_token(session: AsyncSession, token: str) -> None:
    """
    Records the token's jti so it resolves to anonymous from now on.
    Tokens that no longer decode are already dead.
    """
    try:
        payload = decode_token(token)
    except jwt.PyJWTError:
        return

    jti = payload.get("jti")
    if not jti or await is_token_revoked(session, jti):
        return

    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError:
        user_id = None

    # Drop rows whose tokens have already expired
    await session.execute(delete(RevokedToken).where(RevokedToken.expires_at < datetime.now(timezone.utc)))

    session.add(
        RevokedToken(
            jti=jti,
            user_id=user_id,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    )
    await session.commit()
    logger.info(f"Token revoked for user {user_id}")
