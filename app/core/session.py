# app/core/session.py

import uuid
from dataclasses import dataclass
from typing import Optional, Union

import jwt
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import SessionBackendUnavailable
from app.core.security import decode_token
from app.services.auth_service import get_user_by_id, is_token_revoked


@dataclass(frozen=True)
class Principal:
    id: uuid.UUID
    email: str
    display_name: Optional[str] = None
    token_id: Optional[str] = None

    is_authenticated = True


class _Anonymous:
    is_authenticated = False
    id = None

    def __repr__(self) -> str:
        return "ANONYMOUS"


ANONYMOUS = _Anonymous()

Caller = Union[Principal, _Anonymous]


def _parse_subject(payload: dict) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(payload.get("sub")))
    except (TypeError, ValueError):
        return None


async def resolve_session(session: AsyncSession, token: Optional[str]) -> Caller:
    """
    Turns a bearer token into a Principal.

    Bad, expired, revoked or orphaned tokens resolve to ANONYMOUS; only a
    database failure while checking the token is an error.
    """
    if not token:
        return ANONYMOUS

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        logger.debug("Expired access token presented")
        return ANONYMOUS
    except jwt.InvalidTokenError:
        logger.debug("Malformed access token presented")
        return ANONYMOUS

    user_id = _parse_subject(payload)
    if user_id is None:
        return ANONYMOUS

    jti = payload.get("jti")

    try:
        if jti and await is_token_revoked(session, jti):
            return ANONYMOUS
        user = await get_user_by_id(session, user_id)
    except SQLAlchemyError as e:
        logger.error(f"Session validation failed, database unreachable: {e}")
        raise SessionBackendUnavailable("session store unreachable") from e

    if not user or not user.is_active:
        return ANONYMOUS

    return Principal(
        id=user.id,
        email=user.email,
        display_name=user.full_name,
        token_id=jti,
    )
