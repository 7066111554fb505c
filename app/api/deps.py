# app/api/deps.py

from typing import AsyncGenerator, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_session
from app.core.session import Caller, resolve_session


# ------------------------------------------------------------
# HTTP Bearer Authentication
# ------------------------------------------------------------
# auto_error=False: missing credentials mean "anonymous", the gate decides
bearer_scheme = HTTPBearer(auto_error=False)


# ------------------------------------------------------------
# DB Session
# ------------------------------------------------------------
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.ACCESS_TOKEN_COOKIE)


# ------------------------------------------------------------
# Resolve the caller (Principal or ANONYMOUS) for this request
# ------------------------------------------------------------
async def get_caller(
    token: Optional[str] = Depends(get_token),
    session: AsyncSession = Depends(get_db_session),
) -> Caller:
    return await resolve_session(session, token)
