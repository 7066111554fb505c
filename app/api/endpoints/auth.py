# app/api/endpoints/auth.py

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

# Schemas
from app.schemas.auth import MeResponse, SignInRequest, SignUpRequest
from app.schemas.department import DepartmentRead
from app.schemas.user import UserRead

# Services
from app.services.auth_service import (
    authenticate_user,
    create_login_response,
    create_user,
    get_user_by_id,
    revoke_token,
)
from app.services.department_service import get_departments_by_ids, list_departments

# Core
from app.core.config import settings
from app.core.errors import InvalidCredentials, Unauthenticated
from app.core.rate_limiter import limiter
from app.core.rbac import AuthorizationContext, authenticated
from app.core.responses import present

# Deps
from app.api.deps import get_db_session, get_token

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# -------------------------------------------------------------------
# SIGN UP (always a plain `user`)
# -------------------------------------------------------------------
@router.post("/signup", status_code=201)
@limiter.limit(settings.SIGNIN_RATE_LIMIT)
async def signup(
    request: Request,
    payload: SignUpRequest,
    session: AsyncSession = Depends(get_db_session),
):
    user = await create_user(
        session=session,
        email=payload.email,
        password=payload.password,
        full_name=payload.full_name,
        phone=payload.phone,
    )
    return present(UserRead.model_validate(user), status_code=201, message="Account created")


# -------------------------------------------------------------------
# SIGN IN
# -------------------------------------------------------------------
@router.post("/signin")
@limiter.limit(settings.SIGNIN_RATE_LIMIT)
async def signin(
    request: Request,
    payload: SignInRequest,
    session: AsyncSession = Depends(get_db_session),
):
    user = await authenticate_user(session, payload.email, payload.password)
    if not user:
        raise InvalidCredentials(f"failed sign-in for {payload.email}")

    login = await create_login_response(user, session)

    response = present(login)
    response.set_cookie(
        key=settings.ACCESS_TOKEN_COOKIE,
        value=login.access_token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        secure=settings.ENV == "prod",
        samesite="lax",
    )
    return response


# -------------------------------------------------------------------
# SIGN OUT
# -------------------------------------------------------------------
@router.post("/signout")
async def signout(
    ctx: AuthorizationContext = Depends(authenticated),
    token: Optional[str] = Depends(get_token),
    session: AsyncSession = Depends(get_db_session),
):
    if token:
        await revoke_token(session, token)

    response = present(None, message="Signed out successfully")
    response.delete_cookie(settings.ACCESS_TOKEN_COOKIE)
    return response


# -------------------------------------------------------------------
# CURRENT PRINCIPAL (role + departments drive the dashboards)
# -------------------------------------------------------------------
@router.get("/me")
async def me(
    ctx: AuthorizationContext = Depends(authenticated),
    session: AsyncSession = Depends(get_db_session),
):
    user = await get_user_by_id(session, ctx.principal_id)
    if not user:
        raise Unauthenticated("principal vanished mid-request")

    if ctx.is_admin:
        department_ids = None
        departments = await list_departments(session)
    else:
        department_ids = sorted(ctx.department_ids)
        departments = await get_departments_by_ids(session, department_ids)

    user_read = UserRead.model_validate(user)
    user_read.role = ctx.effective_role

    return present(
        MeResponse(
            user=user_read,
            role=ctx.effective_role,
            department_ids=department_ids,
            departments=[DepartmentRead.model_validate(d) for d in departments],
        )
    )
