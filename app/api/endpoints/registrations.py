# app/api/endpoints/registrations.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.config import settings
from app.core.constants import ADMIN_ONLY
from app.core.rate_limiter import limiter
from app.core.rbac import AllowRoles, AuthorizationContext, public_access
from app.core.responses import present
from app.schemas.registration import RegistrationCreate, RegistrationRead, RegistrationStatusUpdate
from app.services.scoped_query import REGISTRATIONS, get_owned, list_owned, mutate_owned
from app.services.turnstile import require_human

router = APIRouter(prefix="/api/registrations", tags=["Registrations"])

admin_only = AllowRoles(*ADMIN_ONLY)


# ------------------------------------------------------------
# PUBLIC FORM
# ------------------------------------------------------------
@router.post("", status_code=201, dependencies=[Depends(require_human)])
@limiter.limit(settings.INTAKE_RATE_LIMIT)
async def submit_registration(
    request: Request,
    payload: RegistrationCreate,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    registration = await mutate_owned(session, ctx, REGISTRATIONS, "create", patch=payload.model_dump())
    return present(
        RegistrationRead.model_validate(registration),
        status_code=201,
        message="Registration submitted successfully",
    )


# ------------------------------------------------------------
# ADMIN REVIEW
# ------------------------------------------------------------
@router.get("")
async def list_registrations(
    status: Optional[str] = None,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, REGISTRATIONS, {"status": status})
    return present([RegistrationRead.model_validate(r) for r in await rows.all()])


@router.get("/{registration_id}")
async def get_registration(
    registration_id: UUID,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    registration = await get_owned(session, ctx, REGISTRATIONS, registration_id)
    return present(RegistrationRead.model_validate(registration))


@router.put("/{registration_id}/status")
async def update_registration_status(
    registration_id: UUID,
    payload: RegistrationStatusUpdate,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    registration = await mutate_owned(
        session, ctx, REGISTRATIONS, "update",
        target_id=registration_id,
        patch={"status": payload.status},
    )
    return present(RegistrationRead.model_validate(registration))
