# app/api/endpoints/sponsorships.py

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
from app.schemas.sponsorship import SponsorshipCreate, SponsorshipRead, SponsorshipStatusUpdate
from app.services.scoped_query import SPONSORSHIPS, get_owned, list_owned, mutate_owned
from app.services.turnstile import require_human

router = APIRouter(prefix="/api/sponsorships", tags=["Sponsorships"])

admin_only = AllowRoles(*ADMIN_ONLY)


@router.post("", status_code=201, dependencies=[Depends(require_human)])
@limiter.limit(settings.INTAKE_RATE_LIMIT)
async def submit_inquiry(
    request: Request,
    payload: SponsorshipCreate,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    inquiry = await mutate_owned(session, ctx, SPONSORSHIPS, "create", patch=payload.model_dump())
    return present(
        SponsorshipRead.model_validate(inquiry),
        status_code=201,
        message="Sponsorship inquiry submitted successfully",
    )


@router.get("")
async def list_inquiries(
    status: Optional[str] = None,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, SPONSORSHIPS, {"status": status})
    return present([SponsorshipRead.model_validate(s) for s in await rows.all()])


@router.get("/{inquiry_id}")
async def get_inquiry(
    inquiry_id: UUID,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    inquiry = await get_owned(session, ctx, SPONSORSHIPS, inquiry_id)
    return present(SponsorshipRead.model_validate(inquiry))


@router.put("/{inquiry_id}/status")
async def update_inquiry_status(
    inquiry_id: UUID,
    payload: SponsorshipStatusUpdate,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    inquiry = await mutate_owned(
        session, ctx, SPONSORSHIPS, "update",
        target_id=inquiry_id,
        patch={"status": payload.status},
    )
    return present(SponsorshipRead.model_validate(inquiry))
