# app/api/endpoints/contact.py

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
from app.schemas.contact import ContactCreate, ContactRead, ContactStatusUpdate
from app.services.scoped_query import CONTACT_MESSAGES, get_owned, list_owned, mutate_owned
from app.services.turnstile import require_human

router = APIRouter(prefix="/api/contact", tags=["Contact"])

admin_only = AllowRoles(*ADMIN_ONLY)


@router.post("", status_code=201, dependencies=[Depends(require_human)])
@limiter.limit(settings.INTAKE_RATE_LIMIT)
async def send_message(
    request: Request,
    payload: ContactCreate,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    message = await mutate_owned(session, ctx, CONTACT_MESSAGES, "create", patch=payload.model_dump())
    return present(ContactRead.model_validate(message), status_code=201, message="Message sent successfully")


@router.get("")
async def list_messages(
    status: Optional[str] = None,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, CONTACT_MESSAGES, {"status": status})
    return present([ContactRead.model_validate(m) for m in await rows.all()])


@router.get("/{message_id}")
async def get_message(
    message_id: UUID,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    message = await get_owned(session, ctx, CONTACT_MESSAGES, message_id)
    return present(ContactRead.model_validate(message))


@router.put("/{message_id}/status")
async def update_message_status(
    message_id: UUID,
    payload: ContactStatusUpdate,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    message = await mutate_owned(
        session, ctx, CONTACT_MESSAGES, "update",
        target_id=message_id,
        patch={"status": payload.status},
    )
    return present(ContactRead.model_validate(message))
