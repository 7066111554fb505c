# app/api/endpoints/events.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.constants import CONTENT_MANAGERS
from app.core.rbac import AllowRoles, AuthorizationContext, public_access
from app.core.responses import present
from app.schemas.event import EventCreate, EventRead, EventUpdate
from app.services.scoped_query import EVENTS, get_owned, list_owned, mutate_owned

router = APIRouter(prefix="/api/events", tags=["Events"])

manage_events = AllowRoles(*CONTENT_MANAGERS)


# ------------------------------------------------------------
# PUBLIC (scoped) READS
# ------------------------------------------------------------
@router.get("")
async def list_events(
    status: Optional[str] = None,
    department_id: Optional[str] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, EVENTS, {"status": status, "department_id": department_id})
    return present([EventRead.model_validate(e) for e in await rows.all()])


@router.get("/{event_id}")
async def get_event(
    event_id: UUID,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    event = await get_owned(session, ctx, EVENTS, event_id)
    return present(EventRead.model_validate(event))


# ------------------------------------------------------------
# MANAGEMENT (admin / department admin)
# ------------------------------------------------------------
@router.post("", status_code=201)
async def create_event(
    payload: EventCreate,
    ctx: AuthorizationContext = Depends(manage_events),
    session: AsyncSession = Depends(get_db_session),
):
    event = await mutate_owned(session, ctx, EVENTS, "create", patch=payload.model_dump())
    return present(EventRead.model_validate(event), status_code=201)


@router.put("/{event_id}")
async def update_event(
    event_id: UUID,
    payload: EventUpdate,
    ctx: AuthorizationContext = Depends(manage_events),
    session: AsyncSession = Depends(get_db_session),
):
    event = await mutate_owned(
        session, ctx, EVENTS, "update",
        target_id=event_id,
        patch=payload.model_dump(exclude_unset=True),
    )
    return present(EventRead.model_validate(event))


@router.delete("/{event_id}")
async def delete_event(
    event_id: UUID,
    ctx: AuthorizationContext = Depends(manage_events),
    session: AsyncSession = Depends(get_db_session),
):
    await mutate_owned(session, ctx, EVENTS, "delete", target_id=event_id)
    return present(None, message="Event deleted successfully")
