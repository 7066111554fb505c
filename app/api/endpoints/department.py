# app/api/endpoints/department.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.rbac import AuthorizationContext, public_access
from app.core.responses import present
from app.schemas.department import DepartmentRead
from app.schemas.event import EventRead
from app.schemas.media import MediaRead
from app.services.department_service import get_department, list_departments
from app.services.scoped_query import EVENTS, MEDIA, list_owned

router = APIRouter(prefix="/api/departments", tags=["Departments"])


@router.get("")
async def get_all_departments(
    session: AsyncSession = Depends(get_db_session),
):
    departments = await list_departments(session)
    return present([DepartmentRead.model_validate(d) for d in departments])


@router.get("/{department_id}")
async def get_department_by_id(
    department_id: str,
    session: AsyncSession = Depends(get_db_session),
):
    department = await get_department(session, department_id)
    return present(DepartmentRead.model_validate(department))


# ----------------------------------------------------------------
# DEPARTMENT GALLERY / EVENTS (scoped like the top-level listings)
# ----------------------------------------------------------------
@router.get("/{department_id}/media")
async def get_department_media(
    department_id: str,
    media_type: Optional[str] = Query(None, alias="type"),
    event_id: Optional[UUID] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    await get_department(session, department_id)

    rows = list_owned(session, ctx, MEDIA, {
        "department_id": department_id,
        "media_type": media_type,
        "event_id": event_id,
    })
    return present([MediaRead.model_validate(m) for m in await rows.all()])


@router.get("/{department_id}/events")
async def get_department_events(
    department_id: str,
    status: Optional[str] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    await get_department(session, department_id)

    rows = list_owned(session, ctx, EVENTS, {"department_id": department_id, "status": status})
    return present([EventRead.model_validate(e) for e in await rows.all()])
