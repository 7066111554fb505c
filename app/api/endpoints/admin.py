# app/api/endpoints/admin.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.constants import CONTENT_MANAGERS
from app.core.rbac import AllowRoles, AuthorizationContext
from app.core.responses import present
from app.services.stats_service import dashboard_stats

router = APIRouter(prefix="/api/admin", tags=["Admin Dashboard"])


@router.get("/stats")
async def get_stats(
    ctx: AuthorizationContext = Depends(AllowRoles(*CONTENT_MANAGERS)),
    session: AsyncSession = Depends(get_db_session),
):
    return present(await dashboard_stats(session, ctx))
