# app/api/endpoints/posts.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.constants import ADMIN_ONLY
from app.core.rbac import AllowRoles, AuthorizationContext, public_access
from app.core.responses import present
from app.schemas.post import PostCreate, PostRead, PostUpdate
from app.services.scoped_query import POSTS, get_owned, list_owned, mutate_owned

router = APIRouter(prefix="/api/posts", tags=["Posts"])

admin_only = AllowRoles(*ADMIN_ONLY)


@router.get("")
async def list_posts(
    post_type: Optional[str] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, POSTS, {"post_type": post_type})
    return present([PostRead.model_validate(p) for p in await rows.all()])


@router.get("/{post_id}")
async def get_post(
    post_id: UUID,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    post = await get_owned(session, ctx, POSTS, post_id)
    return present(PostRead.model_validate(post))


@router.post("", status_code=201)
async def create_post(
    payload: PostCreate,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    post = await mutate_owned(session, ctx, POSTS, "create", patch=payload.model_dump())
    return present(PostRead.model_validate(post), status_code=201)


@router.put("/{post_id}")
async def update_post(
    post_id: UUID,
    payload: PostUpdate,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    post = await mutate_owned(
        session, ctx, POSTS, "update",
        target_id=post_id,
        patch=payload.model_dump(exclude_unset=True),
    )
    return present(PostRead.model_validate(post))


@router.delete("/{post_id}")
async def delete_post(
    post_id: UUID,
    ctx: AuthorizationContext = Depends(admin_only),
    session: AsyncSession = Depends(get_db_session),
):
    await mutate_owned(session, ctx, POSTS, "delete", target_id=post_id)
    return present(None, message="Post deleted successfully")
