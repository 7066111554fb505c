# app/api/endpoints/media.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.constants import CONTENT_MANAGERS
from app.core.rbac import AllowRoles, AuthorizationContext, public_access
from app.core.responses import present
from app.core.storage import remove_media_file, upload_media_file
from app.models.enums import MediaType
from app.schemas.media import MediaCreate, MediaRead, MediaUpdate, split_tags
from app.services.scoped_query import MEDIA, check_create, get_owned, list_owned, mutate_owned

router = APIRouter(prefix="/api/media", tags=["Media"])

manage_media = AllowRoles(*CONTENT_MANAGERS)


# ------------------------------------------------------------
# PUBLIC (scoped) READS
# ------------------------------------------------------------
@router.get("")
async def list_media(
    media_type: Optional[str] = Query(None, alias="type"),
    department_id: Optional[str] = None,
    event_id: Optional[UUID] = None,
    featured: Optional[bool] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, MEDIA, {
        "media_type": media_type,
        "department_id": department_id,
        "event_id": event_id,
        "is_featured": featured,
    })
    return present([MediaRead.model_validate(m) for m in await rows.all()])


@router.get("/featured")
async def featured_media(
    department_id: Optional[str] = None,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    rows = list_owned(session, ctx, MEDIA, {"is_featured": True, "department_id": department_id})
    return present([MediaRead.model_validate(m) for m in await rows.all()])


@router.get("/{media_id}")
async def get_media(
    media_id: UUID,
    ctx: AuthorizationContext = Depends(public_access),
    session: AsyncSession = Depends(get_db_session),
):
    media = await get_owned(session, ctx, MEDIA, media_id)
    return present(MediaRead.model_validate(media))


# ------------------------------------------------------------
# CREATE FROM URL (externally hosted media)
# ------------------------------------------------------------
@router.post("", status_code=201)
async def create_media(
    payload: MediaCreate,
    ctx: AuthorizationContext = Depends(manage_media),
    session: AsyncSession = Depends(get_db_session),
):
    media = await mutate_owned(session, ctx, MEDIA, "create", patch=payload.model_dump())
    return present(MediaRead.model_validate(media), status_code=201)


# ------------------------------------------------------------
# UPLOAD FILE (stored in the media bucket)
# ------------------------------------------------------------
@router.post("/upload", status_code=201)
async def upload_media(
    file: UploadFile = File(...),
    title: str = Form(..., min_length=1, max_length=200),
    media_type: MediaType = Form(...),
    department_id: str = Form(...),
    description: Optional[str] = Form(None),
    event_id: Optional[UUID] = Form(None),
    is_featured: bool = Form(False),
    is_public: bool = Form(True),
    tags: Optional[str] = Form(None),
    ctx: AuthorizationContext = Depends(manage_media),
    session: AsyncSession = Depends(get_db_session),
):
    patch = {
        "title": title,
        "description": description,
        "media_type": media_type,
        "department_id": department_id,
        "event_id": event_id,
        "is_featured": is_featured,
        "is_public": is_public,
        "tags": split_tags(tags),
    }

    # Nothing reaches storage for a caller who could not create the row
    await check_create(session, ctx, MEDIA, patch)

    stored = await upload_media_file(file, department_id, media_type)
    patch["media_url"] = stored.public_url
    patch["storage_path"] = stored.path

    try:
        media = await mutate_owned(session, ctx, MEDIA, "create", patch=patch)
    except Exception:
        # The row never landed, so the object would be orphaned
        remove_media_file(stored.path)
        raise

    return present(MediaRead.model_validate(media), status_code=201)


# ------------------------------------------------------------
# UPDATE / DELETE
# ------------------------------------------------------------
@router.put("/{media_id}")
async def update_media(
    media_id: UUID,
    payload: MediaUpdate,
    ctx: AuthorizationContext = Depends(manage_media),
    session: AsyncSession = Depends(get_db_session),
):
    media = await mutate_owned(
        session, ctx, MEDIA, "update",
        target_id=media_id,
        patch=payload.model_dump(exclude_unset=True),
    )
    return present(MediaRead.model_validate(media))


@router.put("/{media_id}/file")
async def replace_media_file(
    media_id: UUID,
    file: UploadFile = File(...),
    ctx: AuthorizationContext = Depends(manage_media),
    session: AsyncSession = Depends(get_db_session),
):
    """
    Swaps the stored file behind an existing media row. The row keeps its
    department and media type; the new file must match that type.
    """
    media = await get_owned(session, ctx, MEDIA, media_id)
    old_path = media.storage_path

    stored = await upload_media_file(file, media.department_id, media.media_type)

    try:
        media = await mutate_owned(
            session, ctx, MEDIA, "update",
            target_id=media_id,
            patch={"media_url": stored.public_url, "storage_path": stored.path},
        )
    except Exception:
        remove_media_file(stored.path)
        raise

    remove_media_file(old_path)
    return present(MediaRead.model_validate(media), message="Media file replaced")


@router.delete("/{media_id}")
async def delete_media(
    media_id: UUID,
    ctx: AuthorizationContext = Depends(manage_media),
    session: AsyncSession = Depends(get_db_session),
):
    media = await mutate_owned(session, ctx, MEDIA, "delete", target_id=media_id)
    remove_media_file(media.storage_path)
    return present(None, message="Media deleted successfully")
