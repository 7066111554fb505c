from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import StorageUnavailable
from app.core.storage import StoredFile
from app.models.enums import MediaType


def upload_form(**overrides):
    form = {
        "title": "Clean-up day",
        "media_type": "photo",
        "department_id": "education",
        "tags": "cleanup, volunteers , ",
    }
    form.update(overrides)
    return form


PNG = ("photo.png", b"\x89PNG\r\n\x1a\n" + b"0" * 64, "image/png")


# ------------------------------------------------------------------
# READS
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_department_admin_sees_nothing_from_other_department(client, education_admin, make_media):
    await make_media(department_id="environmental")

    res = await client.get("/api/media", params={"department_id": "environmental"}, headers=education_admin.headers)

    assert res.status_code == 200
    assert res.json() == {"success": True, "data": []}


@pytest.mark.asyncio
async def test_public_gallery_filters(client, make_media):
    await make_media(media_type=MediaType.photo, is_featured=True)
    await make_media(media_type=MediaType.video)
    await make_media(is_public=False)

    res = await client.get("/api/media")
    assert len(res.json()["data"]) == 2

    res = await client.get("/api/media", params={"type": "video"})
    assert [m["media_type"] for m in res.json()["data"]] == ["video"]

    res = await client.get("/api/media/featured")
    assert len(res.json()["data"]) == 1
    assert res.json()["data"][0]["is_featured"] is True


@pytest.mark.asyncio
async def test_get_hidden_media_is_not_found(client, member, make_media):
    hidden = await make_media(is_public=False)

    res = await client.get(f"/api/media/{hidden.id}", headers=member.headers)
    assert res.status_code == 404


# ------------------------------------------------------------------
# CREATE FROM URL
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_create_media_by_url(client, education_admin):
    res = await client.post("/api/media", json={
        "title": "Poster",
        "media_type": "poster",
        "media_url": "https://cdn.example.com/poster.png",
        "department_id": "education",
        "tags": "festival,2026",
    }, headers=education_admin.headers)

    assert res.status_code == 201
    data = res.json()["data"]
    assert data["uploaded_by"] == str(education_admin.user.id)
    assert data["tags"] == ["festival", "2026"]


@pytest.mark.asyncio
async def test_create_media_outside_grants(client, education_admin):
    res = await client.post("/api/media", json={
        "title": "Poster",
        "media_type": "poster",
        "media_url": "https://cdn.example.com/poster.png",
        "department_id": "environmental",
    }, headers=education_admin.headers)

    assert res.status_code == 403


# ------------------------------------------------------------------
# UPLOAD
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_upload_stores_file_and_row(client, education_admin):
    stored = StoredFile(
        path="departments/education/photos/abc.png",
        public_url="https://storage.example.com/departments/education/photos/abc.png",
        content_type="image/png",
        size=72,
    )

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(return_value=stored)) as upload:
        res = await client.post("/api/media/upload", data=upload_form(), files={"file": PNG},
                                headers=education_admin.headers)

    assert res.status_code == 201
    upload.assert_awaited_once()
    data = res.json()["data"]
    assert data["media_url"] == stored.public_url
    assert data["tags"] == ["cleanup", "volunteers"]
    assert "storage_path" not in data


@pytest.mark.asyncio
async def test_upload_scope_checked_before_storage(client, education_admin):
    with patch("app.api.endpoints.media.upload_media_file", AsyncMock()) as upload:
        res = await client.post("/api/media/upload", data=upload_form(department_id="environmental"),
                                files={"file": PNG}, headers=education_admin.headers)

    assert res.status_code == 403
    upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_upload_requires_manager_role(client, member):
    with patch("app.api.endpoints.media.upload_media_file", AsyncMock()) as upload:
        res = await client.post("/api/media/upload", data=upload_form(), files={"file": PNG}, headers=member.headers)

    assert res.status_code == 403
    upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_upload_without_storage_is_503(client, admin):
    # No Supabase credentials in the test settings
    res = await client.post("/api/media/upload", data=upload_form(), files={"file": PNG}, headers=admin.headers)

    assert res.status_code == 503
    assert res.json()["message"] == "Service temporarily unavailable"


@pytest.mark.asyncio
async def test_upload_failure_surfaces_as_503(client, admin):
    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(side_effect=StorageUnavailable("boom"))):
        res = await client.post("/api/media/upload", data=upload_form(), files={"file": PNG}, headers=admin.headers)

    assert res.status_code == 503


@pytest.mark.asyncio
async def test_upload_bad_media_type(client, admin):
    res = await client.post("/api/media/upload", data=upload_form(media_type="hologram"),
                            files={"file": PNG}, headers=admin.headers)

    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "media_type"


# ------------------------------------------------------------------
# UPDATE / DELETE
# ------------------------------------------------------------------
@pytest.mark.asyncio
async def test_update_media(client, education_admin, make_media):
    media = await make_media(department_id="education")

    res = await client.put(f"/api/media/{media.id}", json={"is_featured": True, "tags": ["a", "b"]},
                           headers=education_admin.headers)

    assert res.status_code == 200
    assert res.json()["data"]["is_featured"] is True
    assert res.json()["data"]["tags"] == ["a", "b"]


@pytest.mark.asyncio
async def test_delete_media_removes_stored_file(client, education_admin, make_media):
    media = await make_media(department_id="education", storage_path="departments/education/photos/x.png")

    with patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.delete(f"/api/media/{media.id}", headers=education_admin.headers)

    assert res.status_code == 200
    remove.assert_called_once_with("departments/education/photos/x.png")


@pytest.mark.asyncio
async def test_delete_foreign_media_is_not_found(client, education_admin, make_media):
    media = await make_media(department_id="environmental")

    with patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.delete(f"/api/media/{media.id}", headers=education_admin.headers)

    assert res.status_code == 404
    remove.assert_not_called()


# ------------------------------------------------------------------
# FILE REPLACEMENT
# ------------------------------------------------------------------
NEW_FILE = StoredFile(
    path="departments/education/photos/new.png",
    public_url="https://storage.example.com/departments/education/photos/new.png",
    content_type="image/png",
    size=72,
)


@pytest.mark.asyncio
async def test_replace_file_swaps_stored_object(client, education_admin, make_media):
    media = await make_media(department_id="education", storage_path="departments/education/photos/old.png")

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(return_value=NEW_FILE)) as upload, \
            patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.put(f"/api/media/{media.id}/file", files={"file": PNG}, headers=education_admin.headers)

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["media_url"] == NEW_FILE.public_url
    assert data["title"] == media.title
    assert upload.await_args.args[1:] == ("education", MediaType.photo)
    remove.assert_called_once_with("departments/education/photos/old.png")


@pytest.mark.asyncio
async def test_replace_foreign_file_is_not_found(client, education_admin, make_media):
    media = await make_media(department_id="environmental", storage_path="departments/environmental/photos/a.png")

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(return_value=NEW_FILE)) as upload, \
            patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.put(f"/api/media/{media.id}/file", files={"file": PNG}, headers=education_admin.headers)

    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Resource not found"}
    upload.assert_not_awaited()
    remove.assert_not_called()


@pytest.mark.asyncio
async def test_replace_file_requires_manager_role(client, member, make_media):
    media = await make_media()

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock()) as upload:
        res = await client.put(f"/api/media/{media.id}/file", files={"file": PNG}, headers=member.headers)

    assert res.status_code == 403
    upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_replace_removes_new_file(client, admin, make_media):
    media = await make_media(storage_path="departments/education/photos/old.png")
    db_down = OperationalError("UPDATE media", {}, Exception("connection lost"))

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(return_value=NEW_FILE)), \
            patch("app.api.endpoints.media.mutate_owned", AsyncMock(side_effect=db_down)), \
            patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.put(f"/api/media/{media.id}/file", files={"file": PNG}, headers=admin.headers)

    assert res.status_code == 503
    remove.assert_called_once_with(NEW_FILE.path)


@pytest.mark.asyncio
async def test_failed_insert_after_upload_removes_file(client, admin):
    db_down = OperationalError("INSERT INTO media", {}, Exception("connection lost"))

    with patch("app.api.endpoints.media.upload_media_file", AsyncMock(return_value=NEW_FILE)), \
            patch("app.api.endpoints.media.mutate_owned", AsyncMock(side_effect=db_down)), \
            patch("app.api.endpoints.media.remove_media_file") as remove:
        res = await client.post("/api/media/upload", data=upload_form(), files={"file": PNG}, headers=admin.headers)

    assert res.status_code == 503
    remove.assert_called_once_with(NEW_FILE.path)
