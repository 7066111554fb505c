import uuid

import pytest


async def submit(client, payload):
    res = await client.post("/api/registrations", json=payload)
    assert res.status_code == 201
    return res.json()["data"]


@pytest.mark.asyncio
async def test_anonymous_registration_created(client, registration_payload):
    res = await client.post("/api/registrations", json=registration_payload)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert uuid.UUID(body["data"]["id"])
    assert body["data"]["status"] == "pending"


@pytest.mark.asyncio
async def test_missing_full_name_is_field_error(client, registration_payload):
    registration_payload.pop("full_name")

    res = await client.post("/api/registrations", json=registration_payload)

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "full_name"
    assert body["errors"][0]["message"]


@pytest.mark.asyncio
async def test_age_bounds(client, registration_payload):
    registration_payload["age"] = 12

    res = await client.post("/api/registrations", json=registration_payload)

    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "age"


@pytest.mark.asyncio
async def test_client_cannot_choose_status(client, registration_payload):
    registration_payload["status"] = "approved"

    data = await submit(client, registration_payload)

    assert data["status"] == "pending"


@pytest.mark.asyncio
async def test_admin_status_workflow(client, admin, registration_payload):
    registration = await submit(client, registration_payload)
    url = f"/api/registrations/{registration['id']}/status"

    res = await client.put(url, json={"status": "approved"}, headers=admin.headers)
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "approved"

    res = await client.put(url, json={"status": "archived"}, headers=admin.headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "status"

    res = await client.get(f"/api/registrations/{registration['id']}", headers=admin.headers)
    assert res.json()["data"]["status"] == "approved"


@pytest.mark.asyncio
async def test_listing_is_admin_only(client, admin, education_admin, member, registration_payload):
    await submit(client, registration_payload)

    assert (await client.get("/api/registrations")).status_code == 401
    assert (await client.get("/api/registrations", headers=member.headers)).status_code == 403
    assert (await client.get("/api/registrations", headers=education_admin.headers)).status_code == 403

    res = await client.get("/api/registrations", headers=admin.headers)
    assert res.status_code == 200
    assert len(res.json()["data"]) == 1


@pytest.mark.asyncio
async def test_status_filter_is_lenient(client, admin, registration_payload):
    first = await submit(client, registration_payload)
    await submit(client, {**registration_payload, "email": "second@example.com"})
    await client.put(f"/api/registrations/{first['id']}/status", json={"status": "rejected"}, headers=admin.headers)

    res = await client.get("/api/registrations", params={"status": "rejected"}, headers=admin.headers)
    assert [r["id"] for r in res.json()["data"]] == [first["id"]]

    res = await client.get("/api/registrations", params={"status": "archived"}, headers=admin.headers)
    assert len(res.json()["data"]) == 2


@pytest.mark.asyncio
async def test_department_admin_cannot_update_status(client, education_admin, registration_payload):
    registration = await submit(client, registration_payload)

    res = await client.put(
        f"/api/registrations/{registration['id']}/status",
        json={"status": "approved"},
        headers=education_admin.headers,
    )
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_unknown_registration(client, admin):
    res = await client.put(f"/api/registrations/{uuid.uuid4()}/status", json={"status": "approved"}, headers=admin.headers)
    assert res.status_code == 404
