import pytest


@pytest.fixture
def inquiry():
    return {
        "company_name": "Acme Textiles",
        "contact_person": "Vikram Rao",
        "email": "vikram@acme.example.com",
        "phone": "9811111111",
        "website": "https://acme.example.com",
        "sponsorship_type": "Title Sponsor",
        "budget": "5-10 lakh",
        "message": "Interested in the winter festival.",
        "interests": ["Branding", "Stalls"],
    }


@pytest.mark.asyncio
async def test_public_inquiry(client, inquiry):
    res = await client.post("/api/sponsorships", json=inquiry)

    assert res.status_code == 201
    data = res.json()["data"]
    assert data["status"] == "pending"
    assert data["interests"] == ["Branding", "Stalls"]


@pytest.mark.asyncio
async def test_inquiry_requires_company(client, inquiry):
    inquiry.pop("company_name")

    res = await client.post("/api/sponsorships", json=inquiry)

    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "company_name"


@pytest.mark.asyncio
async def test_admin_moves_inquiry_through_statuses(client, admin, inquiry):
    created = (await client.post("/api/sponsorships", json=inquiry)).json()["data"]
    url = f"/api/sponsorships/{created['id']}/status"

    res = await client.put(url, json={"status": "contacted"}, headers=admin.headers)
    assert res.json()["data"]["status"] == "contacted"

    res = await client.put(url, json={"status": "maybe"}, headers=admin.headers)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_inquiries_hidden_from_non_admins(client, education_admin, inquiry):
    created = (await client.post("/api/sponsorships", json=inquiry)).json()["data"]

    assert (await client.get("/api/sponsorships", headers=education_admin.headers)).status_code == 403
    assert (await client.get(f"/api/sponsorships/{created['id']}")).status_code == 401
