import pytest


def new_post(**overrides):
    post = {
        "title": "Festival of Hope returns",
        "content": "Registrations for this year's festival are open.",
        "post_type": "announcement",
    }
    post.update(overrides)
    return post


@pytest.mark.asyncio
async def test_admin_publishes_post(client, admin):
    res = await client.post("/api/posts", json=new_post(), headers=admin.headers)

    assert res.status_code == 201
    assert res.json()["data"]["created_by"] == str(admin.user.id)

    res = await client.get("/api/posts")
    assert len(res.json()["data"]) == 1


@pytest.mark.asyncio
async def test_draft_posts_hidden_from_public(client, admin):
    draft = (await client.post("/api/posts", json=new_post(is_public=False), headers=admin.headers)).json()["data"]

    assert (await client.get("/api/posts")).json()["data"] == []
    assert (await client.get(f"/api/posts/{draft['id']}")).status_code == 404
    assert (await client.get(f"/api/posts/{draft['id']}", headers=admin.headers)).status_code == 200


@pytest.mark.asyncio
async def test_post_type_filter(client, admin):
    await client.post("/api/posts", json=new_post(), headers=admin.headers)
    await client.post("/api/posts", json=new_post(post_type="news"), headers=admin.headers)

    res = await client.get("/api/posts", params={"post_type": "news"})
    assert [p["post_type"] for p in res.json()["data"]] == ["news"]


@pytest.mark.asyncio
async def test_only_admins_write_posts(client, education_admin, member):
    assert (await client.post("/api/posts", json=new_post(), headers=education_admin.headers)).status_code == 403
    assert (await client.post("/api/posts", json=new_post(), headers=member.headers)).status_code == 403
    assert (await client.post("/api/posts", json=new_post())).status_code == 401


@pytest.mark.asyncio
async def test_update_and_delete_post(client, admin):
    post = (await client.post("/api/posts", json=new_post(), headers=admin.headers)).json()["data"]

    res = await client.put(f"/api/posts/{post['id']}", json={"title": "Updated"}, headers=admin.headers)
    assert res.json()["data"]["title"] == "Updated"

    res = await client.delete(f"/api/posts/{post['id']}", headers=admin.headers)
    assert res.status_code == 200
    assert (await client.get(f"/api/posts/{post['id']}")).status_code == 404
