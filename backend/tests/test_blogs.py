"""
Tests for blog endpoints and blog ownership rules.
"""

import pytest
from httpx import AsyncClient

CONTENT = "Matchday recap. " * 5


def post(title="Derby day at the arena", tags=None, **extra):
    return {"title": title, "content": CONTENT, "tags": tags or [], **extra}


@pytest.mark.asyncio
async def test_create_blog(client: AsyncClient, auth_headers, test_user):
    response = await client.post("/api/blogs/", json=post(tags=["football", " ", "derby"]), headers=auth_headers)
    assert response.status_code == 201
    data = response.json()
    assert data["author_id"] == test_user.id
    assert data["author_name"] == test_user.full_name
    assert data["tags"] == ["football", "derby"]
    assert data["image"]  # default placeholder


@pytest.mark.asyncio
async def test_create_blog_requires_auth(client: AsyncClient):
    response = await client.post("/api/blogs/", json=post())
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_short_content_rejected(client: AsyncClient, auth_headers):
    response = await client.post(
        "/api/blogs/", json={"title": "Short one", "content": "too short"}, headers=auth_headers
    )
    assert response.status_code == 400
    assert "content" in response.json()["errors"]


@pytest.mark.asyncio
async def test_public_list_and_filters(client: AsyncClient, auth_headers, other_headers, other_user):
    await client.post("/api/blogs/", json=post("Football weekend", ["football"]), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Concert season opens", ["music"]), headers=other_headers)
    await client.post("/api/blogs/", json=post("Draft notes here", is_published=False), headers=auth_headers)

    everything = await client.get("/api/blogs/")
    assert everything.json()["pagination"]["total_items"] == 2

    by_tag = await client.get("/api/blogs/?tags=music")
    assert [b["title"] for b in by_tag.json()["blogs"]] == ["Concert season opens"]

    by_author = await client.get(f"/api/blogs/?author_id={other_user.id}")
    assert by_author.json()["pagination"]["total_items"] == 1

    by_search = await client.get("/api/blogs/?search=weekend")
    assert [b["title"] for b in by_search.json()["blogs"]] == ["Football weekend"]


@pytest.mark.asyncio
async def test_filter_by_non_ascii_tag(client: AsyncClient, auth_headers):
    await client.post("/api/blogs/", json=post("Tea after training", ["idman", "çay"]), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Coffee break", ["kahve"]), headers=auth_headers)

    response = await client.get("/api/blogs/", params={"tags": "çay"})
    assert [b["title"] for b in response.json()["blogs"]] == ["Tea after training"]

    blog_id = response.json()["blogs"][0]["id"]
    detail = await client.get(f"/api/blogs/{blog_id}")
    assert detail.json()["tags"] == ["idman", "çay"]


@pytest.mark.asyncio
async def test_tag_filter_treats_wildcards_literally(client: AsyncClient, auth_headers):
    await client.post("/api/blogs/", json=post("Literal underscore", ["a_b"]), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Lookalike tag", ["axb"]), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Percent tag", ["50%"]), headers=auth_headers)

    underscore = await client.get("/api/blogs/", params={"tags": "a_b"})
    assert [b["title"] for b in underscore.json()["blogs"]] == ["Literal underscore"]

    percent = await client.get("/api/blogs/", params={"tags": "%"})
    assert percent.json()["pagination"]["total_items"] == 0


@pytest.mark.asyncio
async def test_owner_updates_and_stranger_cannot(client: AsyncClient, auth_headers, other_headers, admin_headers):
    created = await client.post("/api/blogs/", json=post(), headers=auth_headers)
    blog_id = created.json()["id"]

    update = post("Updated derby report", ["derby"])
    assert (await client.put(f"/api/blogs/{blog_id}", json=update, headers=other_headers)).status_code == 403

    by_owner = await client.put(f"/api/blogs/{blog_id}", json=update, headers=auth_headers)
    assert by_owner.status_code == 200
    assert by_owner.json()["title"] == "Updated derby report"

    by_admin = await client.put(f"/api/blogs/{blog_id}", json=post("Admin-edited derby report"), headers=admin_headers)
    assert by_admin.status_code == 200


@pytest.mark.asyncio
async def test_delete_unpublishes(client: AsyncClient, auth_headers, other_headers):
    created = await client.post("/api/blogs/", json=post(), headers=auth_headers)
    blog_id = created.json()["id"]

    assert (await client.delete(f"/api/blogs/{blog_id}", headers=other_headers)).status_code == 403
    assert (await client.delete(f"/api/blogs/{blog_id}", headers=auth_headers)).status_code == 200

    assert (await client.get(f"/api/blogs/{blog_id}")).status_code == 404
    # Still visible to its author
    own = await client.get(f"/api/blogs/{blog_id}", headers=auth_headers)
    assert own.status_code == 200
    assert own.json()["is_published"] is False


@pytest.mark.asyncio
async def test_my_posts(client: AsyncClient, auth_headers, other_headers):
    await client.post("/api/blogs/", json=post("Published piece one"), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Unpublished draft", is_published=False), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Somebody else's post"), headers=other_headers)

    published = await client.get("/api/blogs/my/posts", headers=auth_headers)
    assert published.json()["pagination"]["total_items"] == 1

    everything = await client.get("/api/blogs/my/posts?include_unpublished=true", headers=auth_headers)
    assert everything.json()["pagination"]["total_items"] == 2


@pytest.mark.asyncio
async def test_blog_stats(client: AsyncClient, auth_headers, admin_headers, test_user):
    await client.post("/api/blogs/", json=post("First football piece", ["football", "derby"]), headers=auth_headers)
    await client.post("/api/blogs/", json=post("Second football piece", ["football"]), headers=auth_headers)

    assert (await client.get("/api/blogs/stats/overview", headers=auth_headers)).status_code == 403

    response = await client.get("/api/blogs/stats/overview", headers=admin_headers)
    data = response.json()
    assert data["total_blogs"] == 2
    assert data["published_blogs"] == 2
    assert data["top_authors"][0] == {"author_id": test_user.id, "author_name": test_user.full_name, "count": 2}
    assert data["popular_tags"][0] == {"tag": "football", "count": 2}
