"""End-to-end tests for the content HTTP API over an in-memory database."""

from datetime import datetime, timedelta, timezone

import pytest

from pawtal.application.services import ContentScheduler, TrashRetentionPolicy
from pawtal.domain.exceptions import StorageError
from pawtal.infrastructure.dependencies import build_maintenance_repositories, get_page_service

ADMIN = {"X-Actor-Id": "admin-1"}


@pytest.mark.asyncio
async def test_admin_endpoints_require_actor(client):
    response = await client.get("/api/v1/admin/pages")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_page_derives_slug_and_defaults_to_draft(client):
    response = await client.post("/api/v1/admin/pages", json={"title": "About Us"}, headers=ADMIN)

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "about-us"
    assert body["status"] == "draft"
    assert body["author_id"] == "admin-1"
    assert body["category_ids"] == []


@pytest.mark.asyncio
async def test_duplicate_slug_is_conflict(client):
    first = await client.post("/api/v1/admin/articles", json={"title": "Hello World"}, headers=ADMIN)
    second = await client.post("/api/v1/admin/articles", json={"title": "Hello World!"}, headers=ADMIN)
    third = await client.post(
        "/api/v1/admin/articles", json={"title": "Hello World!", "slug": "hello-world-2"}, headers=ADMIN
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert third.status_code == 201
    assert third.json()["slug"] == "hello-world-2"


@pytest.mark.asyncio
async def test_unusable_title_is_unprocessable(client):
    response = await client.post("/api/v1/admin/pages", json={"title": "???"}, headers=ADMIN)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_patch_appends_revision_and_keeps_other_fields(client):
    created = (
        await client.post(
            "/api/v1/admin/pages",
            json={"title": "Old Title", "content": "Prior content"},
            headers=ADMIN,
        )
    ).json()

    response = await client.patch(
        f"/api/v1/admin/pages/{created['id']}", json={"title": "New Title"}, headers=ADMIN
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["title"], body["content"], body["slug"], body["status"]) == (
        "New Title", "Prior content", "old-title", "draft"
    )
    revisions = (await client.get(f"/api/v1/admin/pages/{created['id']}/revisions", headers=ADMIN)).json()
    assert [(r["number"], r["title"], r["content"]) for r in revisions] == [
        (2, "New Title", "Prior content"),
        (1, "Old Title", "Prior content"),
    ]


@pytest.mark.asyncio
async def test_unknown_item_is_not_found(client):
    response = await client.get("/api/v1/admin/pages/does-not-exist", headers=ADMIN)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_publish_makes_page_public(client):
    created = (await client.post("/api/v1/admin/pages", json={"title": "Contact"}, headers=ADMIN)).json()
    assert (await client.get("/api/v1/pages/contact")).status_code == 404

    published = await client.post(f"/api/v1/admin/pages/{created['id']}/publish", headers=ADMIN)
    assert published.json()["status"] == "published"

    public = await client.get("/api/v1/pages/contact")
    assert public.status_code == 200
    assert public.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_trash_and_restore_cycle(client):
    created = (await client.post("/api/v1/admin/pages", json={"title": "Temp"}, headers=ADMIN)).json()
    item_url = f"/api/v1/admin/pages/{created['id']}"

    conflict = await client.post(f"{item_url}/restore", headers=ADMIN)
    assert conflict.status_code == 409

    trashed = (await client.post(f"{item_url}/trash", headers=ADMIN)).json()
    assert trashed["status"] == "trashed"
    assert trashed["trashed_at"] is not None

    listing = (await client.get("/api/v1/admin/pages", headers=ADMIN)).json()
    assert listing["total"] == 0
    trash = (await client.get("/api/v1/admin/trash", headers=ADMIN)).json()
    assert [p["id"] for p in trash["pages"]] == [created["id"]]
    assert trash["articles"] == []

    # Trashed a moment ago: still inside the retention window.
    emptied = (await client.post("/api/v1/admin/trash/empty", headers=ADMIN)).json()
    assert emptied == {"ok": True, "pages_deleted": 0, "articles_deleted": 0}

    restored = (await client.post(f"{item_url}/restore", headers=ADMIN)).json()
    assert restored["status"] == "draft"
    assert restored["trashed_at"] is None


@pytest.mark.asyncio
async def test_restore_revision_endpoint(client):
    created = (
        await client.post(
            "/api/v1/admin/articles",
            json={"title": "First", "short_text": "one", "content": "v1"},
            headers=ADMIN,
        )
    ).json()
    item_url = f"/api/v1/admin/articles/{created['id']}"
    await client.patch(item_url, json={"title": "Second", "content": "v2"}, headers=ADMIN)
    oldest = (await client.get(f"{item_url}/revisions", headers=ADMIN)).json()[-1]

    response = await client.post(f"{item_url}/revisions/{oldest['id']}/restore", headers=ADMIN)

    assert response.status_code == 200
    assert (response.json()["title"], response.json()["content"]) == ("First", "v1")
    assert len((await client.get(f"{item_url}/revisions", headers=ADMIN)).json()) == 3

    missing = await client.post(f"{item_url}/revisions/nope/restore", headers=ADMIN)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_public_article_listing_is_paginated(client):
    for i in range(3):
        await client.post(
            "/api/v1/admin/articles",
            json={"title": f"Post {i}", "status": "published"},
            headers=ADMIN,
        )
    await client.post("/api/v1/admin/articles", json={"title": "Hidden draft"}, headers=ADMIN)

    page = (await client.get("/api/v1/articles", params={"per_page": 2})).json()
    assert (page["total"], page["page"], page["per_page"], len(page["data"])) == (3, 1, 2, 2)

    clamped = (await client.get("/api/v1/articles", params={"per_page": 500})).json()
    assert clamped["per_page"] == 100
    assert all(a["status"] == "published" for a in clamped["data"])
    assert (await client.get("/api/v1/articles/hidden-draft")).status_code == 404


@pytest.mark.asyncio
async def test_admin_listing_filters_by_status(client):
    await client.post("/api/v1/admin/pages", json={"title": "Draft"}, headers=ADMIN)
    await client.post("/api/v1/admin/pages", json={"title": "Live", "status": "published"}, headers=ADMIN)

    response = await client.get("/api/v1/admin/pages", params={"status": "published"}, headers=ADMIN)

    assert [p["slug"] for p in response.json()["data"]] == ["live"]


@pytest.mark.asyncio
async def test_categories_crud_and_assignment(client):
    created = await client.post("/api/v1/admin/categories", json={"name": "Guides"}, headers=ADMIN)
    assert created.status_code == 201
    category = created.json()
    assert category["slug"] == "guides"

    page = await client.post(
        "/api/v1/admin/pages", json={"title": "How to", "category_ids": [category["id"]]}, headers=ADMIN
    )
    assert page.json()["category_ids"] == [category["id"]]

    bad = await client.post(
        "/api/v1/admin/pages", json={"title": "Broken", "category_ids": ["missing"]}, headers=ADMIN
    )
    assert bad.status_code == 404

    assert (await client.delete(f"/api/v1/admin/categories/{category['id']}", headers=ADMIN)).status_code == 204
    assert (await client.delete(f"/api/v1/admin/categories/{category['id']}", headers=ADMIN)).status_code == 404
    assert (await client.get("/api/v1/admin/categories", headers=ADMIN)).json() == []

    refreshed = await client.get(f"/api/v1/admin/pages/{page.json()['id']}", headers=ADMIN)
    assert refreshed.json()["category_ids"] == []


@pytest.mark.asyncio
async def test_storage_failure_returns_opaque_500(api_app, client):
    class BrokenService:
        async def get(self, item_id):
            raise StorageError("page lookup")

    api_app.dependency_overrides[get_page_service] = lambda: BrokenService()

    response = await client.get("/api/v1/admin/pages/anything", headers=ADMIN)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


@pytest.mark.asyncio
async def test_scheduler_tick_publishes_through_real_storage(client, session_factory):
    publish_at = datetime.now(timezone.utc) - timedelta(seconds=1)
    created = (
        await client.post(
            "/api/v1/admin/articles",
            json={"title": "Timed", "status": "scheduled", "publish_at": publish_at.isoformat()},
            headers=ADMIN,
        )
    ).json()
    assert (await client.get("/api/v1/articles/timed")).status_code == 404

    scheduler = ContentScheduler(
        session_factory=session_factory,
        build_repositories=build_maintenance_repositories,
        policy=TrashRetentionPolicy(30),
    )
    report = await scheduler.run_once()

    assert report.ok
    assert report.counts["publish:article"] == 1
    public = await client.get("/api/v1/articles/timed")
    assert public.status_code == 200
    assert public.json()["id"] == created["id"]


@pytest.mark.asyncio
async def test_category_rename_endpoint(client):
    news = (await client.post("/api/v1/admin/categories", json={"name": "News"}, headers=ADMIN)).json()
    await client.post("/api/v1/admin/categories", json={"name": "Guides"}, headers=ADMIN)

    renamed = await client.put(
        f"/api/v1/admin/categories/{news['id']}", json={"name": "Latest news"}, headers=ADMIN
    )
    assert renamed.status_code == 200
    assert (renamed.json()["name"], renamed.json()["slug"]) == ("Latest news", "news")

    moved = await client.put(
        f"/api/v1/admin/categories/{news['id']}", json={"name": "Latest", "slug": "latest"}, headers=ADMIN
    )
    assert moved.json()["slug"] == "latest"

    taken = await client.put(
        f"/api/v1/admin/categories/{news['id']}", json={"name": "Latest", "slug": "guides"}, headers=ADMIN
    )
    assert taken.status_code == 409
    missing = await client.put("/api/v1/admin/categories/nope", json={"name": "X"}, headers=ADMIN)
    assert missing.status_code == 404
    assert (await client.put(f"/api/v1/admin/categories/{news['id']}", json={"name": "X"})).status_code == 401


@pytest.mark.asyncio
async def test_related_articles_endpoint(client):
    guides = (await client.post("/api/v1/admin/categories", json={"name": "Guides"}, headers=ADMIN)).json()

    async def article(title: str, status: str = "published", category_ids=()) -> dict:
        body = {"title": title, "status": status, "category_ids": list(category_ids)}
        return (await client.post("/api/v1/admin/articles", json=body, headers=ADMIN)).json()

    source = await article("Source", category_ids=[guides["id"]])
    sibling = await article("Sibling", category_ids=[guides["id"]])
    await article("Draft sibling", status="draft", category_ids=[guides["id"]])
    await article("Loner")

    related = await client.get("/api/v1/articles/source/related")
    assert related.status_code == 200
    assert [a["id"] for a in related.json()] == [sibling["id"]]
    assert (await client.get("/api/v1/articles/loner/related")).json() == []
    assert (await client.get("/api/v1/articles/draft-sibling/related")).status_code == 404
    assert source["slug"] == "source"
