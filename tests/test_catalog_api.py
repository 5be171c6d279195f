"""API tests for categories, tags and the health endpoint."""

import pytest

from marketplace.core.config import settings

API = settings.api_prefix


class TestCatalog:
    @pytest.mark.asyncio
    async def test_create_and_list_tags(self, async_client, auth_headers):
        created = await async_client.post(f"{API}/tags", json={"title": "minimal"}, headers=auth_headers)

        assert created.status_code == 201
        listed = (await async_client.get(f"{API}/tags")).json()
        assert listed == [{"id": created.json()["id"], "title": "minimal"}]

    @pytest.mark.asyncio
    async def test_category_keeps_tag_order(self, async_client, auth_headers):
        response = await async_client.post(
            f"{API}/categories",
            json={"title": "Landing Pages", "description": "One pagers", "tags": ["b", "a"]},
            headers=auth_headers,
        )

        assert response.status_code == 201
        [category] = (await async_client.get(f"{API}/categories")).json()
        assert category["title"] == "Landing Pages"
        assert category["description"] == "One pagers"
        assert category["tags"] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_writes_require_token(self, async_client):
        tag = await async_client.post(f"{API}/tags", json={"title": "x"})
        category = await async_client.post(f"{API}/categories", json={"title": "x"})

        assert tag.status_code in (401, 403)
        assert category.status_code in (401, 403)


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["object_storage_enabled"] is True
