"""API tests for the product endpoints."""

import pytest

from marketplace.core.config import settings

API = settings.api_prefix


def product_payload(**overrides):
    payload = {
        "title": "Landing Kit",
        "description": "A landing page starter",
        "categoryId": None,
        "tags": [],
        "productCreator": "alice",
        "privateURL": "https://private.example.com/kit",
        "privateTemplate": "kit.zip",
        "price": 20,
        "uploadVideoUrl": "https://cdn.example.com/kit.mp4",
        "uploadImgUrl": "https://cdn.example.com/kit.png",
    }
    payload.update(overrides)
    return payload


async def create_product(client, headers, **overrides):
    response = await client.post(f"{API}/products", json=product_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_tag(client, headers, title):
    response = await client.post(f"{API}/tags", json={"title": title}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCreateAndFetch:
    @pytest.mark.asyncio
    async def test_create_returns_persisted_fields(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)

        assert created["id"]
        for field, value in product_payload().items():
            assert created[field] == value

    @pytest.mark.asyncio
    async def test_get_by_id_matches_created_record(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)

        response = await async_client.get(f"{API}/products/{created['id']}")

        assert response.status_code == 200
        fetched = response.json()
        for field in product_payload():
            assert fetched[field] == created[field]
        assert fetched["category"] is None

    @pytest.mark.asyncio
    async def test_price_is_coerced_to_number(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers, price="49.5")

        assert created["price"] == 49.5

    @pytest.mark.asyncio
    async def test_create_without_title_is_bad_request(self, async_client, auth_headers):
        payload = product_payload()
        del payload["title"]

        response = await async_client.post(f"{API}/products", json=payload, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_create_requires_token(self, async_client):
        response = await async_client.post(f"{API}/products", json=product_payload())

        assert response.status_code in (401, 403)

    @pytest.mark.asyncio
    async def test_get_unknown_product_is_not_found(self, async_client):
        response = await async_client.get(f"{API}/products/does-not-exist")

        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"

    @pytest.mark.asyncio
    async def test_tag_order_and_duplicates(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers, tags=["t2", "t1", "t2"])

        assert created["tags"] == ["t2", "t1"]


class TestListing:
    @pytest.mark.asyncio
    async def test_empty_catalog_is_an_empty_list(self, async_client):
        response = await async_client.get(f"{API}/products")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_hydrates_category_tags(self, async_client, auth_headers):
        tag = await create_tag(async_client, auth_headers, "saas")
        category = (await async_client.post(
            f"{API}/categories",
            json={"title": "Landing Pages", "tags": [tag["id"]]},
            headers=auth_headers,
        )).json()
        await create_product(async_client, auth_headers, categoryId=category["id"])

        response = await async_client.get(f"{API}/products")

        assert response.status_code == 200
        [item] = response.json()
        assert item["categoryId"] == category["id"]
        assert item["category"] == {"id": category["id"], "tags": [tag["id"]]}

    @pytest.mark.asyncio
    async def test_get_by_id_hydrates_category_title(self, async_client, auth_headers):
        category = (await async_client.post(
            f"{API}/categories", json={"title": "Dashboards"}, headers=auth_headers
        )).json()
        created = await create_product(async_client, auth_headers, categoryId=category["id"])

        response = await async_client.get(f"{API}/products/{created['id']}")

        assert response.json()["category"] == {"id": category["id"], "title": "Dashboards"}

    @pytest.mark.asyncio
    async def test_dangling_category_is_left_unhydrated(self, async_client, auth_headers):
        await create_product(async_client, auth_headers, categoryId="gone")

        [item] = (await async_client.get(f"{API}/products")).json()

        assert item["categoryId"] == "gone"
        assert item["category"] is None

    @pytest.mark.asyncio
    async def test_names_projection(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)
        await create_product(async_client, auth_headers, title="Blog Kit")

        response = await async_client.get(f"{API}/products/names")

        assert response.status_code == 200
        names = response.json()
        assert {"id": created["id"], "title": "Landing Kit"} in names
        assert all(set(entry) == {"id", "title"} for entry in names)

    @pytest.mark.asyncio
    async def test_reads_need_token_when_catalog_is_private(self, async_client, auth_headers, monkeypatch):
        monkeypatch.setattr(settings, "public_catalog_reads", False)

        anonymous = await async_client.get(f"{API}/products")
        authenticated = await async_client.get(f"{API}/products", headers=auth_headers)

        assert anonymous.status_code == 401
        assert authenticated.status_code == 200

    @pytest.mark.asyncio
    async def test_bad_token_rejected_on_public_read(self, async_client):
        response = await async_client.get(
            f"{API}/products", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401


class TestUpdate:
    @pytest.mark.asyncio
    async def test_full_update_then_fetch_returns_new_values(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)
        changes = product_payload(
            title="Landing Kit v2",
            description="Second edition",
            productCreator="bob",
            price=25,
            tags=["t9"],
            privateURL=None,
        )

        response = await async_client.put(
            f"{API}/products/{created['id']}", json=changes, headers=auth_headers
        )
        assert response.status_code == 200

        fetched = (await async_client.get(f"{API}/products/{created['id']}")).json()
        for field, value in changes.items():
            assert fetched[field] == value

    @pytest.mark.asyncio
    async def test_omitted_fields_are_preserved(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers, tags=["t1"])

        response = await async_client.put(
            f"{API}/products/{created['id']}", json={"price": 35}, headers=auth_headers
        )

        updated = response.json()
        assert updated["price"] == 35
        assert updated["description"] == "A landing page starter"
        assert updated["productCreator"] == "alice"
        assert updated["tags"] == ["t1"]

    @pytest.mark.asyncio
    async def test_null_title_is_rejected(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)

        response = await async_client.put(
            f"{API}/products/{created['id']}", json={"title": None}, headers=auth_headers
        )

        assert response.status_code == 400
        fetched = (await async_client.get(f"{API}/products/{created['id']}")).json()
        assert fetched["title"] == "Landing Kit"

    @pytest.mark.asyncio
    async def test_update_unknown_product_is_not_found(self, async_client, auth_headers):
        response = await async_client.put(
            f"{API}/products/missing", json={"price": 1}, headers=auth_headers
        )

        assert response.status_code == 404


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_product(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers, tags=["t1"])

        response = await async_client.delete(f"{API}/products/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Product deleted successfully"}
        assert (await async_client.get(f"{API}/products/{created['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_unknown_product_is_not_found(self, async_client, auth_headers):
        response = await async_client.delete(f"{API}/products/missing", headers=auth_headers)

        assert response.status_code == 404


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_by_creator(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)

        response = await async_client.get(f"{API}/products/search", params={"searchTerm": "alice"})

        assert response.status_code == 200
        assert [product["id"] for product in response.json()] == [created["id"]]

    @pytest.mark.asyncio
    async def test_search_title_is_case_insensitive_substring(self, async_client, auth_headers):
        created = await create_product(async_client, auth_headers)

        response = await async_client.get(f"{API}/products/search", params={"searchTerm": "ding k"})

        assert [product["id"] for product in response.json()] == [created["id"]]

    @pytest.mark.asyncio
    async def test_search_by_tag_title_hydrates_tags(self, async_client, auth_headers):
        ecommerce = await create_tag(async_client, auth_headers, "E-Commerce")
        commerce_ui = await create_tag(async_client, auth_headers, "commerce-ui")
        other = await create_tag(async_client, auth_headers, "portfolio")
        first = await create_product(
            async_client, auth_headers, title="Shop", productCreator="carol", tags=[ecommerce["id"]]
        )
        second = await create_product(
            async_client, auth_headers, title="Store", productCreator="dave",
            tags=[other["id"], commerce_ui["id"]],
        )
        await create_product(async_client, auth_headers, title="Folio", productCreator="erin", tags=[other["id"]])

        response = await async_client.get(f"{API}/products/search", params={"searchTerm": "COMMERCE"})

        assert response.status_code == 200
        results = {product["id"]: product for product in response.json()}
        assert set(results) == {first["id"], second["id"]}
        assert results[second["id"]]["tags"] == [
            {"id": other["id"], "title": "portfolio"},
            {"id": commerce_ui["id"], "title": "commerce-ui"},
        ]

    @pytest.mark.asyncio
    async def test_search_without_match_is_not_found(self, async_client, auth_headers):
        await create_product(async_client, auth_headers)

        response = await async_client.get(f"{API}/products/search", params={"searchTerm": "zzz"})

        assert response.status_code == 404
        assert response.json()["message"] == "No matching results"
        assert len((await async_client.get(f"{API}/products")).json()) == 1

    @pytest.mark.asyncio
    async def test_search_message_follows_locale(self, async_client, monkeypatch):
        monkeypatch.setattr(settings, "message_locale", "ar")

        response = await async_client.get(f"{API}/products/search", params={"searchTerm": "zzz"})

        assert response.status_code == 404
        assert response.json()["message"] == "لا توجد نتائج مطابقة"

    @pytest.mark.asyncio
    async def test_search_requires_term(self, async_client):
        response = await async_client.get(f"{API}/products/search")

        assert response.status_code == 400


class TestLandingKitScenario:
    @pytest.mark.asyncio
    async def test_search_and_names_include_new_product(self, async_client, auth_headers):
        created = await create_product(
            async_client,
            auth_headers,
            title="Landing Kit",
            price=20,
            productCreator="alice",
        )

        search = await async_client.get(f"{API}/products/search", params={"searchTerm": "alice"})
        names = await async_client.get(f"{API}/products/names")

        assert created["id"] in [product["id"] for product in search.json()]
        assert {"id": created["id"], "title": "Landing Kit"} in names.json()
