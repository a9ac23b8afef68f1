"""
Blog Backend - Category API Tests
===================================

What:  End-to-end tests for /api/categories and /api/categories/{id}.
Why:   Status codes and error bodies are the published contract of the API.
How:   HTTPX AsyncClient against the ASGI app, backed by in-memory SQLite.

What we test:
    ✅ Create, list (with _count.posts), get (with posts), update, delete
    ✅ Duplicate names rejected with 400
    ✅ Malformed ids rejected with 400 on every item method
    ✅ Unknown ids answered with 404
    ✅ Deleting a category detaches its posts
    ✅ Unsupported methods answered with 405 and an Allow header
"""

import pytest


class TestCreateCategory:

    @pytest.mark.asyncio
    async def test_create_returns_201(self, test_client):
        response = await test_client.post(
            "/api/categories", json={"name": "Tech", "description": "Gadgets"}
        )

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Tech"
        assert body["description"] == "Gadgets"
        assert isinstance(body["id"], int)

    @pytest.mark.asyncio
    async def test_duplicate_name_is_rejected(self, test_client):
        """Second create with the same name should fail without a second row."""
        first = await test_client.post("/api/categories", json={"name": "Tech"})
        second = await test_client.post("/api/categories", json={"name": "Tech"})

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json() == {"error": "Category with this name already exists"}

        listing = (await test_client.get("/api/categories")).json()
        assert [c["name"] for c in listing] == ["Tech"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{}, {"name": ""}, {"description": "only"}])
    async def test_missing_name_is_rejected(self, test_client, body):
        response = await test_client.post("/api/categories", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Name is required"}

    @pytest.mark.asyncio
    async def test_malformed_body_is_rejected(self, test_client):
        response = await test_client.post(
            "/api/categories",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestListAndGetCategory:

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        response = await test_client.get("/api/categories")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_includes_post_counts(self, test_client, seeded):
        await test_client.post("/api/categories", json={"name": "Empty"})

        listing = (await test_client.get("/api/categories")).json()

        assert [c["name"] for c in listing] == ["Python", "Empty"]
        assert listing[0]["_count"] == {"posts": 2}
        assert listing[1]["_count"] == {"posts": 0}

    @pytest.mark.asyncio
    async def test_get_includes_posts(self, test_client, seeded):
        category_id = seeded["category"]["id"]

        response = await test_client.get(f"/api/categories/{category_id}")

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Python"
        assert [p["title"] for p in body["posts"]] == ["First", "Second"]
        assert all(p["categoryId"] == category_id for p in body["posts"])

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, test_client):
        response = await test_client.get("/api/categories/999999")

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}


class TestUpdateCategory:

    @pytest.mark.asyncio
    async def test_update_changes_only_present_fields(self, test_client):
        created = (
            await test_client.post(
                "/api/categories", json={"name": "Tech", "description": "Gadgets"}
            )
        ).json()

        response = await test_client.put(
            f"/api/categories/{created['id']}", json={"name": "Technology"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "id": created["id"],
            "name": "Technology",
            "description": "Gadgets",
        }

    @pytest.mark.asyncio
    async def test_rename_onto_existing_name_is_rejected(self, test_client):
        await test_client.post("/api/categories", json={"name": "Tech"})
        other = (await test_client.post("/api/categories", json={"name": "Food"})).json()

        response = await test_client.put(
            f"/api/categories/{other['id']}", json={"name": "Tech"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Category with this name already exists"}

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404(self, test_client):
        response = await test_client.put("/api/categories/999999", json={"name": "X"})

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}


class TestDeleteCategory:

    @pytest.mark.asyncio
    async def test_delete_returns_204_then_404(self, test_client):
        created = (await test_client.post("/api/categories", json={"name": "Tech"})).json()

        deleted = await test_client.delete(f"/api/categories/{created['id']}")
        again = await test_client.get(f"/api/categories/{created['id']}")

        assert deleted.status_code == 204
        assert deleted.content == b""
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_detaches_posts(self, test_client, seeded):
        """Posts survive their category; their categoryId goes back to null."""
        response = await test_client.delete(f"/api/categories/{seeded['category']['id']}")
        post = (await test_client.get(f"/api/posts/{seeded['first']['id']}")).json()

        assert response.status_code == 204
        assert post["categoryId"] is None
        assert post["category"] is None

    @pytest.mark.asyncio
    async def test_ids_are_not_reused(self, test_client):
        first = (await test_client.post("/api/categories", json={"name": "A"})).json()
        await test_client.delete(f"/api/categories/{first['id']}")
        second = (await test_client.post("/api/categories", json={"name": "B"})).json()

        assert second["id"] > first["id"]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_404(self, test_client):
        response = await test_client.delete("/api/categories/999999")

        assert response.status_code == 404


class TestCategoryIdParsing:
    """Malformed ids never reach the store."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    @pytest.mark.parametrize("raw_id", ["abc", "0", "-1", "1.5", "12abc"])
    async def test_malformed_id_is_400(self, test_client, method, raw_id):
        response = await test_client.request(
            method, f"/api/categories/{raw_id}", json={"name": "X"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid id"}


class TestCategoryMethodNotAllowed:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["PUT", "DELETE", "PATCH", "OPTIONS"])
    async def test_collection_allows_get_and_post(self, test_client, method):
        response = await test_client.request(method, "/api/categories")

        assert response.status_code == 405
        assert response.headers["allow"] == "GET, POST"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PATCH"])
    async def test_item_allows_get_put_delete(self, test_client, method):
        response = await test_client.request(method, "/api/categories/1")

        assert response.status_code == 405
        assert response.headers["allow"] == "GET, PUT, DELETE"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["POST", "PATCH"])
    async def test_malformed_id_wins_over_unsupported_method(self, test_client, method):
        response = await test_client.request(method, "/api/categories/abc")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid id"}


class TestOversizedCategoryIds:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
    async def test_oversized_id_is_404(self, test_client, method):
        response = await test_client.request(
            method, "/api/categories/99999999999999999999", json={"name": "X"}
        )

        assert response.status_code == 404
        assert response.json() == {"error": "Category not found"}
