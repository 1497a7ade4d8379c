"""Tests for the items API example."""

from waypost.testing import TestClient

ORIGIN = {"Origin": "https://app.example"}


class TestItemsAPI:
    async def test_health(self, example_router) -> None:
        async with TestClient(example_router) as client:
            response = await client.get("/health", headers={"Origin": "https://any.example"})
        assert response.json() == {"status": "ok"}

    async def test_create_then_show(self, example_router) -> None:
        async with TestClient(example_router) as client:
            created = await client.post("/items", headers=ORIGIN, json={"title": "Write docs"})
            shown = await client.get("/items/1", headers=ORIGIN)
        assert created.status == 201
        assert shown.json() == {"id": 1, "title": "Write docs", "done": False}

    async def test_update_and_delete(self, example_router) -> None:
        async with TestClient(example_router) as client:
            await client.post("/items", headers=ORIGIN, json={"title": "Ship"})
            updated = await client.request(
                "PUT", "/items/1", headers={**ORIGIN, "content-type": "application/json"},
                body=b'{"done": true}',
            )
            deleted = await client.delete("/items/1", headers=ORIGIN)
            missing = await client.get("/items/1", headers=ORIGIN)
        assert updated.json()["done"] is True
        assert deleted.status == 204
        assert missing.status == 404

    async def test_foreign_origin_cannot_write(self, example_router) -> None:
        async with TestClient(example_router) as client:
            response = await client.post(
                "/items", headers={"Origin": "https://evil.example"}, json={"title": "x"}
            )
        assert response.status == 403
        assert response.json()["error"] == "Forbidden"

    async def test_foreign_origin_can_read(self, example_router) -> None:
        async with TestClient(example_router) as client:
            response = await client.get("/items", headers={"Origin": "https://evil.example"})
        assert response.status == 200
        assert response.get_header("access-control-allow-origin") == "https://evil.example"
