"""
Product Inventory API: HTTP Transport Tests
===========================================

What:  The FastAPI app end to end: HTTP request → proxy event → router →
       HTTP response, with the request-ID middleware in front.
How:   HTTPX AsyncClient over ASGITransport; the app is built around the
       in-memory store from conftest.
"""

import json

import pytest


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_returns_200_with_empty_body(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_generates_request_id(self, test_client):
        response = await test_client.get("/health")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_echoes_client_request_id(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "client-abc"})

        assert response.headers["X-Request-ID"] == "client-abc"


class TestProducts:

    @pytest.mark.asyncio
    async def test_create_then_get(self, test_client, sample_product):
        created = await test_client.post("/product", json=sample_product)
        fetched = await test_client.get("/product", params={"productId": "1001"})

        assert created.status_code == 200
        assert created.json()["operation"] == "SAVE"
        assert fetched.json() == sample_product

    @pytest.mark.asyncio
    async def test_get_all(self, test_client, memory_store):
        for key in ["a", "b", "c"]:
            await memory_store.put({"productId": key})

        response = await test_client.get("/products")

        assert response.status_code == 200
        assert response.json() == {
            "products": [{"productId": "a"}, {"productId": "b"}, {"productId": "c"}]
        }

    @pytest.mark.asyncio
    async def test_patch_and_delete(self, test_client, memory_store, sample_product):
        await memory_store.put(sample_product)

        patched = await test_client.request(
            "PATCH",
            "/product",
            content=json.dumps({"productId": "1001", "updateKey": "price", "updateValue": 5}),
        )
        deleted = await test_client.request(
            "DELETE", "/product", content=json.dumps({"productId": "1001"})
        )

        assert patched.json()["updatedAttributes"] == {"price": 5}
        assert deleted.json()["item"] == {**sample_product, "price": 5}
        assert memory_store.items == {}

    @pytest.mark.asyncio
    async def test_unknown_path_returns_404(self, test_client):
        response = await test_client.get("/inventory/everything")

        assert response.status_code == 404
        assert response.json() == "404 Not Found"

    @pytest.mark.asyncio
    async def test_unrouted_method_returns_404(self, test_client):
        response = await test_client.put("/product", json={"productId": "1"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["HEAD", "OPTIONS"])
    async def test_head_and_options_return_404(self, test_client, method):
        response = await test_client.request(method, "/product")

        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
    async def test_no_builtin_docs_routes(self, test_client, path):
        response = await test_client.get(path)

        assert response.status_code == 404
        assert response.json() == "404 Not Found"

    @pytest.mark.asyncio
    async def test_cors_preflight_still_answered(self, test_client):
        response = await test_client.options(
            "/product",
            headers={
                "Origin": "http://localhost:3000",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestErrors:

    @pytest.mark.asyncio
    async def test_invalid_body_returns_400(self, test_client):
        response = await test_client.post(
            "/product", content="{not json", headers={"X-Request-ID": "bad-body"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["request_id"] == "bad-body"

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_with_request_id(self, test_client, memory_store):
        memory_store.failing.add("get")

        response = await test_client.get("/product", params={"productId": "1"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "store_error"
        assert body["request_id"] == response.headers["X-Request-ID"]
