"""
Product Inventory API: SQL Store Tests
======================================

What:  SqlProductStore against a throwaway SQLite file (aiosqlite).
How:   Each test gets a fresh database under pytest's tmp_path; the schema
       is created with create_schema() instead of Alembic.
"""

import pytest
import pytest_asyncio

from inventory.database import create_engine
from inventory.exceptions import StoreError
from inventory.services.pagination import collect_all
from inventory.store.base import ScanRequest
from inventory.store.sql import SqlProductStore


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    store = SqlProductStore(engine, page_size=2)
    await store.create_schema()
    yield store
    await store.close()


class TestPointOperations:

    @pytest.mark.asyncio
    async def test_put_then_get(self, sql_store, sample_product):
        await sql_store.put(sample_product)

        assert await sql_store.get("1001") == sample_product

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, sql_store):
        assert await sql_store.get("nope") is None

    @pytest.mark.asyncio
    async def test_put_replaces_whole_item(self, sql_store):
        await sql_store.put({"productId": "1", "name": "old", "color": "red"})
        await sql_store.put({"productId": "1", "name": "new"})

        assert await sql_store.get("1") == {"productId": "1", "name": "new"}

    @pytest.mark.asyncio
    async def test_update_existing_item(self, sql_store, sample_product):
        await sql_store.put(sample_product)

        updated = await sql_store.update("1001", "price", 12.5)

        assert updated == {"price": 12.5}
        assert await sql_store.get("1001") == {**sample_product, "price": 12.5}

    @pytest.mark.asyncio
    async def test_update_missing_item_creates_it(self, sql_store):
        await sql_store.update("2002", "name", "Chair")

        assert await sql_store.get("2002") == {"productId": "2002", "name": "Chair"}

    @pytest.mark.asyncio
    async def test_delete_returns_prior_item(self, sql_store, sample_product):
        await sql_store.put(sample_product)

        prior = await sql_store.delete("1001")

        assert prior == sample_product
        assert await sql_store.get("1001") is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_none(self, sql_store):
        assert await sql_store.delete("nope") is None


class TestScan:

    @pytest.mark.asyncio
    async def test_pages_walk_keys_in_order(self, sql_store):
        for key in ["c", "a", "e", "b", "d"]:
            await sql_store.put({"productId": key})

        first = await sql_store.scan(ScanRequest())
        second = await sql_store.scan(ScanRequest(exclusive_start_key=first.cursor))

        assert [i["productId"] for i in first.items] == ["a", "b"]
        assert first.cursor == {"productId": "b"}
        assert [i["productId"] for i in second.items] == ["c", "d"]

    @pytest.mark.asyncio
    async def test_collect_all_reads_every_item(self, sql_store):
        for key in ["c", "a", "e", "b", "d"]:
            await sql_store.put({"productId": key})

        result = await collect_all(sql_store, ScanRequest())

        assert [i["productId"] for i in result.value] == ["a", "b", "c", "d", "e"]

    @pytest.mark.asyncio
    async def test_empty_table(self, sql_store):
        page = await sql_store.scan(ScanRequest())

        assert page.items == []
        assert page.cursor is None

    @pytest.mark.asyncio
    async def test_request_page_size_overrides_default(self, sql_store):
        for key in ["a", "b", "c"]:
            await sql_store.put({"productId": key})

        page = await sql_store.scan(ScanRequest(page_size=10))

        assert len(page.items) == 3
        assert page.cursor is None

    @pytest.mark.asyncio
    async def test_filters_and_projection(self, sql_store):
        await sql_store.put({"productId": "a", "color": "red", "name": "A"})
        await sql_store.put({"productId": "b", "color": "blue", "name": "B"})
        await sql_store.put({"productId": "c", "color": "red", "name": "C"})

        result = await collect_all(
            sql_store, ScanRequest(filters={"color": "red"}, projection=["productId", "name"])
        )

        assert result.value == [{"productId": "a", "name": "A"}, {"productId": "c", "name": "C"}]

    @pytest.mark.asyncio
    async def test_unknown_collection_raises(self, sql_store):
        with pytest.raises(StoreError) as exc_info:
            await sql_store.scan(ScanRequest(collection="archived"))

        assert exc_info.value.operation == "scan"
