"""
Product Inventory API: SQL Store
================================

What:  ProductStore backed by a relational table through async SQLAlchemy.
Why:   Runs the API locally (SQLite) or against Postgres without DynamoDB,
       with the same item and pagination semantics.
How:   Items live as JSON documents keyed by productId. Scans walk the
       primary key in ascending order; the cursor is the last key returned,
       mirroring DynamoDB's LastEvaluatedKey.
Who:   Selected by the store factory when STORE_BACKEND=sql.

Semantics kept from DynamoDB:
    - put replaces the whole item
    - update creates the item when it does not exist yet (upsert)
    - filters are applied after the page is read, so a filtered page can
      hold fewer than page_size items while still carrying a cursor
"""

import logging
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from inventory.database import Base, create_session_factory
from inventory.exceptions import StoreError
from inventory.models.product import ProductRecord
from inventory.store.base import PRIMARY_KEY, Item, ProductStore, ScanPage, ScanRequest

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class SqlProductStore(ProductStore):
    """
    SQL implementation of ProductStore.

    Args:
        engine:     Async engine; owned by the store and disposed on close()
        table_name: Collection name this store answers to in ScanRequest
        page_size:  Page size used when a ScanRequest does not set one
    """

    def __init__(
        self,
        engine: AsyncEngine,
        table_name: str = ProductRecord.__tablename__,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._engine = engine
        self._sessions = create_session_factory(engine)
        self._table_name = table_name
        self._page_size = page_size

    async def create_schema(self) -> None:
        """Create the products table if missing (tests and local runs; Alembic otherwise)."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as exc:
            raise _store_error("create_schema", exc) from exc

    async def get(self, product_id: str) -> Optional[Item]:
        try:
            async with self._sessions() as session:
                record = await session.get(ProductRecord, product_id)
                return dict(record.attributes) if record else None
        except SQLAlchemyError as exc:
            raise _store_error("get", exc, product_id) from exc

    async def put(self, item: Item) -> None:
        product_id = item[PRIMARY_KEY]
        try:
            async with self._sessions() as session:
                await session.merge(ProductRecord(product_id=product_id, attributes=dict(item)))
                await session.commit()
        except SQLAlchemyError as exc:
            raise _store_error("put", exc, product_id) from exc

    async def update(self, product_id: str, field_name: str, value: Any) -> Item:
        try:
            async with self._sessions() as session:
                record = await session.get(ProductRecord, product_id)
                if record is None:
                    record = ProductRecord(
                        product_id=product_id, attributes={PRIMARY_KEY: product_id}
                    )
                    session.add(record)
                record.attributes = {**record.attributes, field_name: value}
                await session.commit()
        except SQLAlchemyError as exc:
            raise _store_error("update", exc, product_id) from exc
        return {field_name: value}

    async def delete(self, product_id: str) -> Optional[Item]:
        try:
            async with self._sessions() as session:
                record = await session.get(ProductRecord, product_id)
                if record is None:
                    return None
                prior = dict(record.attributes)
                await session.delete(record)
                await session.commit()
                return prior
        except SQLAlchemyError as exc:
            raise _store_error("delete", exc, product_id) from exc

    async def scan(self, request: ScanRequest) -> ScanPage:
        if request.collection and request.collection != self._table_name:
            raise StoreError(
                message=f"Unknown collection '{request.collection}'",
                operation="scan",
                context={"table": self._table_name},
            )

        limit = request.page_size or self._page_size
        query = select(ProductRecord).order_by(ProductRecord.product_id).limit(limit)
        if request.exclusive_start_key:
            query = query.where(
                ProductRecord.product_id > request.exclusive_start_key[PRIMARY_KEY]
            )

        try:
            async with self._sessions() as session:
                result = await session.execute(query)
                records = list(result.scalars().all())
        except SQLAlchemyError as exc:
            raise _store_error("scan", exc) from exc

        # A full page may be followed by more rows; only a short page ends the scan.
        cursor = None
        if len(records) == limit:
            cursor = {PRIMARY_KEY: records[-1].product_id}

        items = [
            _project(record.attributes, request.projection)
            for record in records
            if _matches(record.attributes, request.filters)
        ]
        logger.debug("Scanned %d items (more=%s)", len(items), cursor is not None)
        return ScanPage(items=items, cursor=cursor)

    async def close(self) -> None:
        await self._engine.dispose()


def _matches(item: Item, filters: dict) -> bool:
    return all(name in item and item[name] == value for name, value in filters.items())


def _project(item: Item, projection: Optional[list]) -> Item:
    if not projection:
        return dict(item)
    return {name: item[name] for name in projection if name in item}


def _store_error(operation: str, exc: SQLAlchemyError, product_id: Optional[str] = None) -> StoreError:
    context = {"error_type": type(exc).__name__}
    if product_id is not None:
        context["product_id"] = product_id
    return StoreError(operation=operation, context=context)
