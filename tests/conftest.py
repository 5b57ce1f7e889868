"""
Product Inventory API: Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures and store test doubles.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── memory_store:    InMemoryProductStore with a 2-item page size
    ├── product_service: ProductService over memory_store
    ├── product_router:  ProductRouter over product_service
    ├── sample_product:  {"productId": "1001", "price": 9.99, ...}
    └── test_client:     HTTPX AsyncClient bound to create_app(store=memory_store)
"""

import copy
import json
import os
from typing import Any, Dict, List, Optional, Set

# Settings are read at import time; pin them before any inventory import.
os.environ["STORE_BACKEND"] = "dynamodb"
os.environ["TABLE_NAME"] = "product-inventory-test"
os.environ["AWS_REGION"] = "us-east-1"
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("SCAN_MAX_PAGES", None)
os.environ.pop("SCAN_PAGE_SIZE", None)

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inventory.exceptions import StoreError
from inventory.routes.router import ProductRouter
from inventory.services.product_service import ProductService
from inventory.store.base import PRIMARY_KEY, Item, ProductStore, ScanPage, ScanRequest


# ══════════════════════════════════════════════════════════════════════════
# Store Test Doubles
# ══════════════════════════════════════════════════════════════════════════


class InMemoryProductStore(ProductStore):
    """
    Dict-backed ProductStore.

    - Scans walk insertion order in pages of `page_size`; the cursor is the
      last key of a page, like DynamoDB's LastEvaluatedKey
    - Operations named in `failing` raise StoreError
    - Every ScanRequest received is kept in `scan_requests`
    """

    def __init__(self, page_size: int = 2):
        self.items: Dict[str, Item] = {}
        self.page_size = page_size
        self.failing: Set[str] = set()
        self.scan_requests: List[ScanRequest] = []
        self.closed = False

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreError(operation=operation, context={"injected": True})

    async def get(self, product_id: str) -> Optional[Item]:
        self._check("get")
        return copy.deepcopy(self.items.get(product_id))

    async def put(self, item: Item) -> None:
        self._check("put")
        self.items[item[PRIMARY_KEY]] = copy.deepcopy(item)

    async def update(self, product_id: str, field_name: str, value: Any) -> Item:
        self._check("update")
        item = self.items.setdefault(product_id, {PRIMARY_KEY: product_id})
        item[field_name] = copy.deepcopy(value)
        return {field_name: value}

    async def delete(self, product_id: str) -> Optional[Item]:
        self._check("delete")
        return self.items.pop(product_id, None)

    async def scan(self, request: ScanRequest) -> ScanPage:
        self.scan_requests.append(request)
        self._check("scan")

        keys = list(self.items)
        start = 0
        if request.exclusive_start_key:
            start = keys.index(request.exclusive_start_key[PRIMARY_KEY]) + 1
        size = request.page_size or self.page_size
        page_keys = keys[start:start + size]

        cursor = None
        if start + size < len(keys):
            cursor = {PRIMARY_KEY: page_keys[-1]}

        items = [copy.deepcopy(self.items[key]) for key in page_keys]
        return ScanPage(items=items, cursor=cursor)

    async def close(self) -> None:
        self.closed = True


class ScriptedScanStore(InMemoryProductStore):
    """
    Returns a fixed sequence of scan pages, one per call.

    `fail_at` is a zero-based call index that raises StoreError instead.
    Past the end of `pages` every call raises, so a runaway loop fails loudly.
    """

    def __init__(self, pages: List[ScanPage], fail_at: Optional[int] = None):
        super().__init__()
        self.pages = pages
        self.fail_at = fail_at

    async def scan(self, request: ScanRequest) -> ScanPage:
        call = len(self.scan_requests)
        self.scan_requests.append(request)
        if call == self.fail_at or call >= len(self.pages):
            raise StoreError(operation="scan", context={"call": call})
        return self.pages[call]


class EndlessScanStore(InMemoryProductStore):
    """
    Always signals another page. Raises StoreError after `stop_after` calls
    so an unbounded collector can be observed without hanging the suite.
    """

    def __init__(self, stop_after: int = 500):
        super().__init__()
        self.stop_after = stop_after

    async def scan(self, request: ScanRequest) -> ScanPage:
        call = len(self.scan_requests)
        self.scan_requests.append(request)
        if call >= self.stop_after:
            raise StoreError(operation="scan", context={"call": call})
        key = f"p{call}"
        return ScanPage(items=[{PRIMARY_KEY: key}], cursor={PRIMARY_KEY: key})


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def memory_store() -> InMemoryProductStore:
    return InMemoryProductStore(page_size=2)


@pytest.fixture
def product_service(memory_store) -> ProductService:
    return ProductService(memory_store)


@pytest.fixture
def product_router(product_service) -> ProductRouter:
    return ProductRouter(product_service)


@pytest.fixture
def sample_product() -> Dict[str, Any]:
    return {
        "productId": "1001",
        "price": 9.99,
        "name": "Desk lamp",
        "tags": ["lighting", "office"],
    }


def make_event(
    method: str,
    path: str,
    body: Any = None,
    query: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """API Gateway proxy event; dict/list bodies are JSON-encoded."""
    if body is not None and not isinstance(body, str):
        body = json.dumps(body)
    return {
        "httpMethod": method,
        "path": path,
        "queryStringParameters": query,
        "body": body,
        "headers": {"Content-Type": "application/json"},
        "requestContext": {"stage": "test"},
    }


@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from inventory.main import create_app

    app = create_app(store=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
