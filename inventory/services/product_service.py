"""
Product Inventory API: Product Service (Operation Handlers)
===========================================================

What:  The six operations behind the route table: health, get one, get all,
       save, modify, delete.
Why:   Keeps store access and response-body shaping independent of the
       transport. The router decides status codes; this layer decides bodies.
How:   Each method takes a validated request descriptor, makes one store call
       (get-all makes one collector run), and returns a StoreResult whose
       value is the response body.
Who:   Called by ProductRouter; calls the injected ProductStore.

Response bodies:
    save    → {"operation": "SAVE",   "message": "SUCCESS", "item": <item>}
    modify  → {"operation": "UPDATE", "message": "SUCCESS", "updatedAttributes": {...}}
    delete  → {"operation": "DELETE", "message": "SUCCESS", "item": <prior item>}
    get all → {"products": [...]}
"""

import logging
from typing import Any, Dict, List, Optional

from inventory.schemas.product import (
    DeleteProductRequest,
    GetProductRequest,
    SaveProductRequest,
    UpdateProductRequest,
)
from inventory.services.pagination import collect_all
from inventory.store.base import Item, ProductStore, ScanRequest, StoreResult, guarded

logger = logging.getLogger(__name__)

SUCCESS = "SUCCESS"


class ProductService:
    """
    Business logic for product operations.

    Holds no state besides its dependencies; one instance can serve any
    number of sequential requests.

    Args:
        store:     The ProductStore every operation goes through
        page_size: Limit per scan page for get-all (None leaves it to the store)
        max_pages: Page ceiling for get-all (None is unbounded)
    """

    def __init__(
        self,
        store: ProductStore,
        page_size: Optional[int] = None,
        max_pages: Optional[int] = None,
    ):
        self._store = store
        self._page_size = page_size
        self._max_pages = max_pages

    @property
    def store(self) -> ProductStore:
        return self._store

    async def health(self) -> StoreResult[None]:
        """Liveness only; the store is not contacted."""
        return StoreResult.success(None)

    async def get_product(self, request: GetProductRequest) -> StoreResult[Optional[Item]]:
        """The item, or a success carrying None when no item has that productId."""
        result = await guarded("get", self._store.get(request.product_id))
        if result.ok and result.value is None:
            logger.info("Product %s not found", request.product_id)
        return result

    async def get_products(self) -> StoreResult[Dict[str, List[Item]]]:
        result = await collect_all(
            self._store,
            ScanRequest(page_size=self._page_size),
            max_pages=self._max_pages,
        )
        return result.map(lambda items: {"products": items})

    async def save_product(self, request: SaveProductRequest) -> StoreResult[Dict[str, Any]]:
        item = request.item
        result = await guarded("put", self._store.put(item))
        if result.ok:
            logger.info("Saved product %s", request.product_id)
        return result.map(lambda _: {"operation": "SAVE", "message": SUCCESS, "item": item})

    async def modify_product(self, request: UpdateProductRequest) -> StoreResult[Dict[str, Any]]:
        result = await guarded(
            "update",
            self._store.update(request.product_id, request.update_key, request.update_value),
        )
        if result.ok:
            logger.info("Updated %s on product %s", request.update_key, request.product_id)
        return result.map(
            lambda attributes: {
                "operation": "UPDATE",
                "message": SUCCESS,
                "updatedAttributes": attributes,
            }
        )

    async def delete_product(self, request: DeleteProductRequest) -> StoreResult[Dict[str, Any]]:
        result = await guarded("delete", self._store.delete(request.product_id))
        if result.ok:
            logger.info("Deleted product %s (existed=%s)", request.product_id, result.value is not None)
        return result.map(lambda prior: {"operation": "DELETE", "message": SUCCESS, "item": prior})
