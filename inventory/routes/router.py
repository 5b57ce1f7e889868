"""
Product Inventory API: Event Router
===================================

What:  Matches an inbound proxy event against the fixed route table and turns
       the handler's result into a response envelope.
Who:   Called by both transports (Lambda handler and the HTTP app).

Route Table (first match wins, exact string match on method and path):
    GET    /health    → health
    GET    /product   → get one   (productId from the query string)
    GET    /products  → get all
    POST   /product   → save      (item from the body)
    PATCH  /product   → modify    (productId, updateKey, updateValue from the body)
    DELETE /product   → delete    (productId from the body)
    *      *          → 404 "404 Not Found"

Status mapping:
    success             → 200 with the handler's body
    InvalidRequestError → 400 validation_error
    failed store call   → 500 store_error
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List

from pydantic import ValidationError

from inventory.exceptions import InvalidRequestError, StoreError
from inventory.middleware.request_id import request_id_var
from inventory.routes.responses import build_response
from inventory.schemas.product import (
    DeleteProductRequest,
    ErrorResponse,
    GetProductRequest,
    ProxyEvent,
    SaveProductRequest,
    UpdateProductRequest,
)
from inventory.services.product_service import ProductService
from inventory.store.base import StoreResult

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"
PRODUCT_PATH = "/product"
PRODUCTS_PATH = "/products"

NOT_FOUND_BODY = "404 Not Found"
STORE_FAILURE_MESSAGE = "The product store could not complete the request."

Action = Callable[[ProxyEvent], Awaitable[StoreResult[Any]]]


@dataclass(frozen=True)
class Route:
    method: str
    path: str
    action: Action

    def matches(self, event: ProxyEvent) -> bool:
        return event.http_method == self.method and event.path == self.path


class ProductRouter:
    """
    Dispatches proxy events to ProductService.

    Args:
        service: The ProductService all routes delegate to
    """

    def __init__(self, service: ProductService):
        self._service = service
        self._routes: List[Route] = [
            Route("GET", HEALTH_PATH, self._health),
            Route("GET", PRODUCT_PATH, self._get_product),
            Route("GET", PRODUCTS_PATH, self._get_products),
            Route("POST", PRODUCT_PATH, self._save_product),
            Route("PATCH", PRODUCT_PATH, self._modify_product),
            Route("DELETE", PRODUCT_PATH, self._delete_product),
        ]

    @property
    def service(self) -> ProductService:
        return self._service

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    async def dispatch(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Route one event and return its response envelope.

        Exceptions other than InvalidRequestError propagate to the transport.
        """
        logger.info("Request event: %s", event)
        try:
            parsed = ProxyEvent.model_validate(event)
        except ValidationError as exc:
            return self._invalid_request(
                InvalidRequestError(
                    message="Malformed request event", context={"errors": exc.error_count()}
                )
            )

        for route in self._routes:
            if not route.matches(parsed):
                continue
            try:
                result = await route.action(parsed)
            except InvalidRequestError as exc:
                return self._invalid_request(exc)
            if not result.ok:
                return self._store_failure(result.error)
            return build_response(200, result.value)

        logger.info("No route for %s %s", parsed.http_method, parsed.path)
        return build_response(404, NOT_FOUND_BODY)

    # ── Actions ───────────────────────────────────────────────────────────

    async def _health(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.health()

    async def _get_product(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.get_product(GetProductRequest.from_event(event))

    async def _get_products(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.get_products()

    async def _save_product(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.save_product(SaveProductRequest.from_event(event))

    async def _modify_product(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.modify_product(UpdateProductRequest.from_event(event))

    async def _delete_product(self, event: ProxyEvent) -> StoreResult[Any]:
        return await self._service.delete_product(DeleteProductRequest.from_event(event))

    # ── Error Envelopes ───────────────────────────────────────────────────

    def _invalid_request(self, exc: InvalidRequestError) -> Dict[str, Any]:
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request: %s", rid, exc.message)
        body = ErrorResponse(
            error="validation_error",
            message=exc.message,
            details={"field": exc.field} if exc.field else None,
            request_id=rid,
        )
        return build_response(400, body.model_dump())

    def _store_failure(self, exc: StoreError) -> Dict[str, Any]:
        rid = request_id_var.get("")
        # exc.message and context were logged where the failure was caught.
        body = ErrorResponse(error="store_error", message=STORE_FAILURE_MESSAGE, request_id=rid)
        return build_response(500, body.model_dump())
