"""
Product Inventory API: FastAPI Application Factory
==================================================

What:  Creates the HTTP transport: a FastAPI app whose only route forwards
       every request to ProductRouter.
How:   Factory pattern. create_app() wires store → service → router and
       stores the router on app.state; tests pass their own store.
Who:   uvicorn (`uvicorn inventory.main:app`) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Route:       /{path} (any method) → ProductRouter  │
    │                                                     │
    │  Exception Handlers:                                │
    │     InventoryError → 500 │ Exception → 500          │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, log the selected store
    Shutdown: close the store (disposes the SQL engine, no-op for DynamoDB)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inventory import __version__
from inventory.config import Settings, settings
from inventory.exceptions import InventoryError
from inventory.logging_config import setup_logging
from inventory.middleware.logging import RequestLoggingMiddleware
from inventory.middleware.request_id import RequestIDMiddleware, request_id_var
from inventory.routes import http
from inventory.routes.router import ProductRouter
from inventory.services.product_service import ProductService
from inventory.store import ProductStore, create_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Configure logging on startup; close the store on shutdown."""
    setup_logging()
    store = app.state.product_router.service.store
    logger.info("Product Inventory API %s starting with %s", __version__, type(store).__name__)

    yield

    logger.info("Product Inventory API shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Last-resort handlers for errors the router does not turn into envelopes.

    Validation and store failures never reach these; they are rendered by
    ProductRouter. What lands here is a bug, logged with its traceback.
    """

    @app.exception_handler(InventoryError)
    async def handle_inventory_error(request: Request, exc: InventoryError):
        rid = request_id_var.get("")
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
        )


def create_app(store: Optional[ProductStore] = None, config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store:  ProductStore to serve; built from settings when omitted
        config: Settings to use; the module-level settings when omitted
    """
    config = config or settings
    app = FastAPI(
        title="Product Inventory API",
        description="CRUD facade over the product-inventory key-value store.",
        version=__version__,
        lifespan=lifespan,
        # Every path belongs to the route table; no built-in docs endpoints.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    service = ProductService(
        store or create_store(config),
        page_size=config.scan_page_size,
        max_pages=config.scan_max_pages,
    )
    app.state.product_router = ProductRouter(service)

    # Middleware executes in reverse order of addition: Request ID runs first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(http.router)

    return app


app = create_app()
