"""
Product Inventory API: AWS Lambda Entry Point
=============================================

What:  `handler(event, context)`, the function API Gateway invokes.
How:   Each invocation builds its store, service and router from settings,
       dispatches the event, closes the store and returns the envelope.
       Nothing is shared between invocations.

Deployment:
    Handler string: inventory.handler.handler
    Environment:    TABLE_NAME, AWS_REGION, SCAN_PAGE_SIZE, SCAN_MAX_PAGES, LOG_LEVEL
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from inventory.config import Settings, settings
from inventory.logging_config import setup_logging
from inventory.middleware.request_id import new_request_id, request_id_var
from inventory.routes.router import ProductRouter
from inventory.services.product_service import ProductService
from inventory.store import create_store

logger = logging.getLogger(__name__)


def build_router(config: Optional[Settings] = None) -> ProductRouter:
    """Wire store → service → router from the given settings."""
    config = config or settings
    service = ProductService(
        create_store(config),
        page_size=config.scan_page_size,
        max_pages=config.scan_max_pages,
    )
    return ProductRouter(service)


async def _dispatch(router: ProductRouter, event: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return await router.dispatch(event)
    finally:
        await router.service.store.close()


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    """
    Lambda handler for API Gateway proxy events.

    Args:
        event:   Proxy event (httpMethod, path, queryStringParameters, body, ...)
        context: Lambda context; its aws_request_id becomes the request ID

    Returns:
        {"statusCode": int, "headers": {...}, "body": str}
    """
    setup_logging()
    request_id_var.set(getattr(context, "aws_request_id", None) or new_request_id())
    return asyncio.run(_dispatch(build_router(), event))
