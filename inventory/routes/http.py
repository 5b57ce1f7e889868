"""
Product Inventory API: HTTP Proxy Route
=======================================

What:  A catch-all FastAPI route that turns a real HTTP request into an API
       Gateway proxy event, runs it through ProductRouter, and writes the
       envelope back as the HTTP response.
Why:   Lets the same route table serve local development and container
       deployments, with no second copy of the routing rules.

    GET /product?productId=1001
    → {"httpMethod": "GET", "path": "/product",
       "queryStringParameters": {"productId": "1001"}, "body": None, ...}
    → ProductRouter.dispatch(...)
    → Response(status_code=envelope["statusCode"], content=envelope["body"])
"""

from typing import Any, Dict

from fastapi import APIRouter, Request, Response

from inventory.routes.router import ProductRouter

router = APIRouter(tags=["Products"])

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def to_proxy_event(request: Request) -> Dict[str, Any]:
    """Build the proxy event API Gateway would have sent for this request."""
    raw_body = await request.body()
    return {
        "httpMethod": request.method,
        "path": request.url.path,
        "queryStringParameters": dict(request.query_params) or None,
        "headers": dict(request.headers),
        "body": raw_body.decode("utf-8") if raw_body else None,
        "isBase64Encoded": False,
        "requestContext": {"requestId": getattr(request.state, "request_id", "")},
    }


@router.api_route(
    "/{path:path}",
    methods=PROXY_METHODS,
    summary="Product inventory proxy",
    description=(
        "Dispatches every request through the product route table: "
        "GET /health, GET|POST|PATCH|DELETE /product and GET /products. "
        "Anything else returns 404."
    ),
)
async def proxy(request: Request, path: str) -> Response:
    product_router: ProductRouter = request.app.state.product_router
    envelope = await product_router.dispatch(await to_proxy_event(request))
    return Response(
        content=envelope["body"],
        status_code=envelope["statusCode"],
        headers=envelope["headers"],
    )
