"""
Product Inventory API: Response Builder
=======================================

What:  Wraps a status code and a body value into the proxy response envelope.
How:   Pure function, no side effects:

    build_response(200, {"products": []})
    → {"statusCode": 200,
       "headers": {"Content-Type": "application/json"},
       "body": '{"products": []}'}

    A body of None becomes an empty string (GET /health, missing product).
"""

import json
from decimal import Decimal
from typing import Any, Dict

JSON_HEADERS = {"Content-Type": "application/json"}


def _json_default(value: Any) -> Any:
    # DynamoDB hands every number back as Decimal.
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def build_response(status_code: int, body: Any = None) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(JSON_HEADERS),
        "body": "" if body is None else json.dumps(body, default=_json_default),
    }
