"""
Product Inventory API: DynamoDB Store
=====================================

What:  ProductStore backed by a DynamoDB table through the boto3 resource API.
How:   Each primitive maps to one Table call (get_item, put_item,
       update_item, delete_item, scan). boto3 is synchronous, so calls run
       in the event loop's default executor.
Who:   Selected by the store factory when STORE_BACKEND=dynamodb.

Number handling:
    The boto3 resource layer rejects Python floats and returns every number
    as Decimal. Floats are converted to Decimal on the way in; the response
    builder converts Decimals back when serializing.
"""

import asyncio
import functools
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError

from inventory.exceptions import StoreError
from inventory.store.base import PRIMARY_KEY, Item, ProductStore, ScanPage, ScanRequest

logger = logging.getLogger(__name__)


def to_dynamo(value: Any) -> Any:
    """Recursively replace floats with Decimal so boto3 accepts the value."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamo(v) for v in value]
    return value


class DynamoDBProductStore(ProductStore):
    """
    DynamoDB implementation of ProductStore.

    Args:
        resource:   A boto3 DynamoDB service resource
        table_name: Default table; ScanRequest.collection can name another one
    """

    def __init__(self, resource: Any, table_name: str):
        self._resource = resource
        self._table_name = table_name
        self._table = resource.Table(table_name)

    async def _call(self, operation: str, fn: Callable[..., Dict[str, Any]], **kwargs) -> Dict[str, Any]:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(fn, **kwargs))
        except ClientError as exc:
            error = exc.response.get("Error", {})
            raise StoreError(
                operation=operation,
                context={
                    "table": self._table_name,
                    "error_code": error.get("Code"),
                    "error_message": error.get("Message"),
                },
            ) from exc
        except BotoCoreError as exc:
            raise StoreError(
                operation=operation,
                context={"table": self._table_name, "error_type": type(exc).__name__},
            ) from exc

    async def get(self, product_id: str) -> Optional[Item]:
        response = await self._call(
            "get", self._table.get_item, Key={PRIMARY_KEY: product_id}
        )
        return response.get("Item")

    async def put(self, item: Item) -> None:
        await self._call("put", self._table.put_item, Item=to_dynamo(item))

    async def update(self, product_id: str, field_name: str, value: Any) -> Item:
        # The field name goes through a placeholder; reserved words and
        # punctuation in attribute names stay legal.
        response = await self._call(
            "update",
            self._table.update_item,
            Key={PRIMARY_KEY: product_id},
            UpdateExpression="set #field = :value",
            ExpressionAttributeNames={"#field": field_name},
            ExpressionAttributeValues={":value": to_dynamo(value)},
            ReturnValues="UPDATED_NEW",
        )
        return response.get("Attributes", {})

    async def delete(self, product_id: str) -> Optional[Item]:
        response = await self._call(
            "delete",
            self._table.delete_item,
            Key={PRIMARY_KEY: product_id},
            ReturnValues="ALL_OLD",
        )
        return response.get("Attributes")

    async def scan(self, request: ScanRequest) -> ScanPage:
        table = self._table
        if request.collection and request.collection != self._table_name:
            table = self._resource.Table(request.collection)

        params: Dict[str, Any] = {}
        if request.page_size:
            params["Limit"] = request.page_size
        if request.exclusive_start_key:
            params["ExclusiveStartKey"] = request.exclusive_start_key
        if request.filters:
            conditions = [Attr(name).eq(to_dynamo(value)) for name, value in request.filters.items()]
            params["FilterExpression"] = functools.reduce(lambda a, b: a & b, conditions)
        if request.projection:
            names = {f"#p{i}": name for i, name in enumerate(request.projection)}
            params["ProjectionExpression"] = ", ".join(names)
            params["ExpressionAttributeNames"] = names

        response = await self._call("scan", table.scan, **params)
        items = response.get("Items", [])
        cursor = response.get("LastEvaluatedKey")
        logger.debug(
            "Scanned %d items from %s (more=%s)", len(items), table.name, cursor is not None
        )
        return ScanPage(items=items, cursor=cursor)
