"""
Product Inventory API: Request Descriptors and Response Models
==============================================================

What:  Pydantic models for the inbound proxy event, one request descriptor
       per operation, and the error body returned to callers.
Why:   Handlers receive typed, validated input instead of raw event dicts.
       A missing or mistyped field is rejected when the descriptor is
       built, as an InvalidRequestError (400).
How:   Each descriptor has a `from_event()` constructor that pulls its fields
       from the query string or the JSON body and validates them.

Wire names:
    Fields keep the camelCase names callers send (productId, updateKey,
    updateValue) as aliases; Python code uses snake_case. Only the wire
    names validate: a `product_id` key in a body is an ordinary attribute.
"""

import base64
import binascii
import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from inventory.exceptions import InvalidRequestError
from inventory.store.base import PRIMARY_KEY


# ══════════════════════════════════════════════════════════════════════════
# Inbound Event
# ══════════════════════════════════════════════════════════════════════════


class ProxyEvent(BaseModel):
    """
    API Gateway proxy event, reduced to the fields the router reads.

    Any other keys (requestContext, stageVariables, ...) are accepted and kept.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    http_method: str = Field(default="", alias="httpMethod")
    path: str = Field(default="")
    query_string_parameters: Optional[Dict[str, Optional[str]]] = Field(
        default=None, alias="queryStringParameters"
    )
    headers: Optional[Dict[str, Optional[str]]] = Field(default=None)
    body: Optional[str] = Field(default=None)
    is_base64_encoded: bool = Field(default=False, alias="isBase64Encoded")

    def query_param(self, name: str) -> Optional[str]:
        return (self.query_string_parameters or {}).get(name)

    def json_body(self) -> Dict[str, Any]:
        """
        Decode the body into a JSON object.

        Raises:
            InvalidRequestError: body missing, not base64 when flagged,
                                 not JSON, or not a JSON object
        """
        raw = self.body
        if raw is None or raw == "":
            raise InvalidRequestError(message="Request body is required", field="body")

        if self.is_base64_encoded:
            try:
                raw = base64.b64decode(raw).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError):
                raise InvalidRequestError(
                    message="Request body is not valid base64-encoded UTF-8", field="body"
                )

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise InvalidRequestError(
                message=f"Request body is not valid JSON: {exc.msg}", field="body"
            )

        if not isinstance(payload, dict):
            raise InvalidRequestError(message="Request body must be a JSON object", field="body")
        return payload


def _validate(model: type, data: Dict[str, Any]) -> Any:
    """Validate `data` against `model`, translating pydantic errors to InvalidRequestError."""
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise InvalidRequestError(
            message=f"{field}: {first['msg']}" if field else first["msg"],
            field=field,
            context={"errors": exc.error_count()},
        )


# ══════════════════════════════════════════════════════════════════════════
# Request Descriptors
# ══════════════════════════════════════════════════════════════════════════


class GetProductRequest(BaseModel):
    """GET /product?productId=..."""

    product_id: StrictStr = Field(alias=PRIMARY_KEY, min_length=1)

    @classmethod
    def from_event(cls, event: ProxyEvent) -> "GetProductRequest":
        data = {}
        product_id = event.query_param(PRIMARY_KEY)
        if product_id is not None:
            data[PRIMARY_KEY] = product_id
        return _validate(cls, data)


class SaveProductRequest(BaseModel):
    """
    POST /product with a full item as the body.

    Only productId is checked; every other attribute is stored as sent.
    """

    model_config = ConfigDict(extra="allow")

    product_id: StrictStr = Field(alias=PRIMARY_KEY, min_length=1)

    @property
    def item(self) -> Dict[str, Any]:
        """The item as sent by the caller, productId first."""
        return {PRIMARY_KEY: self.product_id, **(self.model_extra or {})}

    @classmethod
    def from_event(cls, event: ProxyEvent) -> "SaveProductRequest":
        return _validate(cls, event.json_body())


class UpdateProductRequest(BaseModel):
    """PATCH /product with {"productId", "updateKey", "updateValue"}."""

    product_id: StrictStr = Field(alias=PRIMARY_KEY, min_length=1)
    update_key: StrictStr = Field(alias="updateKey", min_length=1)
    # Required, but null is a legal value to set.
    update_value: Any = Field(alias="updateValue")

    @field_validator("update_key")
    @classmethod
    def validate_update_key(cls, v: str) -> str:
        """The primary key attribute cannot be rewritten in place."""
        if v == PRIMARY_KEY:
            raise ValueError(f"{PRIMARY_KEY} cannot be updated")
        return v

    @classmethod
    def from_event(cls, event: ProxyEvent) -> "UpdateProductRequest":
        return _validate(cls, event.json_body())


class DeleteProductRequest(BaseModel):
    """DELETE /product with {"productId"} as the body."""

    product_id: StrictStr = Field(alias=PRIMARY_KEY, min_length=1)

    @classmethod
    def from_event(cls, event: ProxyEvent) -> "DeleteProductRequest":
        return _validate(cls, event.json_body())


# ══════════════════════════════════════════════════════════════════════════
# Error Response Model
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Body of every 400/500 envelope.

    Example:
        {
            "error": "store_error",
            "message": "The product store could not complete the request.",
            "details": null,
            "request_id": "a1b2c3d4"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
