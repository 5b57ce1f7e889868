"""
Product Inventory API: Abstract Store Interface
===============================================

What:  The contract every key-value store backend implements, plus the
       value types that cross it (ScanRequest, ScanPage, StoreResult).
Why:   Handlers depend on this interface only, so the DynamoDB table, the
       SQL table and the in-memory test double are interchangeable.
How:   Concrete stores inherit from ProductStore and implement the five
       primitive operations. Backend-specific errors are translated into
       StoreError inside each implementation.

Tagged results:
    Stores raise; callers in the service layer go through `guarded()`,
    which turns a StoreError into `StoreResult.failure(...)`. "The item does
    not exist" is a success carrying None; "the call failed" is a failure.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

from inventory.exceptions import StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

Item = Dict[str, Any]
Cursor = Dict[str, Any]

PRIMARY_KEY = "productId"


@dataclass(frozen=True)
class ScanRequest:
    """
    Description of one scan call.

    Attributes:
        collection:          Table to scan; None means the store's own table
        filters:             Attribute equality filters, applied by the store
                             after reading a page (pages may come back short)
        projection:          Attribute names to return; None returns all
        page_size:           Upper bound on items read per page
        exclusive_start_key: Cursor from the previous page; None starts at the top
    """

    collection: Optional[str] = None
    filters: Dict[str, Any] = field(default_factory=dict)
    projection: Optional[List[str]] = None
    page_size: Optional[int] = None
    exclusive_start_key: Optional[Cursor] = None


@dataclass(frozen=True)
class ScanPage:
    """One page of scan output. `cursor` is None on the last page."""

    items: List[Item]
    cursor: Optional[Cursor] = None


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Success carrying a value, or failure carrying the StoreError."""

    value: Optional[T] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(error=error)

    def map(self, fn: Callable[[Optional[T]], U]) -> "StoreResult[U]":
        """Transform the value of a success; failures pass through untouched."""
        if not self.ok:
            return StoreResult(error=self.error)
        return StoreResult(value=fn(self.value))

    def unwrap(self) -> Optional[T]:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value


async def guarded(operation: str, call: Awaitable[T]) -> StoreResult[T]:
    """
    Await a store call and wrap its outcome in a StoreResult.

    Only StoreError is converted. Anything else is a programming error and
    propagates to the transport.
    """
    try:
        value = await call
    except StoreError as exc:
        logger.error(
            "Store %s failed: %s | Context: %s", operation, exc.message, exc.context
        )
        return StoreResult.failure(exc)
    return StoreResult.success(value)


class ProductStore(ABC):
    """
    Abstract interface to the product key-value store.

    Contract:
        - Items are plain dicts keyed by `productId`
        - `get` returns None for a missing item (not an error)
        - `update` sets exactly one attribute and returns the new value(s)
          of the updated attribute(s)
        - `delete` returns the item as it was before deletion, or None
        - `scan` returns one bounded page and the cursor for the next one
        - Every backend failure is raised as StoreError
    """

    @abstractmethod
    async def get(self, product_id: str) -> Optional[Item]:
        ...

    @abstractmethod
    async def put(self, item: Item) -> None:
        ...

    @abstractmethod
    async def update(self, product_id: str, field_name: str, value: Any) -> Item:
        ...

    @abstractmethod
    async def delete(self, product_id: str) -> Optional[Item]:
        ...

    @abstractmethod
    async def scan(self, request: ScanRequest) -> ScanPage:
        """
        Read one page of the table.

        Args:
            request: Scan description; `exclusive_start_key` continues a
                     previous scan from its cursor.

        Returns:
            ScanPage with the page's items in store order and the cursor for
            the next page, or cursor=None when the table is exhausted.

        Raises:
            StoreError: The backend call failed.
        """
        ...

    async def close(self) -> None:
        """Release backend resources. Stores without any keep the default."""
        return None
