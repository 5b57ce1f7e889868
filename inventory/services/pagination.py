"""
Product Inventory API: Paginated Collector
==========================================

What:  Drives ProductStore.scan() page after page and assembles the complete
       item list.
Who:   Called by ProductService.get_products() for GET /products.

Loop:
    ┌──────────────┐   page.items    ┌─────────────┐
    │ scan(request)│───────────────▶│ accumulator │
    └──────┬───────┘                 └─────────────┘
           │ page.cursor?
           ├── yes → request = request with exclusive_start_key=cursor, repeat
           └── no  → done, success(accumulator)

Guarantees:
    - Items keep page-arrival order and in-page order; nothing is re-sorted
    - Output length is the sum of page lengths
    - Pages are fetched strictly one after another (each needs the previous cursor)
    - The caller's ScanRequest is never modified
    - A failed page makes the whole result a failure; the items collected
      before it are dropped
    - Without max_pages the loop runs for as long as the store keeps
      returning a cursor
"""

import dataclasses
import logging
from typing import List, Optional

from inventory.exceptions import ScanLimitExceededError, StoreError
from inventory.store.base import Item, ProductStore, ScanRequest, StoreResult

logger = logging.getLogger(__name__)


async def collect_all(
    store: ProductStore,
    request: ScanRequest,
    items: Optional[List[Item]] = None,
    max_pages: Optional[int] = None,
) -> StoreResult[List[Item]]:
    """
    Scan until the store stops returning a continuation cursor.

    Args:
        store:     Store to scan
        request:   First-page scan description
        items:     Items to prepend to the result (copied, not mutated)
        max_pages: Give up with ScanLimitExceededError after this many pages
                   if the store is still signalling more; None is unbounded

    Returns:
        Success with every item across all pages, or failure with the
        StoreError of the page that broke the scan.
    """
    accumulated: List[Item] = list(items or [])
    current = request
    pages = 0

    while True:
        try:
            page = await store.scan(current)
        except StoreError as exc:
            logger.error(
                "Scan failed on page %d after %d items: %s | Context: %s",
                pages + 1,
                len(accumulated),
                exc.message,
                exc.context,
            )
            return StoreResult.failure(exc)

        accumulated.extend(page.items)
        pages += 1

        if page.cursor is None:
            logger.info("Scan complete: %d items in %d pages", len(accumulated), pages)
            return StoreResult.success(accumulated)

        if max_pages is not None and pages >= max_pages:
            error = ScanLimitExceededError(max_pages=max_pages, items_collected=len(accumulated))
            logger.error("%s (%d items collected)", error.message, len(accumulated))
            return StoreResult.failure(error)

        current = dataclasses.replace(current, exclusive_start_key=page.cursor)
