"""
Product Inventory API: Product SQLAlchemy Model
===============================================

What:  ORM model for the `products` table used by the SQL store.
How:   One row per product. The primary key is the product's `productId`;
       the whole item (including productId) is stored as a JSON document so
       the table stays schemaless like the DynamoDB one.
Who:   Used by SqlProductStore and by Alembic.

Query Patterns:
    - Point lookup:  WHERE product_id = :id            → primary key index
    - Scan page:     WHERE product_id > :cursor
                     ORDER BY product_id LIMIT :n      → primary key range scan
"""

from typing import Any, Dict

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory.database import Base


class ProductRecord(Base):
    """A stored product: its key plus the full item document."""

    __tablename__ = "products"

    product_id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="The item's productId",
    )

    # Always reassigned as a new dict on update; in-place mutation of a
    # JSON column is not tracked by the ORM.
    attributes: Mapped[Dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        comment="Full product item, including productId",
    )

    def __repr__(self) -> str:
        return f"<ProductRecord(product_id='{self.product_id}')>"
