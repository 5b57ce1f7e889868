"""Create products table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `products` table backing SqlProductStore.
How:   product_id is the primary key; the full item is a JSON document.
       Portable across SQLite and PostgreSQL (no dialect-specific types).

Rollback: downgrade() drops the table and every stored product.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "products",
        sa.Column(
            "product_id",
            sa.String(255),
            nullable=False,
            comment="The item's productId",
        ),
        sa.Column(
            "attributes",
            sa.JSON(),
            nullable=False,
            comment="Full product item, including productId",
        ),
        sa.PrimaryKeyConstraint("product_id"),
    )


def downgrade() -> None:
    op.drop_table("products")
