"""create menus and orders

Revision ID: 202610190900
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "202610190900"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "menus",
        sa.Column("menu_id", sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column("name", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("menu_id", name="menus_pk"),
    )

    op.create_table(
        "orders",
        sa.Column("order_id", sa.BigInteger(), autoincrement=True, nullable=False),
        sa.Column("menu_id", sa.Integer(), nullable=False),
        sa.Column("table_number", sa.Integer(), nullable=False),
        sa.Column("cook_time", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("order_id", name="orders_pk"),
    )
    op.create_index(
        "ix_orders_table_number_order_id",
        "orders",
        ["table_number", "order_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_orders_table_number_order_id", table_name="orders")
    op.drop_table("orders")
    op.drop_table("menus")
