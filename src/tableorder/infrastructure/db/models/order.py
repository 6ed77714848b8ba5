from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from tableorder.infrastructure.db.models.menu import Base, BigIntegerId


class OrderModel(Base):
    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(BigIntegerId, primary_key=True, autoincrement=True)
    menu_id: Mapped[int] = mapped_column(Integer, nullable=False)
    table_number: Mapped[int] = mapped_column(Integer, nullable=False)
    cook_time: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (Index("ix_orders_table_number_order_id", "table_number", "order_id"),)
