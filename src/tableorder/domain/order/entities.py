from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from tableorder.domain.common.ids import (
    MAX_TABLE_NUMBER,
    MIN_TABLE_NUMBER,
    MenuId,
    OrderId,
    TableNumber,
)
from tableorder.domain.menu.entities import MenuItem


@dataclass(frozen=True)
class Order:
    """A single unit of one menu item requested by a table.

    ``order_id`` is ``None`` until the order store has assigned one.
    """

    order_id: OrderId | None
    table_number: TableNumber
    menu_id: MenuId
    cook_time: int
    created_at: datetime
    menu_name: str | None = None

    def __post_init__(self) -> None:
        if not MIN_TABLE_NUMBER <= self.table_number <= MAX_TABLE_NUMBER:
            raise ValueError(
                f"table_number must be in range of {MIN_TABLE_NUMBER} to {MAX_TABLE_NUMBER}"
            )
        if self.cook_time < 0:
            raise ValueError("cook_time must be >= 0")
        if self.created_at.tzinfo is None:
            raise ValueError("created_at must be timezone-aware")


def create_order(
    table_number: TableNumber,
    menu_item: MenuItem,
    cook_time: int,
    now: datetime,
) -> Order:
    return Order(
        order_id=None,
        table_number=table_number,
        menu_id=menu_item.menu_id,
        cook_time=cook_time,
        created_at=now,
        menu_name=menu_item.name,
    )
