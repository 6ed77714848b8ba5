from __future__ import annotations

from typing import Protocol

from tableorder.domain.common.ids import MenuId, OrderId, TableNumber
from tableorder.domain.menu.entities import MenuItem
from tableorder.domain.order.entities import Order


class MenuRepository(Protocol):
    def get(self, menu_id: MenuId) -> MenuItem | None: ...


class OrderRepository(Protocol):
    def add(self, order: Order) -> Order: ...

    def list_for_table(self, table_number: TableNumber) -> list[Order]: ...

    def get(self, table_number: TableNumber, order_id: OrderId) -> Order | None: ...

    def delete(self, table_number: TableNumber, order_id: OrderId) -> bool: ...
