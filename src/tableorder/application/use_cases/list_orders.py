from __future__ import annotations

from tableorder.application.dto.responses import OrderResponse
from tableorder.application.mappers.order_mapper import to_order_responses
from tableorder.application.ports.repositories import OrderRepository
from tableorder.domain.common.ids import TableNumber


class ListOrders:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, table_number: TableNumber) -> list[OrderResponse]:
        return to_order_responses(self._order_repository.list_for_table(table_number))
