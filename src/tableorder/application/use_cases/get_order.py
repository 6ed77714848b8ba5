from __future__ import annotations

from tableorder.application.dto.responses import OrderResponse
from tableorder.application.mappers.order_mapper import to_order_response
from tableorder.application.metrics.order_lifecycle import record_order_lookup_miss
from tableorder.application.ports.repositories import OrderRepository
from tableorder.domain.common.ids import OrderId, TableNumber


class OrderNotFoundError(Exception):
    pass


class GetOrder:
    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, table_number: TableNumber, order_id: OrderId) -> OrderResponse:
        order = self._order_repository.get(table_number=table_number, order_id=order_id)
        if order is None:
            record_order_lookup_miss("get")
            raise OrderNotFoundError(f"order {order_id} not found for table {table_number}")
        return to_order_response(order)
