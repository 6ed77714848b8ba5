from __future__ import annotations

import logging

from tableorder.application.metrics.order_lifecycle import (
    record_order_deleted,
    record_order_lookup_miss,
)
from tableorder.application.ports.repositories import OrderRepository
from tableorder.application.use_cases.get_order import OrderNotFoundError
from tableorder.domain.common.ids import OrderId, TableNumber

logger = logging.getLogger(__name__)


class DeleteOrder:
    """Removes an order scoped by table; a second delete of the same id fails."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._order_repository = order_repository

    def execute(self, table_number: TableNumber, order_id: OrderId) -> None:
        deleted = self._order_repository.delete(table_number=table_number, order_id=order_id)
        if not deleted:
            record_order_lookup_miss("delete")
            raise OrderNotFoundError(f"order {order_id} not found for table {table_number}")

        record_order_deleted()
        logger.info(
            "order_deleted",
            extra={"table_number": int(table_number), "order_id": int(order_id)},
        )
