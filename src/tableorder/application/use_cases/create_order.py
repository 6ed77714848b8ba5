from __future__ import annotations

import logging
from datetime import datetime, timezone

from tableorder.application.dto.requests import CreateOrderRequest
from tableorder.application.dto.responses import OrderResponse
from tableorder.application.mappers.order_mapper import to_order_response
from tableorder.application.metrics.order_lifecycle import record_order_created
from tableorder.application.ports.repositories import MenuRepository, OrderRepository
from tableorder.domain.common.ids import MenuId, TableNumber
from tableorder.domain.kitchen.cook_time import CookTimeGenerator
from tableorder.domain.order.entities import create_order

logger = logging.getLogger(__name__)


class MenuItemNotFoundError(Exception):
    pass


class CreateOrder:
    def __init__(
        self,
        menu_repository: MenuRepository,
        order_repository: OrderRepository,
        cook_time_generator: CookTimeGenerator,
    ) -> None:
        self._menu_repository = menu_repository
        self._order_repository = order_repository
        self._cook_time_generator = cook_time_generator

    def execute(
        self,
        table_number: TableNumber,
        request_dto: CreateOrderRequest,
    ) -> OrderResponse:
        menu_id = MenuId(request_dto.menu_id)
        # orders.menu_id carries no foreign key, so an unknown id must be
        # rejected here before anything is written.
        menu_item = self._menu_repository.get(menu_id)
        if menu_item is None:
            raise MenuItemNotFoundError(f"menu item {menu_id} does not exist")

        order = create_order(
            table_number=table_number,
            menu_item=menu_item,
            cook_time=self._cook_time_generator.generate(),
            now=datetime.now(timezone.utc),
        )
        persisted = self._order_repository.add(order)

        record_order_created(persisted)
        logger.info(
            "order_created",
            extra={
                "table_number": int(persisted.table_number),
                "order_id": persisted.order_id,
                "menu_id": int(persisted.menu_id),
                "cook_time": persisted.cook_time,
            },
        )
        return to_order_response(persisted)
