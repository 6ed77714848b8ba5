from __future__ import annotations

from tableorder.application.dto.responses import OrderResponse
from tableorder.domain.order.entities import Order


def to_order_response(order: Order) -> OrderResponse:
    if order.order_id is None:
        raise ValueError("order has not been persisted")
    return OrderResponse(
        order_id=int(order.order_id),
        menu_id=int(order.menu_id),
        table_number=int(order.table_number),
        cook_time=order.cook_time,
        created_at=order.created_at,
        menu_name=order.menu_name,
    )


def to_order_responses(orders: list[Order]) -> list[OrderResponse]:
    return [to_order_response(order) for order in orders]
