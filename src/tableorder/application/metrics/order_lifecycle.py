from __future__ import annotations

from prometheus_client import Counter, Histogram

from tableorder.domain.order.entities import Order

ORDERS_CREATED_TOTAL = Counter(
    "tableorder_orders_created_total",
    "Total number of orders created.",
    ["menu_id"],
)

ORDERS_DELETED_TOTAL = Counter(
    "tableorder_orders_deleted_total",
    "Total number of orders deleted.",
)

ORDER_LOOKUP_MISSES_TOTAL = Counter(
    "tableorder_order_lookup_misses_total",
    "Total number of order lookups or deletes that matched no order.",
    ["operation"],
)

ORDER_COOK_TIME_MINUTES = Histogram(
    "tableorder_order_cook_time_minutes",
    "Cook time assigned to created orders.",
    buckets=(1, 5, 10, 15, 20, 30, 45, 60),
)


def record_order_created(order: Order) -> None:
    ORDERS_CREATED_TOTAL.labels(menu_id=str(order.menu_id)).inc()
    ORDER_COOK_TIME_MINUTES.observe(order.cook_time)


def record_order_deleted() -> None:
    ORDERS_DELETED_TOTAL.inc()


def record_order_lookup_miss(operation: str) -> None:
    ORDER_LOOKUP_MISSES_TOTAL.labels(operation=operation).inc()
