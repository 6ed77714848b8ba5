from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from fastapi.exceptions import RequestValidationError

from tableorder.application.dto.requests import CreateOrderRequest
from tableorder.application.dto.responses import OrderResponse
from tableorder.application.ports.repositories import MenuRepository, OrderRepository
from tableorder.application.use_cases.create_order import CreateOrder
from tableorder.application.use_cases.delete_order import DeleteOrder
from tableorder.application.use_cases.get_order import GetOrder
from tableorder.application.use_cases.list_orders import ListOrders
from tableorder.domain.common.ids import MAX_TABLE_NUMBER, MIN_TABLE_NUMBER, OrderId, TableNumber
from tableorder.domain.kitchen.cook_time import CookTimeGenerator
from tableorder.infrastructure.config import get_cook_time_generator
from tableorder.infrastructure.db.repositories.menu_repo import SqlAlchemyMenuRepository
from tableorder.infrastructure.db.repositories.order_repo import SqlAlchemyOrderRepository

router = APIRouter(prefix="/table/{table_number}")

MAX_ORDER_ID = 2**63 - 1
# Plain decimal digits only: no sign, no leading zero, no padding, no fraction.
DECIMAL_ID_PATTERN = r"^[1-9][0-9]{0,18}$"


def _in_range(name: str, raw: str, low: int, high: int) -> int:
    value = int(raw)
    if not low <= value <= high:
        raise RequestValidationError(
            [
                {
                    "type": "value_error",
                    "loc": ("path", name),
                    "msg": f"Value should be between {low} and {high}",
                    "input": raw,
                }
            ]
        )
    return value


def _table_number(
    table_number: Annotated[
        str,
        Path(
            pattern=DECIMAL_ID_PATTERN,
            description=f"Table number, {MIN_TABLE_NUMBER}..{MAX_TABLE_NUMBER}",
        ),
    ],
) -> TableNumber:
    return TableNumber(_in_range("table_number", table_number, MIN_TABLE_NUMBER, MAX_TABLE_NUMBER))


def _order_id(
    order_id: Annotated[str, Path(pattern=DECIMAL_ID_PATTERN, description="Server-assigned order id")],
) -> OrderId:
    return OrderId(_in_range("order_id", order_id, 1, MAX_ORDER_ID))


TableNumberParam = Annotated[TableNumber, Depends(_table_number)]
OrderIdParam = Annotated[OrderId, Depends(_order_id)]


def _menu_repository() -> MenuRepository:
    return SqlAlchemyMenuRepository()


def _order_repository() -> OrderRepository:
    return SqlAlchemyOrderRepository()


def _cook_time_generator() -> CookTimeGenerator:
    return get_cook_time_generator()


@router.post(
    "/order",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    request_dto: CreateOrderRequest,
    table_number: TableNumberParam,
) -> OrderResponse:
    use_case = CreateOrder(
        menu_repository=_menu_repository(),
        order_repository=_order_repository(),
        cook_time_generator=_cook_time_generator(),
    )
    return use_case.execute(table_number=table_number, request_dto=request_dto)


@router.get("/order", response_model=list[OrderResponse])
def list_orders(table_number: TableNumberParam) -> list[OrderResponse]:
    return ListOrders(order_repository=_order_repository()).execute(table_number=table_number)


@router.get("/order/{order_id}", response_model=OrderResponse)
def get_order(
    table_number: TableNumberParam,
    order_id: OrderIdParam,
) -> OrderResponse:
    return GetOrder(order_repository=_order_repository()).execute(
        table_number=table_number,
        order_id=order_id,
    )


@router.delete(
    "/order/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_order(
    table_number: TableNumberParam,
    order_id: OrderIdParam,
) -> Response:
    DeleteOrder(order_repository=_order_repository()).execute(
        table_number=table_number,
        order_id=order_id,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
