from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from sqlalchemy import Engine, delete, select
from sqlalchemy.orm import Session

from tableorder.application.ports.repositories import OrderRepository
from tableorder.domain.common.ids import MenuId, OrderId, TableNumber
from tableorder.domain.order.entities import Order
from tableorder.infrastructure.db.models.menu import MenuModel
from tableorder.infrastructure.db.models.order import OrderModel
from tableorder.infrastructure.db.session import get_engine


class SqlAlchemyOrderRepository(OrderRepository):
    """Order store access; every lookup by id is scoped by table number too."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def add(self, order: Order) -> Order:
        model = OrderModel(
            menu_id=int(order.menu_id),
            table_number=int(order.table_number),
            cook_time=order.cook_time,
            created_at=order.created_at,
        )
        with Session(self._engine) as session:
            session.add(model)
            session.commit()
            order_id = model.order_id
            created_at = model.created_at

        return replace(
            order,
            order_id=OrderId(order_id),
            created_at=_as_utc(created_at),
        )

    def list_for_table(self, table_number: TableNumber) -> list[Order]:
        statement = (
            select(OrderModel, MenuModel.name)
            .outerjoin(MenuModel, MenuModel.menu_id == OrderModel.menu_id)
            .where(OrderModel.table_number == int(table_number))
            .order_by(OrderModel.order_id.asc())
        )
        with Session(self._engine) as session:
            rows = session.execute(statement).all()

        return [self._to_domain(model, menu_name) for model, menu_name in rows]

    def get(self, table_number: TableNumber, order_id: OrderId) -> Order | None:
        statement = (
            select(OrderModel, MenuModel.name)
            .outerjoin(MenuModel, MenuModel.menu_id == OrderModel.menu_id)
            .where(
                OrderModel.table_number == int(table_number),
                OrderModel.order_id == int(order_id),
            )
            .limit(1)
        )
        with Session(self._engine) as session:
            row = session.execute(statement).one_or_none()

        if row is None:
            return None
        model, menu_name = row
        return self._to_domain(model, menu_name)

    def delete(self, table_number: TableNumber, order_id: OrderId) -> bool:
        statement = delete(OrderModel).where(
            OrderModel.table_number == int(table_number),
            OrderModel.order_id == int(order_id),
        )
        with Session(self._engine) as session:
            result = session.execute(statement)
            session.commit()
        return result.rowcount > 0

    def _to_domain(self, model: OrderModel, menu_name: str | None) -> Order:
        return Order(
            order_id=OrderId(model.order_id),
            table_number=TableNumber(model.table_number),
            menu_id=MenuId(model.menu_id),
            cook_time=model.cook_time,
            created_at=_as_utc(model.created_at),
            menu_name=menu_name,
        )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
