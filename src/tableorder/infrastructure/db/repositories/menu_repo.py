from __future__ import annotations

from sqlalchemy import Engine, select
from sqlalchemy.orm import Session

from tableorder.application.ports.repositories import MenuRepository
from tableorder.domain.common.ids import MenuId
from tableorder.domain.menu.entities import MenuItem
from tableorder.infrastructure.db.models.menu import MenuModel
from tableorder.infrastructure.db.session import get_engine


class SqlAlchemyMenuRepository(MenuRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, menu_id: MenuId) -> MenuItem | None:
        statement = select(MenuModel).where(MenuModel.menu_id == int(menu_id)).limit(1)
        with Session(self._engine) as session:
            model = session.execute(statement).scalar_one_or_none()

        if model is None:
            return None
        return MenuItem(menu_id=MenuId(model.menu_id), name=model.name or "")
