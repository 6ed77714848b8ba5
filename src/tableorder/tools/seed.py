from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from tableorder.infrastructure.config import get_settings
from tableorder.infrastructure.db.models.menu import MenuModel
from tableorder.infrastructure.db.session import get_engine
from tableorder.infrastructure.observability.logging_config import configure_logging

logger = logging.getLogger(__name__)

MENU_ITEMS: list[tuple[int, str]] = [
    (1, "ちゃづけ"),
    (2, "らーめん"),
    (3, "弁当"),
    (4, "牛丼"),
    (5, "焼き鳥"),
    (6, "枝豆"),
    (7, "刺身"),
    (8, "うどん"),
    (9, "Nasi Goreng"),
    (10, "Rendang"),
]


def main() -> None:
    configure_logging(get_settings().log_level)
    engine = get_engine()
    inspector = inspect(engine)
    if "menus" not in set(inspector.get_table_names(schema="public")):
        logger.warning("seed_skipped_no_schema")
        return

    with Session(engine) as session:
        for menu_id, name in MENU_ITEMS:
            session.execute(
                insert(MenuModel)
                .values(menu_id=menu_id, name=name)
                .on_conflict_do_update(
                    index_elements=[MenuModel.menu_id],
                    set_={"name": name},
                )
            )
        session.commit()

    logger.info("seed_complete")


if __name__ == "__main__":
    main()
