from __future__ import annotations

from dataclasses import dataclass

from tableorder.domain.common.ids import MenuId


@dataclass(frozen=True)
class MenuItem:
    menu_id: MenuId
    name: str

    def __post_init__(self) -> None:
        if self.menu_id < 1:
            raise ValueError("menu_id must be >= 1")
