from __future__ import annotations

from typing import NewType

MenuId = NewType("MenuId", int)
OrderId = NewType("OrderId", int)
TableNumber = NewType("TableNumber", int)

MIN_TABLE_NUMBER = 1
MAX_TABLE_NUMBER = 100
