from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class OrderResponse(BaseModel):
    order_id: int
    menu_id: int
    table_number: int
    cook_time: int
    created_at: datetime
    menu_name: str | None = None
