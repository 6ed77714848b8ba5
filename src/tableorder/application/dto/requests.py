from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt


class CreateOrderRequest(BaseModel):
    # Booleans, numeric strings and floats such as 1.0 are rejected.
    menu_id: StrictInt = Field(ge=1)
