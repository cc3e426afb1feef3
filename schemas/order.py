from datetime import datetime

from pydantic import Field, field_validator

from models.order import OrderStatus
from schemas.common import CamelModel, strip_text


class OrderCreate(CamelModel):
    order_id: str = Field(min_length=1, max_length=256)
    name: str = Field(min_length=1, max_length=200)
    status: OrderStatus = OrderStatus.PREPARING

    @field_validator("order_id", "name", mode="before")
    @classmethod
    def strip_fields(cls, value):
        return strip_text(value)


class OrderUpdate(CamelModel):
    status: OrderStatus


class OrderOut(CamelModel):
    id: int
    store_id: int
    order_id: str
    name: str
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
