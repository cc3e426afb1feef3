from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from models.store import STORE_ID_MAX_LENGTH, STORE_ID_MIN_LENGTH, STORE_ID_PATTERN
from schemas.common import CamelModel, strip_text


class StoreCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    store_id: Optional[str] = Field(
        default=None,
        min_length=STORE_ID_MIN_LENGTH,
        max_length=STORE_ID_MAX_LENGTH,
        pattern=STORE_ID_PATTERN,
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return strip_text(value)


class StoreUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    store_id: Optional[str] = Field(
        default=None,
        min_length=STORE_ID_MIN_LENGTH,
        max_length=STORE_ID_MAX_LENGTH,
        pattern=STORE_ID_PATTERN,
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return strip_text(value)


class StoreOut(CamelModel):
    id: int
    store_id: str
    name: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
