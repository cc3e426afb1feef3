import random
import string
from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base


STORE_ID_PATTERN = r"^[a-z0-9-]+$"
STORE_ID_MIN_LENGTH = 4
STORE_ID_MAX_LENGTH = 50


def generate_store_id(length: int = STORE_ID_MIN_LENGTH) -> str:
    """Random lowercase slug used when the owner does not pick one."""
    return "".join(random.choice(string.ascii_lowercase) for _ in range(length))


class Store(Base):
    __tablename__ = "stores"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # Public slug used in display URLs
    store_id: Mapped[str] = mapped_column(String(STORE_ID_MAX_LENGTH), unique=True, index=True)
    name: Mapped[str] = mapped_column(Text)

    # Identity provider subject of the owner
    owner_id: Mapped[str] = mapped_column(String(255), index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    orders = relationship(
        "Order",
        back_populates="store",
        cascade="all, delete-orphan",
        order_by="Order.updated_at",
    )

    def is_owned_by(self, subject: str) -> bool:
        return self.owner_id == subject
