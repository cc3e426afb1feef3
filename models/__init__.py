# Import models so that SQLAlchemy metadata includes them on app startup
from .store import Store  # noqa: F401
from .order import Order, OrderStatus  # noqa: F401
