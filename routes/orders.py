import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from core.db import get_db
from core.ownership import get_owned_store, get_store_by_slug
from models.store import Store
from models.order import Order, OrderStatus
from schemas.order import OrderCreate, OrderUpdate, OrderOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/orders", tags=["orders"])


def _get_store_order(store: Store, order_pk: int, db: Session) -> Order:
    order = db.query(Order).filter(Order.store_id == store.id, Order.id == order_pk).one_or_none()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/{store_id}", response_model=List[OrderOut])
def list_orders(store_id: str, status: Optional[OrderStatus] = None, db: Session = Depends(get_db)):
    """Public listing polled by the display page. No authentication."""
    store = get_store_by_slug(store_id, db)
    query = db.query(Order).filter(Order.store_id == store.id)
    if status is not None:
        query = query.filter(Order.status == status.value)
    return query.order_by(Order.updated_at, Order.id).all()


@router.post("/{store_id}", response_model=OrderOut, status_code=201)
def create_order(data: OrderCreate, store: Store = Depends(get_owned_store), db: Session = Depends(get_db)):
    order = Order(
        store_id=store.id,
        order_id=data.order_id,
        name=data.name,
        status=data.status.value,
    )
    db.add(order)
    db.commit()
    db.refresh(order)
    return order


@router.patch("/{store_id}/{id}", response_model=OrderOut)
def update_order_status(
    id: int,
    data: OrderUpdate,
    store: Store = Depends(get_owned_store),
    db: Session = Depends(get_db),
):
    order = _get_store_order(store, id, db)
    order.status = data.status.value
    # Touch even when the status is unchanged so pollers see the update
    order.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(order)
    return order


@router.delete("/{store_id}/{id}", status_code=204)
def delete_order(id: int, store: Store = Depends(get_owned_store), db: Session = Depends(get_db)):
    order = _get_store_order(store, id, db)
    db.delete(order)
    db.commit()
    logger.info("Order %s removed from store %s", order.order_id, store.store_id)
    return None
