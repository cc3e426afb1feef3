import logging
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.db import get_db
from core.ownership import get_owned_store_by_pk, is_store_id_taken
from models.store import Store, generate_store_id
from security.auth import get_current_user
from schemas.store import StoreCreate, StoreUpdate, StoreOut
from schemas.users import UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stores", tags=["stores"])

# Attempts at finding a free random slug before giving up
GENERATE_STORE_ID_ATTEMPTS = 5


def _commit_store(db: Session) -> None:
    # The unique index on store_id settles races the pre-check cannot see
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Store ID already taken")


@router.get("", response_model=List[StoreOut])
def list_stores(current_user: UserOut = Depends(get_current_user), db: Session = Depends(get_db)):
    return db.query(Store).filter(Store.owner_id == current_user.id).order_by(Store.created_at).all()


@router.post("", response_model=StoreOut, status_code=201)
def create_store(
    data: StoreCreate,
    current_user: UserOut = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if data.store_id:
        store_id = data.store_id
        if is_store_id_taken(store_id, db):
            raise HTTPException(status_code=400, detail="Store ID already taken")
    else:
        for _ in range(GENERATE_STORE_ID_ATTEMPTS):
            store_id = generate_store_id()
            if not is_store_id_taken(store_id, db):
                break
        else:
            raise HTTPException(status_code=400, detail="Store ID already taken")

    store = Store(name=data.name, store_id=store_id, owner_id=current_user.id)
    db.add(store)
    _commit_store(db)
    db.refresh(store)
    logger.info("Store %s created by %s", store.store_id, current_user.id)
    return store


@router.patch("/{id}", response_model=StoreOut)
def update_store(data: StoreUpdate, store: Store = Depends(get_owned_store_by_pk), db: Session = Depends(get_db)):
    if data.store_id is not None and data.store_id != store.store_id:
        if is_store_id_taken(data.store_id, db, exclude_pk=store.id):
            raise HTTPException(status_code=400, detail="Store ID already taken")
        store.store_id = data.store_id
    if data.name is not None:
        store.name = data.name

    store.updated_at = datetime.utcnow()
    _commit_store(db)
    db.refresh(store)
    return store


@router.delete("/{id}", status_code=204)
def delete_store(store: Store = Depends(get_owned_store_by_pk), db: Session = Depends(get_db)):
    # Orders go with the store through the relationship cascade
    db.delete(store)
    db.commit()
    logger.info("Store %s deleted", store.store_id)
    return None
