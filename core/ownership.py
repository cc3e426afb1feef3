from fastapi import HTTPException, status, Depends
from sqlalchemy.orm import Session

from core.db import get_db
from models.store import Store
from security.auth import get_current_user
from schemas.users import UserOut


def get_store_by_slug(store_id: str, db: Session) -> Store:
    """Return the Store with the given public slug or raise 404."""
    store = db.query(Store).filter(Store.store_id == store_id).one_or_none()
    if not store:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return store


def check_store_owner(store: Store, user: UserOut) -> Store:
    if not store.is_owned_by(user.id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Unauthorized")
    return store


def get_owned_store(
    store_id: str,
    user: UserOut = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Store:
    """FastAPI dependency resolving ``{store_id}`` to a Store the caller owns."""
    return check_store_owner(get_store_by_slug(store_id, db), user)


def get_owned_store_by_pk(
    id: int,
    user: UserOut = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Store:
    """Same as ``get_owned_store`` but keyed on the internal primary key ``{id}``."""
    store = db.get(Store, id)
    if not store:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return check_store_owner(store, user)


def is_store_id_taken(store_id: str, db: Session, exclude_pk: int | None = None) -> bool:
    query = db.query(Store).filter(Store.store_id == store_id)
    if exclude_pk is not None:
        query = query.filter(Store.id != exclude_pk)
    return db.query(query.exists()).scalar()
