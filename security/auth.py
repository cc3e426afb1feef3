from typing import Optional

from fastapi import HTTPException, status, Header

from schemas.users import UserOut
from security import jwt as jwt_utils
from services import identity
from services.identity import IdentityError


def user_from_claims(payload: dict) -> UserOut:
    return UserOut(id=str(payload["sub"]), email=payload.get("email"), role=payload.get("role"))


def user_from_provider(data: dict) -> UserOut:
    return UserOut(id=str(data["id"]), email=data.get("email"), role=data.get("role"))


def get_current_user(authorization: Optional[str] = Header(default=None, alias="Authorization")) -> UserOut:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    if jwt_utils.local_verification_enabled():
        try:
            return user_from_claims(jwt_utils.decode_access(token))
        except Exception:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

    try:
        return user_from_provider(identity.get_user(token))
    except IdentityError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
