import logging

from fastapi import APIRouter, Depends, HTTPException

from schemas.auth import (
    SignupRequest,
    SigninRequest,
    RefreshSessionRequest,
    ChangePasswordRequest,
    SessionResponse,
    SignupResponse,
    UserResponse,
    MessageResponse,
)
from schemas.users import UserOut
from security.auth import get_current_user, user_from_provider
from services import identity
from services.identity import IdentityError
from services.invite import is_valid_invite_code

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(data: dict) -> SessionResponse:
    return SessionResponse(session=data, user=user_from_provider(data["user"]))


@router.post("/signup", response_model=SignupResponse)
def signup(data: SignupRequest):
    if not is_valid_invite_code(data.email, data.invite_code):
        raise HTTPException(status_code=400, detail="Invalid invite code")
    try:
        user = identity.create_user(data.email, data.password)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)
    logger.info("Registered user %s", user.get("id"))
    return SignupResponse(message="Registration successful", user=user_from_provider(user))


@router.post("/signin", response_model=SessionResponse)
def signin(data: SigninRequest):
    try:
        session = identity.sign_in_with_password(data.email, data.password)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _session_response(session)


@router.post("/refresh", response_model=SessionResponse)
def refresh(data: RefreshSessionRequest):
    try:
        session = identity.refresh_session(data.refresh_token)
    except IdentityError:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    return _session_response(session)


@router.get("/validate", response_model=UserResponse)
def validate(current_user: UserOut = Depends(get_current_user)):
    return UserResponse(user=current_user)


@router.post("/change-password", response_model=MessageResponse)
def change_password(data: ChangePasswordRequest, current_user: UserOut = Depends(get_current_user)):
    if not current_user.email:
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    try:
        identity.sign_in_with_password(current_user.email, data.current_password)
    except IdentityError:
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    try:
        identity.update_user_password(current_user.id, data.new_password)
    except IdentityError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return MessageResponse(message="Password updated successfully")
