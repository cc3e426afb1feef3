from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from schemas.common import CamelModel
from schemas.users import UserOut


class SignupRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    invite_code: str


class SigninRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class RefreshSessionRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=6, max_length=128)
    new_password: str = Field(min_length=6, max_length=128)


# Session keys mirror the identity provider's token response
class Session(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    expires_at: Optional[int] = None


class SessionResponse(BaseModel):
    session: Session
    user: UserOut


class SignupResponse(BaseModel):
    message: str
    user: UserOut


class UserResponse(BaseModel):
    user: UserOut


class MessageResponse(BaseModel):
    message: str
