"""
Client for the external identity provider (Supabase Auth).

Admin operations (user creation, password updates) go through a shared
service-role client. Password and refresh-token grants and token lookups use
a throwaway anon-key client per call, so a signed-in session never leaks into
the admin client's headers. Provider failures are raised as ``IdentityError``
carrying the provider's message and status code; routes decide how to
surface them.
"""
import logging
from functools import lru_cache
from typing import Any, Dict

from supabase import AuthError, Client, create_client
from supabase.lib.client_options import ClientOptions

from core.config import settings

logger = logging.getLogger(__name__)


class IdentityError(Exception):
    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _options() -> ClientOptions:
    return ClientOptions(auto_refresh_token=False, persist_session=False)


@lru_cache(maxsize=1)
def admin_client() -> Client:
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY, options=_options())


def _public_client() -> Client:
    key = settings.SUPABASE_ANON_KEY or settings.SUPABASE_SERVICE_ROLE_KEY
    return create_client(settings.SUPABASE_URL, key, options=_options())


def _to_identity_error(exc: AuthError, action: str) -> IdentityError:
    message = getattr(exc, "message", None) or str(exc) or "Identity provider error"
    status_code = getattr(exc, "status", None) or 400
    logger.warning("Identity provider rejected %s: %s %s", action, status_code, message)
    return IdentityError(message, status_code=status_code)


def _dump(model) -> Dict[str, Any]:
    return model.model_dump(mode="json")


def create_user(email: str, password: str) -> Dict[str, Any]:
    """Create a confirmed user through the admin API."""
    try:
        resp = admin_client().auth.admin.create_user(
            {"email": email, "password": password, "email_confirm": True}
        )
    except AuthError as exc:
        raise _to_identity_error(exc, "create_user")
    return _dump(resp.user)


def sign_in_with_password(email: str, password: str) -> Dict[str, Any]:
    """Password grant. Returns the session payload, user included."""
    try:
        resp = _public_client().auth.sign_in_with_password({"email": email, "password": password})
    except AuthError as exc:
        raise _to_identity_error(exc, "sign_in_with_password")
    if resp.session is None:
        raise IdentityError("Invalid login credentials", status_code=400)
    return _dump(resp.session)


def refresh_session(refresh_token: str) -> Dict[str, Any]:
    try:
        resp = _public_client().auth.refresh_session(refresh_token)
    except AuthError as exc:
        raise _to_identity_error(exc, "refresh_session")
    if resp.session is None:
        raise IdentityError("Invalid refresh token", status_code=401)
    return _dump(resp.session)


def get_user(access_token: str) -> Dict[str, Any]:
    try:
        resp = _public_client().auth.get_user(access_token)
    except AuthError as exc:
        raise _to_identity_error(exc, "get_user")
    if resp is None or resp.user is None:
        raise IdentityError("Invalid token", status_code=401)
    return _dump(resp.user)


def update_user_password(user_id: str, password: str) -> Dict[str, Any]:
    try:
        resp = admin_client().auth.admin.update_user_by_id(user_id, {"password": password})
    except AuthError as exc:
        raise _to_identity_error(exc, "update_user_by_id")
    return _dump(resp.user)
