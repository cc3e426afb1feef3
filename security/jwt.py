from typing import Any, Dict

import jwt

from core.config import settings


def local_verification_enabled() -> bool:
    return bool(settings.SUPABASE_JWT_SECRET)


def decode_access(token: str) -> Dict[str, Any]:
    """Verify an access token issued by the identity provider with its shared secret."""
    return jwt.decode(
        token,
        settings.SUPABASE_JWT_SECRET,
        algorithms=[settings.JWT_ALG],
        audience=settings.JWT_AUDIENCE,
        options={"require": ["exp", "sub"]},
    )
