import hmac

from core.config import settings


def expected_invite_code(email: str, prefix: str | None = None) -> str:
    """Invite codes are the configured prefix followed by the first three letters of the email, upper-cased."""
    if prefix is None:
        prefix = settings.INVITE_CODE_START
    return f"{prefix}{email[:3].upper()}"


def is_valid_invite_code(email: str, code: str, prefix: str | None = None) -> bool:
    return hmac.compare_digest(code.encode(), expected_invite_code(email, prefix).encode())
