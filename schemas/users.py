from pydantic import BaseModel
from typing import Optional


class UserOut(BaseModel):
    """Identity-provider user, reduced to what the API needs."""

    id: str
    email: Optional[str] = None
    role: Optional[str] = None
