# vidshare/services/session_guard.py
import uuid
from dataclasses import dataclass
from typing import Optional

from vidshare.core.errors import InvalidTokenError, UnauthorizedError
from vidshare.core.security import decode_access_token


@dataclass(frozen=True)
class Identity:
    """Who is making the request, as proven by a valid access token."""
    account_id: uuid.UUID
    username: str
    email: str
    full_name: str


def authenticate(token: Optional[str]) -> Identity:
    """Verifies an access token without touching the store.

    Revocation is not checked here: an access token stays valid until its
    TTL runs out, even after logout.
    """
    if not token:
        raise UnauthorizedError("no credential")
    payload = decode_access_token(token)
    try:
        account_id = uuid.UUID(payload["sub"])
    except (ValueError, TypeError):
        raise InvalidTokenError()
    return Identity(
        account_id=account_id,
        username=payload.get("username", ""),
        email=payload.get("email", ""),
        full_name=payload.get("full_name", ""),
    )
