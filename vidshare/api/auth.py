# vidshare/api/auth.py
import logging
from typing import Annotated, Optional

from fastapi import Depends, Request, Response

from vidshare.core.config import settings
from vidshare.core.database import SessionDep
from vidshare.core.repository import Repository
from vidshare.schemas.account import TokenPair
from vidshare.services.credentials import CredentialStore
from vidshare.services.history import HistoryAggregator
from vidshare.services.profile import ProfileAggregator
from vidshare.services.session_guard import Identity, authenticate
from vidshare.services.tokens import TokenService

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# --- Component wiring (one repository per request session) ---

def get_repository(session: SessionDep) -> Repository:
    return Repository(session)


RepositoryDep = Annotated[Repository, Depends(get_repository)]


def get_credential_store(repo: RepositoryDep) -> CredentialStore:
    return CredentialStore(repo)


def get_token_service(repo: RepositoryDep) -> TokenService:
    return TokenService(repo)


def get_profile_aggregator(repo: RepositoryDep) -> ProfileAggregator:
    return ProfileAggregator(repo)


def get_history_aggregator(repo: RepositoryDep) -> HistoryAggregator:
    return HistoryAggregator(repo)


# --- Session guard ---

def get_access_token(request: Request) -> Optional[str]:
    """Reads the access token from the cookie, falling back to a Bearer header."""
    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, credential = header.partition(" ")
    if scheme.lower() == "bearer" and credential.strip():
        return credential.strip()
    return None


def get_current_identity(token: Optional[str] = Depends(get_access_token)) -> Identity:
    identity = authenticate(token)
    logger.debug(f"Authenticated request for account {identity.account_id}")
    return identity


CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]


# --- Cookies ---

def set_auth_cookies(response: Response, pair: TokenPair) -> None:
    response.set_cookie(
        key=ACCESS_COOKIE,
        value=pair.access_token,
        httponly=True,  # Prevent JavaScript access
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
        path="/",
    )
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=pair.refresh_token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        path="/",
    )


def clear_auth_cookies(response: Response) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(key, path="/", secure=settings.cookie_secure, httponly=True)
