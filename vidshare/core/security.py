# vidshare/core/security.py
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from vidshare.core.config import settings
from vidshare.core.errors import InvalidTokenError, TokenExpiredError

# Password hashing context (bcrypt, cost from settings)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__default_rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    # Without a hash, burn the same bcrypt time so callers cannot tell the paths apart
    if not hashed_password:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(claims: dict, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    to_encode = claims.copy()
    to_encode.update({
        "iat": now,
        "exp": now + expires_delta,
        "jti": uuid.uuid4().hex,  # keeps two tokens minted in the same second distinct
    })
    return jwt.encode(to_encode, secret, algorithm=settings.algorithm)


def _decode(token: str, secret: str) -> dict:
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()
    if not payload.get("sub"):
        raise InvalidTokenError()
    return payload


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Signs a short-lived, self-contained access token."""
    return _encode(
        data,
        settings.access_token_secret,
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes),
    )


def create_refresh_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signs a long-lived refresh token carrying only the account id."""
    return _encode(
        {"sub": subject},
        settings.refresh_token_secret,
        expires_delta or timedelta(days=settings.refresh_token_expire_days),
    )


def decode_access_token(token: str) -> dict:
    return _decode(token, settings.access_token_secret)


def decode_refresh_token(token: str) -> dict:
    return _decode(token, settings.refresh_token_secret)
