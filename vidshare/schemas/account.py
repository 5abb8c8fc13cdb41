# vidshare/schemas/account.py
from typing import Optional
from datetime import datetime
import uuid

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class AccountRead(CamelModel):
    """Public view of an account: never carries the password hash or refresh token."""
    id: uuid.UUID
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str = ""
    created_at: datetime
    updated_at: datetime


class LoginRequest(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str


class RefreshRequest(CamelModel):
    refresh_token: Optional[str] = None


class PasswordChange(CamelModel):
    old_password: str
    new_password: str


class AccountUpdate(CamelModel):
    username: str
    full_name: str


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str


class LoginResult(TokenPair):
    user: AccountRead


class IdentityRead(CamelModel):
    id: uuid.UUID
    username: str
    email: str
    full_name: str


class ChannelProfile(CamelModel):
    full_name: str
    username: str
    email: str
    avatar: str
    cover_image: str = ""
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool
