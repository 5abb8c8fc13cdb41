# vidshare/models/subscription.py

import uuid
from sqlmodel import SQLModel, Field, UniqueConstraint
from typing import Optional
from datetime import datetime

from .account import utcnow


class Subscription(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    subscriber_id: uuid.UUID = Field(foreign_key="account.id", index=True)  # the one following
    channel_id: uuid.UUID = Field(foreign_key="account.id", index=True)  # the one followed
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    # One edge per (subscriber, channel) pair
    __table_args__ = (
        UniqueConstraint("subscriber_id", "channel_id"),
    )
