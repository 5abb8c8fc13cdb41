# vidshare/models/account.py
from typing import Optional, List
from datetime import datetime, timezone
import json
import logging
import uuid
from sqlmodel import Field, SQLModel

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(SQLModel, table=True):
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False
    )
    username: str = Field(index=True, unique=True)  # stored lower-cased
    email: str = Field(index=True, unique=True)  # stored lower-cased
    full_name: str = Field(index=True)
    password_hash: str = Field()
    avatar: str = Field()  # upload URL
    cover_image: str = Field(default="")
    watch_history: str = Field(default="[]")  # JSON list of video ids, in stored order
    refresh_token: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def watch_history_ids(self) -> List[uuid.UUID]:
        """Stored video ids in order; malformed entries are skipped."""
        ids = []
        for ref in json.loads(self.watch_history or "[]"):
            try:
                ids.append(uuid.UUID(str(ref)))
            except ValueError:
                logger.warning(f"Skipping malformed video reference {ref!r} in watch history of account {self.id}")
        return ids
