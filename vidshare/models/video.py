# vidshare/models/video.py
import uuid
from datetime import datetime
from sqlmodel import Field, SQLModel

from .account import utcnow


class Video(SQLModel, table=True):
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4, primary_key=True, index=True, nullable=False
    )
    video_file: str = Field()  # upload URL
    thumbnail: str = Field()  # upload URL
    title: str = Field(index=True)
    description: str = Field()
    duration: float = Field(default=0)  # seconds, as reported by the upload
    views: int = Field(default=0, ge=0)
    is_published: bool = Field(default=True)
    owner_id: uuid.UUID = Field(foreign_key="account.id", index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
