# vidshare/schemas/video.py
from datetime import datetime
import uuid

from vidshare.schemas.account import CamelModel


class OwnerRead(CamelModel):
    full_name: str
    username: str
    avatar: str


class VideoRead(CamelModel):
    id: uuid.UUID
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner_id: uuid.UUID
    created_at: datetime


class VideoWithOwner(CamelModel):
    id: uuid.UUID
    video_file: str
    thumbnail: str
    title: str
    description: str
    duration: float
    views: int
    is_published: bool
    owner: OwnerRead
    created_at: datetime
