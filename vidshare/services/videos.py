# vidshare/services/videos.py
import logging
import uuid
from typing import Optional, Tuple

from vidshare.core.errors import ValidationError
from vidshare.core.repository import Repository
from vidshare.models.video import Video

logger = logging.getLogger(__name__)


class VideoService:
    def __init__(self, repo: Repository):
        self.repo = repo

    def check_details(self, title: Optional[str], description: Optional[str]) -> Tuple[str, str]:
        """Trimmed title and description; both are required."""
        title, description = (title or "").strip(), (description or "").strip()
        if not title or not description:
            raise ValidationError("title and description are required")
        return title, description

    def publish(
        self,
        owner_id: uuid.UUID,
        title: str,
        description: str,
        video_url: str,
        thumbnail_url: str,
        duration: Optional[float] = None,
    ) -> Video:
        title, description = self.check_details(title, description)
        video = self.repo.insert_video(Video(
            video_file=video_url,
            thumbnail=thumbnail_url,
            title=title,
            description=description,
            duration=duration or 0,
            owner_id=owner_id,
        ))
        logger.info(f"Account {owner_id} published video {video.id}")
        return video
