# vidshare/services/history.py
import logging
import uuid
from typing import List

from vidshare.core.errors import NotFoundError
from vidshare.core.repository import Repository
from vidshare.schemas.video import OwnerRead, VideoWithOwner

logger = logging.getLogger(__name__)


class HistoryAggregator:
    def __init__(self, repo: Repository):
        self.repo = repo

    def get_watch_history(self, account_id: uuid.UUID) -> List[VideoWithOwner]:
        """Resolves the stored watch history into videos with a flattened owner.

        Order is the stored order. References whose video (or owner) no longer
        exists are skipped.
        """
        account = self.repo.get_account(account_id)
        if account is None:
            raise NotFoundError("account does not exist")

        refs = account.watch_history_ids
        resolved = self.repo.resolve_videos_with_owner(refs)

        history: List[VideoWithOwner] = []
        for ref in refs:
            if ref not in resolved:
                logger.warning(f"Skipping unknown video {ref} in watch history of account {account.id}")
                continue
            video, owner = resolved[ref]
            history.append(VideoWithOwner(
                id=video.id,
                video_file=video.video_file,
                thumbnail=video.thumbnail,
                title=video.title,
                description=video.description,
                duration=video.duration,
                views=video.views,
                is_published=video.is_published,
                owner=OwnerRead(full_name=owner.full_name, username=owner.username, avatar=owner.avatar),
                created_at=video.created_at,
            ))
        return history
