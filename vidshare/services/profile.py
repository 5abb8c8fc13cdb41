# vidshare/services/profile.py
import logging
import uuid
from typing import Optional

from vidshare.core.errors import NotFoundError, ValidationError
from vidshare.core.repository import Repository
from vidshare.schemas.account import ChannelProfile
from vidshare.services.credentials import normalize

logger = logging.getLogger(__name__)


class ProfileAggregator:
    def __init__(self, repo: Repository):
        self.repo = repo

    def get_channel_profile(self, target_username: str, viewer_id: Optional[uuid.UUID] = None) -> ChannelProfile:
        """Public channel view with subscriber counts and the viewer's membership."""
        username = normalize(target_username)
        if not username:
            raise ValidationError("username is missing")

        channel = self.repo.get_account_by_username(username)
        if channel is None:
            raise NotFoundError("channel does not exist")

        subscribers_count = self.repo.count_edges_by_channel(channel.id)
        subscribed_to_count = self.repo.count_edges_by_subscriber(channel.id)
        is_subscribed = (
            viewer_id is not None
            and self.repo.find_edge(viewer_id, channel.id) is not None
        )
        logger.debug(f"Channel {channel.username}: {subscribers_count} subscribers, viewer subscribed={is_subscribed}")

        return ChannelProfile(
            full_name=channel.full_name,
            username=channel.username,
            email=channel.email,
            avatar=channel.avatar,
            cover_image=channel.cover_image,
            subscribers_count=subscribers_count,
            channels_subscribed_to_count=subscribed_to_count,
            is_subscribed=is_subscribed,
        )
