"""Tests for channel profiles and watch history."""

import json
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from vidshare.core.errors import NotFoundError
from vidshare.models.subscription import Subscription
from vidshare.models.video import Video
from vidshare.services.history import HistoryAggregator
from vidshare.services.profile import ProfileAggregator


def subscribe(session, subscriber, channel):
    session.add(Subscription(subscriber_id=subscriber.id, channel_id=channel.id))
    session.commit()


def add_video(session, owner, title="clip"):
    video = Video(
        video_file=f"https://cdn.test/{title}.mp4",
        thumbnail=f"https://cdn.test/{title}.png",
        title=title,
        description=f"about {title}",
        duration=12.5,
        owner_id=owner.id,
    )
    session.add(video)
    session.commit()
    session.refresh(video)
    return video


def set_history(session, account, refs):
    account.watch_history = json.dumps([str(ref) for ref in refs])
    session.add(account)
    session.commit()


class TestChannelProfile:
    def test_counts_subscribers(self, session, repo, make_account):
        channel = make_account("chan")
        for name in ("a", "b", "c"):
            subscribe(session, make_account(name), channel)

        profile = ProfileAggregator(repo).get_channel_profile("chan")
        assert profile.subscribers_count == 3
        assert profile.channels_subscribed_to_count == 0
        assert profile.is_subscribed is False

    def test_counts_subscriptions_of_the_channel(self, session, repo, make_account):
        channel = make_account("chan")
        subscribe(session, channel, make_account("x"))
        subscribe(session, channel, make_account("y"))

        profile = ProfileAggregator(repo).get_channel_profile("chan")
        assert profile.subscribers_count == 0
        assert profile.channels_subscribed_to_count == 2

    def test_viewer_membership(self, session, repo, make_account):
        channel = make_account("chan")
        fan = make_account("fan")
        stranger = make_account("stranger")
        subscribe(session, fan, channel)
        aggregator = ProfileAggregator(repo)

        assert aggregator.get_channel_profile("chan", fan.id).is_subscribed is True
        assert aggregator.get_channel_profile("chan", stranger.id).is_subscribed is False
        assert aggregator.get_channel_profile("chan", None).is_subscribed is False

    def test_edge_direction_matters(self, session, repo, make_account):
        channel = make_account("chan")
        viewer = make_account("viewer")
        subscribe(session, channel, viewer)  # channel follows viewer, not the reverse

        assert ProfileAggregator(repo).get_channel_profile("chan", viewer.id).is_subscribed is False

    def test_lookup_is_case_insensitive(self, repo, make_account):
        make_account("chan", cover_image="https://cdn.test/cover.png")
        profile = ProfileAggregator(repo).get_channel_profile("  CHAN ")
        assert profile.username == "chan"
        assert profile.cover_image == "https://cdn.test/cover.png"

    def test_exposes_public_fields_only(self, repo, make_account):
        make_account("chan")
        dumped = ProfileAggregator(repo).get_channel_profile("chan").model_dump(by_alias=True)
        assert set(dumped) == {
            "fullName",
            "username",
            "email",
            "avatar",
            "coverImage",
            "subscribersCount",
            "channelsSubscribedToCount",
            "isSubscribed",
        }

    def test_unknown_channel(self, repo):
        with pytest.raises(NotFoundError):
            ProfileAggregator(repo).get_channel_profile("ghost")

    def test_duplicate_edge_rejected_by_store(self, session, make_account):
        channel = make_account("chan")
        fan = make_account("fan")
        subscribe(session, fan, channel)
        with pytest.raises(IntegrityError):
            subscribe(session, fan, channel)


class TestWatchHistory:
    def test_preserves_stored_order(self, session, repo, make_account):
        owner = make_account("owner", full_name="Owner Person")
        viewer = make_account("viewer")
        first, second, third = (add_video(session, owner, t) for t in ("one", "two", "three"))
        set_history(session, viewer, [third.id, first.id, second.id])

        history = HistoryAggregator(repo).get_watch_history(viewer.id)
        assert [item.title for item in history] == ["three", "one", "two"]

    def test_owner_is_flattened_projection(self, session, repo, make_account):
        owner = make_account("owner", full_name="Owner Person")
        viewer = make_account("viewer")
        video = add_video(session, owner)
        set_history(session, viewer, [video.id])

        (item,) = HistoryAggregator(repo).get_watch_history(viewer.id)
        assert item.owner.model_dump() == {
            "full_name": "Owner Person",
            "username": "owner",
            "avatar": "https://cdn.test/owner.png",
        }

    def test_empty_history(self, repo, make_account):
        viewer = make_account("viewer")
        assert HistoryAggregator(repo).get_watch_history(viewer.id) == []

    def test_unknown_videos_are_skipped(self, session, repo, make_account):
        owner = make_account("owner")
        viewer = make_account("viewer")
        video = add_video(session, owner)
        set_history(session, viewer, [uuid.uuid4(), video.id, uuid.uuid4()])

        history = HistoryAggregator(repo).get_watch_history(viewer.id)
        assert [item.id for item in history] == [video.id]

    def test_repeated_views_are_kept(self, session, repo, make_account):
        owner = make_account("owner")
        viewer = make_account("viewer")
        video = add_video(session, owner)
        set_history(session, viewer, [video.id, video.id])

        assert len(HistoryAggregator(repo).get_watch_history(viewer.id)) == 2

    def test_unknown_account(self, repo):
        with pytest.raises(NotFoundError):
            HistoryAggregator(repo).get_watch_history(uuid.uuid4())

    def test_malformed_references_are_skipped(self, session, repo, make_account):
        owner = make_account("owner")
        viewer = make_account("viewer")
        video = add_video(session, owner)
        viewer.watch_history = json.dumps(["not-a-uuid", str(video.id), 17])
        session.add(viewer)
        session.commit()

        assert viewer.watch_history_ids == [video.id]
        history = HistoryAggregator(repo).get_watch_history(viewer.id)
        assert [item.id for item in history] == [video.id]
