# vidshare/core/repository.py
import logging
import uuid
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from vidshare.core.errors import ConflictError
from vidshare.models.account import Account, utcnow
from vidshare.models.subscription import Subscription
from vidshare.models.video import Video

logger = logging.getLogger(__name__)


class Repository:
    """All queries over the relational store, wrapping one request-scoped session."""

    def __init__(self, session: Session):
        self.session = session

    # --- Accounts ---

    def get_account(self, account_id: uuid.UUID) -> Optional[Account]:
        return self.session.get(Account, account_id)

    def get_account_by_username(self, username: str) -> Optional[Account]:
        return self.session.exec(
            select(Account).where(Account.username == username)
        ).first()

    def find_account_by_login(self, login: str) -> Optional[Account]:
        """Looks an account up by username or email (both stored lower-cased)."""
        return self.session.exec(
            select(Account).where(or_(Account.username == login, Account.email == login))
        ).first()

    def account_exists(self, username: str, email: str) -> bool:
        found = self.session.exec(
            select(Account.id).where(or_(Account.username == username, Account.email == email))
        ).first()
        return found is not None

    def insert_account(self, account: Account) -> Account:
        """Inserts the account; the unique indexes make this the uniqueness check."""
        self.session.add(account)
        self._commit_or_conflict("username or email already exists")
        self.session.refresh(account)
        return account

    def save_account(self, account: Account) -> Account:
        account.updated_at = utcnow()
        self.session.add(account)
        self._commit_or_conflict("username already exists")
        self.session.refresh(account)
        return account

    def set_refresh_token(self, account_id: uuid.UUID, token: Optional[str]) -> None:
        self.session.exec(
            update(Account)
            .where(Account.id == account_id)
            .values(refresh_token=token, updated_at=utcnow())
        )
        self.session.commit()

    def swap_refresh_token(self, account_id: uuid.UUID, expected: str, new: str) -> bool:
        """Compare-and-swap of the stored refresh token in a single statement.

        Returns False when the stored value no longer equals ``expected``.
        """
        result = self.session.exec(
            update(Account)
            .where(Account.id == account_id, Account.refresh_token == expected)
            .values(refresh_token=new, updated_at=utcnow())
        )
        self.session.commit()
        return result.rowcount == 1

    # --- Subscriptions ---

    def count_edges_by_channel(self, channel_id: uuid.UUID) -> int:
        return self.session.exec(
            select(func.count()).select_from(Subscription).where(Subscription.channel_id == channel_id)
        ).one()

    def count_edges_by_subscriber(self, subscriber_id: uuid.UUID) -> int:
        return self.session.exec(
            select(func.count()).select_from(Subscription).where(Subscription.subscriber_id == subscriber_id)
        ).one()

    def find_edge(self, subscriber_id: uuid.UUID, channel_id: uuid.UUID) -> Optional[Subscription]:
        return self.session.exec(
            select(Subscription)
            .where(Subscription.subscriber_id == subscriber_id)
            .where(Subscription.channel_id == channel_id)
        ).first()

    # --- Videos ---

    def insert_video(self, video: Video) -> Video:
        self.session.add(video)
        self.session.commit()
        self.session.refresh(video)
        return video

    def resolve_videos_with_owner(self, video_ids: Sequence[uuid.UUID]) -> Dict[uuid.UUID, Tuple[Video, Account]]:
        """Loads the given videos joined to their owners, keyed by video id."""
        if not video_ids:
            return {}
        rows: List[Tuple[Video, Account]] = self.session.exec(
            select(Video, Account)
            .join(Account, Video.owner_id == Account.id)
            .where(col(Video.id).in_(set(video_ids)))
        ).all()
        return {video.id: (video, owner) for video, owner in rows}

    def _commit_or_conflict(self, message: str) -> None:
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.info(f"Integrity violation on commit: {e.orig}")
            raise ConflictError(message)
