# vidshare/services/tokens.py
import logging
import uuid
from typing import Optional, Tuple

from vidshare.core.errors import UnauthorizedError
from vidshare.core.repository import Repository
from vidshare.core.security import create_access_token, create_refresh_token, decode_refresh_token
from vidshare.models.account import Account
from vidshare.schemas.account import TokenPair

logger = logging.getLogger(__name__)


class TokenService:
    """Issues access/refresh pairs and keeps one live refresh token per account.

    The stored refresh token is the only server-side session state. Issuing a
    pair overwrites it, so any earlier refresh token stops working at once;
    revoking clears it.
    """

    def __init__(self, repo: Repository):
        self.repo = repo

    def _mint(self, account: Account) -> TokenPair:
        access_token = create_access_token({
            "sub": str(account.id),
            "username": account.username,
            "email": account.email,
            "full_name": account.full_name,
        })
        refresh_token = create_refresh_token(str(account.id))
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    def issue_pair(self, account: Account) -> TokenPair:
        pair = self._mint(account)
        self.repo.set_refresh_token(account.id, pair.refresh_token)
        logger.info(f"Issued token pair for account {account.id}")
        return pair

    def rotate(self, presented: Optional[str]) -> Tuple[Account, TokenPair]:
        """Exchanges a live refresh token for a fresh pair.

        Signature and expiry are checked before the store is touched. A token
        that verifies but is not the one currently stored (already rotated away,
        or revoked) is rejected.
        """
        if not presented:
            raise UnauthorizedError("no credential")
        payload = decode_refresh_token(presented)

        try:
            account_id = uuid.UUID(payload["sub"])
        except (ValueError, TypeError):
            raise UnauthorizedError("invalid token")
        account = self.repo.get_account(account_id)
        if account is None:
            raise UnauthorizedError("invalid token")

        if account.refresh_token != presented:
            logger.warning(f"Refresh token reuse or revoked token for account {account.id}")
            raise UnauthorizedError("expired or already used")

        pair = self._mint(account)
        if not self.repo.swap_refresh_token(account.id, presented, pair.refresh_token):
            # Lost the race against a concurrent rotation or logout
            logger.warning(f"Concurrent rotation rejected for account {account.id}")
            raise UnauthorizedError("expired or already used")
        logger.info(f"Rotated refresh token for account {account.id}")
        return account, pair

    def revoke(self, account_id: uuid.UUID) -> None:
        self.repo.set_refresh_token(account_id, None)
        logger.info(f"Revoked refresh token for account {account_id}")
