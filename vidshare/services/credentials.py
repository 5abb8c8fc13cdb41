# vidshare/services/credentials.py
import logging
import uuid
from typing import Optional

from vidshare.core.errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from vidshare.core.repository import Repository
from vidshare.core.security import get_password_hash, verify_password
from vidshare.models.account import Account

logger = logging.getLogger(__name__)


def normalize(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def _require(**fields: Optional[str]) -> dict:
    """Trims every field and rejects the call if any is empty."""
    trimmed = {name: (value or "").strip() for name, value in fields.items()}
    missing = [name for name, value in trimmed.items() if not value]
    if missing:
        raise ValidationError(f"all fields are required (missing: {', '.join(missing)})")
    return trimmed


class CredentialStore:
    def __init__(self, repo: Repository):
        self.repo = repo

    def ensure_available(self, username: str, email: str) -> None:
        """Early rejection of taken names. Not authoritative: the insert decides."""
        if self.repo.account_exists(normalize(username), normalize(email)):
            raise ConflictError("username or email already exists")

    def register(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar_url: str,
        cover_url: Optional[str] = None,
    ) -> Account:
        fields = _require(
            username=username,
            email=email,
            full_name=full_name,
            password=password,
            avatar=avatar_url,
        )
        account = Account(
            username=fields["username"].lower(),
            email=fields["email"].lower(),
            full_name=fields["full_name"],
            # Blank check only: the password is stored exactly as typed
            password_hash=get_password_hash(password),
            avatar=fields["avatar"],
            cover_image=(cover_url or "").strip(),
        )
        account = self.repo.insert_account(account)
        logger.info(f"Registered account {account.id} ({account.username})")
        return account

    def verify_password(self, account: Optional[Account], candidate: str) -> bool:
        hashed = account.password_hash if account is not None else None
        return verify_password(candidate, hashed)

    def authenticate(self, login: str, password: str) -> Account:
        """Resolves a username or email and checks the password against it."""
        if not normalize(login) or not password:
            raise ValidationError("username or email and password are required")
        account = self.repo.find_account_by_login(normalize(login))
        # Unknown account and wrong password are indistinguishable to the caller
        if not self.verify_password(account, password):
            logger.info(f"Failed login for '{normalize(login)}'")
            raise UnauthorizedError("invalid user credentials")
        return account

    def hash_and_store(self, account: Account, password: str) -> Account:
        account.password_hash = get_password_hash(password)
        return self.repo.save_account(account)

    def change_password(self, account_id: uuid.UUID, old_password: str, new_password: str) -> None:
        if not (new_password or "").strip():
            raise ValidationError("new password is required")
        account = self._load(account_id)
        if not self.verify_password(account, old_password):
            raise ValidationError("invalid old password")
        self.hash_and_store(account, new_password)
        logger.info(f"Password changed for account {account.id}")

    def update_details(self, account_id: uuid.UUID, username: str, full_name: str) -> Account:
        fields = _require(username=username, full_name=full_name)
        account = self._load(account_id)
        account.username = fields["username"].lower()
        account.full_name = fields["full_name"]
        return self.repo.save_account(account)

    def update_avatar(self, account_id: uuid.UUID, avatar_url: str) -> Account:
        account = self._load(account_id)
        account.avatar = avatar_url
        return self.repo.save_account(account)

    def update_cover_image(self, account_id: uuid.UUID, cover_url: str) -> Account:
        account = self._load(account_id)
        account.cover_image = cover_url
        return self.repo.save_account(account)

    def _load(self, account_id: uuid.UUID) -> Account:
        account = self.repo.get_account(account_id)
        if account is None:
            raise NotFoundError("account does not exist")
        return account
