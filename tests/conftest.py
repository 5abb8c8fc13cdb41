"""Shared pytest fixtures for vidshare tests."""

import os

# Settings are read at import time; keep bcrypt cheap and secrets fixed for tests.
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret"

from pathlib import Path
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from vidshare.core.config import settings
from vidshare.core.database import create_db_engine, init_db
from vidshare.core.repository import Repository
from vidshare.core.security import get_password_hash
from vidshare.core.storage import UploadedAsset, get_asset_remover, get_asset_uploader
from vidshare.main import create_app
from vidshare.models.account import Account


class FakeUploader:
    """Stands in for the asset host: records uploads and removals, and can be told to fail."""

    def __init__(self):
        self.uploaded: List[str] = []
        self.removed: List[str] = []
        self.fail = False
        self.fail_on: Optional[str] = None  # fail only uploads whose file name contains this
        self.duration: Optional[float] = 42.0

    async def __call__(self, local_path: Optional[Path]) -> Optional[UploadedAsset]:
        if not local_path:
            return None
        name = Path(local_path).name
        Path(local_path).unlink(missing_ok=True)
        if self.fail or (self.fail_on and self.fail_on in name):
            return None
        self.uploaded.append(name)
        return UploadedAsset(url=f"https://cdn.test/{name}", duration=self.duration, public_id=name)

    async def remove(self, asset: UploadedAsset) -> bool:
        self.removed.append(asset.public_id)
        return True


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_db_engine("sqlite:///:memory:", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo(session):
    return Repository(session)


@pytest.fixture
def make_account(session):
    """Factory inserting an account directly, bypassing registration."""

    def _make(username: str = "ada", password: str = "secret1", **fields) -> Account:
        account = Account(
            username=username,
            email=fields.pop("email", f"{username}@x.com"),
            full_name=fields.pop("full_name", username.title()),
            password_hash=get_password_hash(password),
            avatar=fields.pop("avatar", f"https://cdn.test/{username}.png"),
            **fields,
        )
        session.add(account)
        session.commit()
        session.refresh(account)
        return account

    return _make


@pytest.fixture
def uploader():
    return FakeUploader()


@pytest.fixture
def app(engine, uploader, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_tmp_dir", str(tmp_path / "uploads"))
    app = create_app(engine)
    app.dependency_overrides[get_asset_uploader] = lambda: uploader
    app.dependency_overrides[get_asset_remover] = lambda: uploader.remove
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
