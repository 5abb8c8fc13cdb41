# vidshare/core/database.py
from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine, SQLModel, Session
from typing import Generator, Annotated
from fastapi import Depends, Request

from vidshare.core.config import settings


def create_db_engine(database_url: str | None = None, echo: bool | None = None) -> Engine:
    """Build the engine; the application lifespan owns it."""
    url = database_url or settings.database_url
    kwargs = {"echo": settings.db_echo if echo is None else echo}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def init_db(engine: Engine) -> None:
    # Table classes must be imported so their metadata is registered
    from vidshare.models import account, subscription, video  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_db(request: Request) -> Generator:
    with Session(request.app.state.engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
