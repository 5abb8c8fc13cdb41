# vidshare/main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import Engine

from vidshare.api import users, videos
from vidshare.core.config import settings
from vidshare.core.database import create_db_engine, init_db
from vidshare.core.errors import register_exception_handlers
from vidshare.schemas.response import ApiResponse

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


def create_app(engine: Optional[Engine] = None) -> FastAPI:
    """Builds the application. An engine passed in stays owned by the caller."""
    owns_engine = engine is None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Application startup: initializing database...")
        init_db(app.state.engine)
        yield
        if owns_engine:
            logger.info("Application shutdown: disposing database engine.")
            app.state.engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.engine = create_db_engine() if owns_engine else engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,  # cookies carry the tokens
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/healthcheck", response_model=ApiResponse)
    async def healthcheck():
        return ApiResponse(message="ok")

    app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
    app.include_router(videos.router, prefix="/api/v1/videos", tags=["videos"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("vidshare.main:app", host="0.0.0.0", port=settings.port, log_level=settings.log_level.lower())
