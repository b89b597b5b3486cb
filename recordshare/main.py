from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from recordshare.auth import router as auth_router
from recordshare.auth.security import TokenService
from recordshare.core import db
from recordshare.core.config import Settings, load_settings
from recordshare.core.errors import install_error_handlers
from recordshare.core.logs import configure_logging
from recordshare.records import router as records_router
from recordshare.users import router as users_router


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    logger = configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Initialize the DB pool once per process.
        await db.init_pool(
            settings.database_url,
            min_size=settings.db_pool_min,
            max_size=settings.db_pool_max,
            command_timeout=settings.db_command_timeout,
        )
        if settings.apply_schema:
            await db.apply_schema()
        logger.info("started listen=%s:%s", settings.host, settings.port)
        try:
            yield
        finally:
            await db.close_pool()
            logger.info("stopped")

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.logger = logger
    app.state.token_service = TokenService(
        settings.jwt_secret,
        ttl_seconds=settings.access_token_expire_minutes * 60,
        logger=logger.getChild("tokens"),
    )

    install_error_handlers(app, logger)

    app.include_router(auth_router.router, tags=["auth"])
    app.include_router(users_router.router, tags=["users"])
    app.include_router(records_router.router, tags=["records"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "recordshare api"}

    return app
