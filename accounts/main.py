import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from accounts.infrastructure.db.pool import close_pool, open_pool
from accounts.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from accounts.infrastructure.http.client import (
    close_http_client,
    get_http_client,
    open_http_client,
)
from accounts.infrastructure.redis_cache.pool import close_redis, get_redis
from accounts.logging import setup_logging
from accounts.presentation.api import api
from accounts.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    await open_pool(create_schema=settings.auto_create_schema)
    await open_http_client()
    get_redis()

    # One shared email adapter on top of the shared HTTP client
    email_adapter = HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url,
        client=get_http_client(),
    )
    app.state.email_adapter = email_adapter  # expose to dependencies
    logger.info("accounts service started", extra={"app_env": settings.app_env})

    try:
        yield
    finally:
        # shutdown
        await email_adapter.aclose()  # it won't close the shared client
        await close_http_client()
        await close_redis()
        await close_pool()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Accounts API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api)
    return app


app = create_app()
