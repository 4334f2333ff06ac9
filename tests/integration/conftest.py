# tests/integration/conftest.py
import pytest_asyncio
from redis.asyncio import Redis

from accounts.infrastructure.db.pool import close_pool, get_pool, open_pool
from accounts.settings import get_settings


@pytest_asyncio.fixture
async def redis_client():
    r = Redis.from_url(get_settings().redis_url, encoding="utf-8", decode_responses=True)
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def pool():
    await open_pool(create_schema=True)
    try:
        yield get_pool()
    finally:
        await close_pool()
