import pytest
import pytest_asyncio
import asyncpg
from typing import AsyncGenerator

from leadscout.config import settings
from leadscout.db import db as db_module


@pytest_asyncio.fixture(scope="function")
async def test_db_pool(request) -> AsyncGenerator[asyncpg.Pool, None]:
    """Pool on the configured database with a freshly created schema."""
    if not request.config.getoption("--use-real-db", default=False):
        pytest.skip("need --use-real-db option to run")

    pool = await asyncpg.create_pool(
        host=settings.database_host,
        port=settings.database_port,
        database=settings.database_name,
        user=settings.database_user,
        password=settings.database_password,
        min_size=1,
        max_size=5,
    )

    async with pool.acquire() as conn:
        await conn.execute(
            "DROP TABLE IF EXISTS scrape_logs, companies, leads, jobs CASCADE"
        )
    await db_module.create_schema(pool)

    yield pool

    await pool.close()


@pytest_asyncio.fixture
async def test_db(test_db_pool, monkeypatch) -> asyncpg.Pool:
    """Point the repository's shared pool at the test database."""
    monkeypatch.setattr(db_module, "pool", test_db_pool)
    return test_db_pool


@pytest_asyncio.fixture
async def clean_db(test_db_pool):
    """Clean all data from tables before each test."""
    async with test_db_pool.acquire() as conn:
        await conn.execute("TRUNCATE TABLE scrape_logs, companies, leads, jobs CASCADE")
