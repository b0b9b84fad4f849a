import asyncpg
from pathlib import Path
from leadscout.config import settings
from loguru import logger
from typing import Optional

pool: Optional[asyncpg.Pool] = None

SCHEMA_DIR = Path(__file__).resolve().parent / "models"

# Parent table first; leads and companies reference jobs
SCHEMA_FILES = ["jobs.sql", "leads.sql", "companies.sql", "scrape_logs.sql"]


async def init_pool() -> asyncpg.Pool:
    global pool
    if pool is None:
        pool = await asyncpg.create_pool(
            host=settings.database_host,
            port=settings.database_port,
            database=settings.database_name,
            user=settings.database_user,
            password=settings.database_password,
            min_size=settings.database_pool_min,
            max_size=settings.database_pool_max,
        )
    return pool


async def close_pool():
    global pool
    if pool:
        await pool.close()
        pool = None


async def create_schema(target: Optional[asyncpg.Pool] = None) -> None:
    """Create the tables if they do not exist yet. Existing tables are left alone."""
    target = target or await init_pool()
    async with target.acquire() as conn:
        for schema_file in SCHEMA_FILES:
            await conn.execute((SCHEMA_DIR / schema_file).read_text())
            logger.debug(f"Applied {schema_file}")


class Database:
    async def get_pool(self) -> asyncpg.Pool:
        global pool
        if pool is None:
            pool = await init_pool()
        return pool

    async def fetch(self, query, *args):
        pool = await self.get_pool()
        return await pool.fetch(query, *args)

    async def fetchrow(self, query, *args):
        pool = await self.get_pool()
        return await pool.fetchrow(query, *args)

    async def fetchval(self, query, *args):
        pool = await self.get_pool()
        return await pool.fetchval(query, *args)

    async def execute(self, query, *args):
        pool = await self.get_pool()
        return await pool.execute(query, *args)


db = Database()
