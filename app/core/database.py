# app/core/database.py

from typing import AsyncGenerator

from loguru import logger
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine
)
from sqlalchemy.pool import NullPool
from sqlalchemy import text

from app.core.config import settings

# Register every table on SQLModel.metadata before create_all runs
from app.models import (  # noqa: F401
    contact,
    department,
    event,
    media,
    post,
    registration,
    sponsorship,
    user,
)


# ----------------------------------------------------
# Engine
# ----------------------------------------------------
def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}

    # Hosted Postgres poolers (Supabase) manage pooling themselves
    return {
        "pool_pre_ping": True,
        "poolclass": NullPool,
        "connect_args": {"statement_cache_size": 0},
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    future=True,
    **_engine_kwargs(settings.DATABASE_URL),
)


# ----------------------------------------------------
# Sessions
# ----------------------------------------------------
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


# ----------------------------------------------------
# Create tables
# ----------------------------------------------------
async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def test_connection():
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.debug("Database connection OK")
