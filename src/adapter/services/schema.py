"""Database schema bootstrap

Creates missing tables once at process start. Safe to call repeatedly:
existing tables are left untouched.
"""

import logging
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel import SQLModel

import src.domain  # noqa: F401  registers every table on SQLModel.metadata

logger = logging.getLogger(__name__)


async def init_database(engine: AsyncEngine) -> None:
    """
    Create all tables that do not exist yet

    Args:
        engine: Async engine bound to the target database
    """
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info(f"Database schema ready ({len(SQLModel.metadata.tables)} tables)")
