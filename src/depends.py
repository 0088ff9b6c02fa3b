"""FastAPI dependencies: database sessions and the clock"""

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.clock import SystemClock
from src.app.services.clock import Clock

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

_system_clock = SystemClock()


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def get_clock() -> Clock:
    """Overridden in tests to pin the current time"""
    return _system_clock
