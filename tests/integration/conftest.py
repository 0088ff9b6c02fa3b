import pytest_asyncio
from datetime import datetime
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.schema import init_database
from src.app.services.clock import Clock
from src.depends import get_session
from src.domain.account import Account, Slot
from src.domain.platform import Platform, PlatformPrice
from src.domain.slot_pool import slot_label
from src.domain.user import User


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create a throwaway SQLite database per test"""
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'slots_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)
    await init_database(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


class Seed:
    """Inserts catalog, pool and user rows directly and returns their ids"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def platform(self, name="Netflix", prices=None, available=True) -> int:
        platform = Platform(name=name, available=available)
        self.session.add(platform)
        await self.session.flush()
        for months, price in (prices if prices is not None else {1: Decimal("100.00")}).items():
            self.session.add(PlatformPrice(platform_id=platform.id, duration_months=months, price=price))
        await self.session.commit()
        return platform.id

    async def account(self, platform_id: int, slot_count=1, login=None, last_used_at=None, active=True) -> int:
        account = Account(
            platform_id=platform_id,
            login=login or f"shared-{platform_id}@example.com",
            secret="s3cret",
            active=active,
            last_used_at=last_used_at,
        )
        self.session.add(account)
        await self.session.flush()
        for n in range(1, slot_count + 1):
            self.session.add(
                Slot(account_id=account.id, ordinal=n, label=slot_label("Screen", n), available=True)
            )
        await self.session.commit()
        return account.id

    async def user(self, email="buyer@example.com", balance=Decimal("150.00"), active=True) -> int:
        user = User(email=email, password_hash="hash", balance=balance, active=active)
        self.session.add(user)
        await self.session.commit()
        return user.id


@pytest_asyncio.fixture
def seed(db_session):
    return Seed(db_session)


class SettableClock(Clock):
    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


@pytest_asyncio.fixture
def clock():
    return SettableClock(datetime(2023, 1, 31, 9, 0, 0))
