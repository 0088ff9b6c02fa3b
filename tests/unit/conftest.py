import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.services.clock import Clock

FIXED_NOW = datetime(2024, 1, 31, 12, 0, 0)


class FixedClock(Clock):
    def __init__(self, now: datetime = FIXED_NOW):
        self._now = now

    def now(self) -> datetime:
        return self._now


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def fixed_clock():
    return FixedClock()
