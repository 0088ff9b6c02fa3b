"""Unit tests for ExpirySweeperWorker

Tests cover:
- Worker initialization with configuration
- run_once execution and the disabled switch
- Error propagation from run_once
- run_forever surviving a failed cycle
- Shutdown and cleanup
"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from src.app.use_cases.allocation.dtos import ExpiryResultDTO
from src.worker.expiry_sweeper import ExpirySweeperWorker


class StopSweeping(Exception):
    pass


@pytest.fixture
def sample_result():
    return ExpiryResultDTO(
        expired_count=3,
        released_slots=0,
        expired_allocation_ids=[1, 2, 3],
        run_at=datetime(2024, 2, 1),
        execution_time_ms=12,
    )


def mock_session_factory(mock_sessionmaker):
    session = MagicMock()
    session.__aenter__ = AsyncMock(return_value=session)
    session.__aexit__ = AsyncMock(return_value=False)
    mock_sessionmaker.return_value = MagicMock(return_value=session)
    return session


class TestExpirySweeperWorkerInit:
    @patch("src.worker.expiry_sweeper.ApplicationConfig")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    def test_initializes_with_default_config(self, mock_create_engine, mock_app_config):
        """
        Given: No custom configuration provided
        When: Worker is initialized
        Then: Uses defaults from ApplicationConfig
        """
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_app_config.SWEEPER_RELEASE_SLOTS = False
        mock_create_engine.return_value = MagicMock()

        worker = ExpirySweeperWorker()

        assert worker.db_uri == "sqlite+aiosqlite:///./default.db"
        assert worker.release_slots is False
        mock_create_engine.assert_called_once()

    @patch("src.worker.expiry_sweeper.ApplicationConfig")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    def test_explicit_arguments_override_config(self, mock_create_engine, mock_app_config):
        mock_app_config.DB_URI = "sqlite+aiosqlite:///./default.db"
        mock_app_config.SWEEPER_RELEASE_SLOTS = False
        mock_create_engine.return_value = MagicMock()

        worker = ExpirySweeperWorker(db_uri="sqlite+aiosqlite:///./custom.db", release_slots=True)

        assert worker.db_uri == "sqlite+aiosqlite:///./custom.db"
        assert worker.release_slots is True


@pytest.mark.asyncio
class TestExpirySweeperWorkerRunOnce:
    @patch("src.worker.expiry_sweeper.ApplicationConfig")
    @patch("src.worker.expiry_sweeper.ExpireAllocations")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    @patch("src.worker.expiry_sweeper.sessionmaker")
    async def test_run_once_executes_sweep(
        self, mock_sessionmaker, mock_create_engine, mock_use_case_class, mock_app_config, sample_result
    ):
        """
        Given: Sweeper is enabled
        When: run_once is called
        Then: Executes the expiry use case with the configured slot policy
        """
        mock_app_config.SWEEPER_ENABLED = True
        mock_app_config.SWEEPER_RELEASE_SLOTS = False
        mock_session_factory(mock_sessionmaker)
        mock_create_engine.return_value = MagicMock()

        mock_result = MagicMock()
        mock_result.is_err.return_value = False
        mock_result.value = sample_result
        mock_use_case = MagicMock()
        mock_use_case.execute = AsyncMock(return_value=mock_result)
        mock_use_case_class.return_value = mock_use_case

        worker = ExpirySweeperWorker()
        result = await worker.run_once()

        assert result.expired_count == 3
        mock_use_case.execute.assert_awaited_once()
        assert mock_use_case_class.call_args.kwargs["release_slots"] is False

    @patch("src.worker.expiry_sweeper.ApplicationConfig")
    @patch("src.worker.expiry_sweeper.ExpireAllocations")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    async def test_run_once_skips_when_disabled(
        self, mock_create_engine, mock_use_case_class, mock_app_config
    ):
        mock_app_config.SWEEPER_ENABLED = False
        mock_app_config.SWEEPER_RELEASE_SLOTS = False
        mock_create_engine.return_value = MagicMock()

        worker = ExpirySweeperWorker()
        result = await worker.run_once()

        assert result.expired_count == 0
        mock_use_case_class.assert_not_called()

    @patch("src.worker.expiry_sweeper.ApplicationConfig")
    @patch("src.worker.expiry_sweeper.ExpireAllocations")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    @patch("src.worker.expiry_sweeper.sessionmaker")
    async def test_run_once_raises_on_error(
        self, mock_sessionmaker, mock_create_engine, mock_use_case_class, mock_app_config
    ):
        mock_app_config.SWEEPER_ENABLED = True
        mock_app_config.SWEEPER_RELEASE_SLOTS = False
        mock_session_factory(mock_sessionmaker)
        mock_create_engine.return_value = MagicMock()

        mock_result = MagicMock()
        mock_result.is_err.return_value = True
        mock_result.error.message = "Failed to expire allocations"
        mock_result.error.reason = "db down"
        mock_use_case_class.return_value.execute = AsyncMock(return_value=mock_result)

        worker = ExpirySweeperWorker()

        with pytest.raises(RuntimeError, match="Expiry sweep failed"):
            await worker.run_once()


@pytest.mark.asyncio
class TestExpirySweeperWorkerLoop:
    @patch("src.worker.expiry_sweeper.asyncio.sleep")
    @patch("src.worker.expiry_sweeper.create_async_engine")
    async def test_run_forever_survives_failed_cycle(self, mock_create_engine, mock_sleep, sample_result):
        """
        Given: The first sweep raises
        When: run_forever is running
        Then: The loop logs the failure and runs the next sweep
        """
        mock_create_engine.return_value = MagicMock()
        mock_sleep.side_effect = [None, StopSweeping()]

        worker = ExpirySweeperWorker(release_slots=False)
        worker.run_once = AsyncMock(side_effect=[RuntimeError("boom"), sample_result])

        with pytest.raises(StopSweeping):
            await worker.run_forever(interval_seconds=1)

        assert worker.run_once.await_count == 2
        mock_sleep.assert_any_await(1)

    @patch("src.worker.expiry_sweeper.create_async_engine")
    async def test_shutdown_disposes_engine(self, mock_create_engine):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        mock_create_engine.return_value = engine

        worker = ExpirySweeperWorker(release_slots=False)
        await worker.shutdown()

        engine.dispose.assert_awaited_once()
