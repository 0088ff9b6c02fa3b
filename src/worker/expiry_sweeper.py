"""Allocation Expiry Sweeper Background Worker

Periodically deactivates allocations whose access period has ended.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.account_repository import SqlAlchemyAccountRepository
from src.adapter.repositories.allocation_repository import SqlAlchemyAllocationRepository
from src.adapter.services.clock import SystemClock
from src.adapter.services.schema import init_database
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock
from src.app.use_cases.allocation import ExpireAllocations, ExpiryResultDTO

logger = logging.getLogger(__name__)


class ExpirySweeperWorker:
    """
    Background worker for allocation expiry

    Features:
    - Flips allocations with ends_at <= now to inactive
    - Leaves slots claimed unless SWEEPER_RELEASE_SLOTS is enabled
    - Can run once or continuously
    - Configurable interval (default: daily)

    Usage:
        # Run once
        worker = ExpirySweeperWorker()
        result = await worker.run_once()

        # Run continuously
        worker = ExpirySweeperWorker()
        await worker.run_forever(interval_seconds=86400)  # Daily
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        release_slots: Optional[bool] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            release_slots: Free expired slots (defaults to ApplicationConfig.SWEEPER_RELEASE_SLOTS)
            clock: Time source (defaults to SystemClock)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.release_slots = (
            ApplicationConfig.SWEEPER_RELEASE_SLOTS if release_slots is None else release_slots
        )
        self.clock = clock or SystemClock()

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(f"ExpirySweeperWorker initialized (release_slots={self.release_slots})")

    async def run_once(self) -> ExpiryResultDTO:
        """
        Run one sweep

        Returns:
            ExpiryResultDTO with the sweep results
        """
        if not ApplicationConfig.SWEEPER_ENABLED:
            logger.info("Expiry sweeper is disabled, skipping")
            return ExpiryResultDTO(expired_count=0, run_at=self.clock.now())

        async with self.async_session_factory() as session:
            use_case = ExpireAllocations(
                uow=SqlAlchemyUnitOfWork(session),
                allocation_repo=SqlAlchemyAllocationRepository(session),
                account_repo=SqlAlchemyAccountRepository(session),
                clock=self.clock,
                release_slots=self.release_slots,
            )

            result = await use_case.execute()

            if result.is_err():
                logger.error(f"Expiry sweep failed: {result.error.message} ({result.error.reason})")
                raise RuntimeError(f"Expiry sweep failed: {result.error.message}")

            response = result.value
            if response.expired_count and not self.release_slots:
                logger.info(
                    f"{response.expired_count} allocation(s) expired; their slots stay claimed "
                    f"until an administrator releases them"
                )
            return response

    async def run_forever(self, interval_seconds: int = 86400):
        """
        Run sweeps continuously at the specified interval

        Args:
            interval_seconds: Seconds between sweeps (default: 24 hours)
        """
        logger.info(f"Starting continuous expiry sweeps with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Sweep complete. Expired {result.expired_count} allocation(s), "
                    f"released {result.released_slots} slot(s) in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Sweep cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("ExpirySweeperWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        # Run once
        python -m src.worker.expiry_sweeper --once

        # Run continuously (default: ApplicationConfig.SWEEPER_INTERVAL_SECONDS)
        python -m src.worker.expiry_sweeper

        # Run continuously with custom interval (in seconds)
        python -m src.worker.expiry_sweeper --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Allocation Expiry Sweeper")
    parser.add_argument(
        "--once", action="store_true", help="Run once and exit"
    )
    parser.add_argument(
        "--interval", type=int, default=int(ApplicationConfig.SWEEPER_INTERVAL_SECONDS),
        help="Interval between runs in seconds (default: 86400 = 24 hours)"
    )
    parser.add_argument(
        "--release-slots", action="store_true",
        help="Also free the slots of expired allocations"
    )
    args = parser.parse_args()

    worker = ExpirySweeperWorker(release_slots=True if args.release_slots else None)

    try:
        await init_database(worker.engine)
        if args.once:
            result = await worker.run_once()
            print("Expiry sweep complete:")
            print(f"  Allocations expired: {result.expired_count}")
            print(f"  Slots released: {result.released_slots}")
            print(f"  Execution time: {result.execution_time_ms}ms")
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
