"""ExpireAllocations Use Case

Deactivates allocations whose access period has ended. Run periodically by
the expiry sweeper worker.
"""

import time
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.domain.allocation import DeactivationReason
from .dtos import ExpiryResultDTO


class ExpireAllocations:
    """
    Use Case: Expire finished allocations

    Business Rules:
    1. An allocation expires exactly when now >= ends_at
    2. Only the active flag changes (plus deactivation stamp and reason)
    3. Slots stay claimed unless release_slots is enabled; freeing them is
       otherwise an administrator action (ReleaseSlot / ReactivateAccount)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        allocation_repo: AllocationRepository,
        account_repo: AccountRepository,
        clock: Clock,
        release_slots: bool = False,
    ):
        self.uow = uow
        self.allocation_repo = allocation_repo
        self.account_repo = account_repo
        self.clock = clock
        self.release_slots = release_slots

    async def execute(self, now: Optional[datetime] = None) -> Result[ExpiryResultDTO]:
        """
        Execute one expiry sweep

        Args:
            now: Reference time (defaults to the clock)

        Returns:
            Result[ExpiryResultDTO]: Counts of expired allocations and released slots
        """
        started = time.monotonic()
        run_at = now or self.clock.now()

        try:
            due = await self.allocation_repo.list_due_for_expiry(run_at)
            expired_ids = await self.allocation_repo.deactivate(
                [a.id for a in due], DeactivationReason.EXPIRED, run_at
            )

            # A row revoked after the select is skipped by deactivate
            flipped = set(expired_ids)
            expired = [a for a in due if a.id in flipped]

            released = 0
            if self.release_slots:
                for allocation in expired:
                    if await self.account_repo.release_slot(allocation.account_id, allocation.slot_ordinal):
                        released += 1

            await self.uow.commit()

            return Return.ok(
                ExpiryResultDTO(
                    expired_count=len(expired),
                    released_slots=released,
                    expired_allocation_ids=[a.id for a in expired],
                    run_at=run_at,
                    execution_time_ms=int((time.monotonic() - started) * 1000),
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="EXPIRE_ALLOCATIONS_FAILED",
                    message="Failed to expire allocations",
                    reason=str(e),
                )
            )
