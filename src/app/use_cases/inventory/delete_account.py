"""DeleteAccount Use Case

Removes an account and its slots. Active allocations that still point at
the account are force-expired first so none stays active without a slot.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.use_cases import error_codes
from src.domain.allocation import DeactivationReason
from .dtos import DeleteAccountResponseDTO

logger = logging.getLogger(__name__)


class DeleteAccount:
    """
    Use Case: Delete an account

    Business Rules:
    1. Active allocations on the account become inactive (account_deleted)
    2. Allocation records are kept for history
    3. Slots and the account row are deleted in the same transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        allocation_repo: AllocationRepository,
        clock: Clock,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.allocation_repo = allocation_repo
        self.clock = clock

    async def execute(self, account_id: int) -> Result[DeleteAccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(account_id)
            if not account:
                return Return.err(
                    Error(
                        code=error_codes.ACCOUNT_NOT_FOUND,
                        message=f"Account {account_id} not found",
                    )
                )

            expired = await retire_account(
                self.account_repo, self.allocation_repo, account_id, self.clock.now()
            )
            await self.uow.commit()

            return Return.ok(
                DeleteAccountResponseDTO(account_id=account_id, force_expired_allocations=expired)
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_ACCOUNT_FAILED",
                    message="Failed to delete account",
                    reason=str(e),
                )
            )


async def retire_account(
    account_repo: AccountRepository,
    allocation_repo: AllocationRepository,
    account_id: int,
    when: datetime,
) -> int:
    """
    Force-expire the account's active allocations and delete it, without committing

    Returns:
        Number of allocations force-expired
    """
    active = await allocation_repo.list_active_by_account(account_id)
    expired = len(
        await allocation_repo.deactivate(
            [a.id for a in active], DeactivationReason.ACCOUNT_DELETED, when
        )
    )
    if expired:
        logger.warning(f"Force-expired {expired} active allocation(s) of deleted account {account_id}")

    await account_repo.delete(account_id)
    return expired
