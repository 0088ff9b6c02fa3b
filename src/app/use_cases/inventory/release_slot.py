"""ReleaseSlot Use Case

Administrator manual reset of a single claimed slot.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.use_cases import error_codes
from .dtos import ReleaseSlotCommandDTO, AccountResponseDTO


class ReleaseSlot:
    """
    Use Case: Free one slot

    Refused with SLOT_IN_USE while an active allocation holds the slot;
    releasing an already free slot is a no-op.
    """

    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository, allocation_repo: AllocationRepository):
        self.uow = uow
        self.account_repo = account_repo
        self.allocation_repo = allocation_repo

    async def execute(self, command: ReleaseSlotCommandDTO) -> Result[AccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(command.account_id)
            if not account:
                return Return.err(
                    Error(
                        code=error_codes.ACCOUNT_NOT_FOUND,
                        message=f"Account {command.account_id} not found",
                    )
                )

            slots = await self.account_repo.list_slots(account.id)
            if command.ordinal not in {s.ordinal for s in slots}:
                return Return.err(
                    Error(
                        code=error_codes.SLOT_NOT_FOUND,
                        message=f"Account {account.id} has no slot {command.ordinal}",
                    )
                )

            holders = [
                a for a in await self.allocation_repo.list_active_by_account(account.id)
                if a.slot_ordinal == command.ordinal
            ]
            if holders:
                return Return.err(
                    Error(
                        code=error_codes.SLOT_IN_USE,
                        message=f"Slot {command.ordinal} is held by active allocation {holders[0].id}",
                        reason=f"allocation_id={holders[0].id}",
                    )
                )

            await self.account_repo.release_slot(account.id, command.ordinal)
            await self.uow.commit()

            slots = await self.account_repo.list_slots(account.id)
            return Return.ok(AccountResponseDTO.from_entity(account, slots))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="RELEASE_SLOT_FAILED",
                    message="Failed to release slot",
                    reason=str(e),
                )
            )
