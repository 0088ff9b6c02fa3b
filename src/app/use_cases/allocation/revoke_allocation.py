"""RevokeAllocation Use Case

Administrative early termination of an allocation.
"""

from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.use_cases import error_codes
from src.domain.allocation import DeactivationReason
from .dtos import RevokeAllocationCommandDTO, AllocationResponseDTO


class RevokeAllocation:
    """
    Use Case: Revoke an active allocation

    No refund is issued. The slot is released only when the command asks
    for it.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        allocation_repo: AllocationRepository,
        account_repo: AccountRepository,
        clock: Clock,
    ):
        self.uow = uow
        self.allocation_repo = allocation_repo
        self.account_repo = account_repo
        self.clock = clock

    async def execute(self, command: RevokeAllocationCommandDTO) -> Result[AllocationResponseDTO]:
        try:
            allocation = await self.allocation_repo.get_by_id(command.allocation_id)
            if not allocation:
                return Return.err(
                    Error(
                        code=error_codes.ALLOCATION_NOT_FOUND,
                        message=f"Allocation {command.allocation_id} not found",
                    )
                )
            if not allocation.active:
                return Return.err(
                    Error(
                        code=error_codes.ALLOCATION_INACTIVE,
                        message=f"Allocation {command.allocation_id} is already inactive",
                        reason=f"reason={allocation.deactivation_reason}",
                    )
                )

            await self.allocation_repo.deactivate(
                [allocation.id], DeactivationReason.REVOKED, self.clock.now()
            )
            if command.release_slot:
                await self.account_repo.release_slot(allocation.account_id, allocation.slot_ordinal)

            await self.uow.commit()

            revoked = await self.allocation_repo.get_by_id(allocation.id)
            return Return.ok(AllocationResponseDTO.from_entity(revoked))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REVOKE_ALLOCATION_FAILED",
                    message="Failed to revoke allocation",
                    reason=str(e),
                )
            )
