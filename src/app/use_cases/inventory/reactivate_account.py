"""ReactivateAccount Use Case

Administrator reset of an account: back in rotation, optionally resized,
and every slot no longer backing an active allocation freed.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.use_cases import error_codes
from .dtos import ReactivateAccountCommandDTO, AccountResponseDTO
from .resize_account import resize_slots


class ReactivateAccount:
    """
    Use Case: Reactivate an account and reclaim its idle slots

    Business Rules:
    1. The account becomes active
    2. When slot_count is given the account is resized first (same rules
       as ResizeAccount, after idle slots are freed)
    3. A claimed slot is freed only if no active allocation holds it
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        allocation_repo: AllocationRepository,
        label_prefix: str = "Screen",
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.allocation_repo = allocation_repo
        self.label_prefix = label_prefix

    async def execute(self, command: ReactivateAccountCommandDTO) -> Result[AccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(command.account_id)
            if not account:
                return Return.err(
                    Error(
                        code=error_codes.ACCOUNT_NOT_FOUND,
                        message=f"Account {command.account_id} not found",
                    )
                )

            held = {a.slot_ordinal for a in await self.allocation_repo.list_active_by_account(account.id)}
            for slot in await self.account_repo.list_slots(account.id):
                if not slot.available and slot.ordinal not in held:
                    await self.account_repo.release_slot(account.id, slot.ordinal)

            if command.slot_count is not None:
                resized = await resize_slots(
                    self.account_repo, account, command.slot_count, self.label_prefix
                )
                if resized.is_err():
                    await self.uow.rollback()
                    return resized

            account.active = True
            account = await self.account_repo.update(account)
            await self.uow.commit()

            slots = await self.account_repo.list_slots(account.id)
            return Return.ok(AccountResponseDTO.from_entity(account, slots))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REACTIVATE_ACCOUNT_FAILED",
                    message="Failed to reactivate account",
                    reason=str(e),
                )
            )
