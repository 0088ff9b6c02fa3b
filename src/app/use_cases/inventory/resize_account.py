"""ResizeAccount Use Case

Changes how many slots an account is divided into.
"""

from typing import List
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.use_cases import error_codes
from src.domain.account import Account, Slot
from src.domain.slot_pool import plan_resize, slot_label
from .dtos import ResizeAccountCommandDTO, AccountResponseDTO


class ResizeAccount:
    """
    Use Case: Resize an account's slot list

    Business Rules:
    1. Slots with ordinal <= new count keep their state
    2. Growing appends available slots (old_count, new_count]
    3. Shrinking removes the highest ordinals and is refused (SLOT_IN_USE)
       when any of them is claimed; nothing changes in that case
    """

    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository, label_prefix: str = "Screen"):
        self.uow = uow
        self.account_repo = account_repo
        self.label_prefix = label_prefix

    async def execute(self, command: ResizeAccountCommandDTO) -> Result[AccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(command.account_id)
            if not account:
                return Return.err(
                    Error(
                        code=error_codes.ACCOUNT_NOT_FOUND,
                        message=f"Account {command.account_id} not found",
                    )
                )

            resized = await resize_slots(self.account_repo, account, command.slot_count, self.label_prefix)
            if resized.is_err():
                return resized

            await self.uow.commit()
            return Return.ok(AccountResponseDTO.from_entity(account, resized.value))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="RESIZE_ACCOUNT_FAILED",
                    message="Failed to resize account",
                    reason=str(e),
                )
            )


async def resize_slots(
    account_repo: AccountRepository, account: Account, new_count: int, label_prefix: str
) -> Result[List[Slot]]:
    """
    Apply a resize plan to an account without committing

    Returns:
        Result with the account's slots after the resize, or SLOT_IN_USE
    """
    slots = await account_repo.list_slots(account.id)
    plan = plan_resize(slots, new_count)
    if not plan.allowed:
        return Return.err(
            Error(
                code=error_codes.SLOT_IN_USE,
                message=f"Cannot shrink account {account.id} to {new_count} slots: "
                        f"slots {plan.blocked_ordinals} are claimed",
                reason=f"blocked_ordinals={plan.blocked_ordinals}",
            )
        )

    await account_repo.remove_slots(account.id, plan.remove_ordinals)
    await account_repo.add_slots(
        [
            Slot(account_id=account.id, ordinal=n, label=slot_label(label_prefix, n), available=True)
            for n in plan.add_ordinals
        ]
    )
    return Return.ok(await account_repo.list_slots(account.id))
