"""UpdateAccount Use Case

Edits credentials or notes. Existing allocations keep the snapshot taken
when they were purchased.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.use_cases import error_codes
from .dtos import UpdateAccountCommandDTO, SetAccountActiveCommandDTO, AccountResponseDTO


class UpdateAccount:
    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, command: UpdateAccountCommandDTO) -> Result[AccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(command.account_id)
            if not account:
                return _account_not_found(command.account_id)

            if command.login is not None:
                account.login = command.login.strip()
            if command.secret is not None:
                account.secret = command.secret.strip()
            if command.notes is not None:
                account.notes = command.notes

            account = await self.account_repo.update(account)
            await self.uow.commit()

            slots = await self.account_repo.list_slots(account.id)
            return Return.ok(AccountResponseDTO.from_entity(account, slots))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_ACCOUNT_FAILED",
                    message="Failed to update account",
                    reason=str(e),
                )
            )


class SetAccountActive:
    """
    Use Case: Toggle an account in or out of slot selection

    Allocations already made from the account are not touched.
    """

    def __init__(self, uow: UnitOfWork, account_repo: AccountRepository):
        self.uow = uow
        self.account_repo = account_repo

    async def execute(self, command: SetAccountActiveCommandDTO) -> Result[AccountResponseDTO]:
        try:
            account = await self.account_repo.get_by_id(command.account_id)
            if not account:
                return _account_not_found(command.account_id)

            account.active = command.active
            account = await self.account_repo.update(account)
            await self.uow.commit()

            slots = await self.account_repo.list_slots(account.id)
            return Return.ok(AccountResponseDTO.from_entity(account, slots))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SET_ACCOUNT_ACTIVE_FAILED",
                    message="Failed to change account status",
                    reason=str(e),
                )
            )


def _account_not_found(account_id: int) -> Result:
    return Return.err(
        Error(
            code=error_codes.ACCOUNT_NOT_FOUND,
            message=f"Account {account_id} not found",
        )
    )
