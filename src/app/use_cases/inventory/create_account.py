"""CreateAccount Use Case

Adds a shared account to a platform's pool with all slots available.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.platform_repository import PlatformRepository
from src.app.use_cases import error_codes
from src.domain.account import Account, Slot
from src.domain.slot_pool import slot_label
from .dtos import CreateAccountCommandDTO, AccountResponseDTO


class CreateAccount:
    """
    Use Case: Create an account with slot_count slots

    Business Rules:
    1. Platform must exist
    2. Slots are numbered 1..slot_count and start available
    3. slot_count = 0 is allowed; such an account offers no capacity
    """

    def __init__(
        self,
        uow: UnitOfWork,
        platform_repo: PlatformRepository,
        account_repo: AccountRepository,
        label_prefix: str = "Screen",
    ):
        self.uow = uow
        self.platform_repo = platform_repo
        self.account_repo = account_repo
        self.label_prefix = label_prefix

    async def execute(self, command: CreateAccountCommandDTO) -> Result[AccountResponseDTO]:
        try:
            platform = await self.platform_repo.get_by_id(command.platform_id)
            if not platform:
                return Return.err(
                    Error(
                        code=error_codes.PLATFORM_NOT_FOUND,
                        message=f"Platform {command.platform_id} not found",
                    )
                )

            account = Account(
                platform_id=platform.id,
                login=command.login.strip(),
                secret=command.secret.strip(),
                notes=command.notes,
                active=True,
            )
            slots = [
                Slot(ordinal=n, label=slot_label(self.label_prefix, n), available=True)
                for n in range(1, command.slot_count + 1)
            ]
            account = await self.account_repo.create(account, slots)
            await self.uow.commit()

            created_slots = await self.account_repo.list_slots(account.id)
            return Return.ok(AccountResponseDTO.from_entity(account, created_slots))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_ACCOUNT_FAILED",
                    message="Failed to create account",
                    reason=str(e),
                )
            )
