"""DeletePlatform Use Case

Removes a platform from the catalog and cascades to its accounts.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.repositories.platform_repository import PlatformRepository
from src.app.use_cases import error_codes
from src.app.use_cases.inventory.delete_account import retire_account
from .dtos import DeletePlatformResponseDTO

logger = logging.getLogger(__name__)


class DeletePlatform:
    """
    Use Case: Delete a platform

    Business Rules:
    1. Every account of the platform is deleted as DeleteAccount does
       (active allocations force-expired first)
    2. Price rows go with the platform
    3. All of it commits in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        platform_repo: PlatformRepository,
        account_repo: AccountRepository,
        allocation_repo: AllocationRepository,
        clock: Clock,
    ):
        self.uow = uow
        self.platform_repo = platform_repo
        self.account_repo = account_repo
        self.allocation_repo = allocation_repo
        self.clock = clock

    async def execute(self, platform_id: int) -> Result[DeletePlatformResponseDTO]:
        try:
            platform = await self.platform_repo.get_by_id(platform_id)
            if not platform:
                return Return.err(
                    Error(
                        code=error_codes.PLATFORM_NOT_FOUND,
                        message=f"Platform {platform_id} not found",
                    )
                )

            now = self.clock.now()
            accounts = await self.account_repo.list_accounts(platform_id)
            expired = 0
            for account in accounts:
                expired += await retire_account(self.account_repo, self.allocation_repo, account.id, now)

            await self.platform_repo.delete(platform_id)
            await self.uow.commit()

            logger.info(
                f"Deleted platform {platform.name} with {len(accounts)} account(s), "
                f"{expired} allocation(s) force-expired"
            )
            return Return.ok(
                DeletePlatformResponseDTO(
                    platform_id=platform_id,
                    deleted_accounts=len(accounts),
                    force_expired_allocations=expired,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_PLATFORM_FAILED",
                    message="Failed to delete platform",
                    reason=str(e),
                )
            )
