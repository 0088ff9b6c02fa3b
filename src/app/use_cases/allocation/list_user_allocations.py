"""List User Allocations Use Case

Read-only view of a user's purchases (the customer panel).
"""

from libs.result import Result, Return, Error
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from .dtos import AllocationResponseDTO, ListAllocationsResponseDTO


class ListUserAllocations:
    def __init__(self, user_repo: UserRepository, allocation_repo: AllocationRepository):
        self.user_repo = user_repo
        self.allocation_repo = allocation_repo

    async def execute(self, user_id: int, only_active: bool = False) -> Result[ListAllocationsResponseDTO]:
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            return Return.err(
                Error(
                    code=error_codes.USER_NOT_FOUND,
                    message=f"User {user_id} not found",
                )
            )

        allocations = await self.allocation_repo.list_by_user(user_id, only_active=only_active)
        items = [AllocationResponseDTO.from_entity(a) for a in allocations]
        return Return.ok(
            ListAllocationsResponseDTO(user_id=user_id, allocations=items, total_count=len(items))
        )
