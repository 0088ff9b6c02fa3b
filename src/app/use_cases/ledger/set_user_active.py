"""SetUserActive Use Case

Administrator toggle for customer accounts. Inactive users cannot purchase;
their existing allocations are untouched.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from .dtos import SetUserActiveCommandDTO, UserResponseDTO


class SetUserActive:
    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, command: SetUserActiveCommandDTO) -> Result[UserResponseDTO]:
        try:
            user = await self.user_repo.get_by_id(command.user_id)
            if not user:
                return Return.err(
                    Error(
                        code=error_codes.USER_NOT_FOUND,
                        message=f"User {command.user_id} not found",
                    )
                )

            user.active = command.active
            user = await self.user_repo.update(user)
            await self.uow.commit()
            return Return.ok(UserResponseDTO.from_entity(user))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="SET_USER_ACTIVE_FAILED",
                    message="Failed to change user status",
                    reason=str(e),
                )
            )
