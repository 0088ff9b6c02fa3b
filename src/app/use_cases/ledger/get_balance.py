"""Get Balance Use Case

Retrieves a user's current balance.
"""

from libs.result import Result, Return, Error
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from .dtos import BalanceResponseDTO


class GetBalance:
    """
    Get Balance Use Case

    Read-only operation that retrieves the current balance for a user.
    """

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def execute(self, user_id: int) -> Result[BalanceResponseDTO]:
        """
        Execute get balance operation

        Args:
            user_id: The user identifier

        Returns:
            Result[BalanceResponseDTO]: Success with balance data or error

        Errors:
            USER_NOT_FOUND: No such user
        """
        user = await self.user_repo.get_by_id(user_id)

        if not user:
            return Return.err(
                Error(
                    code=error_codes.USER_NOT_FOUND,
                    message=f"User {user_id} not found",
                )
            )

        return Return.ok(
            BalanceResponseDTO(
                user_id=user.id,
                balance=user.balance,
                last_updated=user.updated_at,
            )
        )
