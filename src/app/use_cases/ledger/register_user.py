"""RegisterUser Use Case"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from src.domain.user import User, normalize_email
from .dtos import RegisterUserCommandDTO, UserResponseDTO


class RegisterUser:
    """
    Use Case: Register a customer with a zero balance

    Emails are normalized (trimmed, lowercased) before the uniqueness check.
    """

    def __init__(self, uow: UnitOfWork, user_repo: UserRepository):
        self.uow = uow
        self.user_repo = user_repo

    async def execute(self, command: RegisterUserCommandDTO) -> Result[UserResponseDTO]:
        try:
            email = normalize_email(command.email)
            if await self.user_repo.get_by_email(email):
                return Return.err(
                    Error(
                        code=error_codes.EMAIL_ALREADY_REGISTERED,
                        message=f"{email} is already registered",
                    )
                )

            user = await self.user_repo.create(
                User(email=email, password_hash=command.password_hash, active=True)
            )
            await self.uow.commit()
            return Return.ok(UserResponseDTO.from_entity(user))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="REGISTER_USER_FAILED",
                    message="Failed to register user",
                    reason=str(e),
                )
            )
