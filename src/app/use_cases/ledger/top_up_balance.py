"""TopUpBalance Use Case

Credits a user's balance by email and records the audit entry.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.balance_transaction_repository import BalanceTransactionRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from src.domain.balance_transaction import BalanceTransaction, TransactionType
from src.domain.user import normalize_email
from .dtos import TopUpCommandDTO, BalanceResponseDTO

logger = logging.getLogger(__name__)


class TopUpBalance:
    """
    Use Case: Administrator top-up

    Business Rules:
    1. amount must be > 0
    2. User is looked up by normalized email
    3. The increment is a single atomic UPDATE; the audit entry commits with it
    4. Independent of any purchase transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        user_repo: UserRepository,
        transaction_repo: BalanceTransactionRepository,
        clock: Clock,
    ):
        self.uow = uow
        self.user_repo = user_repo
        self.transaction_repo = transaction_repo
        self.clock = clock

    async def execute(self, command: TopUpCommandDTO) -> Result[BalanceResponseDTO]:
        """
        Execute a top-up

        Args:
            command: TopUpCommandDTO with user_email, amount, note

        Returns:
            Result[BalanceResponseDTO]: New balance and audit entry id

        Errors:
            INVALID_AMOUNT, USER_NOT_FOUND, TOP_UP_FAILED
        """
        if command.amount <= 0:
            return Return.err(
                Error(
                    code=error_codes.INVALID_AMOUNT,
                    message="Top-up amount must be greater than 0",
                    reason=f"amount={command.amount}",
                )
            )

        try:
            email = normalize_email(command.user_email)
            user = await self.user_repo.get_by_email(email)
            if not user:
                return Return.err(
                    Error(
                        code=error_codes.USER_NOT_FOUND,
                        message=f"No user registered with {email}",
                    )
                )

            balance_after = await self.user_repo.credit(user.id, command.amount)
            if balance_after is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.USER_NOT_FOUND,
                        message=f"No user registered with {email}",
                    )
                )

            now = self.clock.now()
            transaction = await self.transaction_repo.create(
                BalanceTransaction(
                    user_id=user.id,
                    transaction_type=TransactionType.TOP_UP,
                    amount=command.amount,
                    balance_before=balance_after - command.amount,
                    balance_after=balance_after,
                    reference_type="top_up",
                    note=command.note,
                    created_at=now,
                )
            )
            await self.uow.commit()

            logger.info(f"Topped up user {user.id} by {command.amount}, balance now {balance_after}")
            return Return.ok(
                BalanceResponseDTO(
                    user_id=user.id,
                    balance=balance_after,
                    last_updated=now,
                    transaction_id=transaction.id,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="TOP_UP_FAILED",
                    message="Failed to top up balance",
                    reason=str(e),
                )
            )
