"""PurchaseSlot Use Case

Sells one slot of a shared account: validates the purchase, claims a free
slot, charges the user's balance and records the allocation, all inside a
single database transaction.
"""

import logging
from decimal import Decimal
from typing import Optional, Tuple
from libs.result import Result, Return, Error
from src.app.services.clock import Clock
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.allocation_repository import AllocationRepository
from src.app.repositories.balance_transaction_repository import BalanceTransactionRepository
from src.app.repositories.platform_repository import PlatformRepository
from src.app.repositories.user_repository import UserRepository
from src.app.use_cases import error_codes
from src.domain.account import Account, Slot
from src.domain.allocation import Allocation
from src.domain.balance_transaction import BalanceTransaction, TransactionType
from src.domain.period import add_months
from src.domain.slot_pool import select_slot
from .dtos import PurchaseCommandDTO, AllocationResponseDTO

logger = logging.getLogger(__name__)

DEFAULT_MAX_CLAIM_ATTEMPTS = 3


class PurchaseSlot:
    """
    Use Case: Purchase time-limited access to a slot

    Business Rules:
    1. The platform's stored price is charged; the caller's price is ignored
    2. Preconditions are checked in a fixed order, each with its own error
    3. Slot claim is compare-and-set; a lost race retries against a fresh
       view of the pool, up to max_claim_attempts
    4. Balance debit is conditional (balance >= price)
    5. Claim, debit, allocation and audit entry commit together or not at all

    Flow:
    1. Platform exists and is available
    2. Duration has a price > 0
    3. User exists and is active
    4. Balance covers the price
    5. Claim a slot (least-recently-used account, lowest free ordinal)
    6. Touch account last_used_at, debit balance
    7. Create allocation with credential/label snapshots and audit entry
    8. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        platform_repo: PlatformRepository,
        account_repo: AccountRepository,
        user_repo: UserRepository,
        allocation_repo: AllocationRepository,
        transaction_repo: BalanceTransactionRepository,
        clock: Clock,
        max_claim_attempts: int = DEFAULT_MAX_CLAIM_ATTEMPTS,
    ):
        self.uow = uow
        self.platform_repo = platform_repo
        self.account_repo = account_repo
        self.user_repo = user_repo
        self.allocation_repo = allocation_repo
        self.transaction_repo = transaction_repo
        self.clock = clock
        self.max_claim_attempts = max(1, max_claim_attempts)

    async def execute(self, command: PurchaseCommandDTO) -> Result[AllocationResponseDTO]:
        """
        Execute a purchase

        Args:
            command: PurchaseCommandDTO with user_id, platform_id, duration_months

        Returns:
            Result[AllocationResponseDTO]: The committed allocation or error

        Errors:
            PLATFORM_UNAVAILABLE, PRICE_NOT_CONFIGURED, USER_NOT_FOUND,
            USER_INACTIVE, INSUFFICIENT_FUNDS, NO_CAPACITY_AVAILABLE,
            PURCHASE_FAILED
        """
        try:
            # Step 1: Platform must exist and be on sale
            platform = await self.platform_repo.get_by_id(command.platform_id)
            if not platform or not platform.available:
                return Return.err(
                    Error(
                        code=error_codes.PLATFORM_UNAVAILABLE,
                        message="This platform is not currently offered",
                        reason=f"platform_id={command.platform_id}",
                    )
                )

            # Step 2: Authoritative price for the duration
            price_entry = await self.platform_repo.get_price(platform.id, command.duration_months)
            if not price_entry or not price_entry.is_offered():
                return Return.err(
                    Error(
                        code=error_codes.PRICE_NOT_CONFIGURED,
                        message=f"{platform.name} is not offered for {command.duration_months} month(s)",
                        reason=f"platform_id={platform.id}, duration={command.duration_months}",
                    )
                )
            price = price_entry.price
            platform_id, platform_name = platform.id, platform.name

            if command.expected_price is not None and command.expected_price != price:
                logger.info(
                    f"Price mismatch for platform {platform.id} ({command.duration_months}m): "
                    f"expected={command.expected_price}, charged={price}"
                )

            # Step 3: User must exist and be active
            user = await self.user_repo.get_by_id(command.user_id)
            if not user:
                return Return.err(
                    Error(
                        code=error_codes.USER_NOT_FOUND,
                        message=f"User {command.user_id} not found",
                    )
                )
            if not user.active:
                return Return.err(
                    Error(
                        code=error_codes.USER_INACTIVE,
                        message=f"User {command.user_id} is inactive",
                    )
                )

            # Step 4: Early funds check (the debit below re-checks atomically)
            balance_before = user.balance
            if balance_before < price:
                return self._insufficient_funds(balance_before, price)

            # Step 5: Claim a slot
            claim = await self._claim_slot(platform_id)
            if claim is None:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.NO_CAPACITY_AVAILABLE,
                        message=f"No {platform_name} slots are available right now",
                        reason=f"platform_id={platform_id}",
                    )
                )
            account, slot = claim

            # Step 6: Account bookkeeping and conditional debit
            now = self.clock.now()
            await self.account_repo.touch_last_used(account.id, now)

            balance_after = await self.user_repo.debit(user.id, price)
            if balance_after is None:
                await self.uow.rollback()
                return self._insufficient_funds(balance_before, price)

            # Step 7: Allocation with snapshots, then audit entry
            allocation = await self.allocation_repo.create(
                Allocation(
                    user_id=user.id,
                    platform_id=platform.id,
                    account_id=account.id,
                    slot_ordinal=slot.ordinal,
                    slot_label=slot.label,
                    account_login=account.login,
                    account_secret=account.secret,
                    duration_months=command.duration_months,
                    price=price,
                    starts_at=now,
                    ends_at=add_months(now, command.duration_months),
                    active=True,
                    created_at=now,
                )
            )

            await self.transaction_repo.create(
                BalanceTransaction(
                    user_id=user.id,
                    transaction_type=TransactionType.PURCHASE,
                    amount=price,
                    balance_before=balance_after + price,
                    balance_after=balance_after,
                    reference_type="allocation",
                    reference_id=str(allocation.id),
                    created_at=now,
                )
            )

            # Step 8: Commit everything at once
            await self.uow.commit()

            logger.info(
                f"User {user.id} purchased {platform.name} ({command.duration_months}m) "
                f"-> account {account.id} slot {slot.ordinal}, allocation {allocation.id}"
            )
            return Return.ok(AllocationResponseDTO.from_entity(allocation, balance_after=balance_after))

        except Exception as e:
            await self.uow.rollback()
            logger.exception(
                f"Purchase failed for user {command.user_id} platform {command.platform_id}: {e}"
            )
            return Return.err(
                Error(
                    code=error_codes.PURCHASE_FAILED,
                    message="Purchase failed, please try again",
                    reason=str(e),
                )
            )

    async def _claim_slot(self, platform_id: int) -> Optional[Tuple[Account, Slot]]:
        """
        Select and claim a free slot, retrying when another purchase wins the race

        Returns:
            (account, slot) that this call claimed, or None when no capacity is left
            or every attempt lost its race
        """
        for attempt in range(1, self.max_claim_attempts + 1):
            candidates = await self.account_repo.list_candidates(platform_id)
            choice = select_slot(candidates)
            if choice is None:
                return None

            account, slot = choice
            if await self.account_repo.claim_slot(slot.id):
                return account, slot

            logger.warning(
                f"Concurrent claim lost on account {account.id} slot {slot.ordinal} "
                f"(attempt {attempt}/{self.max_claim_attempts})"
            )

        logger.warning(
            f"Giving up on platform {platform_id} after {self.max_claim_attempts} lost claims"
        )
        return None

    @staticmethod
    def _insufficient_funds(balance: Decimal, price: Decimal) -> Result[AllocationResponseDTO]:
        return Return.err(
            Error(
                code=error_codes.INSUFFICIENT_FUNDS,
                message=f"Insufficient balance. Required: {price}, Available: {balance}",
                reason=f"balance={balance}, required={price}",
            )
        )
