"""SQLAlchemy Account Repository Implementation

Provides persistence for the account pool. Slot claims are single
conditional UPDATE statements (compare-and-set) so two concurrent purchases
can never both claim the same slot.
"""

from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.account_repository import AccountRepository
from src.domain.account import Account, Slot
from src.domain.base import utcnow
from src.domain.slot_pool import SlotCandidate


class SqlAlchemyAccountRepository(AccountRepository):
    """
    SQLAlchemy implementation of AccountRepository

    Features:
    - Compare-and-set slot claim (UPDATE ... WHERE available = true)
    - Reads refresh already-loaded rows so availability is never stale
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: int) -> Optional[Account]:
        stmt = (
            select(Account)
            .where(Account.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_accounts(self, platform_id: Optional[int] = None) -> List[Account]:
        stmt = select(Account)
        if platform_id is not None:
            stmt = stmt.where(Account.platform_id == platform_id)
        stmt = stmt.order_by(Account.id).execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, account: Account, slots: List[Slot]) -> Account:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)

        for slot in slots:
            slot.account_id = account.id
        self.session.add_all(slots)
        await self.session.flush()
        return account

    async def update(self, account: Account) -> Account:
        account.updated_at = utcnow()
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def delete(self, account_id: int) -> None:
        await self.session.execute(
            delete(Slot)
            .where(Slot.account_id == account_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(Account)
            .where(Account.id == account_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()

    async def list_slots(self, account_id: int) -> List[Slot]:
        stmt = (
            select(Slot)
            .where(Slot.account_id == account_id)
            .order_by(Slot.ordinal)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add_slots(self, slots: List[Slot]) -> None:
        self.session.add_all(slots)
        await self.session.flush()

    async def remove_slots(self, account_id: int, ordinals: List[int]) -> None:
        if not ordinals:
            return
        await self.session.execute(
            delete(Slot)
            .where(Slot.account_id == account_id, Slot.ordinal.in_(ordinals))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()

    async def list_candidates(self, platform_id: int) -> List[SlotCandidate]:
        """
        Load active accounts of a platform with their free slots

        A single join; accounts without free slots do not appear.
        """
        stmt = (
            select(Account, Slot)
            .join(Slot, Slot.account_id == Account.id)
            .where(
                Account.platform_id == platform_id,
                Account.active == True,  # noqa: E712
                Slot.available == True,  # noqa: E712
            )
            .order_by(Account.id, Slot.ordinal)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        candidates: Dict[int, SlotCandidate] = {}
        for account, slot in result.all():
            candidate = candidates.setdefault(account.id, SlotCandidate(account=account))
            candidate.free_slots.append(slot)
        return list(candidates.values())

    async def claim_slot(self, slot_id: int) -> bool:
        stmt = (
            update(Slot)
            .where(Slot.id == slot_id, Slot.available == True)  # noqa: E712
            .values(available=False, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def release_slot(self, account_id: int, ordinal: int) -> bool:
        stmt = (
            update(Slot)
            .where(
                Slot.account_id == account_id,
                Slot.ordinal == ordinal,
                Slot.available == False,  # noqa: E712
            )
            .values(available=True, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def touch_last_used(self, account_id: int, when: datetime) -> None:
        stmt = (
            update(Account)
            .where(Account.id == account_id)
            .values(last_used_at=when)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
