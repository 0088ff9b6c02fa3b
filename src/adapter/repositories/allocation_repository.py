"""SQLAlchemy Allocation Repository Implementation"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.allocation_repository import AllocationRepository
from src.domain.allocation import Allocation, DeactivationReason


class SqlAlchemyAllocationRepository(AllocationRepository):
    """
    SQLAlchemy implementation of AllocationRepository

    Allocations are inserted once and afterwards only deactivated.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, allocation: Allocation) -> Allocation:
        self.session.add(allocation)
        await self.session.flush()
        await self.session.refresh(allocation)
        return allocation

    async def get_by_id(self, allocation_id: int) -> Optional[Allocation]:
        stmt = (
            select(Allocation)
            .where(Allocation.id == allocation_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_user(self, user_id: int, only_active: bool = False) -> List[Allocation]:
        stmt = select(Allocation).where(Allocation.user_id == user_id)
        if only_active:
            stmt = stmt.where(Allocation.active == True)  # noqa: E712
        stmt = stmt.order_by(Allocation.starts_at.desc(), Allocation.id.desc()).execution_options(
            populate_existing=True
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_due_for_expiry(self, now: datetime) -> List[Allocation]:
        stmt = (
            select(Allocation)
            .where(Allocation.active == True, Allocation.ends_at <= now)  # noqa: E712
            .order_by(Allocation.ends_at, Allocation.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_active_by_account(self, account_id: int) -> List[Allocation]:
        stmt = (
            select(Allocation)
            .where(Allocation.account_id == account_id, Allocation.active == True)  # noqa: E712
            .order_by(Allocation.slot_ordinal)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def deactivate(
        self, allocation_ids: List[int], reason: DeactivationReason, when: datetime
    ) -> List[int]:
        if not allocation_ids:
            return []
        stmt = (
            update(Allocation)
            .where(Allocation.id.in_(allocation_ids), Allocation.active == True)  # noqa: E712
            .values(active=False, deactivated_at=when, deactivation_reason=reason)
            .returning(Allocation.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
