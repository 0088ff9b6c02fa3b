"""SQLAlchemy Platform Repository Implementation

Implements catalog persistence using SQLAlchemy async session.
"""

from typing import List, Optional
from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.platform_repository import PlatformRepository
from src.domain.base import utcnow
from src.domain.platform import Platform, PlatformPrice


class SqlAlchemyPlatformRepository(PlatformRepository):
    """
    SQLAlchemy implementation of PlatformRepository

    Catalog edits are infrequent and use last-writer-wins updates.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, platform_id: int) -> Optional[Platform]:
        stmt = select(Platform).where(Platform.id == platform_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Platform]:
        stmt = select(Platform).where(Platform.name == name)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, only_available: bool = False) -> List[Platform]:
        stmt = select(Platform)
        if only_available:
            stmt = stmt.where(Platform.available == True)  # noqa: E712
        stmt = stmt.order_by(Platform.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, platform: Platform) -> Platform:
        self.session.add(platform)
        await self.session.flush()
        await self.session.refresh(platform)
        return platform

    async def update(self, platform: Platform) -> Platform:
        platform.updated_at = utcnow()
        self.session.add(platform)
        await self.session.flush()
        await self.session.refresh(platform)
        return platform

    async def delete(self, platform_id: int) -> None:
        await self.session.execute(
            delete(PlatformPrice)
            .where(PlatformPrice.platform_id == platform_id)
            .execution_options(synchronize_session=False)
        )
        platform = await self.get_by_id(platform_id)
        if platform:
            await self.session.delete(platform)
        await self.session.flush()

    async def get_price(self, platform_id: int, duration_months: int) -> Optional[PlatformPrice]:
        stmt = select(PlatformPrice).where(
            PlatformPrice.platform_id == platform_id,
            PlatformPrice.duration_months == duration_months,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_prices(self, platform_id: int) -> List[PlatformPrice]:
        stmt = (
            select(PlatformPrice)
            .where(PlatformPrice.platform_id == platform_id)
            .order_by(PlatformPrice.duration_months)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def replace_prices(self, platform_id: int, prices: List[PlatformPrice]) -> List[PlatformPrice]:
        """
        Replace the price list of a platform

        Existing rows are deleted and the given entries inserted in the same
        flush, so readers in other transactions never see a half-written list.
        """
        existing = await self.list_prices(platform_id)
        for price in existing:
            await self.session.delete(price)
        await self.session.flush()

        for price in prices:
            price.platform_id = platform_id
            self.session.add(price)
        await self.session.flush()
        return await self.list_prices(platform_id)
