"""SQLAlchemy User Repository Implementation

Balance mutations are single conditional UPDATE statements, so two
concurrent purchases for the same user cannot drive the balance negative.
"""

from decimal import Decimal
from typing import Optional
from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.user_repository import UserRepository
from src.domain.base import utcnow
from src.domain.user import User


class SqlAlchemyUserRepository(UserRepository):
    """
    SQLAlchemy implementation of UserRepository

    Features:
    - Conditional debit (UPDATE ... WHERE balance >= amount)
    - Atomic credit (UPDATE ... SET balance = balance + amount)
    - Fresh reads of the balance after every mutation
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[User]:
        stmt = (
            select(User)
            .where(User.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = (
            select(User)
            .where(User.email == email)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        user.updated_at = utcnow()
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def debit(self, user_id: int, amount: Decimal) -> Optional[Decimal]:
        """
        Subtract amount from the balance if it covers it

        Args:
            user_id: User ID
            amount: Amount to subtract (> 0)

        Returns:
            New balance, or None if the balance was lower than amount
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.balance >= amount)
            .values(balance=User.balance - amount, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self._current_balance(user_id)

    async def credit(self, user_id: int, amount: Decimal) -> Optional[Decimal]:
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return None
        return await self._current_balance(user_id)

    async def _current_balance(self, user_id: int) -> Decimal:
        result = await self.session.execute(select(User.balance).where(User.id == user_id))
        return result.scalar_one()
