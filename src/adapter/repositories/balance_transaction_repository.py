"""SQLAlchemy implementation of BalanceTransactionRepository"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.balance_transaction_repository import BalanceTransactionRepository
from src.domain.balance_transaction import BalanceTransaction


class SqlAlchemyBalanceTransactionRepository(BalanceTransactionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: BalanceTransaction) -> BalanceTransaction:
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction
