"""Balance Transaction Repository Interface"""

from abc import ABC, abstractmethod
from src.domain.balance_transaction import BalanceTransaction


class BalanceTransactionRepository(ABC):
    """Append-only persistence for balance audit entries"""

    @abstractmethod
    async def create(self, transaction: BalanceTransaction) -> BalanceTransaction:
        pass
