from .platform_repository import SqlAlchemyPlatformRepository
from .account_repository import SqlAlchemyAccountRepository
from .user_repository import SqlAlchemyUserRepository
from .allocation_repository import SqlAlchemyAllocationRepository
from .balance_transaction_repository import SqlAlchemyBalanceTransactionRepository

__all__ = [
    "SqlAlchemyPlatformRepository",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyAllocationRepository",
    "SqlAlchemyBalanceTransactionRepository",
]
