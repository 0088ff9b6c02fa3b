from .platform_repository import PlatformRepository
from .account_repository import AccountRepository
from .user_repository import UserRepository
from .allocation_repository import AllocationRepository
from .balance_transaction_repository import BalanceTransactionRepository

__all__ = [
    "PlatformRepository",
    "AccountRepository",
    "UserRepository",
    "AllocationRepository",
    "BalanceTransactionRepository",
]
