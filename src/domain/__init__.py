from .base import BaseModel, utcnow
from .platform import Platform, PlatformPrice, ALLOWED_DURATIONS
from .account import Account, Slot
from .user import User, normalize_email
from .allocation import Allocation, DeactivationReason
from .balance_transaction import BalanceTransaction, TransactionType

__all__ = [
    "BaseModel",
    "utcnow",
    "Platform",
    "PlatformPrice",
    "ALLOWED_DURATIONS",
    "Account",
    "Slot",
    "User",
    "normalize_email",
    "Allocation",
    "DeactivationReason",
    "BalanceTransaction",
    "TransactionType",
]
