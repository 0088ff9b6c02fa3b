"""User Repository Interface

Defines the contract for users and their balance. Balance changes are
conditional single-statement updates so concurrent requests cannot drive a
balance negative.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional
from src.domain.user import User


class UserRepository(ABC):
    """Repository interface for User persistence"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve user by normalized email

        Args:
            email: Email already normalized by the caller

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        pass

    @abstractmethod
    async def debit(self, user_id: int, amount: Decimal) -> Optional[Decimal]:
        """
        Subtract amount from the balance only if balance >= amount

        Returns:
            New balance, or None when the balance was insufficient
        """
        pass

    @abstractmethod
    async def credit(self, user_id: int, amount: Decimal) -> Optional[Decimal]:
        """
        Add amount to the balance

        Returns:
            New balance, or None when the user does not exist
        """
        pass
