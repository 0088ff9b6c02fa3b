"""Allocation Repository Interface

Defines the contract for allocation persistence.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.allocation import Allocation, DeactivationReason


class AllocationRepository(ABC):
    """Repository interface for Allocation persistence"""

    @abstractmethod
    async def create(self, allocation: Allocation) -> Allocation:
        pass

    @abstractmethod
    async def get_by_id(self, allocation_id: int) -> Optional[Allocation]:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: int, only_active: bool = False) -> List[Allocation]:
        """Allocations of a user, newest first"""
        pass

    @abstractmethod
    async def list_due_for_expiry(self, now: datetime) -> List[Allocation]:
        """
        Active allocations whose period has ended

        Args:
            now: Reference time; allocations with ends_at <= now are due

        Returns:
            List of allocations ordered by ends_at
        """
        pass

    @abstractmethod
    async def list_active_by_account(self, account_id: int) -> List[Allocation]:
        pass

    @abstractmethod
    async def deactivate(
        self, allocation_ids: List[int], reason: DeactivationReason, when: datetime
    ) -> List[int]:
        """
        Flip active allocations to inactive

        Only rows still active are touched.

        Returns:
            Ids of the allocations this call deactivated
        """
        pass
