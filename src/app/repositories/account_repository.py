"""Account Repository Interface

Defines the contract for the account pool: accounts, their slots and the
compare-and-set slot claim used by the purchase flow.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain.account import Account, Slot
from src.domain.slot_pool import SlotCandidate


class AccountRepository(ABC):
    """
    Repository interface for Account and Slot persistence

    Slot availability changes only through claim_slot / release_slot, both
    conditional updates that report whether they changed a row.
    """

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[Account]:
        pass

    @abstractmethod
    async def list_accounts(self, platform_id: Optional[int] = None) -> List[Account]:
        """List accounts, optionally for one platform, ordered by id"""
        pass

    @abstractmethod
    async def create(self, account: Account, slots: List[Slot]) -> Account:
        """
        Create an account together with its initial slots

        Args:
            account: Account entity to persist
            slots: Slots to attach (account_id is filled in)

        Returns:
            Created Account with generated ID
        """
        pass

    @abstractmethod
    async def update(self, account: Account) -> Account:
        pass

    @abstractmethod
    async def delete(self, account_id: int) -> None:
        """Delete an account and all its slots"""
        pass

    @abstractmethod
    async def list_slots(self, account_id: int) -> List[Slot]:
        """Slots of an account ordered by ordinal"""
        pass

    @abstractmethod
    async def add_slots(self, slots: List[Slot]) -> None:
        pass

    @abstractmethod
    async def remove_slots(self, account_id: int, ordinals: List[int]) -> None:
        pass

    @abstractmethod
    async def list_candidates(self, platform_id: int) -> List[SlotCandidate]:
        """
        Active accounts of a platform that have at least one free slot

        Returns:
            One SlotCandidate per account with its free slots
        """
        pass

    @abstractmethod
    async def claim_slot(self, slot_id: int) -> bool:
        """
        Mark a slot as claimed if it is still free (compare-and-set)

        Returns:
            True if this call claimed the slot, False if it was already taken
        """
        pass

    @abstractmethod
    async def release_slot(self, account_id: int, ordinal: int) -> bool:
        """
        Mark a claimed slot as free again

        Returns:
            True if the slot was claimed and is now free
        """
        pass

    @abstractmethod
    async def touch_last_used(self, account_id: int, when: datetime) -> None:
        pass
