"""Platform Repository Interface

Defines the contract for catalog persistence (platforms and their prices).
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.platform import Platform, PlatformPrice


class PlatformRepository(ABC):
    """Repository interface for Platform and PlatformPrice persistence"""

    @abstractmethod
    async def get_by_id(self, platform_id: int) -> Optional[Platform]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[Platform]:
        pass

    @abstractmethod
    async def list_all(self, only_available: bool = False) -> List[Platform]:
        """
        List platforms ordered by name

        Args:
            only_available: If True, skip platforms marked unavailable

        Returns:
            List of platforms
        """
        pass

    @abstractmethod
    async def create(self, platform: Platform) -> Platform:
        pass

    @abstractmethod
    async def update(self, platform: Platform) -> Platform:
        pass

    @abstractmethod
    async def delete(self, platform_id: int) -> None:
        """Delete the platform row and its price rows"""
        pass

    @abstractmethod
    async def get_price(self, platform_id: int, duration_months: int) -> Optional[PlatformPrice]:
        """
        Retrieve the price entry for one duration

        Returns:
            PlatformPrice if configured, None otherwise
        """
        pass

    @abstractmethod
    async def list_prices(self, platform_id: int) -> List[PlatformPrice]:
        pass

    @abstractmethod
    async def replace_prices(self, platform_id: int, prices: List[PlatformPrice]) -> List[PlatformPrice]:
        """Replace the whole price list of a platform"""
        pass
