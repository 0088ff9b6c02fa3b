"""List Catalog Use Case

The purchaser-facing catalog: platforms, offered durations and how many
slots are free right now.
"""

from libs.result import Result, Return
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.platform_repository import PlatformRepository
from .dtos import CatalogResponseDTO, PlatformResponseDTO


class ListCatalog:
    def __init__(self, platform_repo: PlatformRepository, account_repo: AccountRepository):
        self.platform_repo = platform_repo
        self.account_repo = account_repo

    async def execute(self, only_available: bool = True) -> Result[CatalogResponseDTO]:
        items = []
        for platform in await self.platform_repo.list_all(only_available=only_available):
            prices = await self.platform_repo.list_prices(platform.id)
            candidates = await self.account_repo.list_candidates(platform.id)
            free_slots = sum(len(c.free_slots) for c in candidates)
            items.append(PlatformResponseDTO.from_entity(platform, prices, free_slots=free_slots))
        return Return.ok(CatalogResponseDTO(platforms=items, total_count=len(items)))
