"""CreatePlatform Use Case

Adds a streaming platform to the catalog together with its price list.
"""

from typing import Dict, List
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.platform_repository import PlatformRepository
from src.app.use_cases import error_codes
from src.domain.platform import ALLOWED_DURATIONS, Platform, PlatformPrice
from .dtos import CreatePlatformCommandDTO, PlatformResponseDTO


class CreatePlatform:
    """
    Use Case: Create a catalog platform

    Business Rules:
    1. Name is trimmed and must be unique
    2. Durations are limited to 1, 3, 6 and 12 months
    """

    def __init__(self, uow: UnitOfWork, platform_repo: PlatformRepository):
        self.uow = uow
        self.platform_repo = platform_repo

    async def execute(self, command: CreatePlatformCommandDTO) -> Result[PlatformResponseDTO]:
        try:
            invalid = invalid_durations(command.prices, command.welcome_messages)
            if invalid:
                return _invalid_duration_error(invalid)

            name = command.name.strip()
            if await self.platform_repo.get_by_name(name):
                return Return.err(
                    Error(
                        code=error_codes.PLATFORM_NAME_TAKEN,
                        message=f"A platform named '{name}' already exists",
                    )
                )

            platform = await self.platform_repo.create(
                Platform(name=name, logo_url=command.logo_url, available=command.available)
            )
            prices = await self.platform_repo.replace_prices(
                platform.id, build_price_list(command.prices, command.welcome_messages)
            )
            await self.uow.commit()

            return Return.ok(PlatformResponseDTO.from_entity(platform, prices))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_PLATFORM_FAILED",
                    message="Failed to create platform",
                    reason=str(e),
                )
            )


def invalid_durations(prices: Dict[int, Decimal], welcome_messages: Dict[int, str]) -> List[int]:
    return sorted({d for d in list(prices) + list(welcome_messages) if d not in ALLOWED_DURATIONS})


def build_price_list(prices: Dict[int, Decimal], welcome_messages: Dict[int, str]) -> List[PlatformPrice]:
    """One PlatformPrice per duration mentioned in either mapping"""
    durations = sorted(set(prices) | set(welcome_messages))
    return [
        PlatformPrice(
            duration_months=d,
            price=prices.get(d, Decimal("0")),
            welcome_message=welcome_messages.get(d, ""),
        )
        for d in durations
    ]


def _invalid_duration_error(invalid: List[int]) -> Result:
    return Return.err(
        Error(
            code=error_codes.INVALID_DURATION,
            message=f"Unsupported duration(s) {invalid}; allowed: {list(ALLOWED_DURATIONS)}",
        )
    )
