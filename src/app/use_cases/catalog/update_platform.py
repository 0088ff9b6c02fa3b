"""UpdatePlatform Use Case

Edits a catalog platform. Catalog edits are last-writer-wins.
"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.platform_repository import PlatformRepository
from src.app.use_cases import error_codes
from .create_platform import build_price_list, invalid_durations, _invalid_duration_error
from .dtos import UpdatePlatformCommandDTO, PlatformResponseDTO


class UpdatePlatform:
    """
    Use Case: Update platform fields and/or its price list

    When prices is given it replaces the whole price list. A welcome message
    for a duration without a price is kept on a price-0 (not offered) row,
    the same as on create.
    """

    def __init__(self, uow: UnitOfWork, platform_repo: PlatformRepository):
        self.uow = uow
        self.platform_repo = platform_repo

    async def execute(self, command: UpdatePlatformCommandDTO) -> Result[PlatformResponseDTO]:
        try:
            platform = await self.platform_repo.get_by_id(command.platform_id)
            if not platform:
                return Return.err(
                    Error(
                        code=error_codes.PLATFORM_NOT_FOUND,
                        message=f"Platform {command.platform_id} not found",
                    )
                )

            invalid = invalid_durations(command.prices or {}, command.welcome_messages or {})
            if invalid:
                return _invalid_duration_error(invalid)

            if command.name is not None:
                name = command.name.strip()
                other = await self.platform_repo.get_by_name(name)
                if other and other.id != platform.id:
                    return Return.err(
                        Error(
                            code=error_codes.PLATFORM_NAME_TAKEN,
                            message=f"A platform named '{name}' already exists",
                        )
                    )
                platform.name = name
            if command.logo_url is not None:
                platform.logo_url = command.logo_url
            if command.available is not None:
                platform.available = command.available

            platform = await self.platform_repo.update(platform)

            if command.prices is not None or command.welcome_messages is not None:
                current = await self.platform_repo.list_prices(platform.id)
                prices = (
                    command.prices
                    if command.prices is not None
                    else {p.duration_months: p.price for p in current}
                )
                messages = {p.duration_months: p.welcome_message for p in current}
                messages.update(command.welcome_messages or {})
                await self.platform_repo.replace_prices(platform.id, build_price_list(prices, messages))

            await self.uow.commit()

            prices = await self.platform_repo.list_prices(platform.id)
            return Return.ok(PlatformResponseDTO.from_entity(platform, prices))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PLATFORM_FAILED",
                    message="Failed to update platform",
                    reason=str(e),
                )
            )
