"""Unit tests for catalog use cases"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.catalog import (
    CreatePlatform,
    CreatePlatformCommandDTO,
    DeletePlatform,
    ListCatalog,
    UpdatePlatform,
    UpdatePlatformCommandDTO,
)
from src.domain.account import Account, Slot
from src.domain.platform import Platform, PlatformPrice
from src.domain.slot_pool import SlotCandidate


@pytest.fixture
def platform_repo():
    repo = MagicMock()

    async def create(platform):
        platform.id = 1
        return platform

    async def replace_prices(platform_id, prices):
        for p in prices:
            p.platform_id = platform_id
        return prices

    repo.get_by_name = AsyncMock(return_value=None)
    repo.create = AsyncMock(side_effect=create)
    repo.update = AsyncMock(side_effect=lambda p: p)
    repo.replace_prices = AsyncMock(side_effect=replace_prices)
    repo.list_prices = AsyncMock(return_value=[])
    repo.delete = AsyncMock()
    return repo


@pytest.mark.asyncio
class TestCreatePlatform:
    async def test_creates_platform_with_offered_prices(self, mock_uow, platform_repo):
        command = CreatePlatformCommandDTO(
            name="  Netflix ",
            prices={1: Decimal("100"), 3: Decimal("280"), 6: Decimal("0")},
            welcome_messages={1: "Enjoy"},
        )

        result = await CreatePlatform(mock_uow, platform_repo).execute(command)

        assert result.is_ok()
        assert result.value.name == "Netflix"
        # 0 means not offered, so it is stored but not listed
        assert [p.duration_months for p in result.value.prices] == [1, 3]
        assert result.value.prices[0].welcome_message == "Enjoy"
        stored = platform_repo.replace_prices.await_args.args[1]
        assert [p.duration_months for p in stored] == [1, 3, 6]
        mock_uow.commit.assert_awaited_once()

    async def test_duplicate_name(self, mock_uow, platform_repo):
        platform_repo.get_by_name = AsyncMock(return_value=Platform(id=3, name="Netflix"))

        result = await CreatePlatform(mock_uow, platform_repo).execute(
            CreatePlatformCommandDTO(name="Netflix")
        )

        assert result.error.code == "PLATFORM_NAME_TAKEN"
        platform_repo.create.assert_not_called()

    async def test_unsupported_duration(self, mock_uow, platform_repo):
        result = await CreatePlatform(mock_uow, platform_repo).execute(
            CreatePlatformCommandDTO(name="Disney", prices={2: Decimal("50")})
        )

        assert result.error.code == "INVALID_DURATION"


def test_negative_price_rejected_by_dto():
    with pytest.raises(ValueError):
        CreatePlatformCommandDTO(name="Disney", prices={1: Decimal("-1")})


@pytest.mark.asyncio
class TestUpdatePlatform:
    async def test_toggle_availability_keeps_prices(self, mock_uow, platform_repo):
        platform = Platform(id=1, name="Netflix", available=True)
        platform_repo.get_by_id = AsyncMock(return_value=platform)

        result = await UpdatePlatform(mock_uow, platform_repo).execute(
            UpdatePlatformCommandDTO(platform_id=1, available=False)
        )

        assert result.is_ok()
        assert result.value.available is False
        platform_repo.replace_prices.assert_not_called()

    async def test_rename_to_taken_name(self, mock_uow, platform_repo):
        platform_repo.get_by_id = AsyncMock(return_value=Platform(id=1, name="Netflix"))
        platform_repo.get_by_name = AsyncMock(return_value=Platform(id=2, name="HBO"))

        result = await UpdatePlatform(mock_uow, platform_repo).execute(
            UpdatePlatformCommandDTO(platform_id=1, name="HBO")
        )

        assert result.error.code == "PLATFORM_NAME_TAKEN"

    async def test_welcome_message_for_unpriced_duration_is_kept(self, mock_uow, platform_repo):
        platform_repo.get_by_id = AsyncMock(return_value=Platform(id=1, name="Netflix"))
        platform_repo.list_prices = AsyncMock(
            return_value=[PlatformPrice(platform_id=1, duration_months=1, price=Decimal("100"))]
        )

        result = await UpdatePlatform(mock_uow, platform_repo).execute(
            UpdatePlatformCommandDTO(platform_id=1, welcome_messages={1: "Hi", 12: "A whole year"})
        )

        assert result.is_ok()
        stored = platform_repo.replace_prices.await_args.args[1]
        assert [(p.duration_months, p.price, p.welcome_message) for p in stored] == [
            (1, Decimal("100"), "Hi"),
            (12, Decimal("0"), "A whole year"),
        ]
        mock_uow.commit.assert_awaited_once()

    async def test_unknown_platform(self, mock_uow, platform_repo):
        platform_repo.get_by_id = AsyncMock(return_value=None)

        result = await UpdatePlatform(mock_uow, platform_repo).execute(
            UpdatePlatformCommandDTO(platform_id=9, available=True)
        )

        assert result.error.code == "PLATFORM_NOT_FOUND"


@pytest.mark.asyncio
class TestDeletePlatform:
    async def test_retires_every_account(self, mock_uow, platform_repo, fixed_clock):
        platform_repo.get_by_id = AsyncMock(return_value=Platform(id=1, name="Netflix"))
        account_repo = MagicMock()
        account_repo.list_accounts = AsyncMock(
            return_value=[
                Account(id=7, platform_id=1, login="a", secret="b"),
                Account(id=8, platform_id=1, login="c", secret="d"),
            ]
        )
        account_repo.delete = AsyncMock()
        allocation_repo = MagicMock()
        allocation_repo.list_active_by_account = AsyncMock(return_value=[])
        allocation_repo.deactivate = AsyncMock(side_effect=[[11], []])

        result = await DeletePlatform(
            mock_uow, platform_repo, account_repo, allocation_repo, fixed_clock
        ).execute(1)

        assert result.is_ok()
        assert result.value.deleted_accounts == 2
        assert result.value.force_expired_allocations == 1
        assert account_repo.delete.await_count == 2
        platform_repo.delete.assert_awaited_once_with(1)
        mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
class TestListCatalog:
    async def test_counts_free_slots_per_platform(self, platform_repo):
        platform = Platform(id=1, name="Netflix")
        platform_repo.list_all = AsyncMock(return_value=[platform])
        platform_repo.list_prices = AsyncMock(
            return_value=[PlatformPrice(platform_id=1, duration_months=1, price=Decimal("100"))]
        )
        account = Account(id=7, platform_id=1, login="a", secret="b")
        account_repo = MagicMock()
        account_repo.list_candidates = AsyncMock(
            return_value=[
                SlotCandidate(
                    account=account,
                    free_slots=[Slot(account_id=7, ordinal=n, label=f"Screen {n}") for n in (1, 2)],
                )
            ]
        )

        result = await ListCatalog(platform_repo, account_repo).execute()

        assert result.value.total_count == 1
        assert result.value.platforms[0].free_slots == 2
        platform_repo.list_all.assert_awaited_once_with(only_available=True)
