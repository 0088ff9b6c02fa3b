"""Unit tests for account pool use cases

Tests cover:
- CreateAccount slot numbering and labels
- ResizeAccount grow/shrink rules
- DeleteAccount force-expiry of active allocations
- ReactivateAccount and ReleaseSlot never freeing a held slot
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.inventory import (
    CreateAccount,
    CreateAccountCommandDTO,
    DeleteAccount,
    ReactivateAccount,
    ReactivateAccountCommandDTO,
    ReleaseSlot,
    ReleaseSlotCommandDTO,
    ResizeAccount,
    ResizeAccountCommandDTO,
)
from src.domain.account import Account, Slot
from src.domain.allocation import Allocation, DeactivationReason
from src.domain.platform import Platform


def make_slots(*states):
    """One slot per state, True = available"""
    return [
        Slot(id=100 + n, account_id=7, ordinal=n, label=f"Screen {n}", available=available)
        for n, available in enumerate(states, start=1)
    ]


def make_allocation(allocation_id, ordinal):
    return Allocation(
        id=allocation_id,
        user_id=42,
        platform_id=1,
        account_id=7,
        slot_ordinal=ordinal,
        slot_label=f"Screen {ordinal}",
        account_login="shared@example.com",
        account_secret="pw",
        duration_months=1,
        price=Decimal("100.00"),
        starts_at=datetime(2024, 1, 1),
        ends_at=datetime(2024, 2, 1),
        active=True,
    )


@pytest.fixture
def account():
    return Account(id=7, platform_id=1, login="shared@example.com", secret="pw", active=False)


@pytest.fixture
def account_repo(account):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=account)
    repo.update = AsyncMock(side_effect=lambda a: a)
    repo.list_slots = AsyncMock(return_value=make_slots(True, True))
    repo.add_slots = AsyncMock()
    repo.remove_slots = AsyncMock()
    repo.release_slot = AsyncMock(return_value=True)
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def allocation_repo():
    repo = MagicMock()
    repo.list_active_by_account = AsyncMock(return_value=[])
    repo.deactivate = AsyncMock(return_value=[])
    return repo


@pytest.mark.asyncio
class TestCreateAccount:
    async def test_creates_numbered_available_slots(self, mock_uow, account_repo):
        platform_repo = MagicMock()
        platform_repo.get_by_id = AsyncMock(return_value=Platform(id=1, name="Netflix"))

        async def create(account, slots):
            account.id = 7
            return account

        account_repo.create = AsyncMock(side_effect=create)
        account_repo.list_slots = AsyncMock(return_value=make_slots(True, True, True))
        use_case = CreateAccount(mock_uow, platform_repo, account_repo, label_prefix="Perfil")

        result = await use_case.execute(
            CreateAccountCommandDTO(platform_id=1, login=" a@b.com ", secret="pw", slot_count=3)
        )

        assert result.is_ok()
        created_account, slots = account_repo.create.await_args.args
        assert created_account.login == "a@b.com"
        assert [s.ordinal for s in slots] == [1, 2, 3]
        assert [s.label for s in slots] == ["Perfil 1", "Perfil 2", "Perfil 3"]
        assert all(s.available for s in slots)
        mock_uow.commit.assert_awaited_once()

    async def test_unknown_platform(self, mock_uow, account_repo):
        platform_repo = MagicMock()
        platform_repo.get_by_id = AsyncMock(return_value=None)
        use_case = CreateAccount(mock_uow, platform_repo, account_repo)

        result = await use_case.execute(
            CreateAccountCommandDTO(platform_id=9, login="a@b.com", secret="pw", slot_count=1)
        )

        assert result.error.code == "PLATFORM_NOT_FOUND"


@pytest.mark.asyncio
class TestResizeAccount:
    async def test_grow_appends_available_slots(self, mock_uow, account_repo):
        account_repo.list_slots = AsyncMock(
            side_effect=[make_slots(False, True), make_slots(False, True, True, True)]
        )
        use_case = ResizeAccount(mock_uow, account_repo)

        result = await use_case.execute(ResizeAccountCommandDTO(account_id=7, slot_count=4))

        assert result.is_ok()
        assert result.value.total_slots == 4
        assert result.value.free_slots == 3
        added = account_repo.add_slots.await_args.args[0]
        assert [(s.ordinal, s.label, s.available) for s in added] == [
            (3, "Screen 3", True),
            (4, "Screen 4", True),
        ]
        account_repo.remove_slots.assert_awaited_once_with(7, [])
        mock_uow.commit.assert_awaited_once()

    async def test_shrink_removes_free_trailing_slots(self, mock_uow, account_repo):
        account_repo.list_slots = AsyncMock(
            side_effect=[make_slots(False, True, True), make_slots(False)]
        )
        use_case = ResizeAccount(mock_uow, account_repo)

        result = await use_case.execute(ResizeAccountCommandDTO(account_id=7, slot_count=1))

        assert result.is_ok()
        account_repo.remove_slots.assert_awaited_once_with(7, [2, 3])

    async def test_shrink_over_claimed_slot_is_refused(self, mock_uow, account_repo):
        account_repo.list_slots = AsyncMock(return_value=make_slots(True, True, False))
        use_case = ResizeAccount(mock_uow, account_repo)

        result = await use_case.execute(ResizeAccountCommandDTO(account_id=7, slot_count=2))

        assert result.error.code == "SLOT_IN_USE"
        account_repo.remove_slots.assert_not_called()
        account_repo.add_slots.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_unknown_account(self, mock_uow, account_repo):
        account_repo.get_by_id = AsyncMock(return_value=None)

        result = await ResizeAccount(mock_uow, account_repo).execute(
            ResizeAccountCommandDTO(account_id=99, slot_count=2)
        )

        assert result.error.code == "ACCOUNT_NOT_FOUND"


@pytest.mark.asyncio
class TestDeleteAccount:
    async def test_force_expires_active_allocations(self, mock_uow, account_repo, allocation_repo, fixed_clock):
        allocation_repo.list_active_by_account = AsyncMock(
            return_value=[make_allocation(1, 1), make_allocation(2, 2)]
        )
        allocation_repo.deactivate = AsyncMock(return_value=[1, 2])
        use_case = DeleteAccount(mock_uow, account_repo, allocation_repo, fixed_clock)

        result = await use_case.execute(7)

        assert result.is_ok()
        assert result.value.force_expired_allocations == 2
        allocation_repo.deactivate.assert_awaited_once_with(
            [1, 2], DeactivationReason.ACCOUNT_DELETED, fixed_clock.now()
        )
        account_repo.delete.assert_awaited_once_with(7)
        mock_uow.commit.assert_awaited_once()

    async def test_unknown_account(self, mock_uow, account_repo, allocation_repo, fixed_clock):
        account_repo.get_by_id = AsyncMock(return_value=None)

        result = await DeleteAccount(mock_uow, account_repo, allocation_repo, fixed_clock).execute(99)

        assert result.error.code == "ACCOUNT_NOT_FOUND"
        account_repo.delete.assert_not_called()

    async def test_failure_rolls_back(self, mock_uow, account_repo, allocation_repo, fixed_clock):
        account_repo.delete = AsyncMock(side_effect=Exception("locked"))

        result = await DeleteAccount(mock_uow, account_repo, allocation_repo, fixed_clock).execute(7)

        assert result.error.code == "DELETE_ACCOUNT_FAILED"
        mock_uow.rollback.assert_awaited_once()


@pytest.mark.asyncio
class TestReactivateAccount:
    async def test_frees_only_slots_without_active_allocation(
        self, mock_uow, account, account_repo, allocation_repo
    ):
        """
        Given: Slots 1 and 3 claimed; slot 1 still backs an active allocation
        When: The account is reactivated
        Then: Only slot 3 is released and the account becomes active
        """
        account_repo.list_slots = AsyncMock(return_value=make_slots(False, True, False))
        allocation_repo.list_active_by_account = AsyncMock(return_value=[make_allocation(1, 1)])
        use_case = ReactivateAccount(mock_uow, account_repo, allocation_repo)

        result = await use_case.execute(ReactivateAccountCommandDTO(account_id=7))

        assert result.is_ok()
        account_repo.release_slot.assert_awaited_once_with(7, 3)
        assert account.active is True
        mock_uow.commit.assert_awaited_once()

    async def test_optional_resize(self, mock_uow, account_repo, allocation_repo):
        account_repo.list_slots = AsyncMock(return_value=make_slots(True, True))
        use_case = ReactivateAccount(mock_uow, account_repo, allocation_repo)

        result = await use_case.execute(ReactivateAccountCommandDTO(account_id=7, slot_count=3))

        assert result.is_ok()
        added = account_repo.add_slots.await_args.args[0]
        assert [s.ordinal for s in added] == [3]

    async def test_resize_over_held_slot_rolls_back(self, mock_uow, account_repo, allocation_repo):
        account_repo.list_slots = AsyncMock(return_value=make_slots(True, False))
        allocation_repo.list_active_by_account = AsyncMock(return_value=[make_allocation(1, 2)])
        use_case = ReactivateAccount(mock_uow, account_repo, allocation_repo)

        result = await use_case.execute(ReactivateAccountCommandDTO(account_id=7, slot_count=1))

        assert result.error.code == "SLOT_IN_USE"
        mock_uow.rollback.assert_awaited_once()
        mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
class TestReleaseSlot:
    async def test_releases_idle_claimed_slot(self, mock_uow, account_repo, allocation_repo):
        account_repo.list_slots = AsyncMock(return_value=make_slots(False, True))

        result = await ReleaseSlot(mock_uow, account_repo, allocation_repo).execute(
            ReleaseSlotCommandDTO(account_id=7, ordinal=1)
        )

        assert result.is_ok()
        account_repo.release_slot.assert_awaited_once_with(7, 1)
        mock_uow.commit.assert_awaited_once()

    async def test_refused_while_allocation_holds_slot(self, mock_uow, account_repo, allocation_repo):
        account_repo.list_slots = AsyncMock(return_value=make_slots(False, True))
        allocation_repo.list_active_by_account = AsyncMock(return_value=[make_allocation(11, 1)])

        result = await ReleaseSlot(mock_uow, account_repo, allocation_repo).execute(
            ReleaseSlotCommandDTO(account_id=7, ordinal=1)
        )

        assert result.error.code == "SLOT_IN_USE"
        account_repo.release_slot.assert_not_called()

    async def test_unknown_ordinal(self, mock_uow, account_repo, allocation_repo):
        result = await ReleaseSlot(mock_uow, account_repo, allocation_repo).execute(
            ReleaseSlotCommandDTO(account_id=7, ordinal=5)
        )

        assert result.error.code == "SLOT_NOT_FOUND"
