"""Unit tests for RevokeAllocation use case"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.allocation.dtos import RevokeAllocationCommandDTO
from src.app.use_cases.allocation.revoke_allocation import RevokeAllocation
from src.domain.allocation import Allocation, DeactivationReason


@pytest.fixture
def allocation():
    return Allocation(
        id=5,
        user_id=42,
        platform_id=1,
        account_id=7,
        slot_ordinal=3,
        slot_label="Screen 3",
        account_login="shared@example.com",
        account_secret="pw",
        duration_months=1,
        price=Decimal("100.00"),
        starts_at=datetime(2024, 1, 1),
        ends_at=datetime(2024, 2, 1),
        active=True,
    )


@pytest.fixture
def allocation_repo(allocation):
    repo = MagicMock()

    async def deactivate(ids, reason, when):
        allocation.active = False
        allocation.deactivation_reason = reason
        allocation.deactivated_at = when
        return [allocation.id]

    repo.get_by_id = AsyncMock(return_value=allocation)
    repo.deactivate = AsyncMock(side_effect=deactivate)
    return repo


@pytest.fixture
def account_repo():
    repo = MagicMock()
    repo.release_slot = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def revoke(mock_uow, allocation_repo, account_repo, fixed_clock):
    return RevokeAllocation(mock_uow, allocation_repo, account_repo, fixed_clock)


@pytest.mark.asyncio
class TestRevokeAllocation:
    async def test_revoke_keeps_slot_claimed_by_default(self, revoke, allocation_repo, account_repo, mock_uow):
        result = await revoke.execute(RevokeAllocationCommandDTO(allocation_id=5))

        assert result.is_ok()
        assert result.value.active is False
        assert result.value.deactivation_reason == "revoked"
        allocation_repo.deactivate.assert_awaited_once()
        assert allocation_repo.deactivate.await_args.args[1] == DeactivationReason.REVOKED
        account_repo.release_slot.assert_not_called()
        mock_uow.commit.assert_awaited_once()

    async def test_revoke_can_release_slot(self, revoke, account_repo):
        result = await revoke.execute(RevokeAllocationCommandDTO(allocation_id=5, release_slot=True))

        assert result.is_ok()
        account_repo.release_slot.assert_awaited_once_with(7, 3)

    async def test_unknown_allocation(self, revoke, allocation_repo):
        allocation_repo.get_by_id = AsyncMock(return_value=None)

        result = await revoke.execute(RevokeAllocationCommandDTO(allocation_id=99))

        assert result.error.code == "ALLOCATION_NOT_FOUND"

    async def test_already_inactive(self, revoke, allocation, allocation_repo):
        allocation.active = False

        result = await revoke.execute(RevokeAllocationCommandDTO(allocation_id=5))

        assert result.error.code == "ALLOCATION_INACTIVE"
        allocation_repo.deactivate.assert_not_called()
