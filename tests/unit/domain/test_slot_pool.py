"""Unit tests for slot selection and resize planning"""

import pytest
from datetime import datetime

from src.domain.account import Account, Slot
from src.domain.slot_pool import SlotCandidate, plan_resize, select_slot, slot_label


def make_account(account_id, last_used_at=None, active=True):
    return Account(
        id=account_id,
        platform_id=1,
        login=f"acc{account_id}@example.com",
        secret="pw",
        active=active,
        last_used_at=last_used_at,
    )


def make_slot(account_id, ordinal, available=True):
    return Slot(
        id=account_id * 100 + ordinal,
        account_id=account_id,
        ordinal=ordinal,
        label=slot_label("Screen", ordinal),
        available=available,
    )


def candidate(account, *ordinals):
    return SlotCandidate(account=account, free_slots=[make_slot(account.id, o) for o in ordinals])


class TestSelectSlot:
    def test_no_candidates_means_no_capacity(self):
        assert select_slot([]) is None

    def test_never_used_account_wins_over_used_one(self):
        used = make_account(1, last_used_at=datetime(2024, 1, 1))
        fresh = make_account(2)

        account, slot = select_slot([candidate(used, 1), candidate(fresh, 3)])

        assert account.id == 2
        assert slot.ordinal == 3

    def test_least_recently_used_account_wins(self):
        recent = make_account(1, last_used_at=datetime(2024, 3, 1))
        older = make_account(2, last_used_at=datetime(2024, 2, 1))

        account, _ = select_slot([candidate(recent, 1), candidate(older, 1)])

        assert account.id == 2

    def test_ties_broken_by_lowest_account_id(self):
        when = datetime(2024, 2, 1)
        a5 = make_account(5, last_used_at=when)
        a3 = make_account(3, last_used_at=when)

        account, _ = select_slot([candidate(a5, 1), candidate(a3, 1)])

        assert account.id == 3

    def test_lowest_free_ordinal_within_account(self):
        account = make_account(1)

        _, slot = select_slot([candidate(account, 4, 2, 3)])

        assert slot.ordinal == 2
        assert slot.label == "Screen 2"

    def test_inactive_accounts_are_skipped(self):
        inactive = make_account(1, active=False)
        active = make_account(2, last_used_at=datetime(2024, 5, 1))

        account, _ = select_slot([candidate(inactive, 1), candidate(active, 1)])

        assert account.id == 2

    def test_accounts_without_free_slots_are_skipped(self):
        empty = make_account(1)
        other = make_account(2, last_used_at=datetime(2024, 5, 1))

        account, _ = select_slot([SlotCandidate(account=empty), candidate(other, 2)])

        assert account.id == 2

    def test_claimed_slots_in_candidate_are_ignored(self):
        account = make_account(1)
        slots = [make_slot(1, 1, available=False), make_slot(1, 2)]

        _, slot = select_slot([SlotCandidate(account=account, free_slots=slots)])

        assert slot.ordinal == 2


class TestPlanResize:
    def test_grow_appends_new_ordinals(self):
        slots = [make_slot(1, 1, available=False), make_slot(1, 2)]

        plan = plan_resize(slots, 4)

        assert plan.add_ordinals == [3, 4]
        assert plan.remove_ordinals == []
        assert plan.allowed

    def test_shrink_removes_highest_free_ordinals(self):
        slots = [make_slot(1, o) for o in (1, 2, 3, 4)]

        plan = plan_resize(slots, 2)

        assert plan.add_ordinals == []
        assert plan.remove_ordinals == [3, 4]
        assert plan.allowed

    def test_shrink_over_claimed_slot_is_blocked(self):
        slots = [make_slot(1, 1), make_slot(1, 2), make_slot(1, 3, available=False)]

        plan = plan_resize(slots, 1)

        assert plan.blocked_ordinals == [3]
        assert not plan.allowed

    def test_same_count_is_noop(self):
        slots = [make_slot(1, o) for o in (1, 2)]

        plan = plan_resize(slots, 2)

        assert plan.add_ordinals == [] and plan.remove_ordinals == []

    def test_resize_from_zero_slots(self):
        assert plan_resize([], 3).add_ordinals == [1, 2, 3]

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            plan_resize([], -1)
