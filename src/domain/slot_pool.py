"""Slot pool rules

Pure functions deciding which slot a purchase gets and how an account's
slot list changes when it is resized.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence, Tuple
from src.domain.account import Account, Slot


@dataclass
class SlotCandidate:
    """An active account together with its currently free slots"""
    account: Account
    free_slots: List[Slot] = field(default_factory=list)


@dataclass
class ResizePlan:
    """Ordinals to append and ordinals to drop for a resize"""
    add_ordinals: List[int]
    remove_ordinals: List[int]
    blocked_ordinals: List[int]

    @property
    def allowed(self) -> bool:
        return not self.blocked_ordinals


def slot_label(prefix: str, ordinal: int) -> str:
    return f"{prefix} {ordinal}"


def _lru_key(account: Account) -> Tuple[bool, datetime, int]:
    # Never-used accounts sort before any used one
    last_used = account.last_used_at
    return (last_used is not None, last_used or datetime.min, account.id or 0)


def select_slot(candidates: Sequence[SlotCandidate]) -> Optional[Tuple[Account, Slot]]:
    """
    Pick the slot a purchase should claim

    Rules:
    - Only active accounts with at least one free slot are considered
    - Least-recently-used account first, ties broken by account id
    - Lowest free ordinal within the chosen account

    Returns:
        (account, slot) or None when there is no capacity
    """
    eligible = [
        c for c in candidates
        if c.account.active and any(s.available for s in c.free_slots)
    ]
    if not eligible:
        return None

    chosen = min(eligible, key=lambda c: _lru_key(c.account))
    slot = min((s for s in chosen.free_slots if s.available), key=lambda s: s.ordinal)
    return chosen.account, slot


def plan_resize(slots: Sequence[Slot], new_count: int) -> ResizePlan:
    """
    Compute the slot changes for resizing an account to new_count slots

    Existing slots up to new_count are kept as they are. Growing appends
    ordinals (old_count, new_count]. Shrinking drops the highest ordinals;
    any dropped slot that is claimed blocks the resize.
    """
    if new_count < 0:
        raise ValueError("new_count must be >= 0")

    existing = {s.ordinal: s for s in slots}
    old_count = max(existing) if existing else 0

    add_ordinals = list(range(old_count + 1, new_count + 1))
    remove = [existing[o] for o in sorted(existing) if o > new_count]
    return ResizePlan(
        add_ordinals=add_ordinals,
        remove_ordinals=[s.ordinal for s in remove],
        blocked_ordinals=[s.ordinal for s in remove if not s.available],
    )
