"""Allocation engine use cases"""
from .purchase_slot import PurchaseSlot
from .expire_allocations import ExpireAllocations
from .revoke_allocation import RevokeAllocation
from .list_user_allocations import ListUserAllocations
from .dtos import (
    PurchaseCommandDTO,
    AllocationResponseDTO,
    ListAllocationsResponseDTO,
    RevokeAllocationCommandDTO,
    ExpiryResultDTO,
)

__all__ = [
    "PurchaseSlot",
    "ExpireAllocations",
    "RevokeAllocation",
    "ListUserAllocations",
    "PurchaseCommandDTO",
    "AllocationResponseDTO",
    "ListAllocationsResponseDTO",
    "RevokeAllocationCommandDTO",
    "ExpiryResultDTO",
]
