"""Data Transfer Objects for Allocation Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.allocation import Allocation


class PurchaseCommandDTO(BaseModel):
    """
    Command DTO for purchasing a slot

    Used as input to PurchaseSlot use case. user_id comes from the
    authenticated session, never from the request body.
    """

    user_id: int = Field(
        ...,
        description="Authenticated purchasing user"
    )

    platform_id: int = Field(
        ...,
        description="Platform to purchase"
    )

    duration_months: int = Field(
        ...,
        gt=0,
        description="Requested duration in months"
    )

    expected_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Price the purchaser saw in the catalog (informational only)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 42,
                "platform_id": 1,
                "duration_months": 1,
                "expected_price": "100.00"
            }
        }


class AllocationResponseDTO(BaseModel):
    """
    Response DTO for an allocation

    Returned by PurchaseSlot, RevokeAllocation and ListUserAllocations.
    """

    allocation_id: int = Field(..., description="Allocation ID")
    user_id: int = Field(..., description="Owning user")
    platform_id: int = Field(..., description="Purchased platform")
    account_id: int = Field(..., description="Account the slot belongs to")
    slot_ordinal: int = Field(..., description="Claimed slot number")
    slot_label: str = Field(..., description="Slot label at purchase time")
    account_login: str = Field(..., description="Account login at purchase time")
    account_secret: str = Field(..., description="Account password at purchase time")
    duration_months: int = Field(..., description="Purchased duration")
    price: Decimal = Field(..., description="Price charged")
    starts_at: datetime = Field(..., description="Start of access")
    ends_at: datetime = Field(..., description="End of access")
    active: bool = Field(..., description="Whether the allocation is active")
    deactivated_at: Optional[datetime] = Field(default=None)
    deactivation_reason: Optional[str] = Field(default=None)
    balance_after: Optional[Decimal] = Field(
        default=None,
        description="User balance right after the purchase (purchase responses only)"
    )

    @classmethod
    def from_entity(
        cls, allocation: Allocation, balance_after: Optional[Decimal] = None
    ) -> "AllocationResponseDTO":
        reason = allocation.deactivation_reason
        return cls(
            allocation_id=allocation.id,
            user_id=allocation.user_id,
            platform_id=allocation.platform_id,
            account_id=allocation.account_id,
            slot_ordinal=allocation.slot_ordinal,
            slot_label=allocation.slot_label,
            account_login=allocation.account_login,
            account_secret=allocation.account_secret,
            duration_months=allocation.duration_months,
            price=allocation.price,
            starts_at=allocation.starts_at,
            ends_at=allocation.ends_at,
            active=allocation.active,
            deactivated_at=allocation.deactivated_at,
            deactivation_reason=reason.value if reason else None,
            balance_after=balance_after,
        )


class ListAllocationsResponseDTO(BaseModel):
    """Response DTO for a user's allocations"""

    user_id: int
    allocations: List[AllocationResponseDTO]
    total_count: int


class RevokeAllocationCommandDTO(BaseModel):
    """Command DTO for an administrative revocation"""

    allocation_id: int = Field(..., description="Allocation to revoke")
    release_slot: bool = Field(
        default=False,
        description="Also free the slot for new purchases"
    )


class ExpiryResultDTO(BaseModel):
    """
    Result of one expiry sweep

    Returned by ExpireAllocations.
    """

    expired_count: int = Field(..., description="Allocations flipped to inactive")
    released_slots: int = Field(default=0, description="Slots released back to the pool")
    expired_allocation_ids: List[int] = Field(default_factory=list)
    run_at: datetime = Field(..., description="Reference time of the sweep")
    execution_time_ms: int = Field(default=0)
