"""Allocation Domain Entity

A purchase binding a User to one claimed Slot for a number of months.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String
from src.domain.base import BaseModel, IdType, utcnow


class DeactivationReason(str, Enum):
    """Why an allocation stopped being active"""
    EXPIRED = "expired"                  # Sweeper reached ends_at
    REVOKED = "revoked"                  # Admin revocation
    ACCOUNT_DELETED = "account_deleted"  # Owning account (or platform) removed


class Allocation(BaseModel, table=True):
    """
    Allocation - Time-bounded purchase of one slot

    Domain Rules:
    - Created only by the purchase flow, together with the balance charge
    - price, slot label and credentials are snapshots taken at purchase time
    - ends_at = starts_at + duration_months (calendar months)
    - active -> inactive is the only mutation (expiry, revocation, deletion)
    - account_id/platform_id are kept after the account is deleted
    """

    __tablename__ = "allocations"
    __table_args__ = (
        Index("ix_allocations_active_ends_at", "active", "ends_at"),
        Index("ix_allocations_account_slot", "account_id", "slot_ordinal"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique allocation identifier (auto-increment)"
    )

    user_id: int = Field(
        sa_column=Column(IdType, ForeignKey("users.id"), nullable=False, index=True),
        description="Purchasing user"
    )

    platform_id: int = Field(
        sa_column=Column(IdType, nullable=False, index=True),
        description="Platform purchased"
    )

    account_id: int = Field(
        sa_column=Column(IdType, nullable=False),
        description="Account the slot belongs to"
    )

    slot_ordinal: int = Field(
        description="Ordinal of the claimed slot within the account"
    )

    slot_label: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Slot label at purchase time"
    )

    account_login: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account login at purchase time"
    )

    account_secret: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account password at purchase time"
    )

    duration_months: int = Field(
        description="Purchased duration in months"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Price charged (snapshot)"
    )

    starts_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Start of the access period"
    )

    ends_at: datetime = Field(
        sa_column=Column(DateTime, nullable=False),
        description="End of the access period"
    )

    active: bool = Field(
        default=True,
        description="True until expired, revoked or force-expired"
    )

    deactivated_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="When the allocation became inactive"
    )

    deactivation_reason: Optional[DeactivationReason] = Field(
        default=None,
        description="Why the allocation became inactive"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Record creation timestamp"
    )

    def is_expired_at(self, now: datetime) -> bool:
        return now >= self.ends_at
