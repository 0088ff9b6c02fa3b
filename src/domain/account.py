"""Account and Slot Domain Entities

A shared streaming account and the numbered slots (concurrent screens)
it is divided into.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, CheckConstraint
from src.domain.base import BaseModel, IdType, utcnow


class Account(BaseModel, table=True):
    """
    Account - One shared credential pair owned by a Platform

    Domain Rules:
    - Belongs to exactly one Platform
    - Inactive accounts offer no slots regardless of capacity
    - last_used_at drives least-recently-used selection (None = never used)
    - Slots are stored in the slots table, numbered 1..N
    """

    __tablename__ = "accounts"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique account identifier (auto-increment)"
    )

    platform_id: int = Field(
        sa_column=Column(IdType, ForeignKey("platforms.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Owning platform"
    )

    login: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account login (usually an email)"
    )

    secret: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Account password"
    )

    notes: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Free-form admin notes"
    )

    active: bool = Field(
        default=True,
        description="Whether the account takes part in slot selection"
    )

    last_used_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="When a slot of this account was last claimed"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )


class Slot(BaseModel, table=True):
    """
    Slot - One unit of concurrent-access capacity inside an Account

    Domain Rules:
    - (account_id, ordinal) is unique, ordinals run 1..N
    - available=False means the slot is claimed
    - Claiming is a compare-and-set on available
    """

    __tablename__ = "slots"
    __table_args__ = (
        UniqueConstraint("account_id", "ordinal", name="uq_slot_account_ordinal"),
        CheckConstraint("ordinal >= 1", name="ordinal_positive"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    account_id: int = Field(
        sa_column=Column(IdType, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Owning account"
    )

    ordinal: int = Field(
        description="Slot number within the account (1..N)"
    )

    label: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Label shown to the purchaser (e.g. 'Screen 3')"
    )

    available: bool = Field(
        default=True,
        description="True = free, False = claimed"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last availability change"
    )
