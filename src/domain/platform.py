"""Platform Domain Entities

Catalog entries for the streaming services on sale and their price list
per subscription duration.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Numeric, String, Text, UniqueConstraint
from src.domain.base import BaseModel, IdType, utcnow

# Durations (in months) a platform can be sold for
ALLOWED_DURATIONS = (1, 3, 6, 12)


class Platform(BaseModel, table=True):
    """
    Platform - A streaming service offered in the catalog

    Domain Rules:
    - name is unique
    - Unavailable platforms cannot be purchased
    - Owns its Accounts; deleting a platform deletes them
    """

    __tablename__ = "platforms"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique platform identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
        description="Human readable platform name (unique)"
    )

    logo_url: str = Field(
        default="",
        sa_column=Column(String(500), nullable=False, default=""),
        description="Public URL of the platform logo"
    )

    available: bool = Field(
        default=True,
        description="Whether the platform can currently be purchased"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Platform creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last update timestamp"
    )


class PlatformPrice(BaseModel, table=True):
    """
    PlatformPrice - Price of a platform for one duration

    Domain Rules:
    - duration_months is one of ALLOWED_DURATIONS
    - A missing row or a price of 0 means the duration is not offered
    """

    __tablename__ = "platform_prices"
    __table_args__ = (
        UniqueConstraint("platform_id", "duration_months", name="uq_platform_price_duration"),
        CheckConstraint("price >= 0", name="price_non_negative"),
        CheckConstraint("duration_months IN (1, 3, 6, 12)", name="duration_allowed"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
    )

    platform_id: int = Field(
        sa_column=Column(IdType, ForeignKey("platforms.id", ondelete="CASCADE"), nullable=False, index=True),
        description="Owning platform"
    )

    duration_months: int = Field(
        description="Subscription length in months (1, 3, 6 or 12)"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Price for this duration (0 = not offered)"
    )

    welcome_message: str = Field(
        default="",
        sa_column=Column(Text, nullable=False, default=""),
        description="Message shown to the purchaser (display only)"
    )

    def is_offered(self) -> bool:
        return self.price is not None and self.price > 0
