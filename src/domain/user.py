"""User Domain Entity

A registered customer and their prepaid balance.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, DateTime, Numeric, String
from src.domain.base import BaseModel, IdType, utcnow


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(BaseModel, table=True):
    """
    User - A customer with a prepaid balance

    Domain Rules:
    - email is stored normalized (trimmed, lowercase) and is unique
    - Balance must be non-negative
    - Balance changes only through purchases and admin top-ups
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="user_balance_non_negative"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique user identifier (auto-increment)"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False, unique=True, index=True),
        description="Normalized email address (unique)"
    )

    password_hash: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Password hash produced by the authentication layer"
    )

    balance: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False, default=0),
        description="Current balance (must be >= 0)"
    )

    active: bool = Field(
        default=True,
        description="Inactive users cannot purchase"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Registration timestamp"
    )

    updated_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Last balance or status change"
    )
