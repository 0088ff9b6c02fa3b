"""Balance Transaction Domain Entity

Immutable append-only audit trail of user balance mutations.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import DateTime, ForeignKey, Numeric, String, Text
from src.domain.base import BaseModel, IdType, utcnow


class TransactionType(str, Enum):
    """Balance transaction types"""
    PURCHASE = "purchase"  # Balance charged for an allocation
    TOP_UP = "top_up"      # Balance credited by an administrator


class BalanceTransaction(BaseModel, table=True):
    """
    Balance Transaction - Audit trail of balance mutations

    Domain Rules:
    - Transactions are immutable (append-only)
    - Written in the same database transaction as the balance change
    - amount is always positive; transaction_type gives the direction
    """

    __tablename__ = "balance_transactions"
    __table_args__ = (
        Index("ix_balance_transactions_created_at", "created_at"),
        Index("ix_balance_transactions_reference", "reference_type", "reference_id"),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(IdType, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment)"
    )

    user_id: int = Field(
        sa_column=Column(IdType, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        description="User whose balance changed"
    )

    transaction_type: TransactionType = Field(
        description="Type of transaction (purchase, top_up)"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount moved (always positive)"
    )

    balance_before: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Balance before the transaction"
    )

    balance_after: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Balance after the transaction"
    )

    reference_type: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Type of reference (e.g., 'allocation')"
    )

    reference_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="ID of referenced entity"
    )

    note: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Free-form note (top-up reason, receipt number)"
    )

    created_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Transaction timestamp (immutable)"
    )
