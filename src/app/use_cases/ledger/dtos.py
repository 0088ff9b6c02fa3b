"""Data Transfer Objects for Ledger Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from src.domain.user import User


class RegisterUserCommandDTO(BaseModel):
    """
    Command DTO for registering a customer

    password_hash is produced by the authentication layer; this service
    never sees plain passwords.
    """

    email: str = Field(..., min_length=3, max_length=255, pattern=r".+@.+\..+")
    password_hash: str = Field(..., min_length=1)


class TopUpCommandDTO(BaseModel):
    """
    Command DTO for an administrator balance top-up

    Used as input to TopUpBalance use case.
    """

    user_email: str = Field(..., min_length=1, description="Email of the user to credit")
    amount: Decimal = Field(..., description="Amount to add (must be > 0)")
    note: Optional[str] = Field(default=None, description="Audit note (receipt, reason)")

    class Config:
        json_schema_extra = {
            "example": {
                "user_email": "customer@example.com",
                "amount": "500.00",
                "note": "bank transfer #8812"
            }
        }


class SetUserActiveCommandDTO(BaseModel):
    user_id: int
    active: bool


class UserResponseDTO(BaseModel):
    user_id: int
    email: str
    balance: Decimal
    active: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserResponseDTO":
        return cls(
            user_id=user.id,
            email=user.email,
            balance=user.balance,
            active=user.active,
            created_at=user.created_at,
        )


class BalanceResponseDTO(BaseModel):
    """
    Response DTO for balance reads and top-ups

    Returned by GetBalance and TopUpBalance.
    """

    user_id: int = Field(..., description="User identifier")
    balance: Decimal = Field(..., description="Current balance")
    last_updated: datetime = Field(..., description="Timestamp of last balance update")
    transaction_id: Optional[int] = Field(
        default=None,
        description="Audit entry created by the operation (top-ups only)"
    )
