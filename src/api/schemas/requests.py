"""Request schemas for the HTTP API

Pydantic models for validating incoming HTTP request bodies. Identifiers
taken from the path are not repeated here.
"""

from decimal import Decimal
from typing import Dict, Optional
from pydantic import BaseModel, Field, field_validator


class PurchaseRequestSchema(BaseModel):
    """
    Request schema for purchasing a slot

    Used for POST /purchases. user_id stands in for the authenticated
    session identity.
    """

    user_id: int = Field(..., gt=0, description="Authenticated user")
    platform_id: int = Field(..., gt=0, description="Platform to purchase")
    duration_months: int = Field(..., gt=0, description="Duration in months")
    expected_price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Price shown in the catalog (informational)"
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


class TopUpRequestSchema(BaseModel):
    """
    Request schema for an administrator top-up

    Used for POST /admin/users/top-up endpoint.
    """

    user_email: str = Field(..., min_length=3, description="Email of the user to credit")
    amount: Decimal = Field(..., description="Amount to add (must be > 0)")
    note: Optional[str] = Field(default=None, max_length=500)

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v):
        """Ensure amount is positive"""
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v


class RegisterUserRequestSchema(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r".+@.+\..+")
    password_hash: str = Field(..., min_length=1)


class UpdatePlatformRequestSchema(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    logo_url: Optional[str] = None
    available: Optional[bool] = None
    prices: Optional[Dict[int, Decimal]] = None
    welcome_messages: Optional[Dict[int, str]] = None

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v):
        if v is not None and any(p < 0 for p in v.values()):
            raise ValueError("Prices must be >= 0")
        return v


class UpdateAccountRequestSchema(BaseModel):
    login: Optional[str] = Field(default=None, min_length=1)
    secret: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None


class ResizeAccountRequestSchema(BaseModel):
    slot_count: int = Field(..., ge=0, le=100)


class ReactivateAccountRequestSchema(BaseModel):
    slot_count: Optional[int] = Field(default=None, ge=0, le=100)


class SetActiveRequestSchema(BaseModel):
    active: bool


class RevokeAllocationRequestSchema(BaseModel):
    release_slot: bool = False
