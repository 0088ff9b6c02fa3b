"""Data Transfer Objects for Catalog Use Cases"""

from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from src.domain.platform import Platform, PlatformPrice


def _check_prices(prices: Optional[Dict[int, Decimal]]) -> Optional[Dict[int, Decimal]]:
    if prices is not None and any(p < 0 for p in prices.values()):
        raise ValueError("Prices must be >= 0")
    return prices


class CreatePlatformCommandDTO(BaseModel):
    """
    Command DTO for creating a catalog platform

    prices maps duration in months (1, 3, 6, 12) to a price; 0 or a missing
    duration means the duration is not offered.
    """

    name: str = Field(..., min_length=1, max_length=100)
    logo_url: str = Field(default="")
    available: bool = Field(default=True)
    prices: Dict[int, Decimal] = Field(default_factory=dict)
    welcome_messages: Dict[int, str] = Field(default_factory=dict)

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v):
        return _check_prices(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Netflix",
                "logo_url": "/uploads/netflix.png",
                "available": True,
                "prices": {"1": "100.00", "3": "280.00"},
                "welcome_messages": {"1": "Enjoy your first month!"}
            }
        }


class UpdatePlatformCommandDTO(BaseModel):
    """Command DTO for editing a platform (None = unchanged)"""

    platform_id: int
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    logo_url: Optional[str] = None
    available: Optional[bool] = None
    prices: Optional[Dict[int, Decimal]] = None
    welcome_messages: Optional[Dict[int, str]] = None

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v):
        return _check_prices(v)


class PriceDTO(BaseModel):
    duration_months: int
    price: Decimal
    welcome_message: str = ""

    @classmethod
    def from_entity(cls, price: PlatformPrice) -> "PriceDTO":
        return cls(
            duration_months=price.duration_months,
            price=price.price,
            welcome_message=price.welcome_message,
        )


class PlatformResponseDTO(BaseModel):
    """Platform with its offered durations"""

    platform_id: int
    name: str
    logo_url: str
    available: bool
    prices: List[PriceDTO] = Field(default_factory=list)
    free_slots: Optional[int] = Field(
        default=None,
        description="Free slots across active accounts (catalog listing only)"
    )

    @classmethod
    def from_entity(
        cls, platform: Platform, prices: List[PlatformPrice], free_slots: Optional[int] = None
    ) -> "PlatformResponseDTO":
        return cls(
            platform_id=platform.id,
            name=platform.name,
            logo_url=platform.logo_url,
            available=platform.available,
            prices=[PriceDTO.from_entity(p) for p in prices if p.is_offered()],
            free_slots=free_slots,
        )


class CatalogResponseDTO(BaseModel):
    platforms: List[PlatformResponseDTO]
    total_count: int


class DeletePlatformResponseDTO(BaseModel):
    platform_id: int
    deleted_accounts: int
    force_expired_allocations: int
