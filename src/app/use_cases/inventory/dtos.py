"""Data Transfer Objects for Account Pool Use Cases"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.account import Account, Slot


class CreateAccountCommandDTO(BaseModel):
    """
    Command DTO for creating a shared account

    Used as input to CreateAccount use case.
    """

    platform_id: int = Field(..., description="Owning platform")
    login: str = Field(..., min_length=1, description="Account login")
    secret: str = Field(..., min_length=1, description="Account password")
    slot_count: int = Field(..., ge=0, le=100, description="Number of slots to create")
    notes: str = Field(default="", description="Admin notes")

    class Config:
        json_schema_extra = {
            "example": {
                "platform_id": 1,
                "login": "shared-01@example.com",
                "secret": "s3cret",
                "slot_count": 4,
                "notes": "renews on the 5th"
            }
        }


class UpdateAccountCommandDTO(BaseModel):
    """Command DTO for editing account credentials/notes (None = unchanged)"""

    account_id: int
    login: Optional[str] = Field(default=None, min_length=1)
    secret: Optional[str] = Field(default=None, min_length=1)
    notes: Optional[str] = None


class ResizeAccountCommandDTO(BaseModel):
    account_id: int
    slot_count: int = Field(..., ge=0, le=100, description="New total number of slots")


class SetAccountActiveCommandDTO(BaseModel):
    account_id: int
    active: bool


class ReactivateAccountCommandDTO(BaseModel):
    """
    Command DTO for reactivating an account

    Marks the account active, optionally resizes it, and frees every slot
    not held by an active allocation.
    """

    account_id: int
    slot_count: Optional[int] = Field(default=None, ge=0, le=100)


class ReleaseSlotCommandDTO(BaseModel):
    account_id: int
    ordinal: int = Field(..., ge=1)


class SlotDTO(BaseModel):
    ordinal: int
    label: str
    available: bool

    @classmethod
    def from_entity(cls, slot: Slot) -> "SlotDTO":
        return cls(ordinal=slot.ordinal, label=slot.label, available=slot.available)


class AccountResponseDTO(BaseModel):
    """Admin view of an account and its slots"""

    account_id: int = Field(..., description="Account ID")
    platform_id: int = Field(..., description="Owning platform")
    login: str
    secret: str
    notes: str
    active: bool
    last_used_at: Optional[datetime] = None
    total_slots: int = Field(..., description="Number of slots")
    free_slots: int = Field(..., description="Slots currently available")
    slots: List[SlotDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, account: Account, slots: List[Slot]) -> "AccountResponseDTO":
        return cls(
            account_id=account.id,
            platform_id=account.platform_id,
            login=account.login,
            secret=account.secret,
            notes=account.notes,
            active=account.active,
            last_used_at=account.last_used_at,
            total_slots=len(slots),
            free_slots=sum(1 for s in slots if s.available),
            slots=[SlotDTO.from_entity(s) for s in slots],
        )


class ListAccountsResponseDTO(BaseModel):
    accounts: List[AccountResponseDTO]
    total_count: int


class DeleteAccountResponseDTO(BaseModel):
    account_id: int
    force_expired_allocations: int = Field(
        ..., description="Active allocations deactivated because the account was removed"
    )
