"""Account pool use cases"""
from .create_account import CreateAccount
from .update_account import UpdateAccount, SetAccountActive
from .resize_account import ResizeAccount
from .delete_account import DeleteAccount, retire_account
from .reactivate_account import ReactivateAccount
from .release_slot import ReleaseSlot
from .list_accounts import ListAccounts
from .dtos import (
    CreateAccountCommandDTO,
    UpdateAccountCommandDTO,
    ResizeAccountCommandDTO,
    SetAccountActiveCommandDTO,
    ReactivateAccountCommandDTO,
    ReleaseSlotCommandDTO,
    SlotDTO,
    AccountResponseDTO,
    ListAccountsResponseDTO,
    DeleteAccountResponseDTO,
)

__all__ = [
    "CreateAccount",
    "UpdateAccount",
    "SetAccountActive",
    "ResizeAccount",
    "DeleteAccount",
    "retire_account",
    "ReactivateAccount",
    "ReleaseSlot",
    "ListAccounts",
    "CreateAccountCommandDTO",
    "UpdateAccountCommandDTO",
    "ResizeAccountCommandDTO",
    "SetAccountActiveCommandDTO",
    "ReactivateAccountCommandDTO",
    "ReleaseSlotCommandDTO",
    "SlotDTO",
    "AccountResponseDTO",
    "ListAccountsResponseDTO",
    "DeleteAccountResponseDTO",
]
