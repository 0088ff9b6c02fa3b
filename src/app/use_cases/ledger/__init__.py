"""Ledger use cases"""
from .register_user import RegisterUser
from .top_up_balance import TopUpBalance
from .get_balance import GetBalance
from .set_user_active import SetUserActive
from .dtos import (
    RegisterUserCommandDTO,
    TopUpCommandDTO,
    SetUserActiveCommandDTO,
    UserResponseDTO,
    BalanceResponseDTO,
)

__all__ = [
    "RegisterUser",
    "TopUpBalance",
    "GetBalance",
    "SetUserActive",
    "RegisterUserCommandDTO",
    "TopUpCommandDTO",
    "SetUserActiveCommandDTO",
    "UserResponseDTO",
    "BalanceResponseDTO",
]
