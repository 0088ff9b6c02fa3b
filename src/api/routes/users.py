"""User and Balance API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import SqlAlchemyBalanceTransactionRepository, SqlAlchemyUserRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.requests import RegisterUserRequestSchema, SetActiveRequestSchema, TopUpRequestSchema
from src.app.services.clock import Clock
from src.app.use_cases.ledger import (
    BalanceResponseDTO,
    GetBalance,
    RegisterUser,
    RegisterUserCommandDTO,
    SetUserActive,
    SetUserActiveCommandDTO,
    TopUpBalance,
    TopUpCommandDTO,
    UserResponseDTO,
)
from src.depends import get_clock, get_session

router = APIRouter(tags=["Users"])


@router.post("/users", response_model=UserResponseDTO, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterUserRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Register a customer with a zero balance."""
    use_case = RegisterUser(SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session))
    result = await use_case.execute(
        RegisterUserCommandDTO(email=request.email, password_hash=request.password_hash)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/users/{user_id}/balance", response_model=BalanceResponseDTO)
async def get_balance(
    user_id: int,
    session: AsyncSession = Depends(get_session),
):
    """
    Get the current balance of a user.

    **Returns:**
    - 200: Balance retrieved successfully
    - 404: User not found
    """
    result = await GetBalance(SqlAlchemyUserRepository(session)).execute(user_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/admin/users/top-up", response_model=BalanceResponseDTO)
async def top_up(
    request: TopUpRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Credit a user's balance by email.

    **Returns:**
    - 200: Balance credited, audit entry recorded
    - 404: No user with that email
    - 400: Invalid request parameters (amount <= 0)
    """
    use_case = TopUpBalance(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyUserRepository(session),
        SqlAlchemyBalanceTransactionRepository(session),
        clock,
    )
    result = await use_case.execute(
        TopUpCommandDTO(user_email=request.user_email, amount=request.amount, note=request.note)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/admin/users/{user_id}/active", response_model=UserResponseDTO)
async def set_user_active(
    user_id: int,
    request: SetActiveRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Enable or disable a customer."""
    use_case = SetUserActive(SqlAlchemyUnitOfWork(session), SqlAlchemyUserRepository(session))
    result = await use_case.execute(SetUserActiveCommandDTO(user_id=user_id, active=request.active))
    if result.is_err():
        raise ClientError(result.error)
    return result.value
