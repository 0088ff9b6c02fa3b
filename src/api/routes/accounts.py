"""Account Pool API Routes

Administrator endpoints for shared accounts and their slots.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Path, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyAllocationRepository,
    SqlAlchemyPlatformRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.requests import (
    ReactivateAccountRequestSchema,
    ResizeAccountRequestSchema,
    SetActiveRequestSchema,
    UpdateAccountRequestSchema,
)
from src.app.services.clock import Clock
from src.app.use_cases.inventory import (
    AccountResponseDTO,
    CreateAccount,
    CreateAccountCommandDTO,
    DeleteAccount,
    DeleteAccountResponseDTO,
    ListAccounts,
    ListAccountsResponseDTO,
    ReactivateAccount,
    ReactivateAccountCommandDTO,
    ReleaseSlot,
    ReleaseSlotCommandDTO,
    ResizeAccount,
    ResizeAccountCommandDTO,
    SetAccountActive,
    SetAccountActiveCommandDTO,
    UpdateAccount,
    UpdateAccountCommandDTO,
)
from src.depends import get_clock, get_session

router = APIRouter(prefix="/admin/accounts", tags=["Accounts"])


@router.get("", response_model=ListAccountsResponseDTO)
async def list_accounts(
    platform_id: Optional[int] = None,
    session: AsyncSession = Depends(get_session),
):
    """List accounts with slot totals and free counts, optionally for one platform."""
    result = await ListAccounts(SqlAlchemyAccountRepository(session)).execute(platform_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("", response_model=AccountResponseDTO, status_code=status.HTTP_201_CREATED)
async def create_account(
    request: CreateAccountCommandDTO,
    session: AsyncSession = Depends(get_session),
):
    """
    Register a shared account with `slot_count` available slots.

    **Returns:**
    - 201: Account and slots created
    - 404: Platform not found
    """
    use_case = CreateAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPlatformRepository(session),
        SqlAlchemyAccountRepository(session),
        label_prefix=ApplicationConfig.SLOT_LABEL_PREFIX,
    )
    result = await use_case.execute(request)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.patch("/{account_id}", response_model=AccountResponseDTO)
async def update_account(
    account_id: int,
    request: UpdateAccountRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Edit login, secret or notes. Existing allocations keep their credential snapshot."""
    use_case = UpdateAccount(SqlAlchemyUnitOfWork(session), SqlAlchemyAccountRepository(session))
    result = await use_case.execute(
        UpdateAccountCommandDTO(account_id=account_id, **request.model_dump())
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{account_id}/resize", response_model=AccountResponseDTO)
async def resize_account(
    account_id: int,
    request: ResizeAccountRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Change the number of slots of an account.

    **Returns:**
    - 200: Slots added or removed
    - 409: Shrinking would drop a claimed slot
    """
    use_case = ResizeAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        label_prefix=ApplicationConfig.SLOT_LABEL_PREFIX,
    )
    result = await use_case.execute(
        ResizeAccountCommandDTO(account_id=account_id, slot_count=request.slot_count)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{account_id}/active", response_model=AccountResponseDTO)
async def set_account_active(
    account_id: int,
    request: SetActiveRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Enable or disable an account for future purchases."""
    use_case = SetAccountActive(SqlAlchemyUnitOfWork(session), SqlAlchemyAccountRepository(session))
    result = await use_case.execute(
        SetAccountActiveCommandDTO(account_id=account_id, active=request.active)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{account_id}/reactivate", response_model=AccountResponseDTO)
async def reactivate_account(
    account_id: int,
    request: ReactivateAccountRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Mark an account active again, optionally resize it, and free slots no allocation holds."""
    use_case = ReactivateAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyAllocationRepository(session),
        label_prefix=ApplicationConfig.SLOT_LABEL_PREFIX,
    )
    result = await use_case.execute(
        ReactivateAccountCommandDTO(account_id=account_id, slot_count=request.slot_count)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/{account_id}/slots/{ordinal}/release", response_model=AccountResponseDTO)
async def release_slot(
    account_id: int,
    ordinal: int = Path(..., ge=1),
    session: AsyncSession = Depends(get_session),
):
    """Manually free one slot. Refused while an active allocation holds it."""
    use_case = ReleaseSlot(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyAllocationRepository(session),
    )
    result = await use_case.execute(ReleaseSlotCommandDTO(account_id=account_id, ordinal=ordinal))
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/{account_id}", response_model=DeleteAccountResponseDTO)
async def delete_account(
    account_id: int,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Delete an account and its slots; its active allocations are force-expired."""
    use_case = DeleteAccount(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyAllocationRepository(session),
        clock,
    )
    result = await use_case.execute(account_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
