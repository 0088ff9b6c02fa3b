"""Purchase API Routes

FastAPI routes for the allocation engine.
"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyAllocationRepository,
    SqlAlchemyBalanceTransactionRepository,
    SqlAlchemyPlatformRepository,
    SqlAlchemyUserRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.requests import PurchaseRequestSchema, RevokeAllocationRequestSchema
from src.app.services.clock import Clock
from src.app.use_cases.allocation import (
    AllocationResponseDTO,
    ListAllocationsResponseDTO,
    ListUserAllocations,
    PurchaseCommandDTO,
    PurchaseSlot,
    RevokeAllocation,
    RevokeAllocationCommandDTO,
)
from src.depends import get_clock, get_session

router = APIRouter(tags=["Purchases"])


@router.post(
    "/purchases",
    response_model=AllocationResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        402: {
            "description": "Insufficient balance",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_FUNDS",
                            "message": "Insufficient balance. Required: 100.00, Available: 50.00"
                        }
                    }
                }
            }
        },
        409: {
            "description": "No free slot left for the platform",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "NO_CAPACITY_AVAILABLE",
                            "message": "No Netflix slots are available right now"
                        }
                    }
                }
            }
        },
    }
)
async def purchase(
    request: PurchaseRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """
    Purchase time-limited access to one slot of a shared account.

    The platform's stored price is charged regardless of `expected_price`.

    **Returns:**
    - 201: Allocation with the account credentials and slot label
    - 402: Insufficient balance
    - 409: No capacity available
    - 422: Platform not offered / duration not priced
    """
    use_case = PurchaseSlot(
        uow=SqlAlchemyUnitOfWork(session),
        platform_repo=SqlAlchemyPlatformRepository(session),
        account_repo=SqlAlchemyAccountRepository(session),
        user_repo=SqlAlchemyUserRepository(session),
        allocation_repo=SqlAlchemyAllocationRepository(session),
        transaction_repo=SqlAlchemyBalanceTransactionRepository(session),
        clock=clock,
        max_claim_attempts=ApplicationConfig.PURCHASE_MAX_CLAIM_ATTEMPTS,
    )
    command = PurchaseCommandDTO(
        user_id=request.user_id,
        platform_id=request.platform_id,
        duration_months=request.duration_months,
        expected_price=request.expected_price,
    )

    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("/users/{user_id}/allocations", response_model=ListAllocationsResponseDTO)
async def list_allocations(
    user_id: int,
    only_active: bool = False,
    session: AsyncSession = Depends(get_session),
):
    """List a user's allocations, newest first."""
    use_case = ListUserAllocations(
        SqlAlchemyUserRepository(session), SqlAlchemyAllocationRepository(session)
    )
    result = await use_case.execute(user_id, only_active=only_active)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post("/admin/allocations/{allocation_id}/revoke", response_model=AllocationResponseDTO)
async def revoke_allocation(
    allocation_id: int,
    request: RevokeAllocationRequestSchema,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Revoke an active allocation, optionally freeing its slot."""
    use_case = RevokeAllocation(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyAllocationRepository(session),
        SqlAlchemyAccountRepository(session),
        clock,
    )
    result = await use_case.execute(
        RevokeAllocationCommandDTO(allocation_id=allocation_id, release_slot=request.release_slot)
    )
    if result.is_err():
        raise ClientError(result.error)
    return result.value
