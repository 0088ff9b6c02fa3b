"""Catalog API Routes"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyAllocationRepository,
    SqlAlchemyPlatformRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.requests import UpdatePlatformRequestSchema
from src.app.services.clock import Clock
from src.app.use_cases.catalog import (
    CatalogResponseDTO,
    CreatePlatform,
    CreatePlatformCommandDTO,
    DeletePlatform,
    DeletePlatformResponseDTO,
    ListCatalog,
    PlatformResponseDTO,
    UpdatePlatform,
    UpdatePlatformCommandDTO,
)
from src.depends import get_clock, get_session

router = APIRouter(tags=["Catalog"])


@router.get("/catalog", response_model=CatalogResponseDTO)
async def list_catalog(
    include_unavailable: bool = False,
    session: AsyncSession = Depends(get_session),
):
    """
    List platforms with their offered durations and free slot counts.

    Unavailable platforms are hidden unless `include_unavailable` is set.
    """
    use_case = ListCatalog(SqlAlchemyPlatformRepository(session), SqlAlchemyAccountRepository(session))
    result = await use_case.execute(only_available=not include_unavailable)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.post(
    "/admin/platforms",
    response_model=PlatformResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_platform(
    request: CreatePlatformCommandDTO,
    session: AsyncSession = Depends(get_session),
):
    """
    Create a catalog platform.

    **Returns:**
    - 201: Platform created
    - 409: Name already taken
    - 422: Price for a duration outside 1, 3, 6, 12
    """
    use_case = CreatePlatform(SqlAlchemyUnitOfWork(session), SqlAlchemyPlatformRepository(session))
    result = await use_case.execute(request)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.patch("/admin/platforms/{platform_id}", response_model=PlatformResponseDTO)
async def update_platform(
    platform_id: int,
    request: UpdatePlatformRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """Edit a platform. Omitted fields are left unchanged; `prices` replaces the price list."""
    use_case = UpdatePlatform(SqlAlchemyUnitOfWork(session), SqlAlchemyPlatformRepository(session))
    command = UpdatePlatformCommandDTO(platform_id=platform_id, **request.model_dump())
    result = await use_case.execute(command)
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.delete("/admin/platforms/{platform_id}", response_model=DeletePlatformResponseDTO)
async def delete_platform(
    platform_id: int,
    session: AsyncSession = Depends(get_session),
    clock: Clock = Depends(get_clock),
):
    """Delete a platform together with its accounts; their active allocations are force-expired."""
    use_case = DeletePlatform(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemyPlatformRepository(session),
        SqlAlchemyAccountRepository(session),
        SqlAlchemyAllocationRepository(session),
        clock,
    )
    result = await use_case.execute(platform_id)
    if result.is_err():
        raise ClientError(result.error)
    return result.value
