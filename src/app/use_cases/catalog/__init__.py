"""Catalog use cases"""
from .create_platform import CreatePlatform
from .update_platform import UpdatePlatform
from .delete_platform import DeletePlatform
from .list_catalog import ListCatalog
from .dtos import (
    CreatePlatformCommandDTO,
    UpdatePlatformCommandDTO,
    PriceDTO,
    PlatformResponseDTO,
    CatalogResponseDTO,
    DeletePlatformResponseDTO,
)

__all__ = [
    "CreatePlatform",
    "UpdatePlatform",
    "DeletePlatform",
    "ListCatalog",
    "CreatePlatformCommandDTO",
    "UpdatePlatformCommandDTO",
    "PriceDTO",
    "PlatformResponseDTO",
    "CatalogResponseDTO",
    "DeletePlatformResponseDTO",
]
