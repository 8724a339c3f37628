"""Square Catalog API adapter."""

from __future__ import annotations

from .client import MAX_OBJECTS_PER_BATCH, SquareAPIError, SquareCatalogClient
from .schema import (
    BatchUpsertCatalogObjectsResponse,
    CatalogIdMapping,
    ListCatalogResponse,
    SquareError,
)

__all__ = [
    "MAX_OBJECTS_PER_BATCH",
    "BatchUpsertCatalogObjectsResponse",
    "CatalogIdMapping",
    "ListCatalogResponse",
    "SquareAPIError",
    "SquareCatalogClient",
    "SquareError",
]
