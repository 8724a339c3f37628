"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import BatchUpsertResult, CatalogGateway, CatalogPage, IdMapping, RemoteError

__all__ = [
    "BatchUpsertResult",
    "CatalogGateway",
    "CatalogPage",
    "IdMapping",
    "RemoteError",
]
