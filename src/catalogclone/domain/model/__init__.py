"""Catalog domain model."""

from __future__ import annotations

from .catalog import (
    CatalogBaseModel,
    CatalogCategory,
    CatalogDiscount,
    CatalogItem,
    CatalogItemModifierListInfo,
    CatalogItemVariation,
    CatalogModifier,
    CatalogModifierList,
    CatalogObject,
    CatalogTax,
    CatalogV1Id,
    Money,
)
from .enums import CatalogObjectType, ProductType

__all__ = [
    "CatalogBaseModel",
    "CatalogCategory",
    "CatalogDiscount",
    "CatalogItem",
    "CatalogItemModifierListInfo",
    "CatalogItemVariation",
    "CatalogModifier",
    "CatalogModifierList",
    "CatalogObject",
    "CatalogObjectType",
    "CatalogTax",
    "CatalogV1Id",
    "Money",
    "ProductType",
]
