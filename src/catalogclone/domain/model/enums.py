"""Catalog enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class CatalogObjectType(StrEnum):
    ITEM = "ITEM"
    ITEM_VARIATION = "ITEM_VARIATION"
    CATEGORY = "CATEGORY"
    DISCOUNT = "DISCOUNT"
    TAX = "TAX"
    MODIFIER = "MODIFIER"
    MODIFIER_LIST = "MODIFIER_LIST"


class ProductType(StrEnum):
    """Sub-classification of items; only regular items take part in cloning."""

    REGULAR = "REGULAR"
    GIFT_CARD = "GIFT_CARD"
    APPOINTMENTS_SERVICE = "APPOINTMENTS_SERVICE"
