"""Catalog records exchanged with a catalog account.

Only the fields that take part in equivalence checks and reference rewriting
are declared. Everything else a provider sends is kept as extra data so that
a cloned record carries it into the target account unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Money(CatalogBaseModel):
    amount: int | None = None
    currency: str | None = None


class CatalogV1Id(CatalogBaseModel):
    catalog_v1_id: str | None = None
    location_id: str | None = None


class CatalogCategory(CatalogBaseModel):
    name: str | None = None


class CatalogDiscount(CatalogBaseModel):
    name: str | None = None
    discount_type: str | None = None
    percentage: str | None = None
    amount_money: Money | None = None


class CatalogTax(CatalogBaseModel):
    name: str | None = None
    percentage: str | None = None
    inclusion_type: str | None = None


class CatalogModifier(CatalogBaseModel):
    name: str | None = None
    price_money: Money | None = None
    modifier_list_id: str | None = None


class CatalogModifierList(CatalogBaseModel):
    name: str | None = None
    modifiers: list[CatalogObject] = Field(default_factory=list["CatalogObject"])


class CatalogItemModifierListInfo(CatalogBaseModel):
    modifier_list_id: str


class CatalogItemVariation(CatalogBaseModel):
    item_id: str | None = None
    name: str | None = None
    price_money: Money | None = None
    location_overrides: list[dict[str, object]] | None = None


class CatalogItem(CatalogBaseModel):
    name: str | None = None
    category_id: str | None = None
    tax_ids: list[str] = Field(default_factory=list)
    modifier_list_info: list[CatalogItemModifierListInfo] = Field(
        default_factory=list["CatalogItemModifierListInfo"]
    )
    variations: list[CatalogObject] = Field(default_factory=list["CatalogObject"])
    product_type: str | None = None


class CatalogObject(CatalogBaseModel):
    """One record of a catalog account, tagged by ``type``.

    ``id`` holds the source id when read, a ``#``-prefixed correlation id once
    sanitized and the server-assigned id after a batch upsert.
    """

    type: str
    id: str
    version: int | None = None
    updated_at: str | None = None
    is_deleted: bool | None = None
    present_at_all_locations: bool | None = None
    present_at_location_ids: list[str] | None = None
    absent_at_location_ids: list[str] | None = None
    catalog_v1_ids: list[CatalogV1Id] | None = None

    category_data: CatalogCategory | None = None
    discount_data: CatalogDiscount | None = None
    tax_data: CatalogTax | None = None
    modifier_list_data: CatalogModifierList | None = None
    modifier_data: CatalogModifier | None = None
    item_data: CatalogItem | None = None
    item_variation_data: CatalogItemVariation | None = None

    def require_category_data(self) -> CatalogCategory:
        return _require(self.category_data, self, "category_data")

    def require_discount_data(self) -> CatalogDiscount:
        return _require(self.discount_data, self, "discount_data")

    def require_tax_data(self) -> CatalogTax:
        return _require(self.tax_data, self, "tax_data")

    def require_modifier_list_data(self) -> CatalogModifierList:
        return _require(self.modifier_list_data, self, "modifier_list_data")

    def require_modifier_data(self) -> CatalogModifier:
        return _require(self.modifier_data, self, "modifier_data")

    def require_item_data(self) -> CatalogItem:
        return _require(self.item_data, self, "item_data")

    def require_item_variation_data(self) -> CatalogItemVariation:
        return _require(self.item_variation_data, self, "item_variation_data")

    def to_payload(self) -> dict[str, object]:
        """Serialise for the wire, omitting cleared (``None``) fields."""

        return self.model_dump(mode="json", exclude_none=True)


def _require[T](value: T | None, obj: CatalogObject, field_name: str) -> T:
    if value is None:
        raise ValueError(f"Catalog object {obj.id} ({obj.type}) has no {field_name}")
    return value


CatalogModifierList.model_rebuild()
CatalogItem.model_rebuild()
