"""Reusable fakes and builders for catalog cloning tests."""

from __future__ import annotations

from itertools import count
from typing import TYPE_CHECKING

from catalogclone.domain.cloning import is_correlation_id
from catalogclone.domain.model import (
    CatalogCategory,
    CatalogDiscount,
    CatalogItem,
    CatalogItemModifierListInfo,
    CatalogItemVariation,
    CatalogModifier,
    CatalogModifierList,
    CatalogObject,
    CatalogObjectType,
    CatalogTax,
    Money,
)
from catalogclone.domain.ports import BatchUpsertResult, CatalogPage, IdMapping

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from catalogclone.domain.ports import RemoteError


def _money(amount: int | None) -> Money | None:
    return None if amount is None else Money(amount=amount, currency="USD")


def make_discount(
    object_id: str,
    name: str,
    *,
    discount_type: str = "FIXED_PERCENTAGE",
    percentage: str | None = "10.0",
    amount: int | None = None,
    version: int | None = 1,
    present_at_all_locations: bool | None = False,
    present_at_location_ids: Sequence[str] | None = ("L-SRC-1",),
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.DISCOUNT,
        id=object_id,
        version=version,
        present_at_all_locations=present_at_all_locations,
        present_at_location_ids=(
            None if present_at_location_ids is None else list(present_at_location_ids)
        ),
        discount_data=CatalogDiscount(
            name=name,
            discount_type=discount_type,
            percentage=percentage,
            amount_money=_money(amount),
        ),
    )


def make_tax(
    object_id: str,
    name: str,
    *,
    percentage: str = "8.5",
    inclusion_type: str = "ADDITIVE",
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.TAX,
        id=object_id,
        version=1,
        tax_data=CatalogTax(name=name, percentage=percentage, inclusion_type=inclusion_type),
    )


def make_category(object_id: str, name: str) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.CATEGORY,
        id=object_id,
        version=1,
        category_data=CatalogCategory(name=name),
    )


def make_modifier(
    object_id: str,
    name: str,
    *,
    price: int | None = None,
    modifier_list_id: str | None = None,
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.MODIFIER,
        id=object_id,
        version=1,
        modifier_data=CatalogModifier(
            name=name,
            price_money=_money(price),
            modifier_list_id=modifier_list_id,
        ),
    )


def make_modifier_list(
    object_id: str,
    name: str,
    modifiers: Iterable[CatalogObject] = (),
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.MODIFIER_LIST,
        id=object_id,
        version=1,
        modifier_list_data=CatalogModifierList(name=name, modifiers=list(modifiers)),
    )


def make_variation(
    object_id: str,
    name: str,
    *,
    price: int | None = None,
    item_id: str | None = None,
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.ITEM_VARIATION,
        id=object_id,
        version=1,
        present_at_location_ids=["L-SRC-1"],
        item_variation_data=CatalogItemVariation(
            item_id=item_id,
            name=name,
            price_money=_money(price),
            location_overrides=[{"location_id": "L-SRC-1", "track_inventory": True}],
        ),
    )


def make_item(
    object_id: str,
    name: str,
    *,
    category_id: str | None = None,
    tax_ids: Sequence[str] = (),
    modifier_list_ids: Sequence[str] = (),
    variations: Iterable[CatalogObject] = (),
    product_type: str | None = "REGULAR",
) -> CatalogObject:
    return CatalogObject(
        type=CatalogObjectType.ITEM,
        id=object_id,
        version=1,
        present_at_all_locations=True,
        item_data=CatalogItem(
            name=name,
            category_id=category_id,
            tax_ids=list(tax_ids),
            modifier_list_info=[
                CatalogItemModifierListInfo(modifier_list_id=modifier_list_id)
                for modifier_list_id in modifier_list_ids
            ],
            variations=list(variations),
            product_type=product_type,
        ),
    )


def sequential_ids(prefix: str = "#client-") -> Callable[[], str]:
    """Deterministic stand-in for the correlation id factory."""

    counter = count(1)
    return lambda: f"{prefix}{next(counter)}"


class FakeCatalogAccount:
    """In-memory catalog account implementing the gateway port.

    Listing pages through the objects of one type ``page_size`` at a time, using
    the offset as cursor. Upserts assign ids to ``#``-prefixed client ids,
    including nested variations and modifiers, and return only top-level objects.
    """

    def __init__(
        self,
        objects: Iterable[CatalogObject] = (),
        *,
        page_size: int = 100,
        id_prefix: str = "T",
    ) -> None:
        self.objects: dict[str, CatalogObject] = {obj.id: obj for obj in objects}
        self.page_size = page_size
        self.id_prefix = id_prefix
        self.list_calls: list[tuple[str, str | None]] = []
        self.upsert_calls: list[tuple[str, list[CatalogObject]]] = []
        self.list_errors: dict[str, list[RemoteError]] = {}
        self.upsert_errors: list[RemoteError] = []
        self.omit_id_mappings = False
        self.omit_updated_objects = False
        self._ids = count(1)

    def of_type(self, object_type: str) -> list[CatalogObject]:
        return [obj for obj in self.objects.values() if obj.type == object_type]

    def named(self, object_type: str, name: str) -> list[CatalogObject]:
        return [obj for obj in self.of_type(object_type) if _name_of(obj) == name]

    @property
    def upserted(self) -> list[CatalogObject]:
        return [obj for _, objects in self.upsert_calls for obj in objects]

    def list_catalog(self, *, object_type: str, cursor: str | None = None) -> CatalogPage:
        self.list_calls.append((object_type, cursor))
        errors = self.list_errors.get(object_type)
        if errors:
            return CatalogPage(errors=list(errors))

        matching = self.of_type(object_type)
        start = int(cursor) if cursor else 0
        end = start + self.page_size
        return CatalogPage(
            objects=[obj.model_copy(deep=True) for obj in matching[start:end]],
            cursor=str(end) if end < len(matching) else None,
        )

    def batch_upsert(
        self,
        *,
        idempotency_key: str,
        objects: Sequence[CatalogObject],
    ) -> BatchUpsertResult:
        sent = [obj.model_copy(deep=True) for obj in objects]
        self.upsert_calls.append((idempotency_key, sent))
        if self.upsert_errors:
            return BatchUpsertResult(errors=list(self.upsert_errors))

        assigned: dict[str, str] = {}
        stored = [self._store(obj, assigned) for obj in sent]
        mappings = [
            IdMapping(client_object_id=client_id, object_id=object_id)
            for client_id, object_id in assigned.items()
        ]
        returned = [
            obj
            for original, obj in zip(sent, stored, strict=True)
            if is_correlation_id(original.id) or not self.omit_updated_objects
        ]
        return BatchUpsertResult(
            objects=[obj.model_copy(deep=True) for obj in returned],
            id_mappings=[] if self.omit_id_mappings else mappings,
        )

    def _assign(self, obj: CatalogObject, assigned: dict[str, str]) -> CatalogObject:
        if not is_correlation_id(obj.id):
            return obj.model_copy(update={"version": (obj.version or 0) + 1})
        object_id = f"{self.id_prefix}{next(self._ids)}"
        assigned[obj.id] = object_id
        return obj.model_copy(update={"id": object_id, "version": 1})

    def _store(self, obj: CatalogObject, assigned: dict[str, str]) -> CatalogObject:
        stored = self._assign(obj, assigned)
        if stored.item_data is not None:
            variations: list[CatalogObject] = []
            for variation in stored.item_data.variations:
                child = self._assign(variation, assigned)
                data = child.require_item_variation_data().model_copy(
                    update={"item_id": stored.id}
                )
                variations.append(child.model_copy(update={"item_variation_data": data}))
            stored = stored.model_copy(
                update={"item_data": stored.item_data.model_copy(update={"variations": variations})}
            )
        if stored.modifier_list_data is not None:
            modifiers: list[CatalogObject] = []
            for modifier in stored.modifier_list_data.modifiers:
                child = self._assign(modifier, assigned)
                data = child.require_modifier_data().model_copy(
                    update={"modifier_list_id": stored.id}
                )
                modifiers.append(child.model_copy(update={"modifier_data": data}))
            stored = stored.model_copy(
                update={
                    "modifier_list_data": stored.modifier_list_data.model_copy(
                        update={"modifiers": modifiers}
                    )
                }
            )
        self.objects[stored.id] = stored
        return stored


def _name_of(obj: CatalogObject) -> str | None:
    for data in (
        obj.discount_data,
        obj.tax_data,
        obj.category_data,
        obj.modifier_list_data,
        obj.item_data,
    ):
        if data is not None:
            return data.name
    return None
