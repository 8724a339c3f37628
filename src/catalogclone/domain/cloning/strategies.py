"""Per-type clone strategies.

Each catalog object type that can be cloned has one strategy bundling its
fingerprint, sanitizer, merge and eligibility rules. The set is closed: a run
looks strategies up in the table built by ``build_strategy_table`` and never
discovers them at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Protocol

from catalogclone.domain.model import CatalogObjectType, ProductType

from .fingerprint import (
    category_fingerprint,
    discount_fingerprint,
    item_fingerprint,
    modifier_fingerprint,
    modifier_list_fingerprint,
    tax_fingerprint,
    variation_fingerprint,
)
from .sanitize import (
    new_correlation_id,
    prepare_modifier,
    prepare_variation,
    strip_metadata,
)

if TYPE_CHECKING:
    from catalogclone.domain.model import CatalogItemModifierListInfo, CatalogObject

    from .options import CloneOptions
    from .references import ReferenceMaps
    from .sanitize import IdFactory

log = getLogger(__name__)

_REGULAR_PRODUCT_TYPES = frozenset({ProductType.REGULAR, None})


class CloneStrategy(Protocol):
    """Operations a type-clone needs for one object type."""

    @property
    def object_type(self) -> CatalogObjectType: ...

    def is_eligible(self, obj: CatalogObject) -> bool: ...

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps
    ) -> str: ...

    def sanitize(self, obj: CatalogObject, *, references: ReferenceMaps) -> CatalogObject: ...

    def merge(self, source: CatalogObject, target: CatalogObject) -> CatalogObject | None: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class _BaseStrategy:
    present_at_all_locations: bool = False
    id_factory: IdFactory = field(default=new_correlation_id, repr=False)

    def is_eligible(self, obj: CatalogObject) -> bool:  # noqa: ARG002
        return True

    def sanitize(
        self, obj: CatalogObject, *, references: ReferenceMaps  # noqa: ARG002
    ) -> CatalogObject:
        return strip_metadata(
            obj,
            present_at_all_locations=self.present_at_all_locations,
            id_factory=self.id_factory,
        )

    def merge(
        self, source: CatalogObject, target: CatalogObject  # noqa: ARG002
    ) -> CatalogObject | None:
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class CategoryStrategy(_BaseStrategy):
    object_type: ClassVar[CatalogObjectType] = CatalogObjectType.CATEGORY
    present_at_all_locations: bool = True

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps  # noqa: ARG002
    ) -> str:
        return category_fingerprint(obj.require_category_data())


@dataclass(frozen=True, slots=True, kw_only=True)
class DiscountStrategy(_BaseStrategy):
    object_type: ClassVar[CatalogObjectType] = CatalogObjectType.DISCOUNT

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps  # noqa: ARG002
    ) -> str:
        return discount_fingerprint(obj.require_discount_data())


@dataclass(frozen=True, slots=True, kw_only=True)
class TaxStrategy(_BaseStrategy):
    object_type: ClassVar[CatalogObjectType] = CatalogObjectType.TAX

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps  # noqa: ARG002
    ) -> str:
        return tax_fingerprint(obj.require_tax_data())


@dataclass(frozen=True, slots=True, kw_only=True)
class ModifierListStrategy(_BaseStrategy):
    """Modifier lists match by name; missing modifiers are merged into the target list."""

    object_type: ClassVar[CatalogObjectType] = CatalogObjectType.MODIFIER_LIST
    present_at_all_locations: bool = True

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps  # noqa: ARG002
    ) -> str:
        return modifier_list_fingerprint(obj.require_modifier_list_data())

    def sanitize(self, obj: CatalogObject, *, references: ReferenceMaps) -> CatalogObject:
        stripped = _BaseStrategy.sanitize(self, obj, references=references)
        data = stripped.require_modifier_list_data()
        modifiers = [
            prepare_modifier(stripped, modifier, id_factory=self.id_factory)
            for modifier in data.modifiers
        ]
        return stripped.model_copy(
            update={"modifier_list_data": data.model_copy(update={"modifiers": modifiers})}
        )

    def merge(self, source: CatalogObject, target: CatalogObject) -> CatalogObject | None:
        target_data = target.require_modifier_list_data()
        known = {
            modifier_fingerprint(modifier.require_modifier_data())
            for modifier in target_data.modifiers
        }

        added: list[CatalogObject] = []
        for modifier in source.require_modifier_list_data().modifiers:
            key = modifier_fingerprint(modifier.require_modifier_data())
            if key in known:
                continue
            added.append(prepare_modifier(target, modifier, id_factory=self.id_factory))
            known.add(key)

        if not added:
            return None
        data = target_data.model_copy(update={"modifiers": [*target_data.modifiers, *added]})
        return target.model_copy(update={"modifier_list_data": data})


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemStrategy(_BaseStrategy):
    """Items match by name and category; missing variations are merged into the target item.

    Applied taxes and modifier lists are carried over only when the matching
    option is set. Those references are mandatory: a tax or modifier list the
    run has not cloned aborts the run. The category reference is optional and
    is dropped when the category has no counterpart.
    """

    object_type: ClassVar[CatalogObjectType] = CatalogObjectType.ITEM
    include_applied_taxes: bool = False
    include_applied_modifier_lists: bool = False

    def is_eligible(self, obj: CatalogObject) -> bool:
        item = obj.item_data
        return item is not None and item.product_type in _REGULAR_PRODUCT_TYPES

    def fingerprint(
        self, obj: CatalogObject, *, from_source: bool, references: ReferenceMaps
    ) -> str:
        return item_fingerprint(
            obj.require_item_data(), from_source=from_source, references=references
        )

    def sanitize(self, obj: CatalogObject, *, references: ReferenceMaps) -> CatalogObject:
        stripped = _BaseStrategy.sanitize(self, obj, references=references)
        item = stripped.require_item_data()

        category_id = references.category_id(item.category_id)
        if item.category_id is not None and category_id is None:
            log.warning(
                "No target category for source id %s (item %s); cloning it without a category",
                item.category_id,
                obj.id,
            )

        tax_ids: list[str] = []
        if self.include_applied_taxes:
            tax_ids = [references.tax_id(tax_id, referenced_by=obj.id) for tax_id in item.tax_ids]

        modifier_list_info: list[CatalogItemModifierListInfo] = []
        if self.include_applied_modifier_lists:
            modifier_list_info = [
                info.model_copy(
                    update={
                        "modifier_list_id": references.modifier_list_id(
                            info.modifier_list_id, referenced_by=obj.id
                        )
                    }
                )
                for info in item.modifier_list_info
            ]

        variations = [
            prepare_variation(stripped, variation, id_factory=self.id_factory)
            for variation in item.variations
        ]
        data = item.model_copy(
            update={
                "category_id": category_id,
                "tax_ids": tax_ids,
                "modifier_list_info": modifier_list_info,
                "variations": variations,
            }
        )
        return stripped.model_copy(update={"item_data": data})

    def merge(self, source: CatalogObject, target: CatalogObject) -> CatalogObject | None:
        target_item = target.require_item_data()
        known = {
            variation_fingerprint(variation.require_item_variation_data())
            for variation in target_item.variations
        }

        added: list[CatalogObject] = []
        for variation in source.require_item_data().variations:
            key = variation_fingerprint(variation.require_item_variation_data())
            if key in known:
                continue
            added.append(prepare_variation(target, variation, id_factory=self.id_factory))
            known.add(key)

        if not added:
            return None
        data = target_item.model_copy(update={"variations": [*target_item.variations, *added]})
        return target.model_copy(update={"item_data": data})


def build_strategy_table(
    options: CloneOptions,
    *,
    id_factory: IdFactory = new_correlation_id,
) -> dict[CatalogObjectType, CloneStrategy]:
    """Strategies for every type ``options`` asks to clone, in run order."""

    table: dict[CatalogObjectType, CloneStrategy] = {}
    if options.discounts is not None:
        table[CatalogObjectType.DISCOUNT] = DiscountStrategy(
            present_at_all_locations=options.discounts.present_at_all_locations,
            id_factory=id_factory,
        )
    if options.modifier_lists:
        table[CatalogObjectType.MODIFIER_LIST] = ModifierListStrategy(id_factory=id_factory)
    if options.taxes:
        table[CatalogObjectType.TAX] = TaxStrategy(id_factory=id_factory)
    if options.items is not None:
        table[CatalogObjectType.CATEGORY] = CategoryStrategy(id_factory=id_factory)
        table[CatalogObjectType.ITEM] = ItemStrategy(
            present_at_all_locations=options.items.present_at_all_locations,
            include_applied_taxes=options.items.include_applied_taxes,
            include_applied_modifier_lists=options.items.include_applied_modifier_lists,
            id_factory=id_factory,
        )
    return table
