from __future__ import annotations

import logging

import pytest

from catalogclone.domain.cloning import (
    CategoryStrategy,
    CloneOptions,
    DiscountOptions,
    ItemOptions,
    ItemStrategy,
    ModifierListStrategy,
    ReferenceIntegrityError,
    ReferenceMaps,
    build_strategy_table,
)
from catalogclone.domain.cloning.references import freeze
from catalogclone.domain.model import CatalogObjectType
from tests.support.catalog import (
    make_category,
    make_item,
    make_modifier,
    make_modifier_list,
    make_tax,
    make_variation,
    sequential_ids,
)


def _references() -> ReferenceMaps:
    return ReferenceMaps(
        categories=freeze({"C1": make_category("C9", "Drinks")}),
        taxes=freeze({"X1": make_tax("X9", "Sales")}),
        modifier_lists=freeze({"ML1": make_modifier_list("ML9", "Milk")}),
    )


@pytest.mark.parametrize(
    ("product_type", "eligible"),
    [
        ("REGULAR", True),
        (None, True),
        ("GIFT_CARD", False),
        ("APPOINTMENTS_SERVICE", False),
    ],
)
def test_item_eligibility_by_product_type(product_type: str | None, eligible: bool) -> None:
    item = make_item("I1", "Latte", product_type=product_type)

    assert ItemStrategy().is_eligible(item) is eligible


def test_item_sanitize_rewrites_category_and_variations() -> None:
    strategy = ItemStrategy(id_factory=sequential_ids())
    source = make_item(
        "I1",
        "Latte",
        category_id="C1",
        variations=[make_variation("V1", "Small", price=350, item_id="I1")],
    )

    sanitized = strategy.sanitize(source, references=_references())

    item = sanitized.require_item_data()
    assert sanitized.id == "#client-1"
    assert item.category_id == "C9"
    [variation] = item.variations
    assert variation.id == "#client-2"
    assert variation.require_item_variation_data().item_id == "#client-1"
    assert source.require_item_data().category_id == "C1"


def test_item_sanitize_drops_unknown_category(caplog: pytest.LogCaptureFixture) -> None:
    source = make_item("I1", "Latte", category_id="C-unknown")

    with caplog.at_level(logging.WARNING):
        sanitized = ItemStrategy().sanitize(source, references=_references())

    assert sanitized.require_item_data().category_id is None
    assert "C-unknown" in caplog.text


def test_item_sanitize_drops_applied_references_by_default() -> None:
    source = make_item("I1", "Latte", tax_ids=["X1"], modifier_list_ids=["ML1"])

    sanitized = ItemStrategy().sanitize(source, references=_references())

    item = sanitized.require_item_data()
    assert item.tax_ids == []
    assert item.modifier_list_info == []


def test_item_sanitize_rewrites_applied_references_when_included() -> None:
    strategy = ItemStrategy(include_applied_taxes=True, include_applied_modifier_lists=True)
    source = make_item("I1", "Latte", tax_ids=["X1"], modifier_list_ids=["ML1"])

    sanitized = strategy.sanitize(source, references=_references())

    item = sanitized.require_item_data()
    assert item.tax_ids == ["X9"]
    assert [info.modifier_list_id for info in item.modifier_list_info] == ["ML9"]


def test_item_sanitize_rejects_tax_without_counterpart() -> None:
    strategy = ItemStrategy(include_applied_taxes=True)
    source = make_item("I1", "Latte", tax_ids=["X-unknown"])

    with pytest.raises(ReferenceIntegrityError) as exc:
        strategy.sanitize(source, references=_references())

    assert exc.value.source_id == "X-unknown"
    assert exc.value.referenced_by == "I1"


def test_item_merge_adds_only_missing_variations() -> None:
    strategy = ItemStrategy(id_factory=sequential_ids())
    target = make_item(
        "T5",
        "Latte",
        variations=[make_variation("TV1", "Small", price=350, item_id="T5")],
    )
    source = make_item(
        "I1",
        "Latte",
        variations=[
            make_variation("V1", "Small", price=350, item_id="I1"),
            make_variation("V2", "Large", price=450, item_id="I1"),
        ],
    )

    merged = strategy.merge(source, target)

    assert merged is not None
    assert merged.id == "T5"
    variations = merged.require_item_data().variations
    assert [variation.id for variation in variations] == ["TV1", "#client-1"]
    assert variations[1].require_item_variation_data().item_id == "T5"
    assert len(target.require_item_data().variations) == 1


def test_item_merge_without_new_variations_returns_none() -> None:
    target = make_item("T5", "Latte", variations=[make_variation("TV1", "Small", price=350)])
    source = make_item("I1", "Latte", variations=[make_variation("V1", "Small", price=350)])

    assert ItemStrategy().merge(source, target) is None


def test_modifier_list_merge_adds_missing_modifiers() -> None:
    strategy = ModifierListStrategy(id_factory=sequential_ids())
    target = make_modifier_list("ML9", "Milk", [make_modifier("TM1", "Whole")])
    source = make_modifier_list(
        "ML1",
        "Milk",
        [make_modifier("M1", "Whole"), make_modifier("M2", "Oat", price=50)],
    )

    merged = strategy.merge(source, target)

    assert merged is not None
    modifiers = merged.require_modifier_list_data().modifiers
    assert [modifier.id for modifier in modifiers] == ["TM1", "#client-1"]
    assert modifiers[1].require_modifier_data().modifier_list_id == "ML9"


def test_modifier_list_sanitize_prepares_nested_modifiers() -> None:
    strategy = ModifierListStrategy(id_factory=sequential_ids())
    source = make_modifier_list("ML1", "Milk", [make_modifier("M1", "Oat", modifier_list_id="ML1")])

    sanitized = strategy.sanitize(source, references=ReferenceMaps())

    [modifier] = sanitized.require_modifier_list_data().modifiers
    assert sanitized.present_at_all_locations is True
    assert modifier.id == "#client-2"
    assert modifier.require_modifier_data().modifier_list_id == "#client-1"


def test_category_sanitize_forces_all_locations() -> None:
    sanitized = CategoryStrategy().sanitize(
        make_category("C1", "Drinks"), references=ReferenceMaps()
    )

    assert sanitized.present_at_all_locations is True


def test_strategy_table_follows_dependency_order() -> None:
    options = CloneOptions(
        discounts=DiscountOptions(),
        modifier_lists=True,
        taxes=True,
        items=ItemOptions(include_applied_taxes=True),
    )

    table = build_strategy_table(options)

    assert list(table) == [
        CatalogObjectType.DISCOUNT,
        CatalogObjectType.MODIFIER_LIST,
        CatalogObjectType.TAX,
        CatalogObjectType.CATEGORY,
        CatalogObjectType.ITEM,
    ]


def test_strategy_table_only_holds_selected_types() -> None:
    table = build_strategy_table(CloneOptions(taxes=True))

    assert list(table) == [CatalogObjectType.TAX]
