"""Equivalence keys for catalog objects.

Two objects of the same type are considered the same object when their
fingerprints are equal. Fingerprints only read payload fields, never ids or
versions, so a record yields the same key in either account once its
references are expressed as target-account ids.

Fields are joined in a fixed order with ``DELIMITER``. A field value that
contains the delimiter can make two different records collide; that is an
accepted limitation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from catalogclone.domain.model import (
        CatalogCategory,
        CatalogDiscount,
        CatalogItem,
        CatalogItemVariation,
        CatalogModifier,
        CatalogModifierList,
        CatalogTax,
        Money,
    )

    from .references import ReferenceMaps

DELIMITER: Final[str] = ":::"
NULL: Final[str] = "null"


def encode_fields(*values: object) -> str:
    return DELIMITER.join(NULL if value is None else str(value) for value in values)


def amount_or_null(money: Money | None) -> str:
    """Exact minor-unit amount, or ``"null"`` when there is no amount."""

    if money is None or money.amount is None:
        return NULL
    return str(money.amount)


def category_fingerprint(category: CatalogCategory) -> str:
    return encode_fields(category.name)


def discount_fingerprint(discount: CatalogDiscount) -> str:
    return encode_fields(
        discount.name,
        discount.discount_type,
        discount.percentage,
        amount_or_null(discount.amount_money),
    )


def tax_fingerprint(tax: CatalogTax) -> str:
    return encode_fields(tax.name, tax.percentage, tax.inclusion_type)


def modifier_list_fingerprint(modifier_list: CatalogModifierList) -> str:
    return encode_fields(modifier_list.name)


def modifier_fingerprint(modifier: CatalogModifier) -> str:
    return encode_fields(modifier.name, amount_or_null(modifier.price_money))


def item_fingerprint(item: CatalogItem, *, from_source: bool, references: ReferenceMaps) -> str:
    """Name plus the target-account category id.

    A source item's category id belongs to the source account and is
    translated first; a target item's category id is used as it is.
    """

    category_id = item.category_id
    if from_source:
        category_id = references.category_id(category_id)
    return encode_fields(item.name, category_id)


def variation_fingerprint(variation: CatalogItemVariation) -> str:
    return encode_fields(variation.name, amount_or_null(variation.price_money))
