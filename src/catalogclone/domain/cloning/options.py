"""What a clone run copies, per object type."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class DiscountOptions:
    present_at_all_locations: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class ItemOptions:
    present_at_all_locations: bool = False
    include_applied_taxes: bool = False
    include_applied_modifier_lists: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class CloneOptions:
    """Per-type switches for ``clone_account_data``.

    ``None`` for ``discounts`` or ``items`` skips that type. Cloning items
    always clones categories first, since items reference them.
    """

    discounts: DiscountOptions | None = None
    modifier_lists: bool = False
    taxes: bool = False
    items: ItemOptions | None = None

    def __post_init__(self) -> None:
        if self.items is None:
            return
        if self.items.include_applied_taxes and not self.taxes:
            raise ValueError("Including applied taxes requires cloning taxes")
        if self.items.include_applied_modifier_lists and not self.modifier_lists:
            raise ValueError("Including applied modifier lists requires cloning modifier lists")

    @property
    def is_empty(self) -> bool:
        return (
            self.discounts is None
            and not self.modifier_lists
            and not self.taxes
            and self.items is None
        )
