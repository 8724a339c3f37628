"""Stripping of source-account metadata before an object is written to the target.

All helpers return new objects. The object read from an account is never
modified, so a record held in a target index cannot be altered by preparing
an upsert.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final
from uuid import uuid4

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogclone.domain.model import CatalogObject

CORRELATION_ID_PREFIX: Final[str] = "#"

type IdFactory = Callable[[], str]


def new_correlation_id() -> str:
    """Temporary client id; the prefix keeps it apart from server-assigned ids."""

    return f"{CORRELATION_ID_PREFIX}{uuid4()}"


def is_correlation_id(object_id: str) -> bool:
    return object_id.startswith(CORRELATION_ID_PREFIX)


def strip_metadata(
    obj: CatalogObject,
    *,
    present_at_all_locations: bool = False,
    id_factory: IdFactory = new_correlation_id,
) -> CatalogObject:
    """Copy of ``obj`` with a fresh correlation id and no source-account metadata."""

    update: dict[str, object] = {
        "id": id_factory(),
        "version": None,
        "updated_at": None,
        "catalog_v1_ids": [],
        "present_at_location_ids": [],
        "absent_at_location_ids": [],
    }
    if present_at_all_locations:
        update["present_at_all_locations"] = True
    return obj.model_copy(update=update, deep=True)


def strip_nested_metadata(
    parent: CatalogObject,
    child: CatalogObject,
    *,
    id_factory: IdFactory = new_correlation_id,
) -> CatalogObject:
    """Copy of a nested ``child`` that is present exactly where ``parent`` is."""

    stripped = strip_metadata(child, id_factory=id_factory)
    return stripped.model_copy(
        update={
            "present_at_all_locations": parent.present_at_all_locations,
            "present_at_location_ids": _copy_ids(parent.present_at_location_ids),
            "absent_at_location_ids": _copy_ids(parent.absent_at_location_ids),
        }
    )


def prepare_variation(
    parent: CatalogObject,
    variation: CatalogObject,
    *,
    id_factory: IdFactory = new_correlation_id,
) -> CatalogObject:
    """Nested-sanitize an item variation so it belongs to ``parent``.

    Location price overrides name source-account locations and are dropped.
    """

    stripped = strip_nested_metadata(parent, variation, id_factory=id_factory)
    data = stripped.require_item_variation_data().model_copy(
        update={"item_id": parent.id, "location_overrides": []}
    )
    return stripped.model_copy(update={"item_variation_data": data})


def prepare_modifier(
    parent: CatalogObject,
    modifier: CatalogObject,
    *,
    id_factory: IdFactory = new_correlation_id,
) -> CatalogObject:
    """Nested-sanitize a modifier so it belongs to the ``parent`` modifier list."""

    stripped = strip_nested_metadata(parent, modifier, id_factory=id_factory)
    data = stripped.require_modifier_data().model_copy(update={"modifier_list_id": parent.id})
    return stripped.model_copy(update={"modifier_data": data})


def _copy_ids(ids: list[str] | None) -> list[str] | None:
    return None if ids is None else list(ids)
