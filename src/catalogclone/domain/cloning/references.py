"""Read-only source id -> target object maps handed from one type-clone to the next."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from catalogclone.domain.model import CatalogObjectType

from .errors import ReferenceIntegrityError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalogclone.domain.model import CatalogObject

type SourceToTargetMap = dict[str, CatalogObject]


def _empty() -> Mapping[str, CatalogObject]:
    return MappingProxyType({})


def freeze(source_to_target: SourceToTargetMap) -> Mapping[str, CatalogObject]:
    """Publish a finished map; later stages only ever get this read-only view."""

    return MappingProxyType(dict(source_to_target))


@dataclass(frozen=True, slots=True, kw_only=True)
class ReferenceMaps:
    """Maps published by completed type-clones, keyed by source id."""

    categories: Mapping[str, CatalogObject] = field(default_factory=_empty)
    taxes: Mapping[str, CatalogObject] = field(default_factory=_empty)
    modifier_lists: Mapping[str, CatalogObject] = field(default_factory=_empty)

    def category_id(self, source_id: str | None) -> str | None:
        """Translate an optional category reference; unknown ids become ``None``."""

        if source_id is None:
            return None
        target = self.categories.get(source_id)
        return None if target is None else target.id

    def tax_id(self, source_id: str, *, referenced_by: str) -> str:
        return _require_target(
            self.taxes, source_id, CatalogObjectType.TAX, referenced_by=referenced_by
        )

    def modifier_list_id(self, source_id: str, *, referenced_by: str) -> str:
        return _require_target(
            self.modifier_lists,
            source_id,
            CatalogObjectType.MODIFIER_LIST,
            referenced_by=referenced_by,
        )


def _require_target(
    mapping: Mapping[str, CatalogObject],
    source_id: str,
    object_type: CatalogObjectType,
    *,
    referenced_by: str,
) -> str:
    target = mapping.get(source_id)
    if target is None:
        raise ReferenceIntegrityError(
            object_type=object_type, source_id=source_id, referenced_by=referenced_by
        )
    return target.id
