"""Fingerprint index over the target account."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .paging import iter_catalog_pages

if TYPE_CHECKING:
    from catalogclone.domain.model import CatalogObject
    from catalogclone.domain.ports import CatalogGateway

    from .references import ReferenceMaps
    from .strategies import CloneStrategy

type TargetIndex = dict[str, CatalogObject]

log = getLogger(__name__)


def build_target_index(
    target: CatalogGateway,
    strategy: CloneStrategy,
    *,
    references: ReferenceMaps,
) -> TargetIndex:
    """Fingerprint every eligible target object of the strategy's type.

    When two target objects share a fingerprint the later one wins; the
    earlier one is never matched.
    """

    object_type = strategy.object_type
    log.info("  Retrieving %s from target account", object_type)
    index: TargetIndex = {}
    count = 0
    for page in iter_catalog_pages(target, object_type, account="target"):
        for obj in page.objects:
            if not strategy.is_eligible(obj):
                continue
            key = strategy.fingerprint(obj, from_source=False, references=references)
            previous = index.get(key)
            if previous is not None:
                log.debug(
                    "Target %s %s shadows %s (fingerprint %r)",
                    object_type,
                    obj.id,
                    previous.id,
                    key,
                )
            index[key] = obj
        count += len(page.objects)
        log.info("    Retrieved %d total", count)
    return index
