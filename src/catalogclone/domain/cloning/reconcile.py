"""Correlation of batch upsert responses with the source objects that were cloned."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .errors import ReconciliationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from catalogclone.domain.model import CatalogObject
    from catalogclone.domain.ports import BatchUpsertResult


def reconcile_batch_response(
    response: BatchUpsertResult,
    correlation_ids: Mapping[str, str],
) -> dict[str, CatalogObject]:
    """Map each source id in ``correlation_ids`` to the object the account stored.

    ``correlation_ids`` maps source ids to the client ids sent with the upsert.
    The response also maps the client ids of nested objects (variations,
    modifiers), but only returns their parents; those mappings are skipped.
    """

    objects_by_id = {obj.id: obj for obj in response.objects}
    objects_by_client_id: dict[str, CatalogObject] = {}
    for mapping in response.id_mappings:
        obj = objects_by_id.get(mapping.object_id)
        if obj is not None:
            objects_by_client_id[mapping.client_object_id] = obj

    resolved: dict[str, CatalogObject] = {}
    for source_id, correlation_id in correlation_ids.items():
        obj = objects_by_client_id.get(correlation_id)
        if obj is None:
            raise ReconciliationError(source_id, correlation_id)
        resolved[source_id] = obj
    return resolved
