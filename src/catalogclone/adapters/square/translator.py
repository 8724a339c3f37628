"""Translate Square Catalog API payloads into catalog port results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from catalogclone.domain.ports import BatchUpsertResult, CatalogPage, IdMapping, RemoteError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import BatchUpsertCatalogObjectsResponse, ListCatalogResponse, SquareError


def translate_errors(errors: Iterable[SquareError]) -> list[RemoteError]:
    return [
        RemoteError(
            category=error.category,
            code=error.code,
            detail=error.detail,
            field=error.field,
        )
        for error in errors
    ]


def translate_list_response(response: ListCatalogResponse) -> CatalogPage:
    return CatalogPage(
        objects=list(response.objects),
        cursor=response.cursor,
        errors=translate_errors(response.errors),
    )


def translate_batch_upsert_response(
    response: BatchUpsertCatalogObjectsResponse,
) -> BatchUpsertResult:
    return BatchUpsertResult(
        objects=list(response.objects),
        id_mappings=[
            IdMapping(client_object_id=mapping.client_object_id, object_id=mapping.object_id)
            for mapping in response.id_mappings
        ],
        errors=translate_errors(response.errors),
    )
