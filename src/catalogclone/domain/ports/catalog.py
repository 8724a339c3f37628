"""Ports for reading and writing a catalog account."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogclone.domain.model import CatalogObject


@dataclass(frozen=True, slots=True)
class RemoteError:
    """One entry of the error list a catalog account returns."""

    category: str | None = None
    code: str | None = None
    detail: str | None = None
    field: str | None = None

    def __str__(self) -> str:
        parts = [part for part in (self.category, self.code) if part]
        label = "/".join(parts) or "error"
        suffix = f" (field: {self.field})" if self.field else ""
        return f"{label}: {self.detail or 'no detail'}{suffix}"


@dataclass(slots=True)
class CatalogPage:
    """One page of a catalog listing; ``cursor`` is ``None`` on the last page."""

    objects: list[CatalogObject] = field(default_factory=list["CatalogObject"])
    cursor: str | None = None
    errors: list[RemoteError] = field(default_factory=list[RemoteError])


@dataclass(frozen=True, slots=True)
class IdMapping:
    """Pairs a client-supplied correlation id with the id the account assigned."""

    client_object_id: str
    object_id: str


@dataclass(slots=True)
class BatchUpsertResult:
    objects: list[CatalogObject] = field(default_factory=list["CatalogObject"])
    id_mappings: list[IdMapping] = field(default_factory=list[IdMapping])
    errors: list[RemoteError] = field(default_factory=list[RemoteError])


@runtime_checkable
class CatalogGateway(Protocol):
    """Synchronous access to one catalog account."""

    def list_catalog(self, *, object_type: str, cursor: str | None = None) -> CatalogPage: ...

    def batch_upsert(
        self,
        *,
        idempotency_key: str,
        objects: Sequence[CatalogObject],
    ) -> BatchUpsertResult: ...


__all__ = ["BatchUpsertResult", "CatalogGateway", "CatalogPage", "IdMapping", "RemoteError"]
