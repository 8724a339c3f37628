"""Pydantic models for the Square Catalog API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from catalogclone.domain.model import CatalogObject


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class SquareBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SquareError(SquareBaseModel):
    category: str | None = None
    code: str | None = None
    detail: str | None = None
    field: str | None = None


class ListCatalogResponse(SquareBaseModel):
    objects: list[CatalogObject] = Field(default_factory=list["CatalogObject"])
    cursor: str | None = None
    errors: list[SquareError] = Field(default_factory=list["SquareError"])

    _normalize_cursor = field_validator("cursor", mode="before")(_blank_to_none)


class CatalogIdMapping(SquareBaseModel):
    client_object_id: str
    object_id: str


class CatalogObjectBatch(SquareBaseModel):
    objects: list[CatalogObject]


class BatchUpsertCatalogObjectsRequest(SquareBaseModel):
    idempotency_key: str
    batches: list[CatalogObjectBatch]

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)


class BatchUpsertCatalogObjectsResponse(SquareBaseModel):
    objects: list[CatalogObject] = Field(default_factory=list["CatalogObject"])
    id_mappings: list[CatalogIdMapping] = Field(default_factory=list["CatalogIdMapping"])
    errors: list[SquareError] = Field(default_factory=list["SquareError"])
