"""HTTP client for the Square Catalog API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

import httpx
from pydantic import BaseModel, ValidationError

from catalogclone.adapters.http_resilience import ResilientClient
from catalogclone.domain.cloning.errors import CatalogTransportError

from .schema import (
    BatchUpsertCatalogObjectsRequest,
    BatchUpsertCatalogObjectsResponse,
    CatalogObjectBatch,
    ListCatalogResponse,
)
from .translator import translate_batch_upsert_response, translate_list_response

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine, Sequence
    from types import TracebackType

    from catalogclone.config.http_resilience import ResilienceConfig
    from catalogclone.config.square import SquareAccountConfig
    from catalogclone.domain.model import CatalogObject
    from catalogclone.domain.ports import BatchUpsertResult, CatalogPage

log = getLogger(__name__)

LIST_CATALOG_PATH: Final[str] = "/v2/catalog/list"
BATCH_UPSERT_PATH: Final[str] = "/v2/catalog/batch-upsert"
MAX_OBJECTS_PER_BATCH: Final[int] = 1000
_AUTH_FAILURE_STATUSES: Final[frozenset[int]] = frozenset({401, 403})


class SquareAPIError(CatalogTransportError):
    """Raised when a Square account cannot be reached or rejects the request outright."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SquareCatalogClient:
    """Blocking access to one account's catalog.

    Calls run on a private event loop that lives as long as the client, so the
    connection pool and rate limiter are shared by every call. Close the client
    (or use it as a context manager) when the run is over.
    """

    def __init__(
        self,
        *,
        config: SquareAccountConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._runner: asyncio.Runner | None = None
        self._client: ResilientClient | None = None

    @property
    def account(self) -> str:
        return self._config.name

    def __enter__(self) -> SquareCatalogClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._client is not None:
                self._runner.run(self._client.aclose())
        finally:
            self._runner.close()
            self._runner = None
            self._client = None

    def list_catalog(self, *, object_type: str, cursor: str | None = None) -> CatalogPage:
        params = {"types": object_type}
        if cursor:
            params["cursor"] = cursor
        response = self._run(
            self._request("GET", LIST_CATALOG_PATH, ListCatalogResponse, params=params)
        )
        return translate_list_response(response)

    def batch_upsert(
        self,
        *,
        idempotency_key: str,
        objects: Sequence[CatalogObject],
    ) -> BatchUpsertResult:
        request = BatchUpsertCatalogObjectsRequest(
            idempotency_key=idempotency_key,
            batches=[
                CatalogObjectBatch(objects=list(objects[start : start + MAX_OBJECTS_PER_BATCH]))
                for start in range(0, len(objects), MAX_OBJECTS_PER_BATCH)
            ],
        )
        log.debug(
            "Upserting %d objects in %d batch(es) into %s account",
            len(objects),
            len(request.batches),
            self.account,
        )
        response = self._run(
            self._request(
                "POST",
                BATCH_UPSERT_PATH,
                BatchUpsertCatalogObjectsResponse,
                json=request.to_payload(),
            )
        )
        return translate_batch_upsert_response(response)

    def _run[T](self, coroutine: Coroutine[object, object, T]) -> T:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(coroutine)

    def _http(self) -> ResilientClient:
        if self._client is None:
            self._client = self._client_factory(self._resilience)
        return self._client

    async def _request[TModel: BaseModel](
        self,
        method: str,
        path: str,
        model: type[TModel],
        *,
        params: dict[str, str] | None = None,
        json: object = None,
    ) -> TModel:
        if self._resilience.base_url is None:
            raise SquareAPIError("Missing Square base_url in resilience configuration")

        try:
            if json is None:
                response = await self._http().request(method, path, params=params)
            else:
                response = await self._http().request(method, path, params=params, json=json)
        except httpx.HTTPError as exc:
            raise SquareAPIError(
                f"{method} {path} on {self.account} account failed: {exc}"
            ) from exc

        if response.status_code in _AUTH_FAILURE_STATUSES:
            raise SquareAPIError(
                f"{self.account} account rejected the access token "
                f"(HTTP {response.status_code})",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError:
            payload = None

        # error bodies with a Square error list become errors on the result
        carries_errors = isinstance(payload, dict) and bool(payload.get("errors"))
        if response.is_error and not carries_errors:
            raise SquareAPIError(
                f"{method} {path} on {self.account} account returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        if not isinstance(payload, dict):
            raise SquareAPIError(
                f"Unexpected Square response payload from {self.account} account",
                status_code=response.status_code,
            )

        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise SquareAPIError(
                f"Malformed Square response from {self.account} account: {exc}",
                status_code=response.status_code,
            ) from exc
