"""Cursor-driven listing of one object type."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .errors import RemoteValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from catalogclone.domain.ports import CatalogGateway, CatalogPage, RemoteError

log = getLogger(__name__)


def check_remote_errors(errors: Sequence[RemoteError], *, operation: str) -> None:
    """Log and raise when an account answered with errors."""

    if not errors:
        return
    for error in errors:
        log.error("%s: %s", operation, error)
    raise RemoteValidationError(operation, errors)


def iter_catalog_pages(
    gateway: CatalogGateway,
    object_type: str,
    *,
    account: str,
) -> Iterator[CatalogPage]:
    """Yield every page of ``object_type``; page N+1 is only requested after page N."""

    operation = f"Listing {object_type} in {account} account"
    cursor: str | None = None
    while True:
        page = gateway.list_catalog(object_type=object_type, cursor=cursor)
        check_remote_errors(page.errors, operation=operation)
        yield page
        cursor = page.cursor
        if not cursor:
            return
