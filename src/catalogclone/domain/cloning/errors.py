"""Errors raised while cloning catalog objects between accounts.

Every error here is fatal for the run: nothing is retried or rolled back, and
objects written to the target account by earlier pages stay written.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from catalogclone.domain.ports import RemoteError

    from .orchestrator import CloneAccountResult


class CloneCatalogError(RuntimeError):
    """Base class for errors that abort a clone run."""

    partial_result: CloneAccountResult | None = None


class CatalogTransportError(CloneCatalogError):
    """A catalog account could not be reached or refused the credentials."""


class RemoteValidationError(CloneCatalogError):
    """A catalog account answered a list or upsert call with a non-empty error list."""

    def __init__(self, operation: str, errors: Sequence[RemoteError]) -> None:
        self.operation = operation
        self.errors = tuple(errors)
        details = "; ".join(str(error) for error in self.errors)
        super().__init__(f"{operation} failed with {len(self.errors)} error(s): {details}")


class ReconciliationError(CloneCatalogError):
    """A cloned object is missing from the batch upsert response."""

    def __init__(self, source_id: str, correlation_id: str) -> None:
        self.source_id = source_id
        self.correlation_id = correlation_id
        super().__init__(
            f"Cloned catalog object not found in batch response: {source_id} "
            f"(sent as {correlation_id})"
        )


class ReferenceIntegrityError(CloneCatalogError):
    """A mandatory reference points at an object the run has not cloned."""

    def __init__(self, *, object_type: str, source_id: str, referenced_by: str) -> None:
        self.object_type = object_type
        self.source_id = source_id
        self.referenced_by = referenced_by
        super().__init__(
            f"No target {object_type} for source id {source_id} "
            f"(referenced by {referenced_by}); clone {object_type} objects first"
        )
