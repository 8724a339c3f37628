"""Reconciliation and cloning of catalog objects between two accounts.

One run clones type by type:
1) index the target account's objects of the type by fingerprint
2) page through the source account's objects of the type
3) clone objects without a target match, merge sub-objects into matches
4) upsert the page's changes in one batch and map source ids to target objects
5) publish the map so later types can rewrite references to this type
"""

from __future__ import annotations

from .errors import (
    CatalogTransportError,
    CloneCatalogError,
    ReconciliationError,
    ReferenceIntegrityError,
    RemoteValidationError,
)
from .fingerprint import DELIMITER, amount_or_null
from .index import build_target_index
from .options import CloneOptions, DiscountOptions, ItemOptions
from .orchestrator import (
    CloneAccountResult,
    TypeCloneResult,
    clone_account_data,
    clone_catalog_type,
)
from .reconcile import reconcile_batch_response
from .references import ReferenceMaps, SourceToTargetMap
from .sanitize import CORRELATION_ID_PREFIX, is_correlation_id, new_correlation_id
from .strategies import (
    CategoryStrategy,
    CloneStrategy,
    DiscountStrategy,
    ItemStrategy,
    ModifierListStrategy,
    TaxStrategy,
    build_strategy_table,
)

__all__ = [
    "CORRELATION_ID_PREFIX",
    "DELIMITER",
    "CatalogTransportError",
    "CategoryStrategy",
    "CloneAccountResult",
    "CloneCatalogError",
    "CloneOptions",
    "CloneStrategy",
    "DiscountOptions",
    "DiscountStrategy",
    "ItemOptions",
    "ItemStrategy",
    "ModifierListStrategy",
    "ReconciliationError",
    "ReferenceIntegrityError",
    "ReferenceMaps",
    "RemoteValidationError",
    "SourceToTargetMap",
    "TaxStrategy",
    "TypeCloneResult",
    "amount_or_null",
    "build_strategy_table",
    "build_target_index",
    "clone_account_data",
    "clone_catalog_type",
    "is_correlation_id",
    "new_correlation_id",
    "reconcile_batch_response",
]
