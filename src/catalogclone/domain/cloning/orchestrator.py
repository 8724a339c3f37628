"""Type-by-type cloning of a catalog account into another account."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING
from uuid import uuid4

from catalogclone.domain.model import CatalogObjectType

from .errors import CloneCatalogError, ReconciliationError
from .index import build_target_index
from .paging import check_remote_errors, iter_catalog_pages
from .reconcile import reconcile_batch_response
from .references import ReferenceMaps, SourceToTargetMap, freeze
from .sanitize import new_correlation_id
from .strategies import build_strategy_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from catalogclone.domain.model import CatalogObject
    from catalogclone.domain.ports import BatchUpsertResult, CatalogGateway

    from .index import TargetIndex
    from .options import CloneOptions
    from .sanitize import IdFactory
    from .strategies import CloneStrategy

log = getLogger(__name__)


def new_idempotency_key() -> str:
    return str(uuid4())


@dataclass(slots=True)
class TypeCloneResult:
    """Counters and the source id -> target object map of one type-clone."""

    object_type: CatalogObjectType
    retrieved: int = 0
    cloned: int = 0
    merged: int = 0
    source_to_target: SourceToTargetMap = field(default_factory=dict[str, "CatalogObject"])


@dataclass(slots=True)
class CloneAccountResult:
    """Per-type results of a run, in the order the types were cloned."""

    types: dict[CatalogObjectType, TypeCloneResult] = field(
        default_factory=dict[CatalogObjectType, TypeCloneResult]
    )

    @property
    def cloned(self) -> int:
        return sum(result.cloned for result in self.types.values())

    @property
    def merged(self) -> int:
        return sum(result.merged for result in self.types.values())


@dataclass(slots=True)
class _PageUpserts:
    """Objects queued for the single batch upsert issued after a source page."""

    objects: dict[str, CatalogObject] = field(default_factory=dict[str, "CatalogObject"])
    correlation_ids: dict[str, str] = field(default_factory=dict[str, str])
    merges: dict[str, tuple[str, str]] = field(default_factory=dict[str, tuple[str, str]])

    def __bool__(self) -> bool:
        return bool(self.objects)

    def add_clone(self, source_id: str, sanitized: CatalogObject) -> None:
        self.correlation_ids[source_id] = sanitized.id
        self.objects[sanitized.id] = sanitized

    def add_merge(self, source_id: str, merged: CatalogObject, *, fingerprint: str) -> None:
        # several source objects may merge into one target object; the latest
        # copy already carries every earlier addition
        self.objects[merged.id] = merged
        self.merges[source_id] = (merged.id, fingerprint)


def clone_catalog_type(
    *,
    source: CatalogGateway,
    target: CatalogGateway,
    strategy: CloneStrategy,
    references: ReferenceMaps | None = None,
    key_factory: Callable[[], str] = new_idempotency_key,
    result: TypeCloneResult | None = None,
) -> TypeCloneResult:
    """Clone every eligible object of one type from ``source`` into ``target``.

    ``references`` holds the maps of type-clones that already finished; the
    item strategy reads category, tax and modifier list ids from it. Any error
    aborts the type-clone, leaving upserts of earlier pages in place.
    """

    object_type = strategy.object_type
    active_references = references or ReferenceMaps()
    type_result = result or TypeCloneResult(object_type=object_type)
    log.info("Cloning %s", object_type)

    index = build_target_index(target, strategy, references=active_references)

    log.info("  Retrieving %s from source account", object_type)
    for page_number, page in enumerate(iter_catalog_pages(source, object_type, account="source")):
        # only an empty first page means "nothing to clone"; a filtered-out
        # first page can still be followed by eligible objects
        if page_number == 0 and not page.objects and page.cursor is None:
            log.info("    No %s found in source account.", object_type.lower())
            break

        upserts = _PageUpserts()
        cloned = merged = 0
        for source_obj in page.objects:
            if not strategy.is_eligible(source_obj):
                continue
            fingerprint = strategy.fingerprint(
                source_obj, from_source=True, references=active_references
            )
            existing = index.get(fingerprint)
            if existing is None:
                upserts.add_clone(
                    source_obj.id, strategy.sanitize(source_obj, references=active_references)
                )
                cloned += 1
                continue

            merged_obj = strategy.merge(source_obj, existing)
            if merged_obj is not None:
                index[fingerprint] = merged_obj
                upserts.add_merge(source_obj.id, merged_obj, fingerprint=fingerprint)
                merged += 1
            type_result.source_to_target[source_obj.id] = existing

        if upserts:
            response = _upsert(target, upserts, key_factory=key_factory)
            type_result.source_to_target.update(
                reconcile_batch_response(response, upserts.correlation_ids)
            )
            _apply_merge_results(response, upserts, type_result.source_to_target, index)

        type_result.retrieved += len(page.objects)
        type_result.cloned += cloned
        type_result.merged += merged
        log.info(
            "    Retrieved %d objects (%d cloned, %d merged)",
            len(page.objects),
            cloned,
            merged,
        )

    return type_result


def clone_account_data(
    options: CloneOptions,
    *,
    source: CatalogGateway,
    target: CatalogGateway,
    id_factory: IdFactory = new_correlation_id,
    key_factory: Callable[[], str] = new_idempotency_key,
) -> CloneAccountResult:
    """Clone the types selected by ``options`` in dependency order.

    Discounts, modifier lists, taxes and categories run before items, whose
    references are rewritten with the maps those type-clones publish. A fatal
    error aborts the remaining types; the results gathered up to that point
    are attached to the error as ``partial_result``.
    """

    result = CloneAccountResult()
    if options.is_empty:
        log.info("Nothing selected to clone")
        return result

    references = ReferenceMaps()
    try:
        for object_type, strategy in build_strategy_table(options, id_factory=id_factory).items():
            type_result = TypeCloneResult(object_type=object_type)
            result.types[object_type] = type_result
            clone_catalog_type(
                source=source,
                target=target,
                strategy=strategy,
                references=references,
                key_factory=key_factory,
                result=type_result,
            )
            references = _publish(references, type_result)
    except CloneCatalogError as exc:
        exc.partial_result = result
        raise

    return result


def _upsert(
    target: CatalogGateway,
    upserts: _PageUpserts,
    *,
    key_factory: Callable[[], str],
) -> BatchUpsertResult:
    response = target.batch_upsert(
        idempotency_key=key_factory(),
        objects=list(upserts.objects.values()),
    )
    check_remote_errors(response.errors, operation="Batch upsert into target account")
    return response


def _apply_merge_results(
    response: BatchUpsertResult,
    upserts: _PageUpserts,
    source_to_target: SourceToTargetMap,
    index: TargetIndex,
) -> None:
    """Swap merged target objects for the stored versions the account returned.

    A merged object missing from the response raises ``ReconciliationError``.
    """

    objects_by_id = {obj.id: obj for obj in response.objects}
    for source_id, (target_id, fingerprint) in upserts.merges.items():
        stored = objects_by_id.get(target_id)
        if stored is None:
            raise ReconciliationError(source_id, target_id)
        source_to_target[source_id] = stored
        index[fingerprint] = stored


def _publish(references: ReferenceMaps, type_result: TypeCloneResult) -> ReferenceMaps:
    published = freeze(type_result.source_to_target)
    match type_result.object_type:
        case CatalogObjectType.CATEGORY:
            return replace(references, categories=published)
        case CatalogObjectType.TAX:
            return replace(references, taxes=published)
        case CatalogObjectType.MODIFIER_LIST:
            return replace(references, modifier_lists=published)
        case _:
            return references
