"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import ExitStack
from logging import getLogger
from typing import TYPE_CHECKING

from catalogclone.adapters.square import SquareCatalogClient
from catalogclone.config import get_square_config
from catalogclone.domain.cloning import clone_account_data

if TYPE_CHECKING:
    from catalogclone.config import SquareConfig
    from catalogclone.domain.cloning import CloneAccountResult, CloneOptions
    from catalogclone.domain.ports import CatalogGateway


log = getLogger(__name__)


def clone_square_catalog(
    options: CloneOptions,
    *,
    config: SquareConfig | None = None,
    source: CatalogGateway | None = None,
    target: CatalogGateway | None = None,
) -> CloneAccountResult:
    """Clone the selected catalog types between the configured Square accounts.

    Gateways passed in are used as they are; missing ones are built from
    ``config`` (or the environment) and closed when the run ends.
    """

    with ExitStack() as stack:
        if source is None or target is None:
            effective_config = config or get_square_config()
            if source is None:
                source = stack.enter_context(SquareCatalogClient(config=effective_config.source))
            if target is None:
                target = stack.enter_context(SquareCatalogClient(config=effective_config.target))

        log.info(
            "Starting catalog clone: discounts=%s, modifier_lists=%s, taxes=%s, items=%s",
            options.discounts is not None,
            options.modifier_lists,
            options.taxes,
            options.items is not None,
        )
        result = clone_account_data(options, source=source, target=target)
        log.info("Finished catalog clone: cloned=%s, merged=%s", result.cloned, result.merged)
        return result
