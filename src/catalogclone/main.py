#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catalogclone.app import clone_square_catalog
from catalogclone.config import configure_logging
from catalogclone.domain.cloning import (
    CloneCatalogError,
    CloneOptions,
    DiscountOptions,
    ItemOptions,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from catalogclone.domain.cloning import CloneAccountResult

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Clone catalog objects from one Square account to another",
        epilog=(
            "Access tokens are read from SQUARE_SOURCE_ACCESS_TOKEN and "
            "SQUARE_TARGET_ACCESS_TOKEN (a .env file is honoured)."
        ),
    )
    parser.add_argument("--discounts", action="store_true", help="Clone all discounts")
    parser.add_argument(
        "--discounts-all-locations",
        action="store_true",
        help="Make cloned discounts available at all locations",
    )
    parser.add_argument(
        "--modifier-lists",
        action="store_true",
        help="Clone all modifier lists (enabled at all locations)",
    )
    parser.add_argument("--taxes", action="store_true", help="Clone all taxes")
    parser.add_argument("--items", action="store_true", help="Clone all items and categories")
    parser.add_argument(
        "--items-all-locations",
        action="store_true",
        help="Make cloned items available at all locations",
    )
    parser.add_argument(
        "--include-applied-taxes",
        action="store_true",
        help="Apply cloned taxes to cloned items (requires --taxes)",
    )
    parser.add_argument(
        "--include-applied-modifier-lists",
        action="store_true",
        help="Apply cloned modifier lists to cloned items (requires --modifier-lists)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output")
    return parser.parse_args(list(argv))


def _build_options(args: argparse.Namespace) -> CloneOptions:
    if args.discounts_all_locations and not args.discounts:
        raise ValueError("--discounts-all-locations requires --discounts")
    item_flags = (
        args.items_all_locations,
        args.include_applied_taxes,
        args.include_applied_modifier_lists,
    )
    if any(item_flags) and not args.items:
        raise ValueError("Item options require --items")

    options = CloneOptions(
        discounts=(
            DiscountOptions(present_at_all_locations=args.discounts_all_locations)
            if args.discounts
            else None
        ),
        modifier_lists=args.modifier_lists,
        taxes=args.taxes,
        items=(
            ItemOptions(
                present_at_all_locations=args.items_all_locations,
                include_applied_taxes=args.include_applied_taxes,
                include_applied_modifier_lists=args.include_applied_modifier_lists,
            )
            if args.items
            else None
        ),
    )
    if options.is_empty:
        raise ValueError(
            "Nothing to clone: select at least one of --discounts, --modifier-lists, "
            "--taxes, --items"
        )
    return options


def _log_summary(result: CloneAccountResult) -> None:
    for object_type, type_result in result.types.items():
        log.info(
            "%s: retrieved=%s, cloned=%s, merged=%s",
            object_type,
            type_result.retrieved,
            type_result.cloned,
            type_result.merged,
        )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        options = _build_options(parsed_args)
    except ValueError as exc:
        log.error("Error: %s", exc)  # noqa: TRY400
        sys.exit(2)

    try:
        result = clone_square_catalog(options)
    except CloneCatalogError as exc:
        log.exception("Catalog clone aborted")
        if exc.partial_result is not None:
            log.info("Progress before the error:")
            _log_summary(exc.partial_result)
        sys.exit(1)
    except Exception:
        log.exception("Fatal error during catalog clone")
        sys.exit(1)

    _log_summary(result)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
