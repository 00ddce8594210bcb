"""``techtransfer`` sub-command."""

from __future__ import annotations

import argparse

from fetch.service import TECH_TRANSFER_CATEGORIES

from . import common


@common.guarded
def run(ns: argparse.Namespace) -> int:
    common.emit_json(common.build_service().tech_transfer(ns.category, search=ns.search))
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("techtransfer", help="NASA patents, software and spinoffs.")
    parser.add_argument("category", nargs="?", default="patents", choices=tuple(TECH_TRANSFER_CATEGORIES))
    parser.add_argument("--search", help="Keyword to match, e.g. engine.")
    parser.set_defaults(handler=run)
    return parser
