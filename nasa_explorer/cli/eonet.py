"""``eonet`` sub-commands for natural event data."""

from __future__ import annotations

import argparse

from . import common


@common.guarded
def run_stats(ns: argparse.Namespace) -> int:
    common.emit_json(common.build_service().eonet_stats(days=ns.days))
    return common.EXIT_OK


@common.guarded
def run_events(ns: argparse.Namespace) -> int:
    service = common.build_service()
    common.emit_json(
        service.eonet_events(status=ns.status, limit=ns.limit, days=ns.days, category=ns.category)
    )
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("eonet", help="Earth Observatory natural events.")
    commands = parser.add_subparsers(dest="eonet_command")

    stats = commands.add_parser("stats", help="Count events by status, category and source.")
    stats.add_argument("--days", type=int, default=30, help="Look-back window (max 365).")
    stats.set_defaults(handler=run_stats)

    events = commands.add_parser("events", help="List events with geometry summaries.")
    events.add_argument("--status", choices=("open", "closed", "all"), default="all")
    events.add_argument("--limit", type=int, default=100, help="Maximum events (max 500).")
    events.add_argument("--days", type=int, default=20, help="Look-back window (max 365).")
    events.add_argument("--category", help="EONET category id, e.g. wildfires.")
    events.set_defaults(handler=run_events)
    return parser
