"""``neo`` sub-commands backed by the NeoWs API."""

from __future__ import annotations

import argparse

from . import common


@common.guarded
def run_feed(ns: argparse.Namespace) -> int:
    common.emit_json(common.build_service().neo_feed(ns.start, ns.end))
    return common.EXIT_OK


@common.guarded
def run_analyze(ns: argparse.Namespace) -> int:
    analysis_type = "detailed" if ns.detailed else "basic"
    common.emit_json(common.build_service().neo_analyze(ns.start, ns.end, analysis_type))
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("neo", help="Near-Earth object feed and analysis.")
    commands = parser.add_subparsers(dest="neo_command")

    feed = commands.add_parser("feed", help="Fetch the NeoWs feed (default: the next 7 days).")
    feed.add_argument("--start", help="Start date (YYYY-MM-DD).")
    feed.add_argument("--end", help="End date (YYYY-MM-DD).")
    feed.set_defaults(handler=run_feed)

    analyze = commands.add_parser("analyze", help="Summarise hazardous objects, sizes and velocities.")
    analyze.add_argument("--start", required=True, help="Start date (YYYY-MM-DD).")
    analyze.add_argument("--end", required=True, help="End date (YYYY-MM-DD).")
    analyze.add_argument("--detailed", action="store_true", help="Add daily breakdown and risk assessment.")
    analyze.set_defaults(handler=run_analyze)
    return parser
