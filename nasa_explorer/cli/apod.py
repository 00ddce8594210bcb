"""``apod`` sub-command."""

from __future__ import annotations

import argparse

from . import common


@common.guarded
def run(ns: argparse.Namespace) -> int:
    common.emit_json(common.build_service().apod(date=ns.date, hd=not ns.no_hd))
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("apod", help="Astronomy Picture of the Day.")
    parser.add_argument("--date", help="Picture date (YYYY-MM-DD, from 1995-06-16).")
    parser.add_argument("--no-hd", action="store_true", help="Do not request the HD image URL.")
    parser.set_defaults(handler=run)
    return parser
