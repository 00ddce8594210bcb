from __future__ import annotations

"""CLI entry point exposed via ``python -m nasa_explorer``."""

import argparse
import sys
from typing import List, Optional

from .cli import apod, common, eonet, media, neo, stats, techtransfer, tle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nasa-explorer", description="NASA open data toolkit")
    common.add_shared_arguments(parser)
    subparsers = parser.add_subparsers(dest="command")
    tle.configure_parser(subparsers)
    neo.configure_parser(subparsers)
    eonet.configure_parser(subparsers)
    apod.configure_parser(subparsers)
    stats.configure_parser(subparsers)
    techtransfer.configure_parser(subparsers)
    media.configure_parser(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    if not hasattr(ns, "handler"):
        parser.print_help()
        return 1
    common.configure_logging(ns.log_level)
    return ns.handler(ns)


def entrypoint() -> None:
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
