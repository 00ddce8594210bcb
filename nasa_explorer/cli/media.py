"""``media`` sub-commands for the NASA Image and Video Library."""

from __future__ import annotations

import argparse

from fetch.service import MEDIA_ASSET_KINDS, MEDIA_FILTERS

from . import common


@common.guarded
def run_search(ns: argparse.Namespace) -> int:
    filters = {name: getattr(ns, name) for name in MEDIA_FILTERS if getattr(ns, name) is not None}
    result = common.build_service().media_search(
        ns.query, media_type=ns.media_type, page=ns.page, page_size=ns.page_size, **filters
    )
    common.emit_json(result)
    return common.EXIT_OK


@common.guarded
def run_asset(ns: argparse.Namespace) -> int:
    common.emit_json(common.build_service().media_asset(ns.nasa_id, kind=ns.kind))
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("media", help="NASA Image and Video Library.")
    commands = parser.add_subparsers(dest="media_command")

    search = commands.add_parser("search", help="Search images, video and audio.")
    search.add_argument("query", nargs="?", help="Free-text search terms.")
    search.add_argument("--media-type", default="image", help="Comma separated: image, video, audio.")
    search.add_argument("--page", type=int, default=1)
    search.add_argument("--page-size", type=int, default=100, help="Results per page (max 100).")
    for name in MEDIA_FILTERS:
        search.add_argument(f"--{name.replace('_', '-')}", dest=name)
    search.set_defaults(handler=run_search)

    asset = commands.add_parser("asset", help="Asset manifest, metadata or captions for one item.")
    asset.add_argument("nasa_id")
    asset.add_argument("--kind", choices=MEDIA_ASSET_KINDS, default="asset")
    asset.set_defaults(handler=run_asset)
    return parser
