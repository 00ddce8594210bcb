"""``stats`` sub-command: aggregate counts over a JSON record list."""

from __future__ import annotations

import argparse
import json

from ..stats import build_aggregate_stats
from . import common


def _records(payload, key: str | None):
    if key:
        if not isinstance(payload, dict) or key not in payload:
            raise ValueError(f"input has no {key!r} list")
        payload = payload[key]
    if not isinstance(payload, list):
        raise ValueError("input must be a JSON list of records (use --records-key for nested lists)")
    return payload


@common.guarded
def run(ns: argparse.Namespace) -> int:
    try:
        payload = json.loads(common.read_input(ns.input))
    except json.JSONDecodeError as exc:
        raise ValueError(f"input is not valid JSON: {exc}") from exc
    stats = build_aggregate_stats(
        _records(payload, ns.records_key),
        flag_field=ns.flag_field,
        category_field=ns.category_field,
    )
    common.emit_json(stats.as_dict())
    return common.EXIT_OK


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("stats", help="Count records by a boolean flag and a category field.")
    parser.add_argument("input", nargs="?", default="-", help="JSON file ('-' for stdin).")
    parser.add_argument("--flag-field", help="Boolean-like field to count as true/false.")
    parser.add_argument("--category-field", help="Field whose values are tallied.")
    parser.add_argument("--records-key", help="Key holding the record list inside a JSON object.")
    parser.set_defaults(handler=run)
    return parser
