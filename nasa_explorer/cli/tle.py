"""``tle`` sub-commands: parse, derive, fetch and track element sets."""

from __future__ import annotations

import argparse
import datetime as dt

from propagate import ground_track

from ..core import derive, parse_tle_text
from ..core.types import OrbitalElementSet
from . import common


def _load_elements(ns: argparse.Namespace) -> OrbitalElementSet:
    if getattr(ns, "satellite_id", None):
        return common.build_service().tle_elements(ns.satellite_id)
    return parse_tle_text(common.read_input(ns.input), verify_checksum=not ns.no_checksum)


def _parse_start(value: str | None) -> dt.datetime | None:
    if not value:
        return None
    try:
        parsed = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"--start expects an ISO 8601 timestamp, got {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed


@common.guarded
def run_parse(ns: argparse.Namespace) -> int:
    common.emit_json(_load_elements(ns).as_dict())
    return common.EXIT_OK


@common.guarded
def run_orbit(ns: argparse.Namespace) -> int:
    elements = _load_elements(ns)
    common.emit_json({"elements": elements.as_dict(), "orbit": derive(elements).as_dict()})
    return common.EXIT_OK


@common.guarded
def run_fetch(ns: argparse.Namespace) -> int:
    service = common.build_service()
    if len(ns.ids) == 1:
        common.emit_json(service.tle_satellite(ns.ids[0]))
    else:
        common.emit_json(service.tle_satellites(ns.ids))
    return common.EXIT_OK


@common.guarded
def run_track(ns: argparse.Namespace) -> int:
    if ns.step <= 0:
        raise ValueError("--step must be positive")
    elements = _load_elements(ns)
    duration = dt.timedelta(minutes=ns.minutes) if ns.minutes else None
    result = ground_track(
        elements,
        start=_parse_start(ns.start),
        duration=duration,
        step=dt.timedelta(seconds=ns.step),
    )
    common.emit_json(result.as_dict())
    return common.EXIT_OK


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("input", nargs="?", default="-", help="File holding a 2/3-line TLE or TLE API JSON ('-' for stdin).")
    parser.add_argument("--no-checksum", action="store_true", help="Skip line checksum verification.")


def configure_parser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("tle", help="Parse, inspect and track two-line element sets.")
    commands = parser.add_subparsers(dest="tle_command")

    parse_cmd = commands.add_parser("parse", help="Parse a TLE into its orbital elements.")
    _add_input_arguments(parse_cmd)
    parse_cmd.set_defaults(handler=run_parse)

    orbit_cmd = commands.add_parser("orbit", help="Parse a TLE and derive period, altitude and class.")
    _add_input_arguments(orbit_cmd)
    orbit_cmd.set_defaults(handler=run_orbit)

    fetch_cmd = commands.add_parser("fetch", help="Fetch element sets from the TLE API by NORAD id.")
    fetch_cmd.add_argument("ids", nargs="+", help="NORAD catalogue numbers.")
    fetch_cmd.set_defaults(handler=run_fetch)

    track_cmd = commands.add_parser("track", help="Propagate a ground track with SGP4.")
    _add_input_arguments(track_cmd)
    track_cmd.add_argument("--id", dest="satellite_id", help="Fetch the element set by NORAD id instead of reading input.")
    track_cmd.add_argument("--start", help="ISO 8601 start time (default: now, UTC).")
    track_cmd.add_argument("--minutes", type=float, default=None, help="Track length (default: one orbital period).")
    track_cmd.add_argument("--step", type=float, default=60.0, help="Sample spacing in seconds.")
    track_cmd.set_defaults(handler=run_track)
    return parser
