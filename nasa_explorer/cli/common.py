"""Helpers shared by the nasa-explorer sub-commands."""

from __future__ import annotations

import argparse
import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

from fetch.service import ExplorerService, error_payload
from fetch.sources import UpstreamError
from propagate import PropagationError

from ..config import load_config
from ..logging import configure_logging as _configure_json_logging
from ..logging import get_logger

LOGGER = get_logger("cli")

LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

EXIT_OK = 0
EXIT_UPSTREAM = 1
EXIT_INVALID = 2


def add_shared_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options that are common to every sub-command."""

    parser.add_argument(
        "--log-level",
        default=None,
        choices=sorted(LOG_LEVELS),
        help="Logging verbosity (default: $NASA_EXPLORER_LOG_LEVEL or INFO).",
    )


def configure_logging(level_name: str | None) -> None:
    """Route package logs to stderr as JSON at the requested level."""

    level = LOG_LEVELS.get(level_name.upper()) if level_name else None
    _configure_json_logging(level=level, force=True)


def build_service() -> ExplorerService:
    return ExplorerService(config=load_config())


def read_input(path: str | None) -> str:
    """Read a TLE payload from ``path`` or stdin when ``path`` is ``-``/missing."""

    if not path or path == "-":
        return sys.stdin.read()
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"input file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def emit_json(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False, default=str))
    sys.stdout.write("\n")
    sys.stdout.flush()


def _fail(exc: BaseException, code: int) -> int:
    print(json.dumps(error_payload(exc)), file=sys.stderr)
    return code


def guarded(handler: Callable[[argparse.Namespace], int]) -> Callable[[argparse.Namespace], int]:
    """Translate domain failures into an error payload on stderr and an exit code."""

    @functools.wraps(handler)
    def wrapper(ns: argparse.Namespace) -> int:
        try:
            return handler(ns)
        except (ValueError, FileNotFoundError) as exc:
            LOGGER.debug("Rejected input", extra={"command": ns.command, "reason": str(exc)})
            return _fail(exc, EXIT_INVALID)
        except (UpstreamError, PropagationError) as exc:
            LOGGER.error("Command failed", extra={"command": ns.command, "reason": str(exc)})
            return _fail(exc, EXIT_UPSTREAM)

    return wrapper
