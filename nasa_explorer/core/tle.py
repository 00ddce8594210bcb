"""Fixed-column parser for NORAD two-line element sets."""

from __future__ import annotations

import datetime as dt
import json
import math
import re
from typing import Any, Callable, Optional, Tuple

from .types import OrbitalElementSet, ParseError

TLE_LINE_LENGTH = 69
EPOCH_DAY_MIN = 1.0
EPOCH_DAY_LIMIT = 367.0

# Alpha-5 leading letters; I and O are skipped to avoid confusion with 1 and 0.
_ALPHA5_LETTERS = "ABCDEFGHJKLMNPQRSTUVWXYZ"
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)$")
_INT_RE = re.compile(r"^[+-]?\d+$")


def checksum(line: str) -> bool:
    """Validate the modulo-10 checksum in the last column of ``line``."""

    line = line.rstrip()
    if not line:
        return False
    try:
        expected = int(line[-1])
    except ValueError:
        return False
    total = 0
    for ch in line[:-1]:
        if ch.isdigit():
            total += int(ch)
        elif ch == "-":
            total += 1
    return (total % 10) == expected


def expand_epoch_year(year2: int) -> int:
    """Expand a two-digit epoch year (57-99 -> 19xx, 00-56 -> 20xx)."""

    return 1900 + year2 if year2 >= 57 else 2000 + year2


def epoch(line1: str) -> dt.datetime:
    """Parse epoch from line 1 into a timezone-aware UTC datetime."""

    year = expand_epoch_year(_int(line1, 18, 20, "epoch year"))
    doy = _epoch_day(line1)
    day_int = int(doy)
    frac = doy - day_int
    base = dt.datetime(year, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(days=day_int - 1)
    return base + dt.timedelta(seconds=frac * 86400.0)


def _column(line: str, start: int, stop: int) -> str:
    return line[start:stop].strip()


def _numeric(
    line: str,
    start: int,
    stop: int,
    label: str,
    pattern: "re.Pattern[str]",
    cast: Callable[[str], Any],
) -> Any:
    raw = _column(line, start, stop)
    if not pattern.match(raw):
        raise ParseError(f"{label} is not numeric: {line[start:stop]!r}")
    value = cast(raw)
    if isinstance(value, float) and not math.isfinite(value):
        raise ParseError(f"{label} is not finite: {raw!r}")
    return value


def _float(line: str, start: int, stop: int, label: str) -> float:
    return _numeric(line, start, stop, label, _FLOAT_RE, float)


def _int(line: str, start: int, stop: int, label: str) -> int:
    return _numeric(line, start, stop, label, _INT_RE, int)


def _epoch_day(line1: str) -> float:
    day = _float(line1, 20, 32, "epoch day")
    if not EPOCH_DAY_MIN <= day < EPOCH_DAY_LIMIT:
        raise ParseError(f"epoch day must be in [1, 367), got {line1[20:32].strip()!r}")
    return day


def _eccentricity(line2: str) -> float:
    """Columns 27-33 hold seven digits with an implied leading decimal point."""

    raw = line2[26:33]
    if len(raw) != 7 or not (raw.isascii() and raw.isdigit()):
        raise ParseError(f"eccentricity must be seven digits: {raw!r}")
    return float(f"0.{raw}")


def _implied_exponent(line: str, start: int, stop: int, label: str) -> float:
    """Decode the compressed ``SMMMMMSE`` notation, e.g. `` 12345-3`` -> 0.12345e-3."""

    field = line[start:stop]
    if len(field) != 8:
        raise ParseError(f"{label} field is truncated: {field!r}")
    sign, digits, exp_sign, exp_digit = field[0], field[1:6], field[6], field[7]
    digits = digits.replace(" ", "0")
    exp_digit = exp_digit.replace(" ", "0")
    if sign not in " +-" or exp_sign not in " +-":
        raise ParseError(f"{label} has an invalid sign: {field!r}")
    if not digits.isdigit() or not exp_digit.isdigit():
        raise ParseError(f"{label} is not numeric: {field!r}")
    mantissa_sign = "-" if sign == "-" else ""
    exponent_sign = "-" if exp_sign == "-" else "+"
    return float(f"{mantissa_sign}0.{digits}e{exponent_sign}{exp_digit}")


def _satellite_number(line: str) -> int:
    """Decode columns 3-7, accepting Alpha-5 catalogue numbers."""

    raw = _column(line, 2, 7)
    if raw[:1].isalpha():
        index = _ALPHA5_LETTERS.find(raw[0].upper())
        if index < 0 or len(raw) != 5 or not raw[1:].isdigit():
            raise ParseError(f"satellite number is not valid Alpha-5: {raw!r}")
        return (index + 10) * 10000 + int(raw[1:])
    if not raw.isdigit():
        raise ParseError(f"satellite number is not numeric: {raw!r}")
    return int(raw)


def _prepare_line(line: Optional[str], number: int) -> str:
    if line is None or not line.strip():
        raise ParseError(f"line {number} is missing")
    line = line.rstrip("\r\n")
    if len(line) != TLE_LINE_LENGTH:
        raise ParseError(
            f"line {number} must be {TLE_LINE_LENGTH} characters, got {len(line)}"
        )
    if line[0] != str(number):
        raise ParseError(f"line {number} must start with '{number}'")
    return line


def parse_tle(
    name: Optional[str],
    line1: Optional[str],
    line2: Optional[str],
    *,
    verify_checksum: bool = True,
) -> OrbitalElementSet:
    """Parse a name plus two element lines into an :class:`OrbitalElementSet`.

    Raises :class:`ParseError` when either line is missing, is not exactly 69
    characters, carries the wrong line number, fails its checksum (unless
    ``verify_checksum`` is false), disagrees on the satellite number, holds a
    non-numeric value in a numeric column (the eccentricity column must be
    exactly seven digits) or carries an epoch day outside [1, 367).
    """

    l1 = _prepare_line(line1, 1)
    l2 = _prepare_line(line2, 2)

    if verify_checksum:
        if not checksum(l1):
            raise ParseError("line 1 checksum failed")
        if not checksum(l2):
            raise ParseError("line 2 checksum failed")

    if _column(l1, 2, 7) != _column(l2, 2, 7):
        raise ParseError("satellite numbers differ between line 1 and line 2")

    satellite_number = _satellite_number(l1)

    return OrbitalElementSet(
        name=(name or "").strip(),
        satellite_number=satellite_number,
        classification=l1[7],
        intl_designator=_column(l1, 9, 17),
        epoch_year=expand_epoch_year(_int(l1, 18, 20, "epoch year")),
        epoch_day=_epoch_day(l1),
        first_derivative=_float(l1, 33, 43, "first derivative"),
        second_derivative=_implied_exponent(l1, 44, 52, "second derivative"),
        bstar_drag=_implied_exponent(l1, 53, 61, "bstar drag"),
        ephemeris_type=_int(l1, 62, 63, "ephemeris type"),
        element_number=_int(l1, 64, 68, "element number"),
        inclination=_float(l2, 8, 16, "inclination"),
        raan=_float(l2, 17, 25, "raan"),
        eccentricity=_eccentricity(l2),
        arg_of_perigee=_float(l2, 34, 42, "argument of perigee"),
        mean_anomaly=_float(l2, 43, 51, "mean anomaly"),
        mean_motion=_float(l2, 52, 63, "mean motion"),
        revolution_number=_int(l2, 63, 68, "revolution number"),
        line1=l1,
        line2=l2,
    )


def _locate_lines(text: str) -> Tuple[Optional[str], Optional[str], Optional[str]]:
    lines = [ln.strip() for ln in text.splitlines() if ln.strip()]
    for idx in range(len(lines)):
        if lines[idx].startswith("1 ") and idx + 1 < len(lines) and lines[idx + 1].startswith("2 "):
            name = None
            if idx - 1 >= 0 and not lines[idx - 1].startswith(("1 ", "2 ")):
                name = lines[idx - 1]
            return name, lines[idx], lines[idx + 1]
    return None, None, None


def parse_tle_text(text: str, *, verify_checksum: bool = True) -> OrbitalElementSet:
    """Parse raw payload text (2/3-line block or TLE API JSON)."""

    name, line1, line2 = _locate_lines(text)
    if line1 is None or line2 is None:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ParseError("could not locate TLE line pair in payload") from exc
        if not isinstance(data, dict) or "line1" not in data or "line2" not in data:
            raise ParseError("could not locate TLE line pair in payload")
        line1 = str(data["line1"])
        line2 = str(data["line2"])
        name_val = data.get("name")
        name = None if name_val is None else str(name_val)
    return parse_tle(name, line1, line2, verify_checksum=verify_checksum)


__all__ = [
    "TLE_LINE_LENGTH",
    "checksum",
    "epoch",
    "expand_epoch_year",
    "parse_tle",
    "parse_tle_text",
]
