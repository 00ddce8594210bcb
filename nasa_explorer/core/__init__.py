"""Public API for the orbital core primitives."""

from .orbit import (
    calculate_approximate_altitude,
    calculate_orbital_period,
    calculate_semi_major_axis,
    classify_satellite,
    derive,
    perigee_apogee,
)
from .tle import checksum, epoch, parse_tle, parse_tle_text
from .types import DerivedOrbit, DomainError, OrbitalElementSet, ParseError, SatelliteClass

__all__ = [
    "DerivedOrbit",
    "DomainError",
    "OrbitalElementSet",
    "ParseError",
    "SatelliteClass",
    "calculate_approximate_altitude",
    "calculate_orbital_period",
    "calculate_semi_major_axis",
    "checksum",
    "classify_satellite",
    "derive",
    "epoch",
    "parse_tle",
    "parse_tle_text",
    "perigee_apogee",
]
