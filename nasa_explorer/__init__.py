"""NASA open data toolkit: TLE parsing, orbit derivation and dashboard statistics.

The orbital core lives in :mod:`nasa_explorer.core`; upstream access is in the
top-level :mod:`fetch` package and SGP4 propagation in :mod:`propagate`.
"""

from __future__ import annotations

from .config import AppConfig, load_config, redact_secret
from .core import (
    DerivedOrbit,
    DomainError,
    OrbitalElementSet,
    ParseError,
    SatelliteClass,
    calculate_approximate_altitude,
    calculate_orbital_period,
    classify_satellite,
    derive,
    parse_tle,
    parse_tle_text,
)
from .stats import AggregateStats, analyze_neo_feed, build_aggregate_stats

__version__ = "1.0.0"

__all__ = [
    "AggregateStats",
    "AppConfig",
    "DerivedOrbit",
    "DomainError",
    "OrbitalElementSet",
    "ParseError",
    "SatelliteClass",
    "__version__",
    "analyze_neo_feed",
    "build_aggregate_stats",
    "calculate_approximate_altitude",
    "calculate_orbital_period",
    "classify_satellite",
    "derive",
    "load_config",
    "parse_tle",
    "parse_tle_text",
    "redact_secret",
]
