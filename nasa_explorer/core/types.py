"""Shared dataclasses and exceptions for the orbital core."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict


class ParseError(ValueError):
    """Raised when a two-line element set is malformed."""


class DomainError(ValueError):
    """Raised when an orbital quantity is outside the range a formula accepts."""


@dataclass(frozen=True)
class OrbitalElementSet:
    """Typed fields of a parsed two-line element set.

    Angles are in degrees, ``mean_motion`` in revolutions per day.  The source
    lines are kept so the record can be re-emitted or handed to a propagator.
    """

    name: str
    satellite_number: int
    classification: str
    intl_designator: str
    epoch_year: int
    epoch_day: float
    first_derivative: float
    second_derivative: float
    bstar_drag: float
    ephemeris_type: int
    element_number: int
    inclination: float
    raan: float
    eccentricity: float
    arg_of_perigee: float
    mean_anomaly: float
    mean_motion: float
    revolution_number: int
    line1: str
    line2: str

    @property
    def epoch(self) -> dt.datetime:
        day = int(self.epoch_day)
        frac = self.epoch_day - day
        base = dt.datetime(self.epoch_year, 1, 1, tzinfo=dt.timezone.utc) + dt.timedelta(days=day - 1)
        return base + dt.timedelta(seconds=frac * 86400.0)

    def as_text(self, three_line: bool = True) -> str:
        if three_line and self.name:
            return f"{self.name}\n{self.line1}\n{self.line2}\n"
        return f"{self.line1}\n{self.line2}\n"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "satellite_number": self.satellite_number,
            "classification": self.classification,
            "intl_designator": self.intl_designator,
            "epoch_year": self.epoch_year,
            "epoch_day": self.epoch_day,
            "epoch": self.epoch.isoformat(),
            "first_derivative": self.first_derivative,
            "second_derivative": self.second_derivative,
            "bstar_drag": self.bstar_drag,
            "ephemeris_type": self.ephemeris_type,
            "element_number": self.element_number,
            "inclination": self.inclination,
            "raan": self.raan,
            "eccentricity": self.eccentricity,
            "arg_of_perigee": self.arg_of_perigee,
            "mean_anomaly": self.mean_anomaly,
            "mean_motion": self.mean_motion,
            "revolution_number": self.revolution_number,
            "line1": self.line1,
            "line2": self.line2,
        }


@dataclass(frozen=True)
class SatelliteClass:
    """Coarse orbit label: regime (``type``) plus inclination family (``category``)."""

    type: str
    category: str

    @property
    def is_polar(self) -> bool:
        return self.category in {"Polar", "Sun-synchronous"}

    def as_dict(self) -> Dict[str, str]:
        return {"type": self.type, "category": self.category}


@dataclass(frozen=True)
class DerivedOrbit:
    """Quantities computed from an :class:`OrbitalElementSet`."""

    orbital_period: float
    semi_major_axis: float
    altitude: float
    perigee_altitude: float
    apogee_altitude: float
    classification: SatelliteClass

    def as_dict(self) -> Dict[str, Any]:
        return {
            "orbital_period": self.orbital_period,
            "semi_major_axis": self.semi_major_axis,
            "altitude": self.altitude,
            "perigee_altitude": self.perigee_altitude,
            "apogee_altitude": self.apogee_altitude,
            "classification": self.classification.as_dict(),
        }


__all__ = [
    "DerivedOrbit",
    "DomainError",
    "OrbitalElementSet",
    "ParseError",
    "SatelliteClass",
]
