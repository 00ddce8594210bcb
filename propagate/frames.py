"""Frame conversions for SGP4 output: TEME to Earth-fixed and geodetic."""
from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from sgp4.api import jday

EARTH_ROT_RATE_RAD_PER_SEC = 7.2921150e-5
WGS84_A_KM = 6378.137
WGS84_F = 1.0 / 298.257223563
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)


class Frame(str, enum.Enum):
    """Coordinate frames a propagation can be reported in."""

    TEME = "teme"
    ECEF = "ecef"

    @classmethod
    def from_string(cls, value: str) -> "Frame":
        try:
            return cls(value.lower())
        except ValueError as exc:
            raise ValueError(f"Unsupported frame '{value}'") from exc


@dataclass(frozen=True)
class StateVector:
    """Position and velocity (kilometres / kilometres per second)."""

    position_km: Tuple[float, float, float]
    velocity_km_s: Tuple[float, float, float]

    @property
    def speed_km_s(self) -> float:
        return math.sqrt(sum(v * v for v in self.velocity_km_s))


@dataclass(frozen=True)
class Geodetic:
    latitude: float
    longitude: float
    altitude_km: float


def gmst(when: datetime) -> float:
    """Greenwich mean sidereal time in radians (IAU 1982)."""

    if when.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    jd, fr = jday(when.year, when.month, when.day, when.hour, when.minute,
                  when.second + when.microsecond / 1_000_000)
    t = (jd + fr - 2451545.0) / 36525.0
    seconds = (
        67310.54841
        + (876600.0 * 3600 + 8640184.812866) * t
        + 0.093104 * t * t
        - 6.2e-6 * t * t * t
    ) % 86400.0
    return math.radians(seconds / 240.0)


def teme_to_ecef(state: StateVector, when: datetime) -> StateVector:
    theta = gmst(when)
    cos_t, sin_t = math.cos(theta), math.sin(theta)

    x, y, z = state.position_km
    vx, vy, vz = state.velocity_km_s

    px = cos_t * x + sin_t * y
    py = -sin_t * x + cos_t * y

    omega = EARTH_ROT_RATE_RAD_PER_SEC
    qx = cos_t * vx + sin_t * vy + omega * py
    qy = -sin_t * vx + cos_t * vy - omega * px

    return StateVector((px, py, z), (qx, qy, vz))


def ecef_to_geodetic(position_km: Tuple[float, float, float]) -> Geodetic:
    """WGS-84 latitude/longitude (degrees) and height above the ellipsoid."""

    x, y, z = position_km
    lon = math.atan2(y, x)
    p = math.hypot(x, y)
    if p < 1e-9:
        lat = math.copysign(math.pi / 2, z)
        return Geodetic(math.degrees(lat), math.degrees(lon), abs(z) - WGS84_A_KM * (1.0 - WGS84_F))

    lat = math.atan2(z, p * (1.0 - WGS84_E2))
    for _ in range(10):
        sin_lat = math.sin(lat)
        n = WGS84_A_KM / math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
        height = p / math.cos(lat) - n
        updated = math.atan2(z, p * (1.0 - WGS84_E2 * n / (n + height)))
        if abs(updated - lat) < 1e-12:
            lat = updated
            break
        lat = updated

    sin_lat = math.sin(lat)
    n = WGS84_A_KM / math.sqrt(1.0 - WGS84_E2 * sin_lat * sin_lat)
    height = p / math.cos(lat) - n
    return Geodetic(math.degrees(lat), math.degrees(lon), height)


def transform_state(state: StateVector, when: datetime, target: Frame) -> StateVector:
    """Convert a TEME ``state`` (SGP4 native output) into ``target``."""

    if target == Frame.TEME:
        return state
    if target == Frame.ECEF:
        return teme_to_ecef(state, when)
    raise ValueError(f"Unsupported frame {target!r}")


__all__ = [
    "Frame",
    "Geodetic",
    "StateVector",
    "ecef_to_geodetic",
    "gmst",
    "teme_to_ecef",
    "transform_state",
]
