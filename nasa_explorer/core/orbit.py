"""Orbital quantities derived from mean motion, inclination and eccentricity.

Altitudes assume a circular orbit around a spherical Earth, so they are only
representative for near-circular orbits.  For eccentric orbits use the
perigee/apogee pair from :func:`perigee_apogee`.
"""

from __future__ import annotations

import math
from typing import Tuple

from .types import DerivedOrbit, DomainError, OrbitalElementSet, SatelliteClass

MU_EARTH_KM3_S2 = 398600.4418
EARTH_MEAN_RADIUS_KM = 6371.0
MINUTES_PER_DAY = 1440.0
SECONDS_PER_DAY = 86400.0

LEO_MAX_ALTITUDE_KM = 2000.0
GEO_ALTITUDE_KM = 35786.0
GEO_ALTITUDE_TOLERANCE_KM = 250.0
GEO_MAX_INCLINATION_DEG = 5.0
HEO_MIN_ECCENTRICITY = 0.25

POLAR_INCLINATION_DEG = (80.0, 100.0)
SUN_SYNCHRONOUS_INCLINATION_DEG = (96.0, 102.0)
EQUATORIAL_MAX_INCLINATION_DEG = 5.0


def _require_mean_motion(mean_motion: float) -> float:
    value = float(mean_motion)
    if not math.isfinite(value) or value <= 0:
        raise DomainError(f"mean motion must be a positive number of rev/day, got {mean_motion!r}")
    return value


def calculate_orbital_period(mean_motion: float) -> float:
    """Return the orbital period in minutes for ``mean_motion`` rev/day."""

    return MINUTES_PER_DAY / _require_mean_motion(mean_motion)


def calculate_semi_major_axis(mean_motion: float) -> float:
    """Kepler's third law: ``a = (mu / n**2) ** (1/3)`` with ``n`` in rad/s."""

    n_rad_s = _require_mean_motion(mean_motion) * 2.0 * math.pi / SECONDS_PER_DAY
    return (MU_EARTH_KM3_S2 / n_rad_s**2) ** (1.0 / 3.0)


def calculate_approximate_altitude(mean_motion: float) -> float:
    """Mean altitude above Earth's mean radius in km (circular orbit)."""

    return calculate_semi_major_axis(mean_motion) - EARTH_MEAN_RADIUS_KM


def perigee_apogee(mean_motion: float, eccentricity: float) -> Tuple[float, float]:
    """Return ``(perigee, apogee)`` altitudes in km."""

    if not 0.0 <= eccentricity < 1.0:
        raise DomainError(f"eccentricity must be in [0, 1), got {eccentricity!r}")
    a = calculate_semi_major_axis(mean_motion)
    return a * (1.0 - eccentricity) - EARTH_MEAN_RADIUS_KM, a * (1.0 + eccentricity) - EARTH_MEAN_RADIUS_KM


def _orbit_type(inclination: float, altitude: float, eccentricity: float) -> str:
    if eccentricity > HEO_MIN_ECCENTRICITY:
        return "HEO"
    if abs(altitude - GEO_ALTITUDE_KM) <= GEO_ALTITUDE_TOLERANCE_KM:
        return "GEO" if inclination <= GEO_MAX_INCLINATION_DEG else "GSO"
    if altitude < LEO_MAX_ALTITUDE_KM:
        return "LEO"
    if altitude < GEO_ALTITUDE_KM - GEO_ALTITUDE_TOLERANCE_KM:
        return "MEO"
    return "Beyond-GEO"


def _inclination_category(inclination: float, orbit_type: str) -> str:
    sso_low, sso_high = SUN_SYNCHRONOUS_INCLINATION_DEG
    polar_low, polar_high = POLAR_INCLINATION_DEG
    if orbit_type == "LEO" and sso_low <= inclination <= sso_high:
        return "Sun-synchronous"
    if polar_low <= inclination <= polar_high:
        return "Polar"
    if inclination <= EQUATORIAL_MAX_INCLINATION_DEG or inclination >= 180.0 - EQUATORIAL_MAX_INCLINATION_DEG:
        return "Equatorial"
    if inclination > polar_high:
        return "Retrograde"
    return "Inclined"


def classify_satellite(inclination: float, altitude: float, eccentricity: float) -> SatelliteClass:
    """Bucket an orbit by altitude/eccentricity (``type``) and inclination (``category``).

    ``type`` is one of LEO, MEO, GEO, GSO (geosynchronous but inclined), HEO or
    Beyond-GEO (near-circular above the geostationary band); eccentricity above
    0.25 always yields HEO.  ``category`` is one of
    Sun-synchronous, Polar, Equatorial, Retrograde or Inclined.
    """

    if not math.isfinite(inclination) or not 0.0 <= inclination <= 180.0:
        raise DomainError(f"inclination must be in [0, 180] degrees, got {inclination!r}")
    if not math.isfinite(eccentricity) or not 0.0 <= eccentricity < 1.0:
        raise DomainError(f"eccentricity must be in [0, 1), got {eccentricity!r}")
    if not math.isfinite(altitude) or altitude < 0:
        raise DomainError(f"altitude must be a non-negative number of km, got {altitude!r}")

    orbit_type = _orbit_type(inclination, altitude, eccentricity)
    return SatelliteClass(type=orbit_type, category=_inclination_category(inclination, orbit_type))


def derive(elements: OrbitalElementSet) -> DerivedOrbit:
    """Compute every derived quantity for a parsed element set."""

    altitude = calculate_approximate_altitude(elements.mean_motion)
    perigee, apogee = perigee_apogee(elements.mean_motion, elements.eccentricity)
    return DerivedOrbit(
        orbital_period=calculate_orbital_period(elements.mean_motion),
        semi_major_axis=calculate_semi_major_axis(elements.mean_motion),
        altitude=altitude,
        perigee_altitude=perigee,
        apogee_altitude=apogee,
        classification=classify_satellite(elements.inclination, altitude, elements.eccentricity),
    )


__all__ = [
    "EARTH_MEAN_RADIUS_KM",
    "GEO_ALTITUDE_KM",
    "MU_EARTH_KM3_S2",
    "calculate_approximate_altitude",
    "calculate_orbital_period",
    "calculate_semi_major_axis",
    "classify_satellite",
    "derive",
    "perigee_apogee",
]
