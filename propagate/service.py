"""SGP4 propagation of parsed element sets for the satellite tracker."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator, List, Optional, Tuple

from sgp4.api import SGP4_ERRORS, Satrec, jday

from nasa_explorer.core import OrbitalElementSet, calculate_orbital_period
from nasa_explorer.logging import get_logger, log_context
from propagate.frames import Frame, Geodetic, StateVector, ecef_to_geodetic, teme_to_ecef, transform_state

_LOGGER = get_logger("propagate")


class PropagationError(RuntimeError):
    """SGP4 reported an error (decayed orbit, bad mean motion, ...)."""


@dataclass(frozen=True)
class PropagationSample:
    timestamp: datetime
    state: StateVector
    subpoint: Geodetic

    def as_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "position_km": list(self.state.position_km),
            "velocity_km_s": list(self.state.velocity_km_s),
            "latitude": self.subpoint.latitude,
            "longitude": self.subpoint.longitude,
            "altitude_km": self.subpoint.altitude_km,
        }


@dataclass(frozen=True)
class PropagationResult:
    """Samples of one element set over an evenly spaced time grid."""

    elements: OrbitalElementSet
    frame: Frame
    step: timedelta
    samples: Tuple[PropagationSample, ...]

    @property
    def start(self) -> datetime:
        return self.samples[0].timestamp

    @property
    def end(self) -> datetime:
        return self.samples[-1].timestamp

    def ground_track(self) -> List[Tuple[float, float]]:
        """``(latitude, longitude)`` pairs in sample order."""

        return [(s.subpoint.latitude, s.subpoint.longitude) for s in self.samples]

    def as_dict(self) -> dict:
        return {
            "satellite_number": self.elements.satellite_number,
            "name": self.elements.name,
            "frame": self.frame.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "step_seconds": self.step.total_seconds(),
            "samples": [sample.as_dict() for sample in self.samples],
        }


def _as_utc(when: datetime) -> datetime:
    if when.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return when.astimezone(timezone.utc)


def _time_grid(start: datetime, end: datetime, step: timedelta) -> Iterator[datetime]:
    # Offsets are computed from ``start`` so long windows do not accumulate drift.
    count = int((end - start) / step) + 1
    for index in range(count):
        yield start + index * step


def _sgp4(sat: Satrec, when: datetime) -> StateVector:
    seconds = when.second + when.microsecond / 1_000_000
    jd, fr = jday(when.year, when.month, when.day, when.hour, when.minute, seconds)
    code, position, velocity = sat.sgp4(jd, fr)
    if code != 0:
        raise PropagationError(SGP4_ERRORS.get(code, f"SGP4 error code {code}"))
    return StateVector(tuple(position), tuple(velocity))


def _sample(sat: Satrec, when: datetime, frame: Frame) -> PropagationSample:
    teme = _sgp4(sat, when)
    ecef = teme_to_ecef(teme, when)
    state = ecef if frame is Frame.ECEF else transform_state(teme, when, frame)
    return PropagationSample(when, state, ecef_to_geodetic(ecef.position_km))


def propagate(
    elements: OrbitalElementSet,
    *,
    start: datetime,
    end: datetime,
    step: timedelta,
    frame: Frame = Frame.TEME,
) -> PropagationResult:
    """Sample the orbit of ``elements`` from ``start`` to ``end`` inclusive.

    Both bounds must be timezone-aware.  Raises :class:`ValueError` for an
    empty window or non-positive step and :class:`PropagationError` when SGP4
    cannot produce a state.
    """

    first = _as_utc(start)
    last = _as_utc(end)
    if last < first:
        raise ValueError("end must not be before start")
    if step <= timedelta(0):
        raise ValueError("step must be positive")

    sat = Satrec.twoline2rv(elements.line1, elements.line2)
    with log_context(satellite_number=elements.satellite_number):
        samples = tuple(_sample(sat, when, frame) for when in _time_grid(first, last, step))
        _LOGGER.debug("Propagated element set", extra={"samples": len(samples)})
    return PropagationResult(elements=elements, frame=frame, step=step, samples=samples)


def ground_track(
    elements: OrbitalElementSet,
    *,
    start: Optional[datetime] = None,
    duration: Optional[timedelta] = None,
    step: timedelta = timedelta(minutes=1),
) -> PropagationResult:
    """Earth-fixed sub-satellite points over ``duration`` (one orbital period by default)."""

    origin = start or datetime.now(timezone.utc)
    if duration is None:
        duration = timedelta(minutes=calculate_orbital_period(elements.mean_motion))
    return propagate(elements, start=origin, end=origin + duration, step=step, frame=Frame.ECEF)


def position_at(elements: OrbitalElementSet, when: Optional[datetime] = None) -> PropagationSample:
    sat = Satrec.twoline2rv(elements.line1, elements.line2)
    return _sample(sat, _as_utc(when or datetime.now(timezone.utc)), Frame.ECEF)


__all__ = [
    "PropagationError",
    "PropagationResult",
    "PropagationSample",
    "ground_track",
    "position_at",
    "propagate",
]
