"""Propagation utilities built on top of SGP4."""

from .frames import Frame, Geodetic, StateVector, ecef_to_geodetic, transform_state
from .service import (
    PropagationError,
    PropagationResult,
    PropagationSample,
    ground_track,
    position_at,
    propagate,
)

__all__ = [
    "Frame",
    "Geodetic",
    "StateVector",
    "ecef_to_geodetic",
    "transform_state",
    "PropagationError",
    "PropagationResult",
    "PropagationSample",
    "ground_track",
    "position_at",
    "propagate",
]
