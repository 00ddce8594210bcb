from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone

import pytest

from nasa_explorer.core import parse_tle
from propagate import Frame, ecef_to_geodetic, ground_track, position_at, propagate
from propagate.frames import StateVector, teme_to_ecef

LINE1 = "1 25544U 98067A   20344.91719907  .00001264  00000-0  29621-4 0  9993"
LINE2 = "2 25544  51.6466 223.8666 0002416  90.3778  30.6140 15.48970462256430"


@pytest.fixture(scope="module")
def iss():
    return parse_tle("ISS (ZARYA)", LINE1, LINE2)


def test_propagate_samples_inclusive_range(iss):
    start = iss.epoch
    result = propagate(iss, start=start, end=start + timedelta(minutes=90), step=timedelta(minutes=10))

    assert len(result.samples) == 10
    assert result.start == start
    assert result.end == start + timedelta(minutes=90)
    assert result.step == timedelta(minutes=10)
    assert result.frame is Frame.TEME
    for sample in result.samples:
        assert 350 < sample.subpoint.altitude_km < 500
        assert abs(sample.subpoint.latitude) <= 52
        assert -180 <= sample.subpoint.longitude <= 180
        assert 7.5 < sample.state.speed_km_s < 7.8


def test_ecef_frame_keeps_radius(iss):
    start = iss.epoch
    teme = propagate(iss, start=start, end=start, step=timedelta(seconds=1))
    ecef = propagate(iss, start=start, end=start, step=timedelta(seconds=1), frame=Frame.ECEF)

    r_teme = math.sqrt(sum(c * c for c in teme.samples[0].state.position_km))
    r_ecef = math.sqrt(sum(c * c for c in ecef.samples[0].state.position_km))
    assert r_ecef == pytest.approx(r_teme, rel=1e-12)
    assert teme.samples[0].subpoint == ecef.samples[0].subpoint


def test_ground_track_defaults_to_one_period(iss):
    result = ground_track(iss, start=iss.epoch)
    assert 92 <= len(result.samples) <= 94
    assert result.frame is Frame.ECEF
    assert len(result.ground_track()) == len(result.samples)


def test_result_as_dict(iss):
    start = iss.epoch
    payload = propagate(iss, start=start, end=start + timedelta(minutes=5), step=timedelta(minutes=5)).as_dict()
    assert payload["satellite_number"] == 25544
    assert payload["name"] == "ISS (ZARYA)"
    assert payload["frame"] == "teme"
    assert payload["step_seconds"] == 300.0
    assert len(payload["samples"]) == 2
    assert set(payload["samples"][0]) == {
        "timestamp",
        "position_km",
        "velocity_km_s",
        "latitude",
        "longitude",
        "altitude_km",
    }


def test_position_at(iss):
    sample = position_at(iss, iss.epoch + timedelta(minutes=30))
    assert 350 < sample.subpoint.altitude_km < 500
    assert sample.timestamp.tzinfo is not None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start": datetime(2020, 12, 10), "end": datetime(2020, 12, 10, 1), "step": timedelta(minutes=1)},
        {
            "start": datetime(2020, 12, 10, 1, tzinfo=timezone.utc),
            "end": datetime(2020, 12, 10, tzinfo=timezone.utc),
            "step": timedelta(minutes=1),
        },
        {
            "start": datetime(2020, 12, 10, tzinfo=timezone.utc),
            "end": datetime(2020, 12, 10, 1, tzinfo=timezone.utc),
            "step": timedelta(0),
        },
    ],
)
def test_invalid_windows(iss, kwargs):
    with pytest.raises(ValueError):
        propagate(iss, **kwargs)


def test_position_at_requires_aware_datetime(iss):
    with pytest.raises(ValueError, match="timezone-aware"):
        position_at(iss, datetime(2020, 12, 10))


def test_ecef_to_geodetic_reference_points():
    equator = ecef_to_geodetic((6378.137, 0.0, 0.0))
    assert equator.latitude == pytest.approx(0.0, abs=1e-9)
    assert equator.longitude == pytest.approx(0.0, abs=1e-9)
    assert equator.altitude_km == pytest.approx(0.0, abs=1e-6)

    east = ecef_to_geodetic((0.0, 7378.137, 0.0))
    assert east.longitude == pytest.approx(90.0)
    assert east.altitude_km == pytest.approx(1000.0, abs=1e-6)

    pole = ecef_to_geodetic((0.0, 0.0, 6456.7523142))
    assert pole.latitude == pytest.approx(90.0)
    assert pole.altitude_km == pytest.approx(100.0, abs=1e-6)


def test_teme_to_ecef_preserves_z():
    state = StateVector((7000.0, 0.0, 100.0), (0.0, 7.5, 1.0))
    rotated = teme_to_ecef(state, datetime(2024, 1, 1, tzinfo=timezone.utc))
    assert rotated.position_km[2] == 100.0
    assert math.hypot(*rotated.position_km[:2]) == pytest.approx(7000.0)


def test_frame_from_string():
    assert Frame.from_string("ECEF") is Frame.ECEF
    assert Frame.from_string("teme") is Frame.TEME
    with pytest.raises(ValueError, match="Unsupported frame"):
        Frame.from_string("gcrs")
