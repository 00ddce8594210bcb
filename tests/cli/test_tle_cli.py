from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from nasa_explorer.__main__ import main

NAME = "ISS (ZARYA)"
LINE1 = "1 25544U 98067A   20344.91719907  .00001264  00000-0  29621-4 0  9993"
LINE2 = "2 25544  51.6466 223.8666 0002416  90.3778  30.6140 15.48970462256430"


@pytest.fixture
def tle_file(tmp_path: Path) -> Path:
    path = tmp_path / "iss.tle"
    path.write_text(f"{NAME}\n{LINE1}\n{LINE2}\n", encoding="utf-8")
    return path


def _error(captured) -> dict:
    return json.loads(captured.err.strip().splitlines()[-1])


def test_parse_from_file(tle_file, capsys):
    assert main(["tle", "parse", str(tle_file)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == NAME
    assert payload["satellite_number"] == 25544
    assert payload["epoch"].startswith("2020-12-09T22:00:45")


def test_parse_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{LINE1}\n{LINE2}\n"))
    assert main(["tle", "parse"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["name"] == ""
    assert payload["mean_motion"] == pytest.approx(15.48970462)


def test_orbit_derives_classification(tle_file, capsys):
    assert main(["tle", "orbit", str(tle_file)]) == 0
    payload = json.loads(capsys.readouterr().out)
    orbit = payload["orbit"]
    assert orbit["classification"] == {"type": "LEO", "category": "Inclined"}
    assert orbit["altitude"] == pytest.approx(427, abs=5)
    assert orbit["orbital_period"] == pytest.approx(92.97, abs=0.05)


def test_bad_checksum_exits_2(tmp_path, capsys):
    path = tmp_path / "bad.tle"
    path.write_text(f"{LINE1[:68]}4\n{LINE2}\n", encoding="utf-8")
    assert main(["tle", "parse", str(path)]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "checksum" in _error(captured)["error"]


def test_no_checksum_flag_accepts_corrupted_line(tmp_path, capsys):
    path = tmp_path / "bad.tle"
    path.write_text(f"{LINE1[:68]}4\n{LINE2}\n", encoding="utf-8")
    assert main(["tle", "parse", "--no-checksum", str(path)]) == 0
    assert json.loads(capsys.readouterr().out)["satellite_number"] == 25544


def test_missing_file_exits_2(tmp_path, capsys):
    assert main(["tle", "parse", str(tmp_path / "absent.tle")]) == 2
    assert "input file not found" in _error(capsys.readouterr())["error"]


def test_track_window(tle_file, capsys):
    code = main(
        [
            "tle",
            "track",
            str(tle_file),
            "--start",
            "2020-12-09T22:00:46Z",
            "--minutes",
            "10",
            "--step",
            "300",
        ]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["frame"] == "ecef"
    assert payload["start"] == "2020-12-09T22:00:46+00:00"
    assert len(payload["samples"]) == 3
    assert all(350 < s["altitude_km"] < 500 for s in payload["samples"])


@pytest.mark.parametrize("extra", [["--step", "0"], ["--start", "yesterday"]])
def test_track_rejects_bad_options(tle_file, capsys, extra):
    assert main(["tle", "track", str(tle_file), *extra]) == 2
    assert "error" in _error(capsys.readouterr())


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: nasa-explorer" in capsys.readouterr().out


def test_out_of_range_epoch_exits_2(tmp_path, capsys):
    body = LINE1[:20] + "999999999999" + LINE1[32:68]
    total = sum(int(ch) if ch.isdigit() else 1 if ch == "-" else 0 for ch in body)
    path = tmp_path / "epoch.tle"
    path.write_text(f"{body}{total % 10}\n{LINE2}\n", encoding="utf-8")
    assert main(["tle", "parse", str(path)]) == 2
    assert "epoch day" in _error(capsys.readouterr())["error"]
