from __future__ import annotations

import datetime as dt
import json

import pytest

from fetch.service import ExplorerService
from fetch.sources import UpstreamError
from nasa_explorer.__main__ import main
from nasa_explorer.cli import common
from nasa_explorer.config import load_config

LINE1 = "1 25544U 98067A   20344.91719907  .00001264  00000-0  29621-4 0  9993"
LINE2 = "2 25544  51.6466 223.8666 0002416  90.3778  30.6140 15.48970462256430"


class StubClient:
    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def get_json(self, path, params=None):
        self.calls.append((path, dict(params or {})))
        response = self.responses.get(path)
        if isinstance(response, BaseException):
            raise response
        if response is None:
            raise UpstreamError("Requested resource not found. Please check your parameters.", status=404)
        return response


@pytest.fixture
def stubs(monkeypatch):
    clients = {name: StubClient() for name in ("nasa", "eonet", "tle", "data", "images")}

    def build_service():
        return ExplorerService(
            clock=lambda: dt.datetime(2024, 6, 5, 12, tzinfo=dt.timezone.utc),
            config=load_config({}),
            **clients,
        )

    monkeypatch.setattr(common, "build_service", build_service)
    return clients


def _error(captured) -> dict:
    return json.loads(captured.err.strip().splitlines()[-1])


def test_tle_fetch_single(stubs, capsys):
    stubs["tle"].responses["/25544"] = {"name": "ISS (ZARYA)", "line1": LINE1, "line2": LINE2}
    assert main(["tle", "fetch", "25544"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["satellite_id"] == 25544
    assert payload["orbit"]["classification"]["type"] == "LEO"


def test_tle_fetch_upstream_failure_exits_1(stubs, capsys):
    stubs["tle"].responses["/25544"] = UpstreamError("TLE API is unavailable", status=503)
    assert main(["tle", "fetch", "25544"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert _error(captured)["error"] == "TLE API is unavailable"


def test_tle_fetch_rejects_non_numeric_ids(stubs, capsys):
    assert main(["tle", "fetch", "25544", "ISS"]) == 2
    assert "ISS" in _error(capsys.readouterr())["error"]
    assert stubs["tle"].calls == []


def test_tle_track_by_id(stubs, capsys):
    stubs["tle"].responses["/25544"] = {"name": "ISS (ZARYA)", "line1": LINE1, "line2": LINE2}
    code = main(["tle", "track", "--id", "25544", "--start", "2020-12-10T00:00:00", "--minutes", "2"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["satellite_number"] == 25544
    assert len(payload["samples"]) == 3


def test_neo_analyze(stubs, capsys):
    stubs["nasa"].responses["/neo/rest/v1/feed"] = {
        "near_earth_objects": {
            "2024-06-05": [{"is_potentially_hazardous_asteroid": False}, {"is_potentially_hazardous_asteroid": True}]
        }
    }
    assert main(["neo", "analyze", "--start", "2024-06-05", "--end", "2024-06-06", "--detailed"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["analysis"]["total_count"] == 2
    assert payload["analysis"]["potentially_hazardous_count"] == 1
    assert payload["metadata"]["analysis_type"] == "detailed"
    assert stubs["nasa"].calls == [("/neo/rest/v1/feed", {"start_date": "2024-06-05", "end_date": "2024-06-06"})]


def test_neo_feed_inverted_range_exits_2(stubs, capsys):
    assert main(["neo", "feed", "--start", "2024-06-10", "--end", "2024-06-01"]) == 2
    assert stubs["nasa"].calls == []


def test_apod_invalid_date_exits_2(stubs, capsys):
    assert main(["apod", "--date", "1990-01-01"]) == 2
    assert "Date out of range" in _error(capsys.readouterr())["error"]


def test_eonet_events(stubs, capsys):
    stubs["eonet"].responses["/events"] = {"events": [{"id": "E1", "closed": None, "geometry": [{"date": "d"}]}]}
    assert main(["eonet", "events", "--status", "open", "--limit", "5"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["events"][0]["isActive"] is True
    assert stubs["eonet"].calls[0][1]["status"] == "open"
    assert stubs["eonet"].calls[0][1]["limit"] == 5


def test_stats_command(tmp_path, capsys):
    path = tmp_path / "records.json"
    path.write_text(
        json.dumps(
            {
                "studies": [
                    {"status": "Active", "public": "true"},
                    {"status": "Completed", "public": "false"},
                    {"status": "Active", "public": True},
                ]
            }
        ),
        encoding="utf-8",
    )
    code = main(
        ["stats", str(path), "--records-key", "studies", "--flag-field", "public", "--category-field", "status"]
    )
    assert code == 0
    assert json.loads(capsys.readouterr().out) == {
        "total": 3,
        "true_count": 2,
        "false_count": 1,
        "category_counts": {"Active": 2, "Completed": 1},
    }


def test_stats_rejects_non_list(tmp_path, capsys):
    path = tmp_path / "records.json"
    path.write_text(json.dumps({"a": 1}), encoding="utf-8")
    assert main(["stats", str(path)]) == 2
    assert "JSON list" in _error(capsys.readouterr())["error"]


def test_techtransfer_search(stubs, capsys):
    stubs["nasa"].responses["/techtransfer/software/"] = {"results": [["7", "ARC-1", "<b>Flight</b> planner"]]}
    assert main(["techtransfer", "software", "--search", "flight"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["results"] == [["7", "ARC-1", "Flight planner"]]
    assert stubs["nasa"].calls == [("/techtransfer/software/", {"software": "flight"})]


def test_techtransfer_outage_exits_1(stubs, capsys):
    stubs["nasa"].responses["/techtransfer/patent/"] = UpstreamError("Tech Transfer is down", status=500)
    assert main(["techtransfer"]) == 1
    assert _error(capsys.readouterr())["error"] == "Tech Transfer is down"


def test_media_search_passes_filters(stubs, capsys):
    stubs["images"].responses["/search"] = {"collection": {"items": [], "metadata": {"total_hits": 0}}}
    assert main(["media", "search", "--center", "JSC", "--year-start", "1969", "--page-size", "20"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["metadata"]["total_hits"] == 0
    assert stubs["images"].calls == [
        ("/search", {"center": "JSC", "year_start": "1969", "media_type": "image", "page": 1, "page_size": 20})
    ]


def test_media_search_without_terms_exits_2(stubs, capsys):
    assert main(["media", "search"]) == 2
    assert "required" in _error(capsys.readouterr())["error"]
    assert stubs["images"].calls == []
