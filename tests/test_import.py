import importlib


def test_importable() -> None:
    module = importlib.import_module("nasa_explorer")
    assert hasattr(module, "parse_tle")
    assert hasattr(module, "build_aggregate_stats")


def test_service_layers_importable() -> None:
    service = importlib.import_module("fetch.service")
    propagate = importlib.import_module("propagate")
    assert hasattr(service, "ExplorerService")
    assert hasattr(propagate, "ground_track")
