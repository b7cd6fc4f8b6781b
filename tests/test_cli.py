import json
import sys

import pytest

from pothole_route import cli
from pothole_route.config import settings


def _argv(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["pothole-route", *args])


def test_mock_route_writes_map_and_run(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "map.html"
    _argv(
        monkeypatch,
        "--provider", "mock",
        "--origin", "20.59,78.96",
        "--dest", "20.60,78.97",
        "--map", str(out),
        "--save",
    )

    cli.main()

    assert "Pothole #1" in out.read_text(encoding="utf-8")
    run = json.loads((tmp_path / "runs" / "last_run.json").read_text(encoding="utf-8"))
    assert run["route"][0] == [78.96, 20.59]
    assert [h["id"] for h in run["metrics"]["hazards_on_route"]] == [1]


def test_missing_api_key_exits(monkeypatch):
    monkeypatch.setattr(settings, "ors_api_key", "")
    _argv(monkeypatch, "--provider", "ors", "--origin", "20.59,78.96", "--dest", "20.60,78.97")
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2


def test_bad_coordinate_is_rejected(monkeypatch):
    _argv(monkeypatch, "--provider", "mock", "--origin", "120,78.96", "--dest", "20.60,78.97")
    with pytest.raises(SystemExit):
        cli.main()


def test_unreadable_catalog_exits(tmp_path, monkeypatch):
    bad = tmp_path / "catalog.json"
    bad.write_text("{not json", encoding="utf-8")
    _argv(
        monkeypatch,
        "--provider", "mock",
        "--origin", "20.59,78.96",
        "--dest", "20.60,78.97",
        "--catalog", str(bad),
    )
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2


def test_missing_catalog_file_exits(tmp_path, monkeypatch):
    _argv(
        monkeypatch,
        "--provider", "mock",
        "--origin", "20.59,78.96",
        "--dest", "20.60,78.97",
        "--catalog", str(tmp_path / "nope.json"),
    )
    with pytest.raises(SystemExit) as exc:
        cli.main()
    assert exc.value.code == 2


def test_position_source_uses_movement_setting(monkeypatch):
    built = []

    class _Recording(cli.ReplayPositionSource):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            built.append(self)

    monkeypatch.setattr(settings, "position_min_distance_m", 500.0)
    monkeypatch.setattr(cli, "ReplayPositionSource", _Recording)
    _argv(monkeypatch, "--provider", "mock", "--origin", "20.59,78.96", "--dest", "20.60,78.97")

    cli.main()

    assert built[0].min_distance_m == 500.0
