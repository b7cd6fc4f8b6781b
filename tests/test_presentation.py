from pothole_route.core.engine import compute_metrics
from pothole_route.core.models import Coordinate, Route
from pothole_route.presentation import (
    directions_loaded,
    format_coordinate,
    format_distance_km,
    format_score,
    score_hint,
)
from pothole_route.tools.make_map import render_map


def test_format_coordinate():
    assert format_coordinate(Coordinate(lat=20.595, lon=78.965)) == "Lat: 20.5950, Lng: 78.9650"
    assert format_coordinate(None) == ""


def test_format_distance_km():
    assert format_distance_km(12_345.0) == "12.3 km"
    assert format_distance_km(0) == "0 km"
    assert format_distance_km(None) == "0 km"


def test_format_score():
    assert format_score(83) == "83/100"


def test_score_hint(straight_route, small_catalog):
    assert score_hint(None) == "Set a destination to see route score"
    m = compute_metrics(straight_route, small_catalog)
    assert score_hint(m) == "Based on 2 potholes over 0.2km"


def test_directions_loaded():
    assert directions_loaded(3).message == "Route displayed! Found 3 pothole(s) on this path."


def test_render_map(straight_route, small_catalog):
    m = compute_metrics(straight_route, small_catalog)
    html = render_map(straight_route, m, "https://tiles.test/{z}/{x}/{y}.png")
    assert "https://tiles.test/{z}/{x}/{y}.png" in html
    assert "Pothole #1" in html
    assert "Pothole #3" in html
    assert "Pothole #2" not in html
    assert format_score(m.score) in html


def test_render_map_single_point():
    route = Route(points=(Coordinate(lat=1.0, lon=1.0),))
    m = compute_metrics(route, [])
    assert "Set a destination to see route score" in render_map(route, m, "t/{z}/{x}/{y}")
