import pytest

from pothole_route.catalog import default_catalog
from pothole_route.core.hazards import match_hazards
from pothole_route.core.models import Coordinate, Hazard, Route


def _ids(hazards):
    return [h.id for h in hazards]


def test_hazard_on_a_vertex_is_matched(straight_route, small_catalog):
    found = match_hazards(small_catalog, straight_route)
    assert 1 in _ids(found)


def test_far_hazard_is_excluded(straight_route, small_catalog):
    found = match_hazards(small_catalog, straight_route)
    assert 2 not in _ids(found)


def test_output_is_catalog_ordered_subset(straight_route, small_catalog):
    found = match_hazards(small_catalog, straight_route)
    assert _ids(found) == [1, 3]
    assert all(h in small_catalog for h in found)


def test_reversing_route_keeps_the_same_set(straight_route, small_catalog):
    forward = match_hazards(small_catalog, straight_route)
    backward = match_hazards(small_catalog, straight_route.reversed())
    assert _ids(forward) == _ids(backward)


def test_nearby_catalog_entry_is_matched_at_50m():
    # ~15 m from catalog entry #1
    route = Route(points=(Coordinate(lat=20.5951, lon=78.9651), Coordinate(lat=20.60, lon=78.97)))
    found = match_hazards(default_catalog(), route, threshold_m=50.0)
    assert _ids(found) == [1]


def test_threshold_is_strict():
    h = Hazard(id=7, coordinate=Coordinate(lat=0.0, lon=0.0))
    route = Route(points=(Coordinate(lat=0.001, lon=0.0),))  # ~111.2 m away
    assert match_hazards([h], route, threshold_m=111.0) == []
    assert _ids(match_hazards([h], route, threshold_m=112.0)) == [7]


def test_empty_catalog():
    route = Route(points=(Coordinate(lat=0.0, lon=0.0),))
    assert match_hazards([], route) == []


def test_midpoint_of_long_edge_only_caught_in_segment_mode():
    route = Route(points=(Coordinate(lat=20.0, lon=79.0), Coordinate(lat=20.01, lon=79.0)))
    beside = Hazard(id=9, coordinate=Coordinate(lat=20.005, lon=79.0001))  # ~10 m off the edge

    assert match_hazards([beside], route, mode="vertex") == []
    assert _ids(match_hazards([beside], route, mode="segment")) == [9]


def test_segment_mode_single_vertex_route():
    route = Route(points=(Coordinate(lat=20.0, lon=79.0),))
    near = Hazard(id=1, coordinate=Coordinate(lat=20.0001, lon=79.0))
    far = Hazard(id=2, coordinate=Coordinate(lat=20.001, lon=79.0))
    assert _ids(match_hazards([near, far], route, mode="segment")) == [1]


def test_unknown_mode_rejected(straight_route, small_catalog):
    with pytest.raises(ValueError):
        match_hazards(small_catalog, straight_route, mode="grid")
