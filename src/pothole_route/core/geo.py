"""Great-circle distance helpers."""
from __future__ import annotations

from math import atan2, cos, radians, sin, sqrt
from typing import Sequence, Tuple

from pothole_route.core.models import Coordinate

EARTH_RADIUS_M = 6_371_000.0


# ---------------------------------------------------------------------------
# Raw float helpers
# ---------------------------------------------------------------------------

def _haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in metres between two WGS-84 points."""
    lat1r, lon1r, lat2r, lon2r = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2r - lat1r
    dlon = lon2r - lon1r
    a = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_M * 2 * atan2(sqrt(a), sqrt(1 - a))


def _project_local_m(
    lat: float, lon: float, lat0: float, lon0: float
) -> Tuple[float, float]:
    """Equirectangular projection to metres (x east, y north) around (lat0, lon0).

    Accurate to well under a metre over the few hundred metres that matter
    for hazard matching.
    """
    x = radians(lon - lon0) * cos(radians(lat0)) * EARTH_RADIUS_M
    y = radians(lat - lat0) * EARTH_RADIUS_M
    return x, y


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def haversine_m(a: Coordinate, b: Coordinate) -> float:
    return _haversine_m(a.lat, a.lon, b.lat, b.lon)


def route_distance_m(points: Sequence[Coordinate]) -> float:
    """Sum of consecutive segment distances; 0 for fewer than two points."""
    total = 0.0
    for i in range(1, len(points)):
        total += haversine_m(points[i - 1], points[i])
    return total
