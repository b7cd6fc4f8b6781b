"""Classify which catalog hazards lie on a route polyline."""
from __future__ import annotations

import logging
from typing import List, Sequence

from shapely.geometry import LineString, Point

from pothole_route.core.geo import _haversine_m, _project_local_m
from pothole_route.core.models import Hazard, Route

log = logging.getLogger(__name__)

DEFAULT_THRESHOLD_M = 50.0
MATCH_MODES = ("vertex", "segment")


def _near_any_vertex(hazard: Hazard, route: Route, threshold_m: float) -> bool:
    for p in route.points:
        if _haversine_m(hazard.lat, hazard.lon, p.lat, p.lon) < threshold_m:
            return True
    return False


def _segment_distance_m(hazard: Hazard, route: Route) -> float:
    """Minimum distance from the hazard to any polyline edge, in metres."""
    pts = [_project_local_m(p.lat, p.lon, hazard.lat, hazard.lon) for p in route.points]
    here = Point(0.0, 0.0)
    if len(pts) == 1:
        return here.distance(Point(pts[0]))
    return LineString(pts).distance(here)


def match_hazards(
    catalog: Sequence[Hazard],
    route: Route,
    threshold_m: float = DEFAULT_THRESHOLD_M,
    mode: str = "vertex",
) -> List[Hazard]:
    """
    Return the hazards from ``catalog`` that lie on ``route``, in catalog order.

    ``mode="vertex"`` counts a hazard when it is closer than ``threshold_m``
    to any route vertex. Hazards beside the middle of a long straight edge
    are missed; that is the reference behavior.

    ``mode="segment"`` measures to the nearest point on each edge instead.
    It matches a superset of the vertex mode and therefore changes results.
    """
    if mode == "vertex":
        found = [h for h in catalog if _near_any_vertex(h, route, threshold_m)]
    elif mode == "segment":
        found = [h for h in catalog if _segment_distance_m(h, route) < threshold_m]
    else:
        raise ValueError(f"Unknown match mode: '{mode}' (supported: {', '.join(MATCH_MODES)})")

    log.debug(
        "Matched %d/%d hazards against %d vertices (mode=%s, threshold=%.1fm)",
        len(found), len(catalog), len(route.points), mode, threshold_m,
    )
    return found
