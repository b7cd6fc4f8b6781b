from __future__ import annotations

from typing import Optional, Sequence

from pothole_route.core.geo import route_distance_m
from pothole_route.core.hazards import DEFAULT_THRESHOLD_M, match_hazards
from pothole_route.core.models import Hazard, Route, RouteMetrics, ScoringParams
from pothole_route.core.scoring import score_breakdown


def compute_metrics(
    route: Route,
    catalog: Sequence[Hazard],
    threshold_m: float = DEFAULT_THRESHOLD_M,
    params: Optional[ScoringParams] = None,
    mode: str = "vertex",
) -> RouteMetrics:
    # Always a full recompute; metrics are never patched in place
    total_m = route_distance_m(route.points)
    found = match_hazards(catalog, route, threshold_m=threshold_m, mode=mode)
    breakdown = score_breakdown(len(found), total_m, params)
    return RouteMetrics(
        total_distance_m=total_m,
        hazards_on_route=tuple(found),
        score=breakdown.score,
        breakdown=breakdown,
    )
