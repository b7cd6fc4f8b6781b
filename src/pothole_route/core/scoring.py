from __future__ import annotations

from math import floor
from typing import Optional

from pothole_route.core.models import ScoreBreakdown, ScoringParams


def _round_half_up(x: float) -> int:
    # 82.5 -> 83, matching the reference implementation
    return int(floor(x + 0.5))


def score_breakdown(
    hazard_count: int,
    distance_m: Optional[float],
    params: Optional[ScoringParams] = None,
) -> ScoreBreakdown:
    """
    Heuristic route score in [0, 100], higher is better.

    Pothole density (hazards per km) costs up to ``max_pothole_penalty``
    points; deviation from the optimal distance costs up to
    ``max_distance_penalty``. A missing or zero distance scores 0.
    """
    p = params or ScoringParams()

    if not distance_m:
        return ScoreBreakdown(hazard_count=hazard_count)

    distance_km = distance_m / 1000.0
    density = hazard_count / distance_km
    pothole_penalty = min(p.max_pothole_penalty, density * p.pothole_weight)
    distance_penalty = min(
        p.max_distance_penalty, abs(distance_km - p.optimal_distance_km) * p.distance_weight
    )

    raw = max(0.0, 100.0 - pothole_penalty - distance_penalty)
    score = max(0, min(100, _round_half_up(raw)))

    return ScoreBreakdown(
        distance_km=distance_km,
        hazard_count=hazard_count,
        pothole_density=density,
        pothole_penalty=pothole_penalty,
        distance_penalty=distance_penalty,
        raw_score=raw,
        score=score,
    )


def score_route(
    hazard_count: int,
    distance_m: Optional[float],
    params: Optional[ScoringParams] = None,
) -> int:
    return score_breakdown(hazard_count, distance_m, params).score
