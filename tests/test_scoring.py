import pytest

from pothole_route.core.models import ScoringParams
from pothole_route.core.scoring import score_breakdown, score_route


def test_optimal_distance_without_potholes_scores_100():
    b = score_breakdown(0, 5000.0)
    assert b.pothole_penalty == 0
    assert b.distance_penalty == 0
    assert b.score == 100


def test_ten_km_five_potholes():
    b = score_breakdown(5, 10_000.0)
    assert b.pothole_density == pytest.approx(0.5)
    assert b.pothole_penalty == pytest.approx(7.5)
    assert b.distance_penalty == pytest.approx(10.0)
    assert b.raw_score == pytest.approx(82.5)
    assert b.score == 83


def test_rounds_half_up():
    # 98.5 rounds to 99, not to the even 98
    assert score_route(0, 5750.0) == 99


@pytest.mark.parametrize("distance_m", [0, 0.0, None])
def test_zero_or_missing_distance_scores_zero(distance_m):
    assert score_route(4, distance_m) == 0
    assert score_route(0, distance_m) == 0


def test_deviation_from_optimal_lowers_score():
    assert score_route(0, 6000.0) == 98
    assert score_route(0, 4000.0) == 98
    assert score_route(0, 50_000.0) == 70  # distance penalty capped at 30


def test_potholes_lower_score():
    assert score_route(1, 5000.0) == 97
    assert score_route(1, 5000.0) < score_route(0, 5000.0)


def test_pothole_penalty_capped():
    b = score_breakdown(100, 5000.0)
    assert b.pothole_penalty == 60
    assert b.score == 40


@pytest.mark.parametrize(
    "count,distance_m",
    [(0, 1.0), (1000, 10.0), (0, 5_000_000.0), (3, 4999.0), (50, 1000.0)],
)
def test_score_always_bounded(count, distance_m):
    assert 0 <= score_route(count, distance_m) <= 100


def test_clamps_at_zero_with_harsher_params():
    params = ScoringParams(max_pothole_penalty=100, max_distance_penalty=100)
    b = score_breakdown(50, 1000.0, params)
    assert b.raw_score == 0
    assert b.score == 0


def test_custom_optimal_distance():
    params = ScoringParams(optimal_distance_km=10.0)
    assert score_route(0, 10_000.0, params) == 100
    assert score_route(0, 5000.0, params) == 90
