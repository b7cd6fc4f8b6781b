from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

from pydantic import BaseModel, Field


class Coordinate(BaseModel):
    """WGS-84 point in decimal degrees."""

    model_config = {"frozen": True}

    lat: float = Field(..., ge=-90.0, le=90.0, allow_inf_nan=False)
    lon: float = Field(..., ge=-180.0, le=180.0, allow_inf_nan=False)

    @classmethod
    def parse(cls, text: str) -> Coordinate:
        """Parse ``"lat,lon"`` (as typed on the command line)."""
        parts = [p.strip() for p in text.split(",")]
        if len(parts) != 2:
            raise ValueError(f"Expected 'lat,lon', got {text!r}")
        return cls(lat=float(parts[0]), lon=float(parts[1]))

    def as_lonlat(self) -> str:
        # directions services want x,y order
        return f"{self.lon},{self.lat}"


class Hazard(BaseModel):
    model_config = {"frozen": True}

    id: int
    coordinate: Coordinate

    @property
    def lat(self) -> float:
        return self.coordinate.lat

    @property
    def lon(self) -> float:
        return self.coordinate.lon


class Route(BaseModel):
    """Ordered polyline from origin to destination."""

    model_config = {"frozen": True}

    points: Tuple[Coordinate, ...] = Field(..., min_length=1)

    @classmethod
    def from_lonlat(cls, pairs: Iterable[Sequence[Any]]) -> Route:
        """Build from ``[lon, lat]`` pairs (GeoJSON axis order)."""
        return cls(points=tuple(Coordinate(lat=float(p[1]), lon=float(p[0])) for p in pairs))

    @property
    def origin(self) -> Coordinate:
        return self.points[0]

    @property
    def destination(self) -> Coordinate:
        return self.points[-1]

    def reversed(self) -> Route:
        return Route(points=tuple(reversed(self.points)))

    def to_lonlat(self) -> List[List[float]]:
        return [[p.lon, p.lat] for p in self.points]


class ScoringParams(BaseModel):
    """Tuning constants for the route score heuristic."""

    model_config = {"frozen": True}

    optimal_distance_km: float = 5.0
    pothole_weight: float = 15.0
    max_pothole_penalty: float = 60.0
    distance_weight: float = 2.0
    max_distance_penalty: float = 30.0

    @classmethod
    def from_settings(cls, s: Any) -> ScoringParams:
        return cls(
            optimal_distance_km=s.optimal_distance_km,
            pothole_weight=s.pothole_weight,
            max_pothole_penalty=s.max_pothole_penalty,
            distance_weight=s.distance_weight,
            max_distance_penalty=s.max_distance_penalty,
        )


class ScoreBreakdown(BaseModel):
    model_config = {"frozen": True}

    distance_km: float = 0.0
    hazard_count: int = 0
    pothole_density: float = 0.0
    pothole_penalty: float = 0.0
    distance_penalty: float = 0.0
    raw_score: float = 0.0
    score: int = Field(default=0, ge=0, le=100)


class RouteMetrics(BaseModel):
    model_config = {"frozen": True}

    total_distance_m: float = Field(..., ge=0.0)
    hazards_on_route: Tuple[Hazard, ...] = ()
    score: int = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdown = Field(default_factory=ScoreBreakdown)

    @property
    def hazard_count(self) -> int:
        return len(self.hazards_on_route)

    @property
    def total_distance_km(self) -> float:
        return self.total_distance_m / 1000.0
