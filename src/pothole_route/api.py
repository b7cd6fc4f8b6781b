"""FastAPI REST backend for the pothole route scorer."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from pothole_route.catalog import resolve_catalog
from pothole_route.config import settings
from pothole_route.core.engine import compute_metrics
from pothole_route.core.models import Coordinate, Hazard, Route, RouteMetrics, ScoringParams
from pothole_route.errors import ConfigurationError, DirectionsError, NoRouteFoundError
from pothole_route.presentation import format_distance_km, format_score, score_hint
from pothole_route.providers.factory import build_provider

log = logging.getLogger(__name__)

app = FastAPI(title="Pothole Route", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Module-level singletons
# ---------------------------------------------------------------------------
_provider_cache: Dict[str, Any] = {}
_catalog: Optional[List[Hazard]] = None


def _get_provider(name: str):
    if name not in _provider_cache:
        _provider_cache[name] = build_provider(name)
    return _provider_cache[name]


def get_catalog() -> List[Hazard]:
    global _catalog
    if _catalog is None:
        _catalog = resolve_catalog()
    return _catalog


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class RouteMetricsRequest(BaseModel):
    route: List[Coordinate] = Field(..., min_length=1)
    threshold_m: float = Field(default=settings.hazard_threshold_m, gt=0)
    mode: Literal["vertex", "segment"] = settings.match_mode


class DirectionsRequest(BaseModel):
    origin: Coordinate
    destination: Coordinate
    provider: str = "ors"
    threshold_m: float = Field(default=settings.hazard_threshold_m, gt=0)
    mode: Literal["vertex", "segment"] = settings.match_mode


class HazardOut(BaseModel):
    id: int
    lat: float
    lon: float


class MetricsOut(BaseModel):
    total_distance_m: float
    hazards_on_route: List[HazardOut]
    score: int
    score_text: str
    distance_text: str
    hint: str
    breakdown: Dict[str, Any] = {}


class DirectionsResponse(BaseModel):
    route: List[List[float]]  # [lon, lat] pairs
    metrics: MetricsOut


def _hazard_out(h: Hazard) -> HazardOut:
    return HazardOut(id=h.id, lat=h.lat, lon=h.lon)


def _metrics_out(m: RouteMetrics) -> MetricsOut:
    return MetricsOut(
        total_distance_m=m.total_distance_m,
        hazards_on_route=[_hazard_out(h) for h in m.hazards_on_route],
        score=m.score,
        score_text=format_score(m.score),
        distance_text=format_distance_km(m.total_distance_m),
        hint=score_hint(m),
        breakdown=m.breakdown.model_dump(),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health(catalog: List[Hazard] = Depends(get_catalog)):
    return {"status": "ok", "hazards": len(catalog)}


@app.get("/hazards", response_model=List[HazardOut])
def list_hazards(catalog: List[Hazard] = Depends(get_catalog)):
    return [_hazard_out(h) for h in catalog]


@app.post("/route-metrics", response_model=MetricsOut)
def route_metrics(req: RouteMetricsRequest, catalog: List[Hazard] = Depends(get_catalog)):
    metrics = compute_metrics(
        Route(points=tuple(req.route)),
        catalog,
        threshold_m=req.threshold_m,
        params=ScoringParams.from_settings(settings),
        mode=req.mode,
    )
    return _metrics_out(metrics)


@app.post("/directions", response_model=DirectionsResponse)
def directions(req: DirectionsRequest, catalog: List[Hazard] = Depends(get_catalog)):
    try:
        provider = _get_provider(req.provider)
    except (ConfigurationError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        route = provider.get_route(req.origin, req.destination)
    except NoRouteFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DirectionsError as e:
        log.warning("Directions failed: %s", e)
        raise HTTPException(status_code=502, detail="Could not fetch route from OpenRouteService.")

    metrics = compute_metrics(
        route,
        catalog,
        threshold_m=req.threshold_m,
        params=ScoringParams.from_settings(settings),
        mode=req.mode,
    )
    return DirectionsResponse(route=route.to_lonlat(), metrics=_metrics_out(metrics))
