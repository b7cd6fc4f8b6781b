"""User-facing strings for the ride screen (coordinates, distance, score, alerts)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pothole_route.core.models import Coordinate, RouteMetrics


@dataclass(frozen=True)
class Alert:
    title: str
    message: str


PERMISSION_DENIED = Alert(
    "Permission Denied",
    "Location permission is required to show your current location.",
)
NO_DESTINATION = Alert("No Destination", "Please tap the map to place the red marker first.")
NO_CURRENT_LOCATION = Alert("No Current Location", "We do not have your current location yet.")
NO_ROUTE = Alert("Route Error", "No route found by ORS.")
ROUTE_FAILED = Alert("Error", "Could not fetch route from OpenRouteService.")


def directions_loaded(hazard_count: int) -> Alert:
    return Alert(
        "Directions Loaded",
        f"Route displayed! Found {hazard_count} pothole(s) on this path.",
    )


def format_coordinate(c: Optional[Coordinate]) -> str:
    if c is None:
        return ""
    return f"Lat: {c.lat:.4f}, Lng: {c.lon:.4f}"


def format_distance_km(distance_m: Optional[float]) -> str:
    if not distance_m:
        return "0 km"
    return f"{distance_m / 1000:.1f} km"


def format_score(score: int) -> str:
    return f"{score}/100"


def score_hint(metrics: Optional[RouteMetrics]) -> str:
    if metrics is None or not metrics.total_distance_m:
        return "Set a destination to see route score"
    return (
        f"Based on {metrics.hazard_count} potholes over "
        f"{metrics.total_distance_m / 1000:.1f}km"
    )
