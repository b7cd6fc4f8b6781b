"""Centralized settings for pothole-route."""
from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "POTHOLE_ROUTE_"}

    # OpenRouteService: an empty key means the "ors" provider can't be built
    ors_api_key: str = ""
    ors_base_url: str = "https://api.openrouteservice.org/v2/directions"
    ors_profile: str = "driving-car"

    http_timeout_s: int = 25
    user_agent: str = "PotholeRoute/0.1.0"

    # Hazard matching
    hazard_threshold_m: float = 50.0
    match_mode: str = "vertex"  # "vertex" | "segment"
    catalog_path: str = ""      # empty string means the built-in catalog

    # Scoring constants (no stated derivation, keep them tunable)
    optimal_distance_km: float = 5.0
    pothole_weight: float = 15.0
    max_pothole_penalty: float = 60.0
    distance_weight: float = 2.0
    max_distance_penalty: float = 30.0

    # Live position
    position_min_distance_m: float = 1.0

    # Map rendering
    tile_url_template: str = "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png"


settings = Settings()
