from __future__ import annotations

from pothole_route.providers.base import DirectionsProvider


def build_provider(name: str) -> DirectionsProvider:
    """
    Build a directions provider from a CLI/API token:
      "ors"   OpenRouteService (needs POTHOLE_ROUTE_ORS_API_KEY)
      "mock"  straight line, no network
    """
    token = name.strip().lower()

    # Local imports to avoid circular imports
    from pothole_route.config import settings
    from pothole_route.providers.mock import StraightLineProvider
    from pothole_route.providers.ors import OpenRouteServiceProvider

    if token in ("ors", "openrouteservice"):
        return OpenRouteServiceProvider(
            api_key=settings.ors_api_key,
            base_url=settings.ors_base_url,
            profile=settings.ors_profile,
            timeout_s=settings.http_timeout_s,
            user_agent=settings.user_agent,
        )
    if token == "mock":
        return StraightLineProvider()
    raise ValueError(f"Unknown provider token: '{name}' (supported: ors, mock)")
