from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from pothole_route.core.models import Coordinate, Route
from pothole_route.errors import ConfigurationError, DirectionsError, NoRouteFoundError
from pothole_route.providers.base import DirectionsProvider
from pothole_route.providers.http import HTTPClient

log = logging.getLogger(__name__)


class OpenRouteServiceProvider(DirectionsProvider):
    """
    OpenRouteService directions via:
      GET {base_url}/{profile}?api_key=..&start=lon,lat&end=lon,lat

    The GeoJSON response carries the polyline under
    ``features[0].geometry.coordinates`` as ``[lon, lat]`` pairs.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openrouteservice.org/v2/directions",
        profile: str = "driving-car",
        http: Optional[Any] = None,
        timeout_s: int = 25,
        user_agent: str = "PotholeRoute/0.1.0",
    ):
        if not api_key:
            raise ConfigurationError(
                "OpenRouteService API key not set (POTHOLE_ROUTE_ORS_API_KEY)"
            )
        self.api_key = api_key
        self.url = f"{base_url.rstrip('/')}/{profile}"
        self.http = http if http is not None else HTTPClient(user_agent=user_agent, timeout_s=timeout_s)

    def _params(self, origin: Coordinate, destination: Coordinate) -> Dict[str, str]:
        return {
            "api_key": self.api_key,
            "start": origin.as_lonlat(),
            "end": destination.as_lonlat(),
        }

    def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        try:
            data = self.http.get_json(self.url, params=self._params(origin, destination))
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            log.warning("ORS request failed with HTTP %s", status)
            if status == 404:
                raise NoRouteFoundError("No route found by ORS.") from e
            raise DirectionsError(f"ORS HTTP error: {status}") from e
        except (requests.RequestException, ValueError) as e:
            log.warning("ORS request failed: %s", e)
            raise DirectionsError(f"ORS request failed: {type(e).__name__}") from e

        features = data.get("features") if isinstance(data, dict) else None
        if not features:
            raise NoRouteFoundError("No route found by ORS.")

        try:
            coords = features[0]["geometry"]["coordinates"]
            route = Route.from_lonlat(coords)
        except (KeyError, TypeError, IndexError, ValidationError) as e:
            raise DirectionsError(f"Malformed ORS response: {type(e).__name__}") from e

        log.info("ORS route loaded: %d vertices", len(route.points))
        return route
