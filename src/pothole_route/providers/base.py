from __future__ import annotations

from abc import ABC, abstractmethod

from pothole_route.core.models import Coordinate, Route


class DirectionsProvider(ABC):
    """Fetch a driving route between two points."""

    @abstractmethod
    def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        """Return the route polyline.

        Raises NoRouteFoundError when the service has no route, and
        DirectionsError for any other upstream failure.
        """
        raise NotImplementedError
