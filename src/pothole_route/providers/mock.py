from __future__ import annotations

from pothole_route.core.models import Coordinate, Route
from pothole_route.providers.base import DirectionsProvider


class StraightLineProvider(DirectionsProvider):
    """
    Deterministic fake directions so the pipeline runs end-to-end without APIs.
    Returns ``vertices`` evenly spaced points on the straight line origin → destination.
    """

    def __init__(self, vertices: int = 50):
        self.vertices = max(2, int(vertices))

    def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        n = self.vertices - 1
        points = []
        for i in range(self.vertices):
            u = i / n
            points.append(
                Coordinate(
                    lat=origin.lat + u * (destination.lat - origin.lat),
                    lon=origin.lon + u * (destination.lon - origin.lon),
                )
            )
        return Route(points=tuple(points))
