import pytest

from pothole_route.core.models import Coordinate, Hazard, Route


class FakeHTTP:
    """Stands in for HTTPClient: returns a canned payload or raises."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def get_json(self, url, params=None, timeout_s=None):
        self.calls.append((url, params))
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def straight_route():
    # three vertices heading due north along the 79°E meridian, ~111 m apart
    return Route(
        points=(
            Coordinate(lat=20.000, lon=79.0),
            Coordinate(lat=20.001, lon=79.0),
            Coordinate(lat=20.002, lon=79.0),
        )
    )


@pytest.fixture
def small_catalog():
    return [
        Hazard(id=1, coordinate=Coordinate(lat=20.001, lon=79.0)),   # on the middle vertex
        Hazard(id=2, coordinate=Coordinate(lat=20.001, lon=79.01)),  # ~1 km east
        Hazard(id=3, coordinate=Coordinate(lat=20.0021, lon=79.0)),  # ~11 m past the end
    ]
