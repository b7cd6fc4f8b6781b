"""Exception hierarchy for pothole-route.

Providers and sources raise these; the session turns them into alerts,
the API into HTTP errors.
"""
from __future__ import annotations


class PotholeRouteError(Exception):
    """Base class for all pothole-route errors."""


class ConfigurationError(PotholeRouteError):
    pass


class LocationPermissionError(PotholeRouteError):
    """Location access was denied. Terminal for the live-position feature."""


class MissingPreconditionError(PotholeRouteError):
    pass


class NoDestinationError(MissingPreconditionError):
    pass


class NoCurrentLocationError(MissingPreconditionError):
    pass


class DirectionsError(PotholeRouteError):
    """Network, HTTP or payload failure talking to the directions service."""


class NoRouteFoundError(DirectionsError):
    pass
