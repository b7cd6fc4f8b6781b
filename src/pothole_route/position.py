"""Live position sources.

A source delivers an initial fix and then updates whenever the user has
moved at least ``min_distance_m``. Consumers keep only the latest fix.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from pothole_route.config import settings
from pothole_route.core.geo import haversine_m
from pothole_route.core.models import Coordinate
from pothole_route.errors import LocationPermissionError

log = logging.getLogger(__name__)

FixCallback = Callable[[Coordinate], None]


class PositionSource(ABC):
    @abstractmethod
    def start(self, on_fix: FixCallback) -> None:
        """Begin delivering fixes. Raises LocationPermissionError if denied."""
        raise NotImplementedError

    def stop(self) -> None:
        pass


class ReplayPositionSource(PositionSource):
    """Replays a fixed sequence of fixes, applying the minimum-movement filter."""

    def __init__(
        self,
        fixes: Iterable[Coordinate],
        min_distance_m: Optional[float] = None,
        permission_granted: bool = True,
    ):
        self.fixes: List[Coordinate] = list(fixes)
        self.min_distance_m = (
            settings.position_min_distance_m if min_distance_m is None else min_distance_m
        )
        self.permission_granted = permission_granted
        self._running = False
        self._last: Optional[Coordinate] = None

    def start(self, on_fix: FixCallback) -> None:
        if not self.permission_granted:
            raise LocationPermissionError(
                "Location permission is required to show your current location."
            )
        self._running = True
        for fix in self.fixes:
            if not self._running:
                break
            if self._last is not None and haversine_m(self._last, fix) < self.min_distance_m:
                log.debug("Dropping fix (%.6f, %.6f): below movement interval", fix.lat, fix.lon)
                continue
            self._last = fix
            on_fix(fix)

    def stop(self) -> None:
        self._running = False
