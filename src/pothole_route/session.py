"""Ride session: immutable state snapshots transitioned by events.

The session is the only place state changes. Every transition builds a new
``RideState``; subscribers get the new snapshot. Each route request carries
a token, and a response whose token is no longer the latest is dropped, so
the last request issued wins regardless of which response lands last.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel

from pothole_route.core.engine import compute_metrics
from pothole_route.core.hazards import DEFAULT_THRESHOLD_M
from pothole_route.core.models import Coordinate, Hazard, Route, RouteMetrics, ScoringParams
from pothole_route.errors import (
    DirectionsError,
    LocationPermissionError,
    MissingPreconditionError,
    NoCurrentLocationError,
    NoDestinationError,
    NoRouteFoundError,
)
from pothole_route.position import PositionSource
from pothole_route.presentation import (
    NO_CURRENT_LOCATION,
    NO_DESTINATION,
    NO_ROUTE,
    PERMISSION_DENIED,
    ROUTE_FAILED,
    Alert,
    directions_loaded,
)
from pothole_route.providers.base import DirectionsProvider

log = logging.getLogger(__name__)


class RideState(BaseModel):
    model_config = {"frozen": True}

    current: Optional[Coordinate] = None
    destination: Optional[Coordinate] = None
    route: Optional[Route] = None
    metrics: Optional[RouteMetrics] = None
    location_status: Literal["pending", "active", "denied"] = "pending"
    issued_token: int = 0
    in_flight: bool = False
    alert: Optional[Alert] = None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PositionUpdated:
    coordinate: Coordinate


@dataclass(frozen=True)
class LocationDenied:
    pass


@dataclass(frozen=True)
class DestinationSelected:
    coordinate: Coordinate


@dataclass(frozen=True)
class PreconditionFailed:
    alert: Alert


@dataclass(frozen=True)
class RouteRequested:
    token: int


@dataclass(frozen=True)
class RouteResolved:
    token: int
    route: Route
    metrics: RouteMetrics


@dataclass(frozen=True)
class RouteFailed:
    token: int
    alert: Alert


@dataclass(frozen=True)
class AlertDismissed:
    pass


Event = Union[
    PositionUpdated,
    LocationDenied,
    DestinationSelected,
    PreconditionFailed,
    RouteRequested,
    RouteResolved,
    RouteFailed,
    AlertDismissed,
]


def reduce(state: RideState, event: Event) -> RideState:
    """Pure transition: return the snapshot that follows ``event``."""
    if isinstance(event, PositionUpdated):
        return state.model_copy(update={"current": event.coordinate, "location_status": "active"})

    if isinstance(event, LocationDenied):
        return state.model_copy(update={"location_status": "denied", "alert": PERMISSION_DENIED})

    if isinstance(event, DestinationSelected):
        return state.model_copy(update={"destination": event.coordinate})

    if isinstance(event, PreconditionFailed):
        return state.model_copy(update={"alert": event.alert})

    if isinstance(event, RouteRequested):
        if event.token <= state.issued_token:
            raise ValueError(f"Route token {event.token} is not newer than {state.issued_token}")
        return state.model_copy(update={"issued_token": event.token, "in_flight": True})

    if isinstance(event, RouteResolved):
        if event.token != state.issued_token:
            return state
        return state.model_copy(
            update={
                "route": event.route,
                "metrics": event.metrics,
                "in_flight": False,
                "alert": directions_loaded(event.metrics.hazard_count),
            }
        )

    if isinstance(event, RouteFailed):
        if event.token != state.issued_token:
            return state
        # previous route/metrics stay on screen
        return state.model_copy(update={"in_flight": False, "alert": event.alert})

    if isinstance(event, AlertDismissed):
        return state.model_copy(update={"alert": None})

    raise TypeError(f"Unknown event: {event!r}")


Subscriber = Callable[[RideState], None]


class RideSession:
    def __init__(
        self,
        provider: DirectionsProvider,
        catalog: Sequence[Hazard],
        threshold_m: float = DEFAULT_THRESHOLD_M,
        params: Optional[ScoringParams] = None,
        mode: str = "vertex",
    ):
        self.provider = provider
        self.catalog = list(catalog)
        self.threshold_m = threshold_m
        self.params = params
        self.mode = mode
        self._state = RideState()
        self._subscribers: List[Subscriber] = []
        self._source: Optional[PositionSource] = None

    @property
    def state(self) -> RideState:
        return self._state

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        self._subscribers.append(fn)

        def _unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

        return _unsubscribe

    def dispatch(self, event: Event) -> RideState:
        new_state = reduce(self._state, event)
        if new_state is self._state:
            log.debug("Ignored %s", type(event).__name__)
            return new_state
        self._state = new_state
        for fn in list(self._subscribers):
            fn(new_state)
        return new_state

    # ---- Position ---------------------------------------------------------

    def attach_position_source(self, source: PositionSource) -> None:
        self._source = source
        try:
            source.start(lambda c: self.dispatch(PositionUpdated(c)))
        except LocationPermissionError as e:
            log.warning("Location permission denied: %s", e)
            self.dispatch(LocationDenied())

    def detach_position_source(self) -> None:
        if self._source is not None:
            self._source.stop()
            self._source = None

    # ---- Destination / route ---------------------------------------------

    def select_destination(self, coordinate: Coordinate) -> RideState:
        return self.dispatch(DestinationSelected(coordinate))

    def begin_route_request(self) -> int:
        """Validate preconditions and issue a new request token.

        Raises NoDestinationError / NoCurrentLocationError, destination first.
        """
        if self._state.destination is None:
            raise NoDestinationError("Select a destination first.")
        if self._state.current is None:
            raise NoCurrentLocationError("Current location not available.")
        token = self._state.issued_token + 1
        self.dispatch(RouteRequested(token))
        return token

    def _reject(self, error: MissingPreconditionError) -> RideState:
        log.info("Route request rejected: %s", error)
        alert = NO_DESTINATION if isinstance(error, NoDestinationError) else NO_CURRENT_LOCATION
        return self.dispatch(PreconditionFailed(alert))

    def complete_route_request(self, token: int, route: Route) -> RideState:
        metrics = compute_metrics(
            route,
            self.catalog,
            threshold_m=self.threshold_m,
            params=self.params,
            mode=self.mode,
        )
        log.info(
            "Route %d: %.1f km, %d hazards, score %d",
            token, metrics.total_distance_km, metrics.hazard_count, metrics.score,
        )
        return self.dispatch(RouteResolved(token, route, metrics))

    def fail_route_request(self, token: int, error: Exception) -> RideState:
        log.warning("Route %d failed: %s", token, error)
        alert = NO_ROUTE if isinstance(error, NoRouteFoundError) else ROUTE_FAILED
        return self.dispatch(RouteFailed(token, alert))

    def request_route(self) -> RideState:
        try:
            token = self.begin_route_request()
        except MissingPreconditionError as e:
            return self._reject(e)
        origin, destination = self._state.current, self._state.destination
        try:
            route = self.provider.get_route(origin, destination)
        except DirectionsError as e:
            return self.fail_route_request(token, e)
        return self.complete_route_request(token, route)

    async def request_route_async(self) -> RideState:
        """Same as request_route, with the provider call run off the event loop."""
        try:
            token = self.begin_route_request()
        except MissingPreconditionError as e:
            return self._reject(e)
        origin, destination = self._state.current, self._state.destination
        try:
            route = await asyncio.to_thread(self.provider.get_route, origin, destination)
        except DirectionsError as e:
            return self.fail_route_request(token, e)
        return self.complete_route_request(token, route)
