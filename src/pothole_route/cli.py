from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from pothole_route.catalog import resolve_catalog
from pothole_route.config import settings
from pothole_route.core.models import Coordinate, ScoringParams
from pothole_route.errors import ConfigurationError
from pothole_route.position import ReplayPositionSource
from pothole_route.presentation import (
    format_coordinate,
    format_distance_km,
    format_score,
    score_hint,
)
from pothole_route.providers.factory import build_provider
from pothole_route.session import RideSession
from pothole_route.tools.make_map import render_map, write_map


def _save_json(path: Path, obj) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(obj, indent=2), encoding="utf-8")


def main() -> None:
    ap = argparse.ArgumentParser(description="Score a driving route by the potholes along it.")
    ap.add_argument("--origin", required=True, type=Coordinate.parse, help="Current location 'lat,lon'")
    ap.add_argument("--dest", required=True, type=Coordinate.parse, help="Destination 'lat,lon'")
    ap.add_argument("--provider", default="ors", help="ors | mock")
    ap.add_argument("--catalog", default=None, help="Hazard catalog JSON (default: built-in)")
    ap.add_argument("--threshold-m", type=float, default=settings.hazard_threshold_m)
    ap.add_argument("--mode", choices=["vertex", "segment"], default=settings.match_mode)
    ap.add_argument("--map", default=None, help="Write a Leaflet HTML map to this path")
    ap.add_argument("--save", action="store_true", help="Save route + metrics to runs/last_run.json")
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [pothole-route] %(levelname)s %(message)s",
    )

    console = Console()

    try:
        provider = build_provider(args.provider)
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(2)

    try:
        catalog = resolve_catalog(args.catalog)
    except (OSError, ValueError) as e:
        console.print(f"[red]Could not load hazard catalog: {e}[/red]")
        raise SystemExit(2)

    session = RideSession(
        provider,
        catalog,
        threshold_m=args.threshold_m,
        params=ScoringParams.from_settings(settings),
        mode=args.mode,
    )
    session.attach_position_source(
        ReplayPositionSource([args.origin], min_distance_m=settings.position_min_distance_m)
    )
    session.select_destination(args.dest)
    state = session.request_route()

    if state.metrics is None:
        alert = state.alert
        console.print(f"[red]{alert.title}[/red]: {alert.message}" if alert else "[red]No route[/red]")
        raise SystemExit(1)

    metrics = state.metrics
    table = Table(title="Plan Your Ride")
    table.add_column("Current Location")
    table.add_column("Destination")
    table.add_column("Potholes")
    table.add_column("Distance")
    table.add_column("Score")
    table.add_row(
        format_coordinate(state.current),
        format_coordinate(state.destination),
        str(metrics.hazard_count),
        format_distance_km(metrics.total_distance_m),
        format_score(metrics.score),
    )
    console.print(table)
    console.print(score_hint(metrics))

    if metrics.hazards_on_route:
        hz = Table(title="Potholes on route")
        hz.add_column("Id")
        hz.add_column("Lat")
        hz.add_column("Lon")
        for h in metrics.hazards_on_route:
            hz.add_row(str(h.id), f"{h.lat:.5f}", f"{h.lon:.5f}")
        console.print(hz)

    if args.debug:
        console.print(metrics.breakdown.model_dump())

    if args.save:
        run_path = Path("runs") / "last_run.json"
        _save_json(run_path, {"route": state.route.to_lonlat(), "metrics": metrics.model_dump()})
        console.print(f"Saved: {run_path.resolve()}")

    if args.map:
        html = render_map(
            state.route,
            metrics,
            settings.tile_url_template,
            current=state.current,
            destination=state.destination,
        )
        out = write_map(Path(args.map), html)
        console.print(f"Saved: {out.resolve()}")


if __name__ == "__main__":
    main()
