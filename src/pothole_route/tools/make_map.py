from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Optional

from pothole_route.core.models import Coordinate, Route, RouteMetrics
from pothole_route.presentation import format_coordinate, format_distance_km, format_score, score_hint

MARKER_COLOR = {
    "origin": "#1565c0",
    "destination": "#c62828",
    "pothole": "#ef6c00",
}
ROUTE_COLOR = "#ff0000"


def render_map(
    route: Route,
    metrics: RouteMetrics,
    tile_url_template: str,
    current: Optional[Coordinate] = None,
    destination: Optional[Coordinate] = None,
) -> str:
    """Return a self-contained Leaflet page: route, endpoints, potholes, score panel."""
    origin = current or route.origin
    dest = destination or route.destination

    markers = [
        {"lat": origin.lat, "lon": origin.lon, "title": "You are here", "color": MARKER_COLOR["origin"]},
        {"lat": dest.lat, "lon": dest.lon, "title": "Destination", "color": MARKER_COLOR["destination"]},
    ]
    markers += [
        {"lat": h.lat, "lon": h.lon, "title": f"Pothole #{h.id}", "color": MARKER_COLOR["pothole"]}
        for h in metrics.hazards_on_route
    ]
    line = [[p.lat, p.lon] for p in route.points]

    panel = {
        "current": format_coordinate(origin),
        "destination": format_coordinate(dest),
        "potholes": metrics.hazard_count,
        "distance": format_distance_km(metrics.total_distance_m),
        "score": format_score(metrics.score),
        "hint": score_hint(metrics),
    }

    return f"""<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>Pothole Route – Map</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css" />
  <style>
    body {{ margin: 0; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }}
    #map {{ height: 100vh; width: 100vw; }}
    #panel {{ position: absolute; top: 12px; right: 12px; z-index: 1000; background: #fff;
              padding: 12px 16px; border-radius: 12px; box-shadow: 0 2px 8px rgba(0,0,0,.2); }}
    #panel .score {{ font-size: 32px; font-weight: bold; color: #1a237e; }}
  </style>
</head>
<body>
<div id="map"></div>
<div id="panel"></div>
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<script>
  const markers = {json.dumps(markers)};
  const line = {json.dumps(line)};
  const panel = {json.dumps(panel)};

  const map = L.map('map');

  L.tileLayer({json.dumps(tile_url_template)}, {{
    maxZoom: 19,
    attribution: '&copy; OpenStreetMap contributors'
  }}).addTo(map);

  L.polyline(line, {{ color: '{ROUTE_COLOR}', weight: 3 }}).addTo(map);

  markers.forEach((m) => {{
    L.circleMarker([m.lat, m.lon], {{ radius: 7, color: m.color, fillOpacity: 0.9 }})
      .addTo(map).bindPopup(`<b>${{m.title}}</b>`);
  }});

  document.getElementById('panel').innerHTML = `
    <div><b>Current:</b> ${{panel.current}}</div>
    <div><b>Destination:</b> ${{panel.destination}}</div>
    <div><b>Potholes:</b> ${{panel.potholes}} &nbsp; <b>Distance:</b> ${{panel.distance}}</div>
    <div class="score">${{panel.score}}</div>
    <div>${{panel.hint}}</div>
  `;

  map.fitBounds(L.latLngBounds(line).pad(0.2));
</script>
</body>
</html>
"""


def write_map(path: Path, html: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path


def main() -> None:
    """Render a map from a JSON file written by ``pothole-route --save``."""
    ap = argparse.ArgumentParser()
    ap.add_argument("--run", default="runs/last_run.json", help="Path to a saved run")
    ap.add_argument("--out", default="runs/last_run_map.html")
    args = ap.parse_args()

    from pothole_route.config import settings

    data = json.loads(Path(args.run).read_text(encoding="utf-8"))
    if not data.get("route"):
        raise SystemExit(f"No route found in {args.run}")

    route = Route.from_lonlat(data["route"])
    metrics = RouteMetrics.model_validate(data["metrics"])
    out = write_map(Path(args.out), render_map(route, metrics, settings.tile_url_template))
    print(f"Wrote: {out.resolve()}")


if __name__ == "__main__":
    main()
