"""Hazard catalog: built-in pothole list plus JSON loading."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pothole_route.core.models import Coordinate, Hazard

log = logging.getLogger(__name__)


# (id, lat, lon)
_DEFAULT_ROWS: List[Tuple[int, float, float]] = [
    (1, 20.595, 78.965),
    (2, 20.596, 78.969),
    (3, 19.1255, 72.8531),
    (4, 19.1234, 72.5678),
    (5, 19.2345, 72.6789),
    (6, 19.3456, 72.7890),
    (7, 19.4567, 72.8901),
    (8, 19.5678, 72.9012),
    (9, 19.6789, 72.0123),
    (10, 19.7890, 72.1234),
    (11, 19.8912, 72.2345),
    (12, 19.9123, 72.3456),
    (13, 19.9234, 72.4567),
    (14, 19.9345, 72.5678),
    (15, 19.9456, 72.6789),
    (16, 19.1272, 72.8357),
    (17, 19.1267, 72.8313),
    (18, 19.1271, 72.8353),
    (19, 19.1243, 72.8375),
    (20, 19.1277, 72.8461),
    (21, 19.1276, 72.8406),
    (22, 19.1278, 72.8319),
    (23, 19.1223, 72.8459),
]


def default_catalog() -> List[Hazard]:
    return [
        Hazard(id=hid, coordinate=Coordinate(lat=lat, lon=lon))
        for hid, lat, lon in _DEFAULT_ROWS
    ]


def _hazard_from_row(row: Dict[str, Any]) -> Hazard:
    # Accept both {"lat","lon"} and the {"latitude","longitude"} shape
    lat = row["lat"] if "lat" in row else row["latitude"]
    lon = row["lon"] if "lon" in row else row["longitude"]
    return Hazard(id=int(row["id"]), coordinate=Coordinate(lat=float(lat), lon=float(lon)))


def load_catalog(path: Path) -> List[Hazard]:
    """
    Load a catalog from a JSON array of ``{"id", "lat", "lon"}`` records.

    File order is preserved; it is the order matched hazards are reported in.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"Hazard catalog {path} must be a JSON array")

    try:
        hazards = [_hazard_from_row(row) for row in data]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Hazard catalog {path} has a malformed record: {e!r}") from e
    ids = [h.id for h in hazards]
    if len(set(ids)) != len(ids):
        raise ValueError(f"Hazard catalog {path} has duplicate ids")

    log.info("Loaded %d hazards from %s", len(hazards), path)
    return hazards


def resolve_catalog(path: Optional[str] = None) -> List[Hazard]:
    """Catalog from ``path`` (or settings.catalog_path), else the built-in one."""
    if path is None:
        from pothole_route.config import settings

        path = settings.catalog_path
    if path:
        return load_catalog(Path(path))
    return default_catalog()
