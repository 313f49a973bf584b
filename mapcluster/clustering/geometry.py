"""Coordinate access, distance and centroid helpers shared by the clusterers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, Tuple

import numpy as np

from ..models.cluster import LatLng


def latlng_of(point: Any) -> Tuple[float, float]:
    """Return ``(lat, lng)`` of a point.

    Accepts mappings (``{"lat": .., "lng": ..}``) and objects with ``lat`` /
    ``lng`` attributes. ``lon`` is accepted in place of ``lng``.
    """
    if isinstance(point, Mapping):
        lng = point["lng"] if "lng" in point else point["lon"]
        return float(point["lat"]), float(lng)
    lng = getattr(point, "lng", None)
    if lng is None:
        lng = getattr(point, "lon")
    return float(point.lat), float(lng)


def coord_of(point: Any) -> LatLng:
    """Default ``coord`` accessor: the point's position as a LatLng."""
    lat, lng = latlng_of(point)
    return LatLng(lat=lat, lng=lng)


def centroid(points: Iterable[Any], coord: Callable[[Any], Any] = coord_of) -> LatLng:
    """Unweighted arithmetic mean of the points' lat/lng.

    Plain mean of raw degrees, no geodesic correction and no weighting.
    """
    arr = np.array([latlng_of(coord(p)) for p in points], dtype=float)
    lat, lng = arr.mean(axis=0)
    return LatLng(lat=float(lat), lng=float(lng))
