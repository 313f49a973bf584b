"""Structural types for the host map widget the layer draws onto."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, Tuple

from ..models.cluster import LatLng


class Bounds(Protocol):
    """Geographic rectangle currently visible on the map."""

    def contains(self, point: Any) -> bool: ...


class Marker(Protocol):
    """A single marker placed on the host map."""

    def set_position(self, latlng: LatLng) -> Any: ...

    def add_to(self, host: "HostMap") -> Any: ...

    def remove(self) -> Any: ...


class HostMap(Protocol):
    """Interactive map exposing viewport state, projection, markers and events."""

    def get_bounds(self) -> Optional[Bounds]: ...

    def project(self, point: Any) -> Any: ...

    def create_marker(self, element: Optional[Any] = None) -> Marker: ...

    def on(self, event: str, handler: Callable[..., Any]) -> Any: ...

    def off(self, event: str, handler: Callable[..., Any]) -> Any: ...


def screen_xy(projected: Any) -> Tuple[float, float]:
    """Normalise a projected position to ``(x, y)``.

    Hosts may return an object with ``x`` / ``y`` attributes, a mapping with
    ``"x"`` / ``"y"`` keys, or a plain pair.
    """
    if isinstance(projected, Mapping):
        return float(projected["x"]), float(projected["y"])
    if hasattr(projected, "x") and hasattr(projected, "y"):
        return float(projected.x), float(projected.y)
    x, y = projected[:2]
    return float(x), float(y)
