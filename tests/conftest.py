"""Shared fakes: a host map with a lat/lng bounding box and a linear projection."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional

import pytest


class Box:
    """Bounds as an inclusive lat/lng rectangle."""

    def __init__(self, south: float, west: float, north: float, east: float):
        self.south, self.west, self.north, self.east = south, west, north, east

    def contains(self, point: Any) -> bool:
        return self.south <= point["lat"] <= self.north and self.west <= point["lng"] <= self.east


class FakeMarker:
    def __init__(self, element: Any = None):
        self.element = element
        self.position = None
        self.host = None
        self.removed = False

    def set_position(self, latlng):
        self.position = latlng
        return self

    def add_to(self, host):
        self.host = host
        return self

    def remove(self):
        self.removed = True
        return self


class FakeMap:
    """Host map whose projection is ``scale`` pixels per degree."""

    def __init__(self, bounds: Optional[Box] = None, scale: float = 1000.0):
        self.bounds = bounds
        self.scale = scale
        self.handlers: Dict[str, List[Callable]] = {}
        self.created: List[FakeMarker] = []
        self.bounds_reads = 0

    def get_bounds(self):
        self.bounds_reads += 1
        return self.bounds

    def project(self, point):
        return SimpleNamespace(x=point["lng"] * self.scale, y=-point["lat"] * self.scale)

    def create_marker(self, element=None):
        marker = FakeMarker(element)
        self.created.append(marker)
        return marker

    def on(self, event, handler):
        self.handlers.setdefault(event, []).append(handler)

    def off(self, event, handler):
        self.handlers.get(event, []).remove(handler)

    def fire(self, event):
        for handler in list(self.handlers.get(event, [])):
            handler({"type": event})

    def live_markers(self) -> List[FakeMarker]:
        return [m for m in self.created if not m.removed]


class ManualClock:
    """Monotonic clock advanced by hand, in seconds."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def world_box() -> Box:
    return Box(-90.0, -180.0, 90.0, 180.0)


@pytest.fixture
def fake_map(world_box) -> FakeMap:
    return FakeMap(bounds=world_box)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()
