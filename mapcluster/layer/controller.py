"""Viewport-driven clustered marker layer.

A ``ClusteredLayer`` listens to the host map's viewport-change event, clusters
the visible points in screen space and replaces its markers with one marker
per cluster. Each layer owns its markers; nothing is shared between layers.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from ..clustering.dbscan import DistanceFn, dbscan, validate_params
from ..clustering.grid import grid, validate_cell_size
from ..config import DEFAULT_CELL_SIZE, DEFAULT_THROTTLE_MS, DEFAULT_VIEWPORT_EVENT
from ..models.cluster import Cluster
from .host import HostMap, Marker, screen_xy
from .renderer import default_cluster_html, html_to_element
from .throttle import throttle as throttled

logger = logging.getLogger(__name__)

VectorFn = Callable[[Any], Tuple[float, float]]
ClusterStrategy = Callable[[Sequence[Any], VectorFn], List[Cluster]]


def grid_strategy(cell_size: Optional[float] = None) -> ClusterStrategy:
    """Grid clustering over projected pixels (the layer default)."""
    size = DEFAULT_CELL_SIZE if cell_size is None else cell_size
    validate_cell_size(size)

    def run(points: Sequence[Any], vector: VectorFn) -> List[Cluster]:
        return grid(points, cell_size=size, vector=vector)

    return run


def dbscan_strategy(
    eps: float,
    min_pts: int,
    *,
    distance: Optional[DistanceFn] = None,
) -> ClusterStrategy:
    """DBSCAN over projected pixels; ``eps`` is in pixels unless ``distance`` says otherwise."""
    validate_params(eps, min_pts)

    def run(points: Sequence[Any], vector: VectorFn) -> List[Cluster]:
        return dbscan(points, eps=eps, min_pts=min_pts, vector=vector, distance=distance)

    return run


class ClusteredLayer:
    """Clustered marker layer bound to one host map.

    Usage:
        layer = ClusteredLayer(host, points, throttle=200)
        dispose = layer.attach()
        ...
        dispose()
        layer.clear()
    """

    def __init__(
        self,
        host: HostMap,
        points: Iterable[Any],
        *,
        throttle: Optional[float] = None,
        cluster_html: Optional[Callable[[List[Any]], Optional[str]]] = None,
        cell_size: Optional[float] = None,
        strategy: Optional[ClusterStrategy] = None,
        renderer: Callable[[str], Any] = html_to_element,
        event: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.host = host
        self.points = list(points)
        self.cluster_html = cluster_html or default_cluster_html
        self.renderer = renderer
        self.strategy = strategy or grid_strategy(cell_size)
        self.event = event or DEFAULT_VIEWPORT_EVENT
        self.throttle_ms = DEFAULT_THROTTLE_MS if throttle is None else throttle

        self.clusters: List[Cluster] = []
        self._markers: List[Marker] = []
        self._handler = throttled(self._on_viewport_change, self.throttle_ms, clock=clock)
        self._attached = False

    @property
    def markers(self) -> Tuple[Marker, ...]:
        """Markers drawn by the last recompute."""
        return tuple(self._markers)

    @property
    def attached(self) -> bool:
        return self._attached

    def attach(self) -> Callable[[], None]:
        """Bind to the viewport-change event and compute once immediately.

        Returns:
            Disposer that unbinds the event handler.
        """
        if not self._attached:
            self.host.on(self.event, self._handler)
            self._attached = True
            logger.info(
                "attached clustered layer (%d points, event=%r, throttle=%sms)",
                len(self.points), self.event, self.throttle_ms,
            )
        self._handler()
        return self.dispose

    def dispose(self) -> None:
        """Unbind the event handler. Markers already drawn stay on the map."""
        if not self._attached:
            return
        self.host.off(self.event, self._handler)
        self._attached = False
        logger.info("detached clustered layer from event %r", self.event)

    def clear(self) -> None:
        """Remove every marker this layer has drawn."""
        for marker in self._markers:
            marker.remove()
        self._markers = []

    def recompute(self) -> List[Cluster]:
        """Re-cluster the visible points and rebuild all markers, unthrottled.

        Returns:
            The clusters drawn. If the host has no bounds yet nothing changes
            and the previous clusters are returned.
        """
        bounds = self.host.get_bounds()
        if bounds is None:
            logger.debug("viewport bounds unavailable, skipping recompute")
            return self.clusters

        visible = [p for p in self.points if bounds.contains(p)]
        clusters = self.strategy(visible, self._project)

        self.clear()
        for cluster in clusters:
            self._markers.append(self._draw(cluster))
        self.clusters = clusters

        logger.debug("recompute: %d visible points -> %d markers", len(visible), len(clusters))
        return clusters

    def _on_viewport_change(self, *_: Any) -> None:
        self.recompute()

    def _project(self, point: Any) -> Tuple[float, float]:
        return screen_xy(self.host.project(point))

    def _draw(self, cluster: Cluster) -> Marker:
        html = self.cluster_html(cluster.points)
        element = self.renderer(html) if html else None
        marker = self.host.create_marker(element)
        marker.set_position(cluster.center)
        marker.add_to(self.host)
        return marker


def attach(
    host: HostMap,
    points: Iterable[Any],
    *,
    throttle: Optional[float] = None,
    cluster_html: Optional[Callable[[List[Any]], Optional[str]]] = None,
    cell_size: Optional[float] = None,
    strategy: Optional[ClusterStrategy] = None,
    renderer: Callable[[str], Any] = html_to_element,
    event: Optional[str] = None,
    clock: Callable[[], float] = time.monotonic,
) -> Callable[[], None]:
    """Add a clustered marker layer to ``host`` and return its disposer.

    Args:
        host: Host map widget.
        points: Items exposing ``lat`` / ``lng``.
        throttle: Min milliseconds between executed recomputes (default 200).
        cluster_html: ``points -> html or None``. None draws the host's
            default marker. Defaults to a count badge for multi-point clusters.
        cell_size: Grid cell size in pixels (default 150). Ignored when a
            ``strategy`` is given.
        strategy: Clustering strategy, see ``grid_strategy`` / ``dbscan_strategy``.
        renderer: Turns marker HTML into the element handed to the host.
        event: Viewport-change event name (default "zoom").
        clock: Monotonic clock in seconds, used for throttling.

    Returns:
        Callable that detaches the layer from the viewport-change event.
    """
    layer = ClusteredLayer(
        host,
        points,
        throttle=throttle,
        cluster_html=cluster_html,
        cell_size=cell_size,
        strategy=strategy,
        renderer=renderer,
        event=event,
        clock=clock,
    )
    return layer.attach()
