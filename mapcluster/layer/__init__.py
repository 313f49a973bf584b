"""Viewport-driven clustered marker layer for interactive maps."""

from .controller import ClusteredLayer, attach, dbscan_strategy, grid_strategy
from .renderer import default_cluster_html, html_to_element
from .throttle import RateLimiter, throttle

__all__ = [
    "ClusteredLayer",
    "attach",
    "grid_strategy",
    "dbscan_strategy",
    "default_cluster_html",
    "html_to_element",
    "RateLimiter",
    "throttle",
]
