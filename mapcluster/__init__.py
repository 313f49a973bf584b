"""mapcluster - Viewport-driven grid and DBSCAN clustering of map markers."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .clustering import dbscan, dbscan_labels, grid
from .errors import InvalidParameterError, MalformedMarkerContentError, MapClusterError
from .layer import ClusteredLayer, RateLimiter, attach, dbscan_strategy, grid_strategy, throttle
from .models import Cluster, DbscanResult, LatLng

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a stream handler to the package logger and set its level.

    Args:
        level: Logging level name or number. Defaults to MAPCLUSTER_LOG_LEVEL.

    Returns:
        The package logger.
    """
    from .config import LOG_LEVEL

    logger = logging.getLogger(__name__)
    logger.setLevel(level if level is not None else LOG_LEVEL)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    return logger


__all__ = [
    "grid",
    "dbscan",
    "dbscan_labels",
    "attach",
    "ClusteredLayer",
    "grid_strategy",
    "dbscan_strategy",
    "RateLimiter",
    "throttle",
    "Cluster",
    "DbscanResult",
    "LatLng",
    "MapClusterError",
    "InvalidParameterError",
    "MalformedMarkerContentError",
    "configure_logging",
]
