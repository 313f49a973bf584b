"""Quantized-grid clustering over a caller-chosen 2-D vector space."""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Dict, List, Sequence

from ..errors import InvalidParameterError
from ..models.cluster import Cluster
from .geometry import centroid

logger = logging.getLogger(__name__)


def cell_id(x: float, y: float, cell_size: float) -> str:
    """Return the ``"{col};{row}"`` key of the grid cell containing (x, y)."""
    return f"{math.floor(x / cell_size)};{math.floor(y / cell_size)}"


def validate_cell_size(cell_size: float) -> None:
    """Raise InvalidParameterError unless cell_size is a positive finite number."""
    if not (isinstance(cell_size, numbers.Real) and math.isfinite(cell_size) and cell_size > 0):
        raise InvalidParameterError(f"cell_size must be > 0, got {cell_size!r}")


def grid(
    points: Sequence[Any],
    *,
    cell_size: float,
    vector: Callable[[Any], Sequence[float]],
) -> List[Cluster]:
    """Bucket points into square cells of ``cell_size`` and emit one cluster per cell.

    Args:
        points: Items exposing ``lat`` / ``lng`` (attributes or mapping keys).
        cell_size: Cell edge length in the units of ``vector`` (e.g. pixels).
        vector: Accessor mapping a point to its ``(x, y)`` position.

    Returns:
        Clusters in order of first appearance of their cell. Each cluster id is
        the cell id and its points keep their input order.

    Raises:
        InvalidParameterError: If ``cell_size`` is not a positive finite number.
    """
    validate_cell_size(cell_size)

    buckets: Dict[str, List[Any]] = {}
    for point in points:
        x, y = vector(point)[:2]
        buckets.setdefault(cell_id(x, y, cell_size), []).append(point)

    clusters = [
        Cluster(id=cid, center=centroid(members), points=members)
        for cid, members in buckets.items()
    ]
    logger.debug("grid: %d points -> %d cells (cell_size=%s)", len(points), len(clusters), cell_size)
    return clusters
