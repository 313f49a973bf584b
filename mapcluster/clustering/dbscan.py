"""DBSCAN (density-based spatial clustering of applications with noise).

Region queries are brute force, O(n^2) distance evaluations in the worst case.
``min_pts`` counts the point itself, as in the original paper.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from ..errors import InvalidParameterError
from ..models.cluster import Cluster, DbscanResult
from .geometry import centroid, coord_of

logger = logging.getLogger(__name__)

NOISE = -1

DistanceFn = Callable[[Any, Any], float]


class _DbscanRun:
    """Per-call state: visited flags, labels, core flags and the neighbour cache.

    Nothing here outlives a single ``dbscan_labels`` call, so independent
    point sets can be clustered concurrently.
    """

    def __init__(
        self,
        points: Sequence[Any],
        eps: float,
        min_pts: int,
        *,
        vectors: Optional[np.ndarray] = None,
        distance: Optional[DistanceFn] = None,
    ):
        n = len(points)
        self.points = points
        self.eps = eps
        self.min_pts = min_pts
        self.vectors = vectors
        self.distance = distance
        self.visited = [False] * n
        self.labels = [NOISE] * n
        self.core = [False] * n
        self._neighbors: Dict[int, List[int]] = {}

    def neighbors(self, i: int) -> List[int]:
        """Indices within ``eps`` of point ``i`` (itself included), ascending."""
        cached = self._neighbors.get(i)
        if cached is not None:
            return cached

        if self.vectors is not None:
            dists = np.linalg.norm(self.vectors - self.vectors[i], axis=1)
            mask = dists <= self.eps
            mask[i] = True
            found = np.flatnonzero(mask).tolist()
        else:
            pi = self.points[i]
            found = [
                j for j, pj in enumerate(self.points)
                if j == i or self.distance(pi, pj) <= self.eps
            ]

        self._neighbors[i] = found
        return found

    def is_dense(self, neighbors: List[int]) -> bool:
        return len(neighbors) >= self.min_pts


def validate_params(eps: float, min_pts: int) -> None:
    """Raise InvalidParameterError unless eps is finite and > 0 and min_pts >= 1."""
    if not (isinstance(eps, numbers.Real) and math.isfinite(eps) and eps > 0):
        raise InvalidParameterError(f"eps must be > 0, got {eps!r}")
    if not (isinstance(min_pts, numbers.Real) and min_pts >= 1):
        raise InvalidParameterError(f"min_pts must be >= 1, got {min_pts!r}")


def _stack_vectors(points: Sequence[Any], vector: Callable[[Any], Sequence[float]]) -> np.ndarray:
    """Stack point vectors into an (n, d) array, d being the shortest vector length."""
    vecs = [vector(p) for p in points]
    dims = min(len(v) for v in vecs)
    return np.array([list(v)[:dims] for v in vecs], dtype=float)


def _expand_cluster(run: _DbscanRun, seed: int, seed_neighbors: List[int], cid: int) -> None:
    """Grow cluster ``cid`` breadth-first from a core seed."""
    run.labels[seed] = cid
    run.core[seed] = True

    queue = list(seed_neighbors)
    queued = set(queue)
    q = 0
    while q < len(queue):
        j = queue[q]
        q += 1
        if not run.visited[j]:
            run.visited[j] = True
            j_neighbors = run.neighbors(j)
            if run.is_dense(j_neighbors):
                run.core[j] = True
                for nb in j_neighbors:
                    if nb not in queued:
                        queued.add(nb)
                        queue.append(nb)
        # Unclaimed points (including provisional noise) join as border or core
        if run.labels[j] == NOISE:
            run.labels[j] = cid


def dbscan_labels(
    points: Sequence[Any],
    *,
    eps: float,
    min_pts: int,
    vector: Optional[Callable[[Any], Sequence[float]]] = None,
    coord: Optional[Callable[[Any], Any]] = None,
    distance: Optional[DistanceFn] = None,
) -> DbscanResult:
    """Run DBSCAN and return per-point labels, core/border flags, noise and clusters.

    Args:
        points: Items to cluster.
        eps: Neighbourhood radius. Points at distance <= eps are neighbours.
        min_pts: Minimum neighbourhood size, the point itself included.
        vector: Accessor mapping a point to a numeric vector. Required unless
            ``distance`` is given.
        coord: Accessor returning the point's lat/lng (object or mapping) for
            centroids. Defaults to reading ``lat`` / ``lng`` off the point.
        distance: Optional distance function between two points. Defaults to
            Euclidean distance over ``vector``.

    Returns:
        DbscanResult. Cluster ids are ``"0"``, ``"1"``, ... in discovery order.

    Raises:
        InvalidParameterError: On ``eps <= 0``, ``min_pts < 1``, or when
            neither ``vector`` nor ``distance`` is provided.
    """
    validate_params(eps, min_pts)
    if distance is None and vector is None:
        raise InvalidParameterError("dbscan needs a vector accessor or a distance function")
    coord = coord or coord_of

    n = len(points)
    if n == 0:
        return DbscanResult()

    if distance is None:
        run = _DbscanRun(points, eps, min_pts, vectors=_stack_vectors(points, vector))
    else:
        run = _DbscanRun(points, eps, min_pts, distance=distance)

    cid = 0
    for i in range(n):
        if run.visited[i]:
            continue
        run.visited[i] = True

        neighbors = run.neighbors(i)
        if not run.is_dense(neighbors):
            # Provisional noise; may still be claimed as a border point later
            run.labels[i] = NOISE
            continue

        _expand_cluster(run, i, neighbors, cid)
        cid += 1

    border = [run.labels[i] != NOISE and not run.core[i] for i in range(n)]
    noise = [i for i in range(n) if run.labels[i] == NOISE]

    groups: Dict[int, List[Any]] = {}
    for point, label in zip(points, run.labels):
        if label != NOISE:
            groups.setdefault(label, []).append(point)

    clusters = [
        Cluster(id=str(label), center=centroid(members, coord), points=members)
        for label, members in sorted(groups.items())
    ]

    logger.debug(
        "dbscan: %d points, eps=%s, min_pts=%s -> %d clusters, %d noise",
        n, eps, min_pts, len(clusters), len(noise),
    )

    return DbscanResult(
        labels=run.labels,
        core=run.core,
        border=border,
        noise=noise,
        clusters=clusters,
    )


def dbscan(
    points: Sequence[Any],
    *,
    eps: float,
    min_pts: int,
    vector: Optional[Callable[[Any], Sequence[float]]] = None,
    coord: Optional[Callable[[Any], Any]] = None,
    distance: Optional[DistanceFn] = None,
) -> List[Cluster]:
    """Cluster points with DBSCAN and return the clusters; noise is left out.

    See ``dbscan_labels`` for the parameters.
    """
    return dbscan_labels(
        points,
        eps=eps,
        min_pts=min_pts,
        vector=vector,
        coord=coord,
        distance=distance,
    ).clusters
