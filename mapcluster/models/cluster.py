"""Cluster data models."""

from __future__ import annotations

from typing import Any, List

from pydantic import BaseModel, Field


class LatLng(BaseModel):
    """Geographic coordinate in degrees (no wraparound correction)."""

    lat: float
    lng: float


class Cluster(BaseModel):
    """A group of points rendered as one marker.

    ``id`` is only stable within one clustering pass: the grid cell id for
    grid clusters, the cluster index for DBSCAN clusters.
    """

    id: str
    center: LatLng
    points: List[Any] = Field(min_length=1)

    @property
    def size(self) -> int:
        return len(self.points)


class DbscanResult(BaseModel):
    """Full DBSCAN output: per-point state plus the cluster list."""

    labels: List[int] = Field(default_factory=list)  # -1 = noise
    core: List[bool] = Field(default_factory=list)
    border: List[bool] = Field(default_factory=list)
    noise: List[int] = Field(default_factory=list)  # indices of noise points
    clusters: List[Cluster] = Field(default_factory=list)

    @property
    def n_clusters(self) -> int:
        return len(self.clusters)

    @property
    def noise_count(self) -> int:
        return len(self.noise)
