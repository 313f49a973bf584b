"""Pydantic data models for mapcluster."""

from .cluster import Cluster, DbscanResult, LatLng

__all__ = [
    "Cluster",
    "DbscanResult",
    "LatLng",
]
