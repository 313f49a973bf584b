"""Grid and DBSCAN clustering of map points."""

from .grid import cell_id, grid
from .dbscan import dbscan, dbscan_labels
from .geometry import centroid, coord_of, latlng_of

__all__ = [
    "grid",
    "cell_id",
    "dbscan",
    "dbscan_labels",
    "centroid",
    "coord_of",
    "latlng_of",
]
