"""Exceptions raised by mapcluster."""

from __future__ import annotations


class MapClusterError(Exception):
    """Base class for every mapcluster error."""


class InvalidParameterError(MapClusterError, ValueError):
    """A clustering or layer parameter is out of range or missing."""


class MalformedMarkerContentError(MapClusterError, ValueError):
    """Custom marker HTML does not parse to exactly one root element."""
