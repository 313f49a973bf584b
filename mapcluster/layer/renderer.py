"""Marker content: default cluster HTML and HTML string -> element parsing."""

from __future__ import annotations

import warnings
from typing import Any, Optional, Sequence

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, Tag

from ..errors import MalformedMarkerContentError

warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def default_cluster_html(points: Sequence[Any]) -> Optional[str]:
    """Count badge for multi-point clusters; None lets the host draw its default marker."""
    if len(points) == 1:
        return None
    return f'<div class="cluster">{len(points)}</div>'


def html_to_element(html: str) -> Tag:
    """Parse HTML representing a single element.

    Raises:
        MalformedMarkerContentError: If the markup is empty, is bare text, or
            has more than one top-level node.
    """
    soup = BeautifulSoup((html or "").strip(), "html.parser")
    nodes = list(soup.contents)
    if len(nodes) != 1 or not isinstance(nodes[0], Tag):
        raise MalformedMarkerContentError(
            f"Marker HTML must represent a single HTML element, got {html!r}"
        )
    return nodes[0].extract()
