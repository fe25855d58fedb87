"""
Availability of optional tile sources.

The contour source needs a MapTiler key that may only be known at runtime.
When its location cannot be resolved, every layer depending on it is
removed so the rendering client never requests tiles from a missing source.
"""

import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

CONTOUR_SOURCE = "contours"

# Layer ids containing one of these depend on the contour source
CONTOUR_LAYER_MARKERS = ("contour", "bathymetry")

ContourUrlResolver = Callable[[], Optional[str]]


def _has_location(source: Optional[Dict[str, Any]]) -> bool:
    if not isinstance(source, dict):
        return False
    url = source.get("url")
    if isinstance(url, str) and url.strip():
        return True
    tiles = source.get("tiles")
    return isinstance(tiles, list) and any(isinstance(t, str) and t.strip() for t in tiles)


def depends_on_contours(layer: Dict[str, Any]) -> bool:
    """True for layers that need the contour source."""
    layer_id = str(layer.get("id", ""))
    if any(marker in layer_id for marker in CONTOUR_LAYER_MARKERS):
        return True
    return layer.get("source") == CONTOUR_SOURCE


def resolve_contour_source(style: Dict[str, Any],
                           resolver: Optional[ContourUrlResolver] = None) -> Dict[str, Any]:
    """
    Make sure the contour source is usable, or strip its dependent layers.

    Args:
        style: Style dictionary, modified in place
        resolver: Called once when the source has no location; returns the
            TileJSON URL or None

    Returns:
        The same style dictionary
    """
    sources = style.get("sources") or {}
    source = sources.get(CONTOUR_SOURCE)

    if _has_location(source):
        return style
    if source is None and not any(depends_on_contours(layer) for layer in style.get("layers", [])):
        return style

    url = resolver() if resolver is not None else None
    if url:
        if isinstance(source, dict):
            source["url"] = url
        else:
            style.setdefault("sources", {})[CONTOUR_SOURCE] = {"type": "vector", "url": url}
        logger.debug("Resolved contour source to %s", url)
        return style

    before = len(style.get("layers", []))
    style["layers"] = [layer for layer in style.get("layers", []) if not depends_on_contours(layer)]
    sources.pop(CONTOUR_SOURCE, None)
    logger.debug(
        "Contour source unavailable; removed %d dependent layers",
        before - len(style["layers"]),
    )
    return style
