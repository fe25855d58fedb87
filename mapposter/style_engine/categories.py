"""
Classification of style layers into paint categories.

Each layer is classified once from its id and type; the paint updater then
dispatches on the resulting ``LayerCategory``. Rules are checked in order,
so more specific categories (bathymetry, contours) win over generic ones
(water, labels).
"""

from enum import Enum
from typing import Any, Callable, List, Mapping, Tuple

from .ordering import is_water_fill
from .toggles import BATHYMETRY_PREFIX


class LayerCategory(Enum):
    """Closed set of paint categories."""

    BACKGROUND = "background"
    HILLSHADE = "hillshade"
    BATHYMETRY = "bathymetry"
    WATER = "water"
    WATERWAY = "waterway"
    CONTOUR = "contour"
    CONTOUR_LABEL = "contour-label"
    POPULATION = "population"
    ROAD = "road"
    BUILDING = "building"
    PARK = "park"
    BOUNDARY = "boundary"
    LABEL = "label"
    GRID = "grid"
    UNKNOWN = "unknown"


ROAD_PREFIXES = ("road-", "bridge-", "tunnel-")

# Decorative underwater effects recolored like bathymetry
UNDERWATER_MARKERS = ("water-gradient", "shoreline-glow", "water-glow")


def _is_underwater_effect(layer_id: str, layer_type: str) -> bool:
    if layer_type != "line":
        return False
    return layer_id.startswith(BATHYMETRY_PREFIX) or any(m in layer_id for m in UNDERWATER_MARKERS)


_RULES: List[Tuple[LayerCategory, Callable[[str, str, Mapping[str, Any]], bool]]] = [
    (LayerCategory.BACKGROUND, lambda i, t, l: t == "background"),
    (LayerCategory.HILLSHADE, lambda i, t, l: t == "hillshade"),
    (LayerCategory.BATHYMETRY, lambda i, t, l: _is_underwater_effect(i, t)),
    (LayerCategory.WATER, lambda i, t, l: is_water_fill(l)),
    (LayerCategory.WATERWAY, lambda i, t, l: t == "line" and (i == "waterway" or l.get("source-layer") == "waterway")),
    (LayerCategory.CONTOUR_LABEL, lambda i, t, l: t == "symbol" and ("contour" in i or "topo" in i)),
    (LayerCategory.CONTOUR, lambda i, t, l: "contour" in i or "topo" in i),
    (LayerCategory.POPULATION, lambda i, t, l: t == "fill" and "population" in i),
    (LayerCategory.ROAD, lambda i, t, l: i.startswith(ROAD_PREFIXES)),
    (LayerCategory.BUILDING, lambda i, t, l: "building" in i),
    (LayerCategory.PARK, lambda i, t, l: t == "fill" and "park" in i),
    (LayerCategory.BOUNDARY, lambda i, t, l: t == "line" and "boundar" in i),
    (LayerCategory.LABEL, lambda i, t, l: t == "symbol" and "label" in i),
    (LayerCategory.GRID, lambda i, t, l: t == "line" and (i == "grid" or i.startswith("grid-"))),
]


def classify_layer(layer: Mapping[str, Any]) -> LayerCategory:
    """Return the paint category of a layer."""
    layer_id = str(layer.get("id", ""))
    layer_type = str(layer.get("type", ""))
    for category, matches in _RULES:
        if matches(layer_id, layer_type, layer):
            return category
    return LayerCategory.UNKNOWN
