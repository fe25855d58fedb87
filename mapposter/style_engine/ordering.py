"""
Render-order normalization between terrain shading and water.

Water must occlude the hillshade beneath it, so the hillshade layer has to
come before the first water fill regardless of how a base style orders them.
"""

import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

WATER_SOURCE_LAYER = "water"


def is_water_fill(layer: Dict[str, Any]) -> bool:
    """True for fill layers drawing the water polygons."""
    if layer.get("type") != "fill":
        return False
    return layer.get("source-layer") == WATER_SOURCE_LAYER or layer.get("id") == "water"


def _first_index(layers: List[Dict[str, Any]], predicate) -> Optional[int]:
    for index, layer in enumerate(layers):
        if predicate(layer):
            return index
    return None


def ensure_hillshade_below_water(layers: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Move the hillshade layer right before the first water fill if needed.

    Modifies ``layers`` in place and returns it. Running it twice gives the
    same order as running it once.
    """
    hillshade_index = _first_index(layers, lambda layer: layer.get("type") == "hillshade")
    water_index = _first_index(layers, is_water_fill)

    if hillshade_index is None or water_index is None:
        return layers
    if hillshade_index < water_index:
        return layers

    hillshade = layers.pop(hillshade_index)
    layers.insert(water_index, hillshade)
    logger.debug(
        "Moved hillshade layer '%s' from index %d to %d (before '%s')",
        hillshade.get("id"), hillshade_index, water_index, layers[water_index + 1].get("id"),
    )
    return layers
