"""
Toggle catalog for the base styles.

Binds each user-facing layer toggle to the layer ids of a built base style.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..style_engine.toggles import LayerToggle

logger = logging.getLogger(__name__)

ROAD_LAYER_IDS = (
    "road-service",
    "road-residential",
    "road-tertiary",
    "road-secondary",
    "road-primary",
    "road-trunk",
    "road-motorway",
)


def build_layer_toggles(
    include_road_glow: bool = False,
    include_spaceports: bool = False,
    include_bridges: bool = False,
    contour_layer_ids: Optional[Sequence[str]] = None,
    underwater_layer_ids: Optional[Sequence[str]] = None,
    custom_layer_ids: Optional[Dict[str, Sequence[str]]] = None,
    all_layer_ids: Optional[Sequence[str]] = None,
) -> List[LayerToggle]:
    """
    Build the toggle catalog for a base style.

    Args:
        include_road_glow: The style has a ``road-glow`` layer
        include_spaceports: The style has spaceport layers
        include_bridges: The style has bridge layers
        contour_layer_ids: Contour layer ids when not the single ``contours`` layer
        underwater_layer_ids: Bathymetry layer ids when not ``bathymetry-detail``
        custom_layer_ids: Per-toggle replacement of the layer ids
        all_layer_ids: When given, toggles referencing other ids are logged

    Returns:
        List of LayerToggle, one per user-facing toggle
    """
    custom = custom_layer_ids or {}

    streets = list(ROAD_LAYER_IDS)
    if include_road_glow:
        streets.insert(0, "road-glow")
    if include_bridges:
        streets += ["bridge-motorway-casing", "bridge-motorway"]

    pois = ["aeroway-area", "aeroway-runway", "aerodrome-label"]
    if include_spaceports:
        pois += ["spaceport-area", "spaceport-label"]
    pois += ["poi-symbol", "poi-label"]

    defaults = [
        ("streets", "Streets", streets),
        ("buildings", "Buildings", ["buildings"]),
        ("buildings3D", "3D Buildings", ["buildings-3d"]),
        ("water", "Water", ["water", "waterway"]),
        ("terrainUnderWater", "Underwater Terrain", list(underwater_layer_ids or ["bathymetry-detail"])),
        ("parks", "Parks", ["park"]),
        ("terrain", "Terrain Shading", ["hillshade"]),
        ("contours", "Topography (Contours)", list(contour_layer_ids or ["contours"])),
        ("population", "Population Density", ["population-density"]),
        ("pois", "Points of Interest", pois),
        ("labels-admin", "State & Country Names", ["labels-country", "labels-state"]),
        ("boundaries", "Administrative Boundaries",
         ["boundaries-country", "boundaries-state", "boundaries-county"]),
        ("labels-cities", "City Names", ["labels-city"]),
    ]

    toggles = [
        LayerToggle(id=toggle_id, name=name, layer_ids=tuple(custom.get(toggle_id, layer_ids)))
        for toggle_id, name, layer_ids in defaults
    ]

    if all_layer_ids is not None:
        known = set(all_layer_ids)
        for toggle in toggles:
            missing = [layer_id for layer_id in toggle.layer_ids if layer_id not in known]
            if missing:
                logger.warning(
                    "Layer toggle '%s' references non-existent layer ids: %s",
                    toggle.id, ", ".join(missing),
                )

    return toggles
