"""
Per-layer paint rules.

``update_layer_paint`` classifies a layer once and applies the paint rule
of its category, recoloring it from the active palette. Layers in no known
category keep their paint untouched.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .categories import LayerCategory, classify_layer
from .colors import is_color_dark
from .config import VisibilityConfig
from .contours import (
    CONTOUR_ELEVATION_PROPERTY,
    CONTOUR_SOURCE_LAYER,
    contour_density_filter,
    contour_guards,
    contour_role,
)
from .expressions import scale_expression
from .palette import ROAD_CLASSES, Palette, resolve_color

logger = logging.getLogger(__name__)

# Water must stay opaque enough to hide the hillshade beneath it
MIN_WATER_OPACITY = 0.95

# Bathymetry two-tone colors (dark background, light background)
BATHYMETRY_DARK_BG_COLOR = "#FFFFFF"
BATHYMETRY_LIGHT_BG_COLOR = "#001a33"

# Glow sub-layers are suppressed once a palette is applied
SUPPRESSED_GLOW_OPACITY = 0.01

# Default opacities when the base style sets none
DEFAULT_CONTOUR_OPACITY = 0.4
DEFAULT_POPULATION_OPACITY = 0.6
DEFAULT_BUILDING_OPACITY = 0.5
DEFAULT_LABEL_OPACITY = 1.0
DEFAULT_GRID_OPACITY = 0.2

# Halo (width, blur) per label rank; largest for country names
LABEL_HALO_TIERS = {
    "country": (3.0, 1.0),
    "state": (2.0, 0.8),
    "default": (1.5, 0.5),
}

# Unmatched road lines with these ids take the secondary color
SECONDARY_ROAD_IDS = frozenset({"road-street", "road-residential", "road-tertiary", "road-service"})

PaintRule = Callable[[Dict[str, Any], Palette, Optional[VisibilityConfig]], None]


def _paint(layer: Dict[str, Any]) -> Dict[str, Any]:
    """Return the layer's paint dict, creating it when missing."""
    paint = layer.get("paint")
    if not isinstance(paint, dict):
        paint = {}
        layer["paint"] = paint
    return paint


def _paint_background(layer, palette, config):
    layer["paint"] = {"background-color": palette.background}


def _paint_hillshade(layer, palette, config):
    paint = _paint(layer)
    if palette.hillshade:
        shadow = accent = palette.hillshade
        highlight = palette.background
    elif is_color_dark(palette.background):
        shadow = accent = "#000000"
        highlight = resolve_color(palette, "hillshade_tone")
    else:
        shadow = accent = resolve_color(palette, "hillshade_tone")
        highlight = palette.background

    paint["hillshade-shadow-color"] = shadow
    paint["hillshade-highlight-color"] = highlight
    paint["hillshade-accent-color"] = accent

    if config is not None and config.hillshade_exaggeration is not None:
        paint["hillshade-exaggeration"] = min(1.0, max(0.0, float(config.hillshade_exaggeration)))


def _paint_water(layer, palette, config):
    paint = _paint(layer)
    paint["fill-color"] = palette.water

    if config is not None and not config.terrain_under_water:
        paint["fill-opacity"] = 1.0
        return

    opacity = paint.get("fill-opacity")
    if isinstance(opacity, (int, float)) and not isinstance(opacity, bool):
        paint["fill-opacity"] = max(float(opacity), MIN_WATER_OPACITY)
    else:
        paint["fill-opacity"] = MIN_WATER_OPACITY


def _paint_waterway(layer, palette, config):
    _paint(layer)["line-color"] = resolve_color(palette, "water_line")


def _paint_bathymetry(layer, palette, config):
    paint = _paint(layer)
    dark = is_color_dark(palette.background)
    paint["line-color"] = BATHYMETRY_DARK_BG_COLOR if dark else BATHYMETRY_LIGHT_BG_COLOR
    if "glow" in layer["id"]:
        paint["line-opacity"] = SUPPRESSED_GLOW_OPACITY


def _paint_park(layer, palette, config):
    _paint(layer)["fill-color"] = resolve_color(palette, "parks")


def _apply_contour_density(layer, config):
    if config is None or not config.contour_density:
        return
    if layer.get("source-layer") != CONTOUR_SOURCE_LAYER:
        return
    # Elevation guards of the base filter (above sea level, has height) are kept
    layer["filter"] = contour_density_filter(
        CONTOUR_ELEVATION_PROPERTY, config.contour_density, contour_role(layer["id"]),
        guards=contour_guards(layer.get("filter")),
    )


def _paint_contour(layer, palette, config):
    if layer["type"] == "line":
        chain = "contour_index" if "index" in layer["id"] else "contour"
        paint = _paint(layer)
        paint["line-color"] = resolve_color(palette, chain)
        paint.setdefault("line-opacity", DEFAULT_CONTOUR_OPACITY)
    _apply_contour_density(layer, config)


def _paint_contour_label(layer, palette, config):
    paint = _paint(layer)
    paint["text-color"] = resolve_color(palette, "contour_index")
    paint["text-halo-color"] = palette.background
    _apply_contour_density(layer, config)


def _paint_population(layer, palette, config):
    paint = _paint(layer)
    paint["fill-color"] = resolve_color(palette, "population")
    if paint.get("fill-opacity") is None:
        paint["fill-opacity"] = DEFAULT_POPULATION_OPACITY


def _road_class(layer_id: str) -> Optional[str]:
    for road_class in ROAD_CLASSES:
        if road_class in layer_id:
            return road_class
    return None


def _paint_road(layer, palette, config):
    if layer["type"] != "line":
        return

    layer_id = layer["id"]
    paint = _paint(layer)

    factor = config.road_width_factor if config is not None else 1.0
    if factor != 1.0 and "line-width" in paint:
        paint["line-width"] = scale_expression(paint["line-width"], factor)

    if "bridge" in layer_id and "casing" in layer_id:
        # Casing takes the background so bridges read as cut out
        paint["line-color"] = palette.background
        return

    road_class = _road_class(layer_id)
    if road_class is not None:
        paint["line-color"] = palette.roads.get(road_class)
    elif "glow" in layer_id:
        paint["line-color"] = palette.roads.motorway
    elif layer_id in SECONDARY_ROAD_IDS:
        paint["line-color"] = resolve_color(palette, "road_secondary")
    else:
        paint["line-color"] = resolve_color(palette, "road_primary")


def _paint_building(layer, palette, config):
    color = resolve_color(palette, "buildings")
    paint = _paint(layer)
    layer_type = layer["type"]
    if layer_type == "fill":
        paint["fill-color"] = color
        if paint.get("fill-opacity") is None:
            paint["fill-opacity"] = DEFAULT_BUILDING_OPACITY
    elif layer_type == "line":
        paint["line-color"] = color
    elif layer_type == "fill-extrusion":
        paint["fill-extrusion-color"] = color


def _paint_boundary(layer, palette, config):
    _paint(layer)["line-color"] = resolve_color(palette, "border")


def _label_tier(layer_id: str) -> str:
    if "country" in layer_id:
        return "country"
    if "state" in layer_id:
        return "state"
    return "default"


def _paint_label(layer, palette, config):
    paint = _paint(layer)
    halo_width, halo_blur = LABEL_HALO_TIERS[_label_tier(layer["id"])]
    paint["text-color"] = palette.text
    paint["text-halo-color"] = palette.background
    paint["text-halo-width"] = halo_width
    paint["text-halo-blur"] = halo_blur
    if paint.get("text-opacity") is None:
        paint["text-opacity"] = DEFAULT_LABEL_OPACITY


def _paint_grid(layer, palette, config):
    if not palette.grid:
        return
    paint = _paint(layer)
    paint["line-color"] = palette.grid
    if paint.get("line-opacity") is None:
        paint["line-opacity"] = DEFAULT_GRID_OPACITY


PAINT_RULES: Dict[LayerCategory, PaintRule] = {
    LayerCategory.BACKGROUND: _paint_background,
    LayerCategory.HILLSHADE: _paint_hillshade,
    LayerCategory.BATHYMETRY: _paint_bathymetry,
    LayerCategory.WATER: _paint_water,
    LayerCategory.WATERWAY: _paint_waterway,
    LayerCategory.CONTOUR: _paint_contour,
    LayerCategory.CONTOUR_LABEL: _paint_contour_label,
    LayerCategory.POPULATION: _paint_population,
    LayerCategory.ROAD: _paint_road,
    LayerCategory.BUILDING: _paint_building,
    LayerCategory.PARK: _paint_park,
    LayerCategory.BOUNDARY: _paint_boundary,
    LayerCategory.LABEL: _paint_label,
    LayerCategory.GRID: _paint_grid,
}


def update_layer_paint(layer: Dict[str, Any], palette: Palette,
                       config: Optional[VisibilityConfig] = None) -> LayerCategory:
    """Recolor one layer in place and return the category it was painted as."""
    category = classify_layer(layer)
    rule = PAINT_RULES.get(category)
    if rule is not None:
        rule(layer, palette, config)
    logger.debug("Painted layer '%s' as %s", layer.get("id"), category.value)
    return category
