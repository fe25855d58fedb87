"""
Built-in base styles for map posters.

Each style is a MapLibre base style assembled from the layer factories,
with its palettes and the toggle catalog the poster editor shows.

Usage:
    from mapposter.styles import get_style, get_palette
    from mapposter.style_engine import derive_style

    style = get_style("minimal")
    derived = derive_style(style.map_style, get_palette("minimal"), toggles=style.layer_toggles)
"""

from .catalog import (
    STYLE_DEFINITIONS,
    PosterStyle,
    StyleDefinition,
    build_style,
    get_palette,
    get_style,
    list_styles,
)
from .layers import (
    create_base_layers,
    create_boundary_layers,
    create_label_layers,
    create_poi_layers,
    create_road_layers,
    create_sources,
    create_terrain_layers,
)
from .palettes import PALETTES_BY_STYLE, load_palettes
from .toggles import build_layer_toggles
from .variants import STYLE_VARIANTS, StyleVariant, get_variant

__all__ = [
    # Catalog
    "STYLE_DEFINITIONS",
    "PosterStyle",
    "StyleDefinition",
    "build_style",
    "get_style",
    "get_palette",
    "list_styles",
    # Layer factories
    "create_sources",
    "create_base_layers",
    "create_terrain_layers",
    "create_road_layers",
    "create_label_layers",
    "create_boundary_layers",
    "create_poi_layers",
    # Palettes, variants, toggles
    "PALETTES_BY_STYLE",
    "load_palettes",
    "STYLE_VARIANTS",
    "StyleVariant",
    "get_variant",
    "build_layer_toggles",
]
