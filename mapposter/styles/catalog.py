"""
Built-in poster styles.

``build_style`` assembles a base MapLibre style from the layer factories in
rendering order and pairs it with its palettes and toggle catalog. The
resulting ``PosterStyle.map_style`` is the immutable input of
``derive_style``.

Usage:
    from mapposter.styles import get_style, get_palette

    style = get_style("topographic")
    palette = get_palette("topographic", "topo-night")
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..style_engine.config import TileSourceConfig
from ..style_engine.palette import Palette
from ..style_engine.toggles import LayerToggle
from .layers import (
    BATHYMETRY_LAYER_IDS,
    DETAILED_CONTOUR_LAYER_IDS,
    GLYPHS_URL,
    create_base_layers,
    create_boundary_layers,
    create_label_layers,
    create_poi_layers,
    create_road_layers,
    create_sources,
    create_terrain_layers,
)
from .palettes import load_palettes
from .toggles import build_layer_toggles
from .variants import StyleVariant, get_variant

logger = logging.getLogger(__name__)

SPACEPORT_NAME = ["downcase", ["coalesce", ["get", "name:en"], ["get", "name:latin"], ["get", "name"]]]

# Labels that mention a launch site by name rather than by class
SPACEPORT_LABEL_FILTER = [
    "any",
    ["==", ["get", "class"], "spaceport"],
    [">=", ["index-of", "space center", SPACEPORT_NAME], 0],
    [">=", ["index-of", "spaceport", SPACEPORT_NAME], 0],
    [">=", ["index-of", "ksc", SPACEPORT_NAME], 0],
]

BRIGHT_POPULATION_STOPS = ((0, 0), (1, 0.1), (100, 0.25), (1000, 0.45), (10000, 0.7))


@dataclass(frozen=True)
class StyleDefinition:
    """Static description of a built-in style."""

    id: str
    name: str
    description: str
    recommended_fonts: Tuple[str, ...] = ()
    base_options: Dict[str, Any] = field(default_factory=dict)
    spaceport_label_filter: Optional[List[Any]] = None
    custom_toggle_ids: Dict[str, Sequence[str]] = field(default_factory=dict)


@dataclass
class PosterStyle:
    """A base style with its palettes and toggle catalog."""

    id: str
    name: str
    description: str
    map_style: Dict[str, Any]
    default_palette: Palette
    palettes: List[Palette]
    recommended_fonts: List[str]
    layer_toggles: List[LayerToggle]

    @property
    def layer_ids(self) -> List[str]:
        return [layer["id"] for layer in self.map_style["layers"]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "mapStyle": self.map_style,
            "defaultPalette": self.default_palette.to_dict(),
            "palettes": [palette.to_dict() for palette in self.palettes],
            "recommendedFonts": list(self.recommended_fonts),
            "layerToggles": [toggle.to_dict() for toggle in self.layer_toggles],
        }


STYLE_DEFINITIONS: Dict[str, StyleDefinition] = {
    "minimal": StyleDefinition(
        id="minimal",
        name="Minimal / Line Art",
        description="Clean, understated line work on paper-toned backgrounds",
        recommended_fonts=("Inter", "Helvetica Neue", "Futura", "Montserrat"),
    ),
    "dark-mode": StyleDefinition(
        id="dark-mode",
        name="Dark Mode / Noir",
        description="Dramatic dark maps with luminous street networks",
        recommended_fonts=("Montserrat", "Poppins", "Bebas Neue", "Oswald"),
        base_options={
            "water_opacity": 0.8,
            "waterway_opacity": 0.5,
            "park_opacity": 0.4,
            "buildings_opacity": 0.3,
            "population_stops": BRIGHT_POPULATION_STOPS,
        },
        spaceport_label_filter=SPACEPORT_LABEL_FILTER,
    ),
    "blueprint": StyleDefinition(
        id="blueprint",
        name="Blueprint / Technical",
        description="Architectural blueprint style with high-contrast lines on deep blue",
        recommended_fonts=("JetBrains Mono", "IBM Plex Mono", "Space Mono", "Roboto Mono"),
        base_options={
            "water_opacity": 0.7,
            "park_opacity": 0.25,
            "buildings_opacity": 0.2,
            "population_stops": BRIGHT_POPULATION_STOPS,
        },
        spaceport_label_filter=SPACEPORT_LABEL_FILTER,
        custom_toggle_ids={"water": ["water"]},
    ),
    "topographic": StyleDefinition(
        id="topographic",
        name="Topographic / Contour",
        description="Terrain-focused maps with detailed elevation contours and hillshading",
        recommended_fonts=("Spectral", "Merriweather", "Lora", "Noto Serif"),
        base_options={
            "water_opacity": 1.0,
            "park_opacity": 0.4,
            "buildings_opacity": 0.2,
        },
        spaceport_label_filter=SPACEPORT_LABEL_FILTER,
    ),
}


def _pick(layers: List[Dict[str, Any]], *layer_ids: str) -> List[Dict[str, Any]]:
    return [layer for layer in layers if layer["id"] in layer_ids]


def build_style(
    definition: StyleDefinition,
    palettes: Sequence[Palette],
    variant: Optional[StyleVariant] = None,
    tiles: Optional[TileSourceConfig] = None,
) -> PosterStyle:
    """
    Assemble a complete base style in rendering order.

    Args:
        definition: Style id, name and per-style options
        palettes: Palettes of the style, default first
        variant: Structural options; looked up from the style id if omitted
        tiles: Tile source context; read from the environment if omitted

    Returns:
        PosterStyle with map style, palettes and toggle catalog
    """
    if not palettes:
        raise ValueError(f"Style '{definition.id}' has no palettes")
    variant = variant or get_variant(definition.id)
    palette = palettes[0]

    base = create_base_layers(palette, **definition.base_options)
    terrain = create_terrain_layers(
        palette,
        hillshade_exaggeration=variant.hillshade_exaggeration,
        volumetric_bathymetry=variant.volumetric_bathymetry,
        detailed_contours=variant.detailed_contours,
    )
    include_bridges = variant.include_bridges or variant.include_glow

    # Rendering order, bottom to top
    layers: List[Dict[str, Any]] = []
    layers += _pick(base, "background")
    layers += _pick(terrain, "hillshade")
    layers += _pick(base, "water", "waterway")
    layers += [layer for layer in terrain if layer["id"].startswith("bathymetry")]
    layers += _pick(base, "park", "buildings", "buildings-3d")
    layers += create_road_layers(
        palette,
        line_cap=variant.line_cap,
        line_join=variant.line_join,
        include_glow=variant.include_glow,
        include_bridges=include_bridges,
    )
    layers += _pick(base, "population-density")
    layers += [layer for layer in terrain if "contour" in layer["id"]]
    layers += create_boundary_layers(palette)
    layers += create_label_layers(palette, style=variant.label_style)
    layers += create_poi_layers(
        palette,
        include_spaceports=variant.include_spaceports,
        spaceport_label_filter=definition.spaceport_label_filter,
    )

    layer_ids = [layer["id"] for layer in layers]
    toggles = build_layer_toggles(
        include_road_glow=variant.include_glow,
        include_spaceports=variant.include_spaceports,
        include_bridges=include_bridges,
        contour_layer_ids=DETAILED_CONTOUR_LAYER_IDS if variant.detailed_contours else None,
        underwater_layer_ids=BATHYMETRY_LAYER_IDS if variant.volumetric_bathymetry else None,
        custom_layer_ids=definition.custom_toggle_ids,
        all_layer_ids=layer_ids,
    )

    map_style = {
        "version": 8,
        "name": definition.name,
        "metadata": {"mapbox:autocomposite": False},
        "sources": create_sources(tiles),
        "glyphs": GLYPHS_URL,
        "layers": layers,
    }
    logger.debug("Built style '%s' (%d layers, %d toggles)", definition.id, len(layers), len(toggles))

    return PosterStyle(
        id=definition.id,
        name=definition.name,
        description=definition.description,
        map_style=map_style,
        default_palette=palette,
        palettes=list(palettes),
        recommended_fonts=list(definition.recommended_fonts),
        layer_toggles=toggles,
    )


def list_styles() -> List[StyleDefinition]:
    """Return the built-in style definitions."""
    return list(STYLE_DEFINITIONS.values())


def get_style(style_id: str, tiles: Optional[TileSourceConfig] = None) -> PosterStyle:
    """
    Build a built-in style by id.

    Raises:
        ValueError: Unknown style id
    """
    if style_id not in STYLE_DEFINITIONS:
        raise ValueError(f"Unknown style: {style_id}. Available: {list(STYLE_DEFINITIONS.keys())}")
    return build_style(STYLE_DEFINITIONS[style_id], load_palettes(style_id), tiles=tiles)


def get_palette(style_id: str, palette_id: Optional[str] = None) -> Palette:
    """
    Return a palette of a style; its default when ``palette_id`` is omitted.

    Raises:
        ValueError: Unknown style or palette id
    """
    palettes = load_palettes(style_id)
    if palette_id is None:
        return palettes[0]
    for palette in palettes:
        if palette.id == palette_id:
            return palette
    raise ValueError(
        f"Unknown palette: {palette_id}. Available: {[palette.id for palette in palettes]}"
    )
