"""
Layer factories for the base poster styles.

Each ``create_*_layers`` function returns a list of MapLibre layer dicts
colored from a palette. The engine recolors them again at derivation time,
so the colors here only matter for the raw base style.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..style_engine.colors import is_color_dark
from ..style_engine.config import TileSourceConfig
from ..style_engine.palette import Palette, resolve_color

OPENMAPTILES = "openmaptiles"
GLYPHS_URL = "https://tiles.openfreemap.org/fonts/{fontstack}/{range}.pbf"
TERRAIN_TILE_SIZE = 256

NAME_FIELD = ["coalesce", ["get", "name:en"], ["get", "name:latin"], ["get", "name"]]
FONT = ["Noto Sans Regular"]

# Population -> opacity stops for the density choropleth
DEFAULT_POPULATION_STOPS = ((0, 0), (1, 0.05), (100, 0.15), (1000, 0.3), (10000, 0.5))

# Zoom -> width stops per road class, in drawing order (lowest class first)
ROAD_WIDTHS: Dict[str, Sequence[float]] = {
    "service": (11, 0.1, 13, 0.3, 14, 0.5),
    "residential": (9, 0.1, 12, 0.4, 13, 0.7, 14, 1.0),
    "tertiary": (10, 0.3, 11, 0.5, 12, 0.8, 13, 1.1, 14, 1.4),
    "secondary": (10, 0.6, 11, 0.9, 12, 1.2, 13, 1.6, 14, 2.0),
    "primary": (10, 1.0, 11, 1.4, 12, 1.8, 13, 2.2, 14, 2.6),
    "trunk": (10, 1.5, 11, 2.0, 12, 2.5, 13, 3.0, 14, 3.5),
    "motorway": (10, 2.0, 11, 2.5, 12, 3.0, 13, 3.5, 14, 4.0),
}

# Road layer id -> OpenMapTiles classes it draws
ROAD_CLASS_FILTERS: Dict[str, Sequence[str]] = {
    "service": ("service", "path", "track"),
    "residential": ("residential", "living_street", "unclassified", "minor"),
    "tertiary": ("tertiary",),
    "secondary": ("secondary",),
    "primary": ("primary",),
    "trunk": ("trunk",),
    "motorway": ("motorway",),
}

ROAD_MIN_ZOOM = {"service": 11, "residential": 9}

BATHYMETRY_DEPTHS = (10, 50, 200, 1000, 3000, 5000)
BATHYMETRY_LAYER_IDS = tuple(f"bathymetry-volumetric-{depth}" for depth in BATHYMETRY_DEPTHS)

DETAILED_CONTOUR_LAYER_IDS = ("contours-regular", "contours-index", "contours-labels")

POI_CLASSES = ["monument", "museum", "stadium", "attraction", "artwork", "viewpoint"]

# Halo (width, blur) per label style
LABEL_HALOS = {
    "halo": (2.5, 1.5),
    "strong": (3.0, 1.0),
    "none": (0.0, 0.0),
}


def _interpolate_zoom(stops: Sequence[float]) -> List[Any]:
    return ["interpolate", ["linear"], ["zoom"], *stops]


def create_sources(tiles: Optional[TileSourceConfig] = None) -> Dict[str, Any]:
    """
    Create the tile sources shared by all base styles.

    The contour source keeps an empty URL when no MapTiler key is
    configured; derivation resolves it or drops the contour layers.
    """
    tiles = tiles or TileSourceConfig.from_env()
    return {
        OPENMAPTILES: {
            "type": "vector",
            "url": tiles.openmaptiles_tilejson_url(),
            "minzoom": 0,
            "maxzoom": 15,
        },
        "contours": {
            "type": "vector",
            "url": tiles.contour_tilejson_url() or "",
            "minzoom": 9,
            "maxzoom": 15,
        },
        "population": {
            "type": "vector",
            "tiles": [tiles.population_tile_url()],
            "minzoom": 0,
            "maxzoom": 15,
            "attribution": "Kontur Population",
        },
        "terrain": {
            "type": "raster-dem",
            "tiles": [tiles.terrain_url],
            "tileSize": TERRAIN_TILE_SIZE,
            "encoding": "terrarium",
            "maxzoom": 14,
        },
    }


def create_base_layers(
    palette: Palette,
    water_opacity: float = 0.6,
    waterway_opacity: float = 0.7,
    park_opacity: float = 0.3,
    buildings_opacity: float = 0.15,
    population_stops: Sequence[Sequence[float]] = DEFAULT_POPULATION_STOPS,
    water_filter: Optional[List[Any]] = None,
) -> List[Dict[str, Any]]:
    """Create background, water, waterway, park, building and population layers."""
    buildings_color = resolve_color(palette, "buildings")

    water: Dict[str, Any] = {
        "id": "water",
        "type": "fill",
        "source": OPENMAPTILES,
        "source-layer": "water",
        "paint": {
            "fill-color": palette.water,
            "fill-opacity": water_opacity,
        },
    }
    if water_filter:
        water["filter"] = water_filter

    return [
        {
            "id": "background",
            "type": "background",
            "paint": {"background-color": palette.background},
        },
        water,
        {
            "id": "waterway",
            "type": "line",
            "source": OPENMAPTILES,
            "source-layer": "waterway",
            "paint": {
                "line-color": resolve_color(palette, "water_line"),
                "line-opacity": waterway_opacity,
                "line-width": _interpolate_zoom((10, 0.5, 12, 1.0, 14, 1.5)),
            },
        },
        {
            "id": "park",
            "type": "fill",
            "source": OPENMAPTILES,
            "source-layer": "park",
            "paint": {
                "fill-color": resolve_color(palette, "parks"),
                "fill-opacity": park_opacity,
            },
        },
        {
            "id": "buildings",
            "type": "fill",
            "source": OPENMAPTILES,
            "source-layer": "building",
            "paint": {
                "fill-color": buildings_color,
                "fill-opacity": buildings_opacity,
            },
        },
        # Extruded buildings, hidden until the 3D toggle is switched on
        {
            "id": "buildings-3d",
            "type": "fill-extrusion",
            "source": OPENMAPTILES,
            "source-layer": "building",
            "minzoom": 14,
            "layout": {"visibility": "none"},
            "paint": {
                "fill-extrusion-color": buildings_color,
                "fill-extrusion-height": [
                    "interpolate", ["linear"], ["zoom"],
                    14, 0,
                    15, ["coalesce", ["get", "render_height"], 10],
                ],
                "fill-extrusion-base": ["coalesce", ["get", "render_min_height"], 0],
                "fill-extrusion-opacity": 0.85,
            },
        },
        {
            "id": "population-density",
            "type": "fill",
            "source": "population",
            "source-layer": "stats",
            "paint": {
                "fill-color": resolve_color(palette, "population"),
                "fill-opacity": [
                    "interpolate", ["linear"], ["get", "population"],
                    *[value for stop in population_stops for value in stop],
                ],
            },
        },
    ]


def _contour_line(layer_id: str, color: str, base_filter: List[Any],
                  widths: Sequence[float], opacities: Sequence[float]) -> Dict[str, Any]:
    return {
        "id": layer_id,
        "type": "line",
        "source": "contours",
        "source-layer": "contour",
        "filter": base_filter,
        "layout": {"line-join": "round", "line-cap": "round"},
        "paint": {
            "line-color": color,
            "line-width": _interpolate_zoom(widths),
            "line-opacity": _interpolate_zoom(opacities),
        },
    }


def create_terrain_layers(
    palette: Palette,
    hillshade_exaggeration: float = 0.6,
    volumetric_bathymetry: bool = False,
    detailed_contours: bool = False,
) -> List[Dict[str, Any]]:
    """
    Create hillshade, bathymetry and contour layers.

    Args:
        palette: Palette for the initial colors
        hillshade_exaggeration: Initial hillshade strength
        volumetric_bathymetry: Stack of depth bands instead of one detail line
        detailed_contours: Regular, index and label layers instead of one line
    """
    dark = is_color_dark(palette.background)
    tone = resolve_color(palette, "hillshade_tone")
    if palette.hillshade:
        shadow, highlight = palette.hillshade, palette.background
    elif dark:
        shadow, highlight = "#000000", tone
    else:
        shadow, highlight = tone, palette.background

    layers: List[Dict[str, Any]] = [{
        "id": "hillshade",
        "type": "hillshade",
        "source": "terrain",
        "paint": {
            "hillshade-shadow-color": shadow,
            "hillshade-highlight-color": highlight,
            "hillshade-accent-color": shadow,
            "hillshade-exaggeration": hillshade_exaggeration,
        },
    }]

    if volumetric_bathymetry:
        for depth in BATHYMETRY_DEPTHS:
            layers.append({
                "id": f"bathymetry-volumetric-{depth}",
                "type": "line",
                "source": "contours",
                "source-layer": "contour",
                "filter": ["all", ["has", "height"], ["<=", ["get", "height"], -depth]],
                "paint": {
                    "line-color": "#001a33",
                    "line-width": _interpolate_zoom((9, 40, 12, 100, 15, 200)),
                    "line-blur": _interpolate_zoom((9, 30, 12, 80, 15, 150)),
                    "line-opacity": 0.05,
                },
            })
    else:
        layers.append({
            "id": "bathymetry-detail",
            "type": "line",
            "source": "contours",
            "source-layer": "contour",
            "filter": ["all", ["has", "height"], ["<", ["get", "height"], 0]],
            "paint": {
                "line-color": "#FFFFFF" if dark else "#001a33",
                "line-width": _interpolate_zoom((9, 10, 12, 30, 15, 60)),
                "line-blur": _interpolate_zoom((9, 8, 12, 20, 15, 40)),
                "line-opacity": 0.05 if dark else 0.1,
            },
        })

    if not detailed_contours:
        layers.append({
            "id": "contours",
            "type": "line",
            "source": "contours",
            "source-layer": "contour",
            "layout": {"line-join": "round", "line-cap": "round"},
            "paint": {
                "line-color": resolve_color(palette, "contour"),
                "line-width": 0.5,
                "line-opacity": 0.4,
            },
        })
        return layers

    above_sea = ["all", ["has", "height"], [">", ["get", "height"], 0]]
    index_filter = above_sea + [["==", ["%", ["get", "height"], 500], 0]]
    regular_filter = above_sea + [[
        "any",
        ["!=", ["%", ["get", "height"], 500], 0],
        ["<", ["get", "height"], 500],
    ]]
    index_color = resolve_color(palette, "contour_index")

    layers.append(_contour_line(
        "contours-regular", resolve_color(palette, "contour"), regular_filter,
        widths=(9, 0.4, 11, 0.6, 13, 1.0, 15, 1.4),
        opacities=(9, 0.5, 11, 0.6, 13, 0.7),
    ))
    layers.append(_contour_line(
        "contours-index", index_color, index_filter,
        widths=(9, 0.5, 11, 1.0, 13, 1.8, 15, 2.6),
        opacities=(9, 0.5, 11, 0.65, 13, 0.8),
    ))
    layers.append({
        "id": "contours-labels",
        "type": "symbol",
        "source": "contours",
        "source-layer": "contour",
        "filter": list(index_filter),
        "layout": {
            "symbol-placement": "line",
            "text-field": ["concat", ["to-string", ["get", "height"]], "m"],
            "text-font": FONT,
            "text-size": _interpolate_zoom((9, 7, 11, 8.5, 13, 9.5, 15, 11)),
            "text-max-angle": 30,
            "symbol-spacing": _interpolate_zoom((9, 250, 12, 350, 14, 400)),
        },
        "paint": {
            "text-color": index_color,
            "text-halo-color": palette.background,
            "text-halo-width": 1.5,
            "text-halo-blur": 0.5,
        },
    })
    return layers


def _road_line(layer_id: str, color: str, road_filter: List[Any], widths: Sequence[float],
               layout: Optional[Dict[str, str]]) -> Dict[str, Any]:
    layer: Dict[str, Any] = {
        "id": layer_id,
        "type": "line",
        "source": OPENMAPTILES,
        "source-layer": "transportation",
        "filter": road_filter,
        "paint": {
            "line-color": color,
            "line-width": _interpolate_zoom(widths),
        },
    }
    if layout:
        layer["layout"] = dict(layout)
    return layer


def create_road_layers(
    palette: Palette,
    line_cap: Optional[str] = None,
    line_join: Optional[str] = None,
    include_glow: bool = False,
    include_bridges: bool = False,
) -> List[Dict[str, Any]]:
    """Create one line layer per road class, lowest class first."""
    layout: Dict[str, str] = {}
    if line_cap:
        layout["line-cap"] = line_cap
    if line_join:
        layout["line-join"] = line_join

    layers: List[Dict[str, Any]] = []

    if include_glow:
        glow = _road_line(
            "road-glow", palette.roads.motorway,
            ["in", ["get", "class"], ["literal", ["motorway", "trunk", "primary"]]],
            (10, 6.25, 11, 7.5, 12, 8.75, 13, 10.0, 14, 11.25),
            None,
        )
        glow["paint"]["line-blur"] = 4
        glow["paint"]["line-opacity"] = 0.4
        layers.append(glow)

    for road_class in ROAD_WIDTHS:
        classes = ROAD_CLASS_FILTERS[road_class]
        if len(classes) == 1:
            road_filter = ["==", ["get", "class"], classes[0]]
        else:
            road_filter = ["in", ["get", "class"], ["literal", list(classes)]]
        layer = _road_line(
            f"road-{road_class}", palette.roads.get(road_class), road_filter,
            ROAD_WIDTHS[road_class], layout,
        )
        if road_class in ROAD_MIN_ZOOM:
            layer["minzoom"] = ROAD_MIN_ZOOM[road_class]
        layers.append(layer)

    if include_bridges:
        bridge_filter = ["all", ["==", ["get", "class"], "motorway"], ["==", ["get", "brunnel"], "bridge"]]
        motorway = ROAD_WIDTHS["motorway"]
        layers.append(_road_line(
            "bridge-motorway-casing", palette.background, list(bridge_filter),
            [v * 1.5 if i % 2 else v for i, v in enumerate(motorway)], layout,
        ))
        layers.append(_road_line(
            "bridge-motorway", palette.roads.motorway, list(bridge_filter),
            [round(v * 1.1, 2) if i % 2 else v for i, v in enumerate(motorway)], layout,
        ))

    return layers


def _place_label(layer_id: str, palette: Palette, place_filter: List[Any], sizes: Sequence[float],
                 letter_spacing: float, style: str) -> Dict[str, Any]:
    halo_width, halo_blur = LABEL_HALOS.get(style, LABEL_HALOS["halo"])
    paint: Dict[str, Any] = {
        "text-color": palette.text,
        "text-halo-width": halo_width,
        "text-halo-blur": halo_blur,
    }
    if style != "none":
        paint["text-halo-color"] = palette.background
    return {
        "id": layer_id,
        "type": "symbol",
        "source": OPENMAPTILES,
        "source-layer": "place",
        "filter": place_filter,
        "layout": {
            "text-field": NAME_FIELD,
            "text-font": FONT,
            "text-size": _interpolate_zoom(sizes),
            "text-transform": "uppercase",
            "text-letter-spacing": letter_spacing,
        },
        "paint": paint,
    }


def create_label_layers(palette: Palette, style: str = "halo") -> List[Dict[str, Any]]:
    """Create country, state and city name labels.

    ``style`` is one of ``halo``, ``strong`` or ``none``.
    """
    not_admin = [
        "all",
        ["!=", ["get", "class"], "state"],
        ["!=", ["get", "class"], "country"],
    ]
    # Zoom steps must stay at the top level of a filter
    city_filter = [
        "step", ["zoom"],
        not_admin + [["<=", ["get", "rank"], 3]],
        6, not_admin + [["<=", ["get", "rank"], 7]],
        9, list(not_admin),
    ]

    state = _place_label("labels-state", palette, ["==", ["get", "class"], "state"],
                         (3, 11, 8, 19), 0.15, style)
    state["paint"]["text-opacity"] = 0.85
    return [
        _place_label("labels-country", palette, ["==", ["get", "class"], "country"],
                     (2, 12, 6, 20), 0.3, style),
        state,
        _place_label("labels-city", palette, city_filter, (4, 11, 12, 18), 0.12, style),
    ]


def create_boundary_layers(
    palette: Palette,
    country_width: float = 1.5,
    state_width: float = 0.75,
    county_width: float = 0.5,
) -> List[Dict[str, Any]]:
    """Create country, state and county boundary lines on land."""
    color = resolve_color(palette, "border")
    levels = (
        ("boundaries-country", 2, country_width, 0.3, None),
        ("boundaries-state", 4, state_width, 0.2, [4, 4]),
        ("boundaries-county", 6, county_width, 0.15, [2, 2]),
    )
    layers = []
    for layer_id, admin_level, width, opacity, dasharray in levels:
        paint: Dict[str, Any] = {"line-color": color, "line-width": width, "line-opacity": opacity}
        if dasharray:
            paint["line-dasharray"] = dasharray
        layers.append({
            "id": layer_id,
            "type": "line",
            "source": OPENMAPTILES,
            "source-layer": "boundary",
            "filter": ["all", ["==", ["get", "admin_level"], admin_level], ["==", ["get", "maritime"], 0]],
            "paint": paint,
        })
    return layers


def _poi_label(layer_id: str, palette: Palette, source_layer: str, text_field: List[Any],
               layer_filter: Optional[List[Any]] = None) -> Dict[str, Any]:
    layer: Dict[str, Any] = {
        "id": layer_id,
        "type": "symbol",
        "source": OPENMAPTILES,
        "source-layer": source_layer,
        "minzoom": 10,
        "layout": {
            "text-field": text_field,
            "text-font": FONT,
            "text-size": _interpolate_zoom((10, 9, 14, 12)),
            "text-anchor": "top",
            "text-offset": [0, 0.5],
        },
        "paint": {
            "text-color": palette.text,
            "text-halo-color": palette.background,
            "text-halo-width": 1.5,
            "text-halo-blur": 0.5,
        },
    }
    if layer_filter:
        layer["filter"] = layer_filter
    return layer


def create_poi_layers(
    palette: Palette,
    include_spaceports: bool = False,
    spaceport_label_filter: Optional[List[Any]] = None,
) -> List[Dict[str, Any]]:
    """Create airport, landmark and optional spaceport layers."""
    aeroway_color = palette.secondary or palette.primary or palette.text
    spaceport_color = palette.accent or palette.secondary or palette.text

    layers: List[Dict[str, Any]] = [
        {
            "id": "aeroway-area",
            "type": "fill",
            "source": OPENMAPTILES,
            "source-layer": "aeroway",
            "filter": ["==", ["geometry-type"], "Polygon"],
            "paint": {"fill-color": aeroway_color, "fill-opacity": 0.3},
        },
        {
            "id": "aeroway-runway",
            "type": "line",
            "source": OPENMAPTILES,
            "source-layer": "aeroway",
            "filter": ["all", ["==", ["geometry-type"], "LineString"], ["==", ["get", "class"], "runway"]],
            "paint": {
                "line-color": aeroway_color,
                "line-width": _interpolate_zoom((10, 0.5, 12, 2, 14, 4)),
            },
        },
        _poi_label("aerodrome-label", palette, "aerodrome_label", ["concat", "✈ ", NAME_FIELD]),
        {
            "id": "poi-symbol",
            "type": "circle",
            "source": OPENMAPTILES,
            "source-layer": "poi",
            "minzoom": 12,
            "filter": ["in", ["get", "class"], ["literal", list(POI_CLASSES)]],
            "paint": {
                "circle-radius": 3,
                "circle-color": palette.primary or palette.accent or palette.text,
                "circle-stroke-width": 1,
                "circle-stroke-color": palette.background,
            },
        },
    ]

    poi_label = _poi_label(
        "poi-label", palette, "poi", NAME_FIELD,
        ["in", ["get", "class"], ["literal", list(POI_CLASSES)]],
    )
    poi_label["minzoom"] = 13
    poi_label["layout"]["text-size"] = 9
    poi_label["layout"]["text-offset"] = [0, 0.8]
    poi_label["paint"]["text-opacity"] = 0.8
    layers.append(poi_label)

    if include_spaceports:
        label_filter = spaceport_label_filter or ["==", ["get", "class"], "spaceport"]
        layers.append({
            "id": "spaceport-area",
            "type": "fill",
            "source": OPENMAPTILES,
            "source-layer": "aeroway",
            "filter": ["all", ["==", ["geometry-type"], "Polygon"], ["==", ["get", "class"], "spaceport"]],
            "paint": {"fill-color": spaceport_color, "fill-opacity": 0.3},
        })
        spaceport_label = _poi_label(
            "spaceport-label", palette, "aeroway", ["concat", "🚀 ", NAME_FIELD],
            ["all", ["==", ["geometry-type"], "Point"], label_filter],
        )
        spaceport_label["layout"]["text-padding"] = 5
        spaceport_label["layout"]["text-allow-overlap"] = False
        spaceport_label["layout"]["text-optional"] = False
        layers.append(spaceport_label)

    return layers
