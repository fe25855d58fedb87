#!/usr/bin/env python3
"""Pytest configuration and shared fixtures."""
import sys
import tempfile
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from mapposter.style_engine.palette import Palette
from mapposter.style_engine.toggles import LayerToggle


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def road_ramp():
    """Road colors from motorway to service."""
    return {
        "motorway": "#111111",
        "trunk": "#222222",
        "primary": "#333333",
        "secondary": "#444444",
        "tertiary": "#555555",
        "residential": "#666666",
        "service": "#777777",
    }


@pytest.fixture
def palette_dict(road_ramp):
    """Light palette as saved by the poster editor (camelCase keys)."""
    return {
        "id": "test-light",
        "name": "Test Light",
        "background": "#F7F5F0",
        "text": "#2C2C2C",
        "border": "#2C2C2C",
        "roads": road_ramp,
        "water": "#E0E7ED",
        "waterLine": "#C8D4DC",
        "greenSpace": "#EDEEE8",
        "landuse": "#F0EDE6",
        "buildings": "#EBE8E2",
        "accent": "#2C2C2C",
    }


@pytest.fixture
def palette(palette_dict):
    """Light palette."""
    return Palette.from_dict(palette_dict)


@pytest.fixture
def bare_palette(road_ramp):
    """Palette with only the required slots."""
    return Palette.from_dict({
        "id": "bare",
        "background": "#FFFFFF",
        "text": "#202020",
        "water": "#A0C0E0",
        "greenSpace": "#C0E0C0",
        "roads": road_ramp,
    })


@pytest.fixture
def dark_palette(road_ramp):
    """Dark palette with a secondary slot."""
    return Palette.from_dict({
        "id": "test-dark",
        "background": "#0A0A0F",
        "text": "#D4AF37",
        "secondary": "#B89428",
        "water": "#06080D",
        "greenSpace": "#0A0F0A",
        "roads": road_ramp,
    })


@pytest.fixture
def base_style():
    """Base style covering every layer category, hillshade after water."""
    return {
        "version": 8,
        "name": "Test",
        "sources": {
            "openmaptiles": {"type": "vector", "url": "/api/tiles/openfreemap/planet"},
            "contours": {"type": "vector", "url": ""},
            "terrain": {"type": "raster-dem", "tiles": ["https://example.com/{z}/{x}/{y}.png"]},
        },
        "layers": [
            {"id": "background", "type": "background", "paint": {"background-color": "#ffffff"}},
            {
                "id": "water",
                "type": "fill",
                "source": "openmaptiles",
                "source-layer": "water",
                "paint": {"fill-color": "#0000ff", "fill-opacity": 0.6},
            },
            {"id": "hillshade", "type": "hillshade", "source": "terrain", "paint": {}},
            {
                "id": "waterway",
                "type": "line",
                "source": "openmaptiles",
                "source-layer": "waterway",
                "paint": {"line-color": "#0000ff"},
            },
            {
                "id": "bathymetry-detail",
                "type": "line",
                "source": "contours",
                "source-layer": "contour",
                "paint": {"line-color": "#001a33", "line-opacity": 0.1},
            },
            {
                "id": "park",
                "type": "fill",
                "source": "openmaptiles",
                "source-layer": "park",
                "paint": {"fill-color": "#00ff00"},
            },
            {
                "id": "road-motorway",
                "type": "line",
                "source": "openmaptiles",
                "source-layer": "transportation",
                "paint": {
                    "line-color": "#ff0000",
                    "line-width": ["interpolate", ["linear"], ["zoom"], 10, 2, 14, 4],
                },
            },
            {
                "id": "contours-regular",
                "type": "line",
                "source": "contours",
                "source-layer": "contour",
                "paint": {"line-color": "#999999"},
            },
            {
                "id": "contours-index",
                "type": "line",
                "source": "contours",
                "source-layer": "contour",
                "paint": {"line-color": "#666666"},
            },
            {
                "id": "labels-city",
                "type": "symbol",
                "source": "openmaptiles",
                "source-layer": "place",
                "layout": {
                    "text-field": ["get", "name"],
                    "text-size": ["interpolate", ["linear"], ["zoom"], 4, 11, 12, 18],
                },
                "paint": {"text-color": "#000000"},
            },
            {
                "id": "decorative-frame",
                "type": "line",
                "source": "openmaptiles",
                "source-layer": "boundary",
                "layout": {"visibility": "none"},
                "paint": {"line-color": "#abcdef"},
            },
        ],
    }


@pytest.fixture
def toggle_catalog():
    """Toggle catalog for ``base_style``."""
    return [
        LayerToggle("streets", "Streets", ("road-motorway",)),
        LayerToggle("water", "Water", ("water", "waterway")),
        LayerToggle("terrainUnderWater", "Underwater Terrain", ("bathymetry-detail",)),
        LayerToggle("parks", "Parks", ("park",)),
        LayerToggle("terrain", "Terrain Shading", ("hillshade",)),
        LayerToggle("contours", "Topography (Contours)", ("contours-regular", "contours-index")),
        LayerToggle("labels-cities", "City Names", ("labels-city",)),
    ]


@pytest.fixture
def contour_url():
    """Resolver returning a contour TileJSON URL."""
    return lambda: "/api/tiles/maptiler/tiles/contours-v2/tiles.json?key=test"


@pytest.fixture
def no_contours():
    """Resolver for a runtime without a contour tile provider."""
    return lambda: None
