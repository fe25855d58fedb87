"""
Built-in color palettes, grouped by base style.

Palettes are kept in the same camelCase mapping form saved projects use and
converted to ``Palette`` objects on load. The first palette of each style is
its default.
"""

from typing import Any, Dict, List

from ..style_engine.palette import Palette


def _ramp(motorway, trunk, primary, secondary, tertiary, residential, service) -> Dict[str, str]:
    return {
        "motorway": motorway,
        "trunk": trunk,
        "primary": primary,
        "secondary": secondary,
        "tertiary": tertiary,
        "residential": residential,
        "service": service,
    }


# =============================================================================
# MINIMAL
# =============================================================================

MINIMAL_PALETTES: List[Dict[str, Any]] = [
    {
        "id": "minimal-ink",
        "name": "Ink & Paper",
        "background": "#F7F5F0",
        "text": "#2C2C2C",
        "border": "#2C2C2C",
        "roads": _ramp("#1A1A1A", "#252525", "#2C2C2C", "#3D3D3D", "#5C5C5C", "#6E6E6E", "#8A8A8A"),
        "water": "#E0E7ED",
        "waterLine": "#C8D4DC",
        "greenSpace": "#EDEEE8",
        "landuse": "#F0EDE6",
        "buildings": "#EBE8E2",
        "accent": "#2C2C2C",
    },
    {
        "id": "minimal-charcoal",
        "name": "Charcoal",
        "background": "#F5F5F0",
        "text": "#2D2D2D",
        "border": "#2D2D2D",
        "roads": _ramp("#1F1F1F", "#2D2D2D", "#3A3A3A", "#4D4D4D", "#666666", "#7A7A7A", "#909090"),
        "water": "#B8C5D0",
        "waterLine": "#A0B0BC",
        "greenSpace": "#C5CBBA",
        "landuse": "#ECEBE5",
        "buildings": "#E5E4DE",
        "accent": "#2D2D2D",
    },
    {
        "id": "minimal-navy",
        "name": "Navy & Cream",
        "background": "#FDF6E3",
        "text": "#1E3A5F",
        "border": "#1E3A5F",
        "roads": _ramp("#0F2840", "#1A3350", "#1E3A5F", "#2E4A6F", "#3E5C81", "#5070A0", "#6888B0"),
        "water": "#D4E4F0",
        "waterLine": "#B8D0E4",
        "greenSpace": "#E4EAD8",
        "landuse": "#F5EED8",
        "buildings": "#EFE8D8",
        "accent": "#1E3A5F",
    },
    {
        "id": "minimal-warm",
        "name": "Warm Gray",
        "background": "#FAF8F5",
        "text": "#4A4A4A",
        "border": "#4A4A4A",
        "roads": _ramp("#3A3A3A", "#454545", "#4A4A4A", "#5A5A5A", "#707070", "#888888", "#A0A0A0"),
        "water": "#D8E4EC",
        "waterLine": "#C0D0DC",
        "greenSpace": "#E4E8DC",
        "landuse": "#F2F0EB",
        "buildings": "#EBE9E4",
        "accent": "#4A4A4A",
    },
]


# =============================================================================
# DARK MODE
# =============================================================================

DARK_MODE_PALETTES: List[Dict[str, Any]] = [
    {
        "id": "dark-gold",
        "name": "Gold Standard",
        "background": "#0A0A0F",
        "text": "#D4AF37",
        "border": "#D4AF37",
        "roads": _ramp("#E8C547", "#D4AF37", "#C9A432", "#B89428", "#9A8228", "#7A6820", "#5A4E1A"),
        "water": "#06080D",
        "waterLine": "#1A1A25",
        "greenSpace": "#0A0F0A",
        "landuse": "#0C0C12",
        "buildings": "#12121A",
        "accent": "#E8C547",
    },
    {
        "id": "dark-silver",
        "name": "Silver City",
        "background": "#0C0C10",
        "text": "#C0C0C8",
        "border": "#C0C0C8",
        "roads": _ramp("#E8E8F0", "#D0D0D8", "#C0C0C8", "#A8A8B0", "#888890", "#686870", "#484850"),
        "water": "#08080C",
        "waterLine": "#18181C",
        "greenSpace": "#0C100C",
        "landuse": "#0E0E12",
        "buildings": "#141418",
        "accent": "#E8E8F0",
    },
    {
        "id": "dark-neon",
        "name": "Neon Noir",
        "background": "#0B0B1A",
        "text": "#FFFFFF",
        "border": "#00E5FF",
        "roads": _ramp("#00F5FF", "#00E5EE", "#00D4DD", "#00B8C0", "#009099", "#006870", "#004048"),
        "water": "#050510",
        "waterLine": "#0A1020",
        "greenSpace": "#0A140A",
        "landuse": "#0D0D1E",
        "buildings": "#10102A",
        "accent": "#00F5FF",
    },
]


# =============================================================================
# BLUEPRINT
# =============================================================================

BLUEPRINT_PALETTES: List[Dict[str, Any]] = [
    {
        "id": "blueprint-classic",
        "name": "Classic Blueprint",
        "background": "#0A2647",
        "text": "#E8F1F5",
        "border": "#E8F1F5",
        "roads": _ramp("#FFFFFF", "#F5F8FA", "#E8F1F5", "#D0E0EC", "#A8C8E0", "#88A8C8", "#6888A8"),
        "water": "#072035",
        "waterLine": "#1A4060",
        "greenSpace": "#0A3040",
        "landuse": "#0D2D52",
        "buildings": "#0F3355",
        "accent": "#E8F1F5",
        "grid": "#1A3A5C",
    },
    {
        "id": "blueprint-architect",
        "name": "Architect",
        "background": "#1C2833",
        "text": "#D4E6F1",
        "border": "#D4E6F1",
        "roads": _ramp("#E8F4FA", "#D4E6F1", "#C0D8E8", "#AED6F1", "#90C0DC", "#70A0C0", "#5080A0"),
        "water": "#141E28",
        "waterLine": "#2E4053",
        "greenSpace": "#1A2830",
        "landuse": "#202D38",
        "buildings": "#243540",
        "accent": "#D4E6F1",
        "grid": "#2E4053",
    },
    {
        "id": "blueprint-white",
        "name": "Whiteprint",
        "background": "#F5F8FA",
        "text": "#0A2647",
        "border": "#0A2647",
        "roads": _ramp("#082040", "#0A2647", "#0E3055", "#1A4068", "#2E5580", "#4A7098", "#6888B0"),
        "water": "#E0EBF5",
        "waterLine": "#A0C0DC",
        "greenSpace": "#E8F0EC",
        "landuse": "#EEF2F5",
        "buildings": "#E5EBF0",
        "accent": "#0A2647",
        "grid": "#D0DCE8",
    },
]


# =============================================================================
# TOPOGRAPHIC
# =============================================================================

TOPOGRAPHIC_PALETTES: List[Dict[str, Any]] = [
    {
        "id": "topo-survey",
        "name": "Survey",
        "background": "#F5F2E8",
        "text": "#3C3020",
        "border": "#5C4830",
        "roads": _ramp("#4A3020", "#5C4830", "#6E5840", "#806848", "#9A8060", "#B89870", "#C8A880"),
        "water": "#B8D4E8",
        "waterLine": "#7BA3C4",
        "greenSpace": "#D8E4D0",
        "landuse": "#EBE8DE",
        "buildings": "#E0DCD0",
        "accent": "#5C4830",
        "contour": "#B8A080",
        "contourIndex": "#8B7355",
        "hillshade": "#00000020",
    },
    {
        "id": "topo-night",
        "name": "Terrain Night",
        "background": "#1A1A2E",
        "text": "#B8C5D0",
        "border": "#6BB8C8",
        "roads": _ramp("#8AD0E0", "#6BB8C8", "#58A0B0", "#4A8898", "#3A7080", "#2A5868", "#1A4050"),
        "water": "#0F2040",
        "waterLine": "#2A4060",
        "greenSpace": "#1A2A1A",
        "landuse": "#1C1C30",
        "buildings": "#202040",
        "accent": "#6BB8C8",
        "contour": "#4A90A4",
        "contourIndex": "#6BB8C8",
        "hillshade": "#FFFFFF10",
    },
]


PALETTES_BY_STYLE: Dict[str, List[Dict[str, Any]]] = {
    "minimal": MINIMAL_PALETTES,
    "dark-mode": DARK_MODE_PALETTES,
    "blueprint": BLUEPRINT_PALETTES,
    "topographic": TOPOGRAPHIC_PALETTES,
}


def load_palettes(style_id: str) -> List[Palette]:
    """Return the palettes of a style as ``Palette`` objects, default first."""
    try:
        entries = PALETTES_BY_STYLE[style_id]
    except KeyError:
        raise ValueError(
            f"Unknown style: {style_id}. Available: {list(PALETTES_BY_STYLE.keys())}"
        ) from None
    return [Palette.from_dict(entry) for entry in entries]
