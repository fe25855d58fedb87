"""
Map Poster Style Derivation Engine

Turns an immutable base map style plus a color palette and the poster's
layer toggles into a MapLibre style ready to render:
- Palette colors per layer category with fallback chains for optional slots
- Road width and label size scaling of zoom expressions
- Hillshade kept beneath water, water kept opaque
- Zoom-adaptive contour density filters
- Optional contour source resolution and dependent layer removal

The engine is pure and synchronous: no rendering, tiling or network I/O.

Usage:
    # List built-in styles
    python -m mapposter.style_engine.cli styles

    # Derive a style with a palette
    python -m mapposter.style_engine.cli derive minimal out/style.json --palette minimal-navy

    # Check invariants of a derived style
    python -m mapposter.style_engine.cli check out/style.json
"""

from .categories import LayerCategory, classify_layer
from .colors import is_color_dark, luminance, parse_color
from .config import TileSourceConfig, VisibilityConfig
from .contours import contour_density_filter, contour_guards
from .derive import derive_style, validate_layers
from .errors import ConfigError, LayerContractError, PaletteError, StyleDerivationError
from .expressions import evaluate_filter, scale_expression
from .layout import update_layer_layout
from .ordering import ensure_hillshade_below_water
from .paint import update_layer_paint
from .palette import FALLBACK_CHAINS, ROAD_CLASSES, Palette, RoadRamp, palette_from_custom, resolve_color
from .sources import resolve_contour_source
from .toggles import LayerToggle, apply_underwater_visibility, apply_visibility_toggles

__all__ = [
    # Orchestration
    "derive_style",
    "validate_layers",
    # Data model
    "Palette",
    "RoadRamp",
    "ROAD_CLASSES",
    "FALLBACK_CHAINS",
    "resolve_color",
    "palette_from_custom",
    "LayerToggle",
    "VisibilityConfig",
    "TileSourceConfig",
    # Pipeline steps
    "scale_expression",
    "contour_density_filter",
    "contour_guards",
    "ensure_hillshade_below_water",
    "resolve_contour_source",
    "apply_visibility_toggles",
    "apply_underwater_visibility",
    "LayerCategory",
    "classify_layer",
    "update_layer_paint",
    "update_layer_layout",
    # Helpers
    "evaluate_filter",
    "is_color_dark",
    "luminance",
    "parse_color",
    # Errors
    "StyleDerivationError",
    "LayerContractError",
    "ConfigError",
    "PaletteError",
]
__version__ = "0.1.0"
