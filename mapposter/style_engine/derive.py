"""
Style derivation: base style + palette + toggles -> renderable style.

Pipeline (strictly ordered, on a deep copy of the base style):
    1. validate layer and palette contracts
    2. resolve the optional contour source (strip dependent layers if missing)
    3. move the hillshade below the first water fill
    4. apply visibility toggles (full with a catalog, bathymetry-only without)
    5. per layer: paint rules, then label layout

Usage:
    from mapposter.style_engine import derive_style, VisibilityConfig

    derived = derive_style(style.map_style, palette, VisibilityConfig(), style.layer_toggles)
"""

import copy
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from .config import TileSourceConfig, VisibilityConfig
from .errors import LayerContractError, StyleDerivationError
from .layout import update_layer_layout
from .ordering import ensure_hillshade_below_water
from .paint import update_layer_paint
from .palette import Palette
from .sources import ContourUrlResolver, resolve_contour_source
from .toggles import LayerToggle, apply_underwater_visibility, apply_visibility_toggles

logger = logging.getLogger(__name__)


def _default_contour_resolver() -> Optional[str]:
    return TileSourceConfig.from_env().contour_tilejson_url()


def validate_layers(style: Mapping[str, Any]) -> None:
    """Fail fast on layers without a string ``id`` and ``type``."""
    layers = style.get("layers")
    if layers is None:
        return
    if not isinstance(layers, list):
        raise StyleDerivationError("Style 'layers' must be a list")

    for index, layer in enumerate(layers):
        if not isinstance(layer, Mapping):
            raise LayerContractError(f"Layer at index {index} is not an object")
        layer_id = layer.get("id")
        if not isinstance(layer_id, str) or not layer_id:
            raise LayerContractError(f"Layer at index {index} is missing its 'id'")
        if not isinstance(layer.get("type"), str) or not layer["type"]:
            raise LayerContractError(f"Layer '{layer_id}' is missing its 'type'", layer_id=layer_id)


def derive_style(
    base_style: Mapping[str, Any],
    palette: Union[Palette, Mapping[str, Any]],
    config: Union[VisibilityConfig, Mapping[str, Any], None] = None,
    toggles: Optional[Sequence[LayerToggle]] = None,
    contour_url_resolver: Optional[ContourUrlResolver] = None,
) -> Dict[str, Any]:
    """
    Derive a renderable style from a base style and a palette.

    Args:
        base_style: MapLibre style dictionary; never mutated
        palette: ``Palette`` or a palette mapping (camelCase accepted)
        config: Live layer toggles and intensities (``VisibilityConfig`` or
            a saved-project ``layers`` mapping)
        toggles: Toggle catalog of the base style
        contour_url_resolver: Resolves the contour TileJSON URL when the
            base style has none; defaults to the environment

    Returns:
        New style dictionary sharing no objects with the inputs

    Raises:
        LayerContractError: A layer lacks its id or type
        PaletteError: The palette lacks a required slot
    """
    if not isinstance(palette, Palette):
        palette = Palette.from_dict(palette)
    if config is not None and not isinstance(config, VisibilityConfig):
        config = VisibilityConfig.from_dict(config)
    validate_layers(base_style)

    style = copy.deepcopy(dict(base_style))
    if not style.get("layers"):
        return style

    if toggles is not None:
        toggles = [t if isinstance(t, LayerToggle) else LayerToggle.from_dict(t) for t in toggles]

    resolve_contour_source(style, contour_url_resolver or _default_contour_resolver)
    ensure_hillshade_below_water(style["layers"])

    if config is not None and toggles is not None:
        apply_visibility_toggles(style["layers"], config, toggles)
    elif config is not None:
        apply_underwater_visibility(style["layers"], config)

    for layer in style["layers"]:
        update_layer_paint(layer, palette, config)
        update_layer_layout(layer, config)

    logger.debug(
        "Derived style '%s' with palette '%s' (%d layers)",
        style.get("name", "?"), palette.id, len(style["layers"]),
    )
    return style
