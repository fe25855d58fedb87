"""
Layer visibility driven by the poster's layer toggles.

A toggle catalog binds each user-facing toggle to the layer ids it controls.
Bathymetry layers are the exception: they always follow the underwater
terrain toggle, even if a catalog entry also claims them.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .config import VisibilityConfig

logger = logging.getLogger(__name__)

BATHYMETRY_PREFIX = "bathymetry"
UNDERWATER_TOGGLE = "terrainUnderWater"


@dataclass(frozen=True)
class LayerToggle:
    """One user-facing toggle and the layer ids it governs."""

    id: str
    name: str
    layer_ids: Sequence[str] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayerToggle":
        layer_ids = data.get("layerIds", data.get("layer_ids", ()))
        return cls(id=data["id"], name=data.get("name", data["id"]), layer_ids=tuple(layer_ids))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "layerIds": list(self.layer_ids)}


def is_bathymetry(layer: Mapping[str, Any]) -> bool:
    """True for underwater terrain layers."""
    return str(layer.get("id", "")).startswith(BATHYMETRY_PREFIX)


def find_toggle(layer_id: str, catalog: Iterable[LayerToggle]) -> Optional[LayerToggle]:
    """Return the toggle owning ``layer_id``, or None."""
    for toggle in catalog:
        if layer_id in toggle.layer_ids:
            return toggle
    return None


def _set_visibility(layer: Dict[str, Any], visible: bool) -> None:
    layer["layout"] = {
        **(layer.get("layout") or {}),
        "visibility": "visible" if visible else "none",
    }


def apply_visibility_toggles(layers: List[Dict[str, Any]], config: VisibilityConfig,
                             catalog: Sequence[LayerToggle]) -> None:
    """Set an explicit visibility on every layer from the toggle catalog."""
    for layer in layers:
        if is_bathymetry(layer):
            _set_visibility(layer, config.terrain_under_water)
            continue

        toggle = find_toggle(layer["id"], catalog)
        if toggle is None:
            _set_visibility(layer, True)
            continue

        enabled = config.is_enabled(toggle.id)
        if enabled is None:
            logger.debug("Toggle '%s' has no config field; showing '%s'", toggle.id, layer["id"])
            enabled = True
        _set_visibility(layer, enabled)


def apply_underwater_visibility(layers: List[Dict[str, Any]], config: VisibilityConfig) -> None:
    """Degraded mode without a catalog: only bathymetry layers are toggled."""
    for layer in layers:
        if is_bathymetry(layer):
            _set_visibility(layer, config.terrain_under_water)
