"""
Configuration dataclasses for style derivation.

``VisibilityConfig`` holds the live poster selections: one boolean per
layer toggle plus the scalar intensities (hillshade exaggeration, contour
density, road weight, label size and wrap width). Defaults mirror the
poster editor's default configuration.

``TileSourceConfig`` holds the runtime context needed to resolve optional
tile sources, read from the environment.
"""

import math
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError


@dataclass(frozen=True)
class VisibilityConfig:
    """User-facing layer toggles and intensities."""

    # Layer toggles
    streets: bool = True
    buildings: bool = False
    buildings_3d: bool = False
    water: bool = True
    terrain_under_water: bool = True
    parks: bool = True
    terrain: bool = True
    contours: bool = False
    population: bool = False
    labels: bool = False
    labels_admin: bool = False
    labels_cities: bool = False
    pois: bool = False
    boundaries: bool = False

    # Intensities
    hillshade_exaggeration: Optional[float] = 0.5  # 0.0-1.0
    contour_density: Optional[int] = 50  # Metres between contour lines
    road_weight: float = 1.0  # Road width multiplier
    label_size: float = 1.0  # Label text-size multiplier
    label_max_width: Optional[float] = 10  # Label wrap width in ems

    def __post_init__(self) -> None:
        density = self.contour_density
        if density is not None:
            whole = _is_number(density) and math.isfinite(density) and density == int(density)
            if not whole or density <= 0:
                raise ConfigError(
                    f"contour_density must be a positive whole number of metres, got {density!r}",
                    field="contour_density",
                )
            # Integral floats from JSON become ints
            object.__setattr__(self, "contour_density", int(density))

        for name in ("road_weight", "label_size"):
            value = getattr(self, name)
            if not _is_number(value) or not math.isfinite(value) or value <= 0:
                raise ConfigError(f"{name} must be a positive number, got {value!r}", field=name)

    def is_enabled(self, toggle_id: str) -> Optional[bool]:
        """Return the boolean for a toggle id, or None if the id is unknown.

        Toggle ids come from the toggle catalog (``terrainUnderWater``,
        ``labels-admin``); both those spellings and field names are accepted.
        """
        field_name = TOGGLE_FIELDS.get(toggle_id, toggle_id)
        if field_name not in _BOOLEAN_FIELDS:
            return None
        return getattr(self, field_name)

    @property
    def road_width_factor(self) -> float:
        """Road width multiplier, thinned slightly while labels are shown."""
        return self.road_weight * (LABELS_ON_ROAD_FACTOR if self.labels else 1.0)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VisibilityConfig":
        """Build from a saved-project ``layers`` mapping (camelCase accepted)."""
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = TOGGLE_FIELDS.get(key, _INTENSITY_KEYS.get(key, key))
            if name in known:
                values[name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# Roads are drawn at this fraction of their weight while labels are on
LABELS_ON_ROAD_FACTOR = 0.8

# Toggle catalog id -> VisibilityConfig field
TOGGLE_FIELDS: Dict[str, str] = {
    "streets": "streets",
    "buildings": "buildings",
    "buildings3D": "buildings_3d",
    "water": "water",
    "terrainUnderWater": "terrain_under_water",
    "parks": "parks",
    "terrain": "terrain",
    "contours": "contours",
    "population": "population",
    "labels": "labels",
    "labels-admin": "labels_admin",
    "labels-cities": "labels_cities",
    "pois": "pois",
    "boundaries": "boundaries",
}

_INTENSITY_KEYS = {
    "hillshadeExaggeration": "hillshade_exaggeration",
    "contourDensity": "contour_density",
    "roadWeight": "road_weight",
    "labelSize": "label_size",
    "labelMaxWidth": "label_max_width",
}

_BOOLEAN_FIELDS = frozenset(
    f.name for f in fields(VisibilityConfig) if f.type in (bool, "bool")
)


@dataclass
class TileSourceConfig:
    """Runtime context for optional tile sources."""

    # Tiles are fetched through the application's proxy route
    proxy_base: str = "/api/tiles"

    # Absolute origin of the proxy (empty for relative URLs)
    server_url: str = ""

    # MapTiler key; the contour source is unavailable without it
    maptiler_key: Optional[str] = None

    # Terrarium-encoded elevation tiles (public, not proxied)
    terrain_url: str = "https://s3.amazonaws.com/elevation-tiles-prod/terrarium/{z}/{x}/{y}.png"

    @classmethod
    def from_env(cls) -> "TileSourceConfig":
        """Read ``MAPTILER_KEY``, ``TILE_PROXY_BASE`` and ``SERVER_URL``."""
        return cls(
            proxy_base=os.environ.get("TILE_PROXY_BASE", "/api/tiles"),
            server_url=os.environ.get("SERVER_URL", ""),
            maptiler_key=os.environ.get("MAPTILER_KEY") or None,
        )

    def _join(self, path: str) -> str:
        # Plain concatenation keeps "{z}/{x}/{y}" templates unescaped
        proxied = f"{self.proxy_base.rstrip('/')}/{path.lstrip('/')}"
        if not self.server_url:
            return proxied
        return f"{self.server_url.rstrip('/')}/{proxied.lstrip('/')}"

    def contour_tilejson_url(self) -> Optional[str]:
        """TileJSON URL of the contour tiles, or None without an API key."""
        if not self.maptiler_key:
            return None
        return self._join(f"maptiler/tiles/contours-v2/tiles.json?key={self.maptiler_key}")

    def openmaptiles_tilejson_url(self) -> str:
        """TileJSON URL of the OpenFreeMap planet tileset."""
        return self._join("openfreemap/planet")

    def population_tile_url(self) -> str:
        """Tile template of the Kontur population tiles."""
        return self._join("kontur/{z}/{x}/{y}.mvt?indicatorsClass=general")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, hiding the API key."""
        data = asdict(self)
        data["maptiler_key"] = "***" if self.maptiler_key else None
        return data
