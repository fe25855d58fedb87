"""
Color palettes and their fallback chains.

A palette is a set of semantic color slots substituted into a base style.
Required slots are always present; optional slots may be ``None`` and are
resolved through the fallback chains in ``FALLBACK_CHAINS``, which always
end in a required slot.

Usage:
    from mapposter.style_engine.palette import Palette, resolve_color

    palette = Palette.from_dict(json.loads(path.read_text()))
    color = resolve_color(palette, "buildings")  # buildings -> primary -> text
"""

from dataclasses import asdict, dataclass, fields
from operator import attrgetter
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import PaletteError

# Road hierarchy from highest to lowest class
ROAD_CLASSES: Tuple[str, ...] = (
    "motorway",
    "trunk",
    "primary",
    "secondary",
    "tertiary",
    "residential",
    "service",
)


@dataclass(frozen=True)
class RoadRamp:
    """One color per road class, ordered motorway to service."""

    motorway: str
    trunk: str
    primary: str
    secondary: str
    tertiary: str
    residential: str
    service: str

    def get(self, road_class: str) -> Optional[str]:
        """Return the color for ``road_class`` or None for unknown classes."""
        if road_class not in ROAD_CLASSES:
            return None
        return getattr(self, road_class)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoadRamp":
        missing = [name for name in ROAD_CLASSES if not data.get(name)]
        if missing:
            raise PaletteError(
                f"Palette road ramp is missing required slot 'roads.{missing[0]}'",
                slot=f"roads.{missing[0]}",
            )
        return cls(**{name: data[name] for name in ROAD_CLASSES})


@dataclass(frozen=True)
class Palette:
    """Semantic color slots for one poster palette."""

    # Required slots
    background: str
    text: str
    water: str
    green_space: str
    roads: RoadRamp

    # Descriptive
    id: str = "custom"
    name: str = "Custom"

    # Optional slots (resolved through FALLBACK_CHAINS)
    primary: Optional[str] = None
    secondary: Optional[str] = None
    accent: Optional[str] = None
    border: Optional[str] = None
    water_line: Optional[str] = None
    landuse: Optional[str] = None
    parks: Optional[str] = None
    buildings: Optional[str] = None
    contour: Optional[str] = None
    contour_index: Optional[str] = None
    hillshade: Optional[str] = None
    population: Optional[str] = None
    grid: Optional[str] = None

    def __post_init__(self) -> None:
        for slot in REQUIRED_SLOTS:
            if not getattr(self, slot):
                raise PaletteError(
                    f"Palette '{self.id}' is missing required slot '{slot}'",
                    slot=slot,
                )
        if not isinstance(self.roads, RoadRamp):
            raise PaletteError(
                f"Palette '{self.id}' slot 'roads' must be a RoadRamp",
                slot="roads",
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Palette":
        """Build a palette from a JSON-style mapping.

        Accepts both the camelCase keys used by saved projects
        (``greenSpace``, ``contourIndex``, ``waterLine``) and snake_case.
        Unknown keys are ignored.
        """
        normalized: Dict[str, Any] = {}
        for key, value in data.items():
            normalized[_CAMEL_TO_SNAKE.get(key, key)] = value

        for slot in REQUIRED_SLOTS:
            if not normalized.get(slot):
                palette_id = normalized.get("id", "custom")
                raise PaletteError(
                    f"Palette '{palette_id}' is missing required slot '{slot}'",
                    slot=slot,
                )

        roads = normalized["roads"]
        if not isinstance(roads, RoadRamp):
            if not isinstance(roads, Mapping):
                raise PaletteError("Palette slot 'roads' must be a mapping", slot="roads")
            roads = RoadRamp.from_dict(roads)
        normalized["roads"] = roads

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in normalized.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase mapping for JSON serialization."""
        data = asdict(self)
        return {
            _SNAKE_TO_CAMEL.get(key, key): value
            for key, value in data.items()
            if value is not None
        }


REQUIRED_SLOTS: Tuple[str, ...] = ("background", "text", "water", "green_space", "roads")

_CAMEL_TO_SNAKE = {
    "greenSpace": "green_space",
    "waterLine": "water_line",
    "contourIndex": "contour_index",
}
_SNAKE_TO_CAMEL = {snake: camel for camel, snake in _CAMEL_TO_SNAKE.items()}


# =============================================================================
# FALLBACK CHAINS
# =============================================================================
# Ordered accessors per semantic slot, evaluated first-non-empty. Every
# layer category that colors the same concept shares one chain.

FALLBACK_CHAINS: Dict[str, Tuple[str, ...]] = {
    "buildings": ("buildings", "primary", "text"),
    "border": ("border", "text"),
    "parks": ("parks", "green_space"),
    "water_line": ("water_line", "water"),
    "contour": ("contour", "contour_index", "secondary", "roads.secondary", "text"),
    "contour_index": ("contour_index", "contour", "secondary", "roads.secondary", "text"),
    "population": ("population", "accent", "primary", "roads.motorway"),
    "hillshade_tone": ("secondary", "text"),
    "road_primary": ("primary", "roads.primary"),
    "road_secondary": ("secondary", "roads.secondary"),
}


def resolve_color(palette: Palette, chain: str) -> str:
    """Return the first non-empty slot of the named fallback chain."""
    try:
        accessors = FALLBACK_CHAINS[chain]
    except KeyError:
        raise ValueError(
            f"Unknown fallback chain: {chain}. Available: {list(FALLBACK_CHAINS.keys())}"
        ) from None

    for accessor in accessors:
        value = attrgetter(accessor)(palette)
        if value:
            return value
    # Chains end in required slots, so this only triggers on a broken table
    raise PaletteError(f"Fallback chain '{chain}' resolved to no color", slot=chain)


def palette_from_custom(data: Mapping[str, Any]) -> Palette:
    """Convert a generated custom palette into a complete ``Palette``.

    Custom palettes only carry the essential slots; the derived slots are
    filled the way the poster editor fills them for hand-made palettes.
    """
    text = data.get("text")
    background = data.get("background")
    water = data.get("water")
    accent = data.get("accent") or text
    landuse = data.get("landuse") or background

    return Palette.from_dict({
        "id": "ai-custom",
        "name": "AI Custom",
        "background": background,
        "text": text,
        "water": water,
        "greenSpace": data.get("greenSpace") or data.get("green_space"),
        "roads": data.get("roads") or {},
        "border": accent,
        "accent": accent,
        "waterLine": data.get("waterLine") or water,
        "landuse": landuse,
        "buildings": data.get("buildings") or landuse,
        "contour": data.get("contour"),
        "hillshade": data.get("hillshade"),
        "population": data.get("population"),
    })
