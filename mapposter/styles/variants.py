"""
Style variants: the structural choices that distinguish one base style
from another (road caps, glow, bridges, label halos, terrain detail).
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class StyleVariant:
    """Structural options for one family of base styles."""

    line_cap: str = "round"
    line_join: str = "round"
    include_glow: bool = False
    include_bridges: bool = False
    label_style: str = "halo"  # halo, strong or none
    include_spaceports: bool = True
    volumetric_bathymetry: bool = False
    hillshade_exaggeration: float = 0.6

    @property
    def detailed_contours(self) -> bool:
        """Regular/index/label contour layers go with volumetric bathymetry."""
        return self.volumetric_bathymetry


STYLE_VARIANTS: Dict[str, StyleVariant] = {
    "minimal": StyleVariant(include_bridges=True),
    "dark-mode": StyleVariant(include_glow=True, include_bridges=True),
    "blueprint": StyleVariant(line_cap="square", line_join="miter", label_style="none"),
    "topographic": StyleVariant(volumetric_bathymetry=True, hillshade_exaggeration=0.15),
}


def get_variant(style_id: str) -> StyleVariant:
    """Return the variant for a style id, falling back to ``minimal``."""
    return STYLE_VARIANTS.get(style_id, STYLE_VARIANTS["minimal"])
