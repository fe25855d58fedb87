"""
Color helpers for light/dark-aware palette decisions.

Palette slots are CSS color strings (``#rgb``, ``#rrggbb``, ``#rrggbbaa``,
``rgb()``, named colors). Parsing is delegated to Pillow's ``ImageColor``;
luminance uses the ITU-R BT.709 weights on normalized sRGB channels.
"""

import numpy as np
from numpy.typing import NDArray
from PIL import ImageColor

# ITU-R BT.709 luma coefficients (R, G, B)
BT709_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])

# Backgrounds below this luminance count as dark
DARK_LUMINANCE_THRESHOLD = 0.5


def parse_color(value: str) -> tuple[int, int, int, int]:
    """Parse a CSS color string into an ``(r, g, b, a)`` tuple (0-255).

    Raises:
        ValueError: If the string is not a color Pillow understands
    """
    rgba = ImageColor.getcolor(value.strip(), "RGBA")
    return tuple(rgba)


def _normalized_rgb(value: str) -> NDArray[np.float64]:
    r, g, b, _ = parse_color(value)
    return np.array([r, g, b], dtype=np.float64) / 255.0


def luminance(value: str) -> float:
    """Relative luminance of a color in [0, 1] using BT.709 weights."""
    return float(np.dot(BT709_WEIGHTS, _normalized_rgb(value)))


def is_color_dark(value: str | None) -> bool:
    """Return True when ``value`` is a dark color.

    Values that cannot be parsed are treated as light, so palettes with
    exotic color syntax fall back to the light-background variants.
    """
    if not value or not isinstance(value, str):
        return False
    try:
        return luminance(value) < DARK_LUMINANCE_THRESHOLD
    except ValueError:
        return False
