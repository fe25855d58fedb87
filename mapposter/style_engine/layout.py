"""
Label layout: global size/wrap scaling and collision settings.
"""

from typing import Any, Dict, Optional

from .config import VisibilityConfig
from .expressions import scale_expression

# Placed by the spaceport overlay with its own collision handling
EXEMPT_LAYER_IDS = frozenset({"spaceport-label"})

LABEL_PADDING = 5


def update_layer_layout(layer: Dict[str, Any], config: Optional[VisibilityConfig] = None) -> None:
    """Apply label scaling and collision avoidance to a symbol layer in place."""
    if layer.get("type") != "symbol" or layer.get("id") in EXEMPT_LAYER_IDS:
        return

    layout = dict(layer.get("layout") or {})

    if config is not None:
        if config.label_max_width:
            layout["text-max-width"] = config.label_max_width
        if config.label_size != 1.0 and "text-size" in layout:
            layout["text-size"] = scale_expression(layout["text-size"], config.label_size)

    layout["text-padding"] = LABEL_PADDING
    layout["text-allow-overlap"] = False
    layout["text-ignore-placement"] = False
    layer["layout"] = layout
