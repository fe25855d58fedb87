"""
Zoom-adaptive contour density filters.

At low zoom there is too little room for dense contour lines, so the
interval coarsens independently of the user's density setting; from zoom 13
the user's density takes over. Within each zoom band the index and regular
predicates exclude each other so no contour is drawn by two layers.

    band          label / index            regular
    z >= 13       ele % (5d) == 0          ele % d == 0 and ele % (5d) != 0
    11 <= z < 13  ele % 500 == 0           ele % 500 != 0
    z < 11        ele % 1000 == 0          ele % 200 == 0 and ele % 1000 != 0

The thresholds and fixed intervals reproduce the existing poster output and
are kept as policy constants.
"""

import copy
from typing import Any, List, Sequence

# Contour tiles expose elevation in metres under this attribute
CONTOUR_ELEVATION_PROPERTY = "height"

# Source-layer name of the contour tiles
CONTOUR_SOURCE_LAYER = "contour"

# Zoom band thresholds
MID_ZOOM = 11
HIGH_ZOOM = 13

# Index lines every INDEX_MULTIPLIER regular intervals at high zoom
INDEX_MULTIPLIER = 5

# Fixed intervals (metres) below HIGH_ZOOM
MID_ZOOM_MAJOR_INTERVAL = 500
LOW_ZOOM_MAJOR_INTERVAL = 1000
LOW_ZOOM_MINOR_INTERVAL = 200

ROLES = ("label", "index", "regular", "simple")


def _multiple_of(prop: str, interval: int) -> List[Any]:
    return ["==", ["%", ["get", prop], interval], 0]


def _not_multiple_of(prop: str, interval: int) -> List[Any]:
    return ["!=", ["%", ["get", prop], interval], 0]


def _band(prop: str, role: str, minor: int | None, major: int) -> List[Any]:
    """Predicate for one zoom band.

    ``minor`` of None means the regular role keeps everything that is not a
    major line.
    """
    if role in ("label", "index"):
        return _multiple_of(prop, major)
    if minor is None:
        return _not_multiple_of(prop, major)
    return ["all", _multiple_of(prop, minor), _not_multiple_of(prop, major)]


def _mentions(expression: Any, operators: Sequence[str]) -> bool:
    if not isinstance(expression, list) or not expression:
        return False
    if expression[0] in operators:
        return True
    return any(_mentions(arg, operators) for arg in expression[1:])


def contour_guards(expression: Any) -> List[Any]:
    """Return the clauses of a base contour filter that survive a density change.

    Interval predicates (modulo) and zoom expressions are replaced by the
    density filter; anything else, such as ``["has", "height"]`` or an
    above-sea-level comparison, is kept.
    """
    if not isinstance(expression, list) or not expression:
        return []
    clauses = expression[1:] if expression[0] == "all" else [expression]
    return [clause for clause in clauses if not _mentions(clause, ("%", "zoom"))]


def _guarded(guards: Sequence[Any], predicate: List[Any]) -> List[Any]:
    if not guards:
        return predicate
    clauses = predicate[1:] if predicate[0] == "all" else [predicate]
    return ["all", *(copy.deepcopy(guard) for guard in guards), *clauses]


def contour_density_filter(prop: str, density: int, role: str,
                           guards: Sequence[Any] = ()) -> List[Any]:
    """
    Build a contour filter for a layer role and density.

    Args:
        prop: Elevation attribute name (usually ``CONTOUR_ELEVATION_PROPERTY``)
        density: Contour interval in metres chosen by the user (> 0)
        role: ``label``, ``index``, ``regular`` or ``simple``
        guards: Extra clauses every band must also satisfy (see ``contour_guards``)

    Returns:
        MapLibre filter expression. Banded roles use a top-level ``step`` on
        zoom, the only place a zoom input is allowed in a filter.
    """
    if role not in ROLES:
        raise ValueError(f"Unknown contour role: {role}. Available: {list(ROLES)}")
    if isinstance(density, bool) or not isinstance(density, int) or density <= 0:
        raise ValueError(f"Contour density must be a positive integer, got {density!r}")

    if role == "simple":
        return _guarded(guards, _multiple_of(prop, density))

    return [
        "step", ["zoom"],
        _guarded(guards, _band(prop, role, LOW_ZOOM_MINOR_INTERVAL, LOW_ZOOM_MAJOR_INTERVAL)),
        MID_ZOOM, _guarded(guards, _band(prop, role, None, MID_ZOOM_MAJOR_INTERVAL)),
        HIGH_ZOOM, _guarded(guards, _band(prop, role, density, density * INDEX_MULTIPLIER)),
    ]


def contour_role(layer_id: str) -> str:
    """Infer the contour role of a layer from its id."""
    if "label" in layer_id:
        return "label"
    if "index" in layer_id:
        return "index"
    if "regular" in layer_id:
        return "regular"
    return "simple"
