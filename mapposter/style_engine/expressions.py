"""
Helpers for MapLibre style values and expressions.

``scale_expression`` rescales a numeric paint/layout value that may be a
plain number, a zoom ``interpolate``/``step`` expression or a legacy
``{"stops": [...]}`` function, leaving zoom breakpoints untouched.

``evaluate_filter`` interprets the subset of the expression language used by
the bundled styles and by the contour density filters, so derived styles can
be checked without a rendering client.
"""

import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def scale_expression(value: Any, factor: float) -> Any:
    """Multiply every output magnitude of ``value`` by ``factor``.

    Supported shapes:
        - plain numbers
        - ``["interpolate", <interpolation>, <input>, z1, v1, z2, v2, ...]``
        - ``["step", <input>, v0, z1, v1, ...]``
        - ``{"stops": [[z1, v1], [z2, v2], ...], ...}`` (legacy functions)

    Output values that are themselves expressions are scaled recursively.
    Any other shape is returned unchanged. The input is never mutated.
    """
    if _is_number(value):
        return value * factor

    if isinstance(value, list) and value:
        operator = value[0]
        if operator == "interpolate" and len(value) >= 5:
            scaled = list(value[:3])
            for index in range(3, len(value)):
                item = value[index]
                # Outputs sit at odd offsets from the first breakpoint
                if (index - 3) % 2 == 1:
                    item = scale_expression(item, factor)
                scaled.append(item)
            return scaled
        if operator == "step" and len(value) >= 3:
            scaled = list(value[:2])
            for index in range(2, len(value)):
                item = value[index]
                # Default output at offset 2, then (stop, output) pairs
                if index % 2 == 0:
                    item = scale_expression(item, factor)
                scaled.append(item)
            return scaled
        return value

    if isinstance(value, dict) and isinstance(value.get("stops"), list):
        scaled_stops = []
        for stop in value["stops"]:
            if isinstance(stop, (list, tuple)) and len(stop) == 2:
                scaled_stops.append([stop[0], scale_expression(stop[1], factor)])
            else:
                scaled_stops.append(stop)
        return {**value, "stops": scaled_stops}

    return value


# =============================================================================
# EXPRESSION EVALUATION
# =============================================================================

_COMPARISONS = {
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    ">": lambda a, b: a > b,
    ">=": lambda a, b: a >= b,
}


def evaluate(expression: Any, properties: Mapping[str, Any], zoom: float = 0.0,
             geometry_type: Optional[str] = None) -> Any:
    """Evaluate a MapLibre expression against feature properties."""
    if not isinstance(expression, list):
        return expression
    if not expression:
        return None

    operator = expression[0]
    if not isinstance(operator, str):
        # Literal arrays such as dash patterns
        return expression

    args = expression[1:]

    def ev(item: Any) -> Any:
        return evaluate(item, properties, zoom, geometry_type)

    if operator == "get":
        return properties.get(args[0])
    if operator == "has":
        return args[0] in properties and properties[args[0]] is not None
    if operator == "literal":
        return args[0]
    if operator == "zoom":
        return zoom
    if operator == "geometry-type":
        return geometry_type
    if operator == "all":
        return all(ev(item) for item in args)
    if operator == "any":
        return any(ev(item) for item in args)
    if operator == "!":
        return not ev(args[0])
    if operator == "coalesce":
        for item in args:
            result = ev(item)
            if result is not None:
                return result
        return None
    if operator in _COMPARISONS:
        left, right = ev(args[0]), ev(args[1])
        if left is None or right is None:
            return operator == "!=" and left != right
        try:
            return _COMPARISONS[operator](left, right)
        except TypeError:
            return False
    if operator == "%":
        left, right = ev(args[0]), ev(args[1])
        if not _is_number(left) or not _is_number(right) or right == 0:
            return None
        return left % right
    if operator == "in":
        needle, haystack = ev(args[0]), ev(args[1])
        if isinstance(haystack, (list, str)):
            return needle in haystack
        return False
    if operator == "step":
        input_value = ev(args[0])
        result = args[1]
        for index in range(2, len(args) - 1, 2):
            if _is_number(input_value) and input_value < args[index]:
                break
            result = args[index + 1]
        return ev(result)

    logger.warning("Unsupported expression operator '%s' in %s", operator, expression)
    return None


def evaluate_filter(expression: Any, properties: Mapping[str, Any], zoom: float = 0.0,
                    geometry_type: Optional[str] = None) -> bool:
    """Return True when a feature passes a layer filter.

    A missing filter accepts everything. Unsupported operators evaluate to
    False so unexpected filters never draw features by accident.
    """
    if expression is None:
        return True
    return bool(evaluate(expression, properties, zoom, geometry_type))
