#!/usr/bin/env python3
"""
Command-line interface for the map poster style engine.

Usage:
    # List built-in styles
    python -m mapposter.style_engine.cli styles

    # List the palettes of a style
    python -m mapposter.style_engine.cli palettes dark-mode

    # Write the raw base style
    python -m mapposter.style_engine.cli base topographic out/topo-base.json

    # Derive a style with a palette and poster settings
    python -m mapposter.style_engine.cli derive minimal out/style.json \\
        --palette minimal-navy --road-weight 1.5 --labels

    # Derive with a palette and layer settings saved as JSON
    python -m mapposter.style_engine.cli derive topographic out/style.json \\
        --palette-file palette.json --config layers.json

    # Check a derived style
    python -m mapposter.style_engine.cli check out/style.json
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import VisibilityConfig
from .derive import derive_style
from .errors import StyleDerivationError
from .expressions import evaluate_filter
from .ordering import is_water_fill
from .paint import MIN_WATER_OPACITY
from .palette import Palette, palette_from_custom


def _load_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _write_json(path: Path, data: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def cmd_styles(args: argparse.Namespace) -> int:
    """List built-in styles."""
    from ..styles import list_styles, load_palettes

    print("Available styles:\n")
    for definition in list_styles():
        palettes = load_palettes(definition.id)
        print(f"  {definition.id}")
        print(f"    {definition.name}: {definition.description}")
        print(f"    Palettes: {len(palettes)} (default: {palettes[0].id})")
        print()

    print("Usage: python -m mapposter.style_engine.cli derive <style> out/style.json --palette <id>")
    return 0


def cmd_palettes(args: argparse.Namespace) -> int:
    """List the palettes of one style."""
    from ..styles import load_palettes

    try:
        palettes = load_palettes(args.style)
    except ValueError as e:
        print(f"✗ {e}")
        return 1

    print(f"Palettes for {args.style}:\n")
    for palette in palettes:
        print(f"  {palette.id:22} {palette.name}")
        print(f"    background={palette.background} text={palette.text} water={palette.water}")
    return 0


def cmd_base(args: argparse.Namespace) -> int:
    """Write the base style of a built-in style."""
    from ..styles import get_style

    try:
        style = get_style(args.style)
    except ValueError as e:
        print(f"✗ {e}")
        return 1

    output = Path(args.output)
    _write_json(output, style.map_style)
    print(f"✓ Wrote base style '{style.id}' ({len(style.layer_ids)} layers) to: {output}")
    return 0


def _load_palette(args: argparse.Namespace, style_id: str) -> Palette:
    from ..styles import get_palette

    if args.palette_file:
        data = _load_json(Path(args.palette_file))
        # Generated palettes have no id and only the essential slots
        if "id" not in data:
            return palette_from_custom(data)
        return Palette.from_dict(data)
    return get_palette(style_id, args.palette)


def _load_config(args: argparse.Namespace) -> VisibilityConfig:
    config = VisibilityConfig()
    if args.config:
        data = _load_json(Path(args.config))
        # Saved projects nest the toggles under "layers"
        config = VisibilityConfig.from_dict(data.get("layers", data))

    overrides: Dict[str, Any] = {}
    if args.road_weight is not None:
        overrides["road_weight"] = args.road_weight
    if args.label_size is not None:
        overrides["label_size"] = args.label_size
    if args.contour_density is not None:
        overrides["contour_density"] = args.contour_density
    if args.labels:
        overrides["labels"] = True
    if args.no_terrain_under_water:
        overrides["terrain_under_water"] = False
    return dataclasses.replace(config, **overrides) if overrides else config


def cmd_derive(args: argparse.Namespace) -> int:
    """Derive a renderable style."""
    from ..styles import get_style

    try:
        style = get_style(args.style)
        palette = _load_palette(args, style.id)
        config = _load_config(args)
        derived = derive_style(style.map_style, palette, config, style.layer_toggles)
    except (StyleDerivationError, ValueError) as e:
        print(f"✗ {e}")
        return 1
    except OSError as e:
        print(f"✗ Could not read input: {e}")
        return 1

    output = Path(args.output)
    _write_json(output, derived)

    hidden = sum(1 for layer in derived["layers"] if (layer.get("layout") or {}).get("visibility") == "none")
    print(f"✓ Derived '{style.id}' with palette '{palette.id}'")
    print(f"  Layers: {len(derived['layers'])} ({hidden} hidden)")
    print(f"  Road weight: {config.road_width_factor:.2f}, label size: {config.label_size:.2f}")
    print(f"\nWrote style to: {output}")
    return 0


def _has_nested_zoom(expression: Any, top_level: bool = True) -> bool:
    """True if a zoom ``step``/``interpolate`` sits below the top of a filter."""
    if not isinstance(expression, list) or not expression:
        return False
    is_zoom_curve = (
        expression[0] in ("step", "interpolate")
        and ["zoom"] in expression[1:3]
    )
    if is_zoom_curve and not top_level:
        return True
    return any(_has_nested_zoom(arg, top_level=False) for arg in expression[1:])


# Sampled elevations and zooms for the contour band check
CHECK_ELEVATIONS = range(0, 5001, 10)
CHECK_ZOOMS = (10, 12, 14)


def _overlapping_contours(layers: List[Dict[str, Any]]) -> List[str]:
    """Find elevations drawn by both the regular and the index contour line."""
    lines = {
        role: layer for layer in layers
        for role in ("regular", "index")
        if layer.get("type") == "line" and layer.get("id") == f"contours-{role}"
    }
    if len(lines) < 2:
        return []

    problems = []
    for zoom in CHECK_ZOOMS:
        for height in CHECK_ELEVATIONS:
            properties = {"height": height}
            if all(evaluate_filter(line.get("filter"), properties, zoom=zoom) for line in lines.values()):
                problems.append(f"contour elevation {height} is drawn twice at zoom {zoom}")
                break
    return problems


def check_style(style: Dict[str, Any]) -> List[str]:
    """Return the problems found in a derived style (empty if none)."""
    problems: List[str] = []
    layers = style.get("layers") or []

    hillshade = next((i for i, layer in enumerate(layers) if layer.get("type") == "hillshade"), None)
    water = next((i for i, layer in enumerate(layers) if is_water_fill(layer)), None)
    if hillshade is not None and water is not None and hillshade > water:
        problems.append(f"hillshade (index {hillshade}) renders above water (index {water})")

    for layer in layers:
        if is_water_fill(layer):
            opacity = (layer.get("paint") or {}).get("fill-opacity")
            if not isinstance(opacity, (int, float)) or opacity < MIN_WATER_OPACITY:
                problems.append(f"water layer '{layer['id']}' has fill-opacity {opacity!r}")
        if _has_nested_zoom(layer.get("filter")):
            problems.append(f"layer '{layer.get('id')}' nests a zoom expression inside its filter")

    problems.extend(_overlapping_contours(layers))

    sources = style.get("sources") or {}
    for layer in layers:
        source = layer.get("source")
        if source is not None and source not in sources:
            problems.append(f"layer '{layer.get('id')}' references missing source '{source}'")

    return problems


def cmd_check(args: argparse.Namespace) -> int:
    """Check the invariants of a derived style."""
    try:
        style = _load_json(Path(args.style_json))
    except (OSError, json.JSONDecodeError) as e:
        print(f"✗ Could not read style: {e}")
        return 1

    problems = check_style(style)
    if problems:
        for problem in problems:
            print(f"✗ {problem}")
        return 1

    print(f"✓ {len(style.get('layers') or [])} layers OK")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Map poster style derivation engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("styles", help="List built-in styles")

    palettes_parser = subparsers.add_parser("palettes", help="List the palettes of a style")
    palettes_parser.add_argument("style", help="Style id")

    base_parser = subparsers.add_parser("base", help="Write the base style JSON")
    base_parser.add_argument("style", help="Style id")
    base_parser.add_argument("output", help="Output file path")

    derive_parser = subparsers.add_parser("derive", help="Write a derived style JSON")
    derive_parser.add_argument("style", help="Style id")
    derive_parser.add_argument("output", help="Output file path")
    palette_group = derive_parser.add_mutually_exclusive_group()
    palette_group.add_argument("--palette", "-p", help="Palette id (default: the style's default)")
    palette_group.add_argument("--palette-file", help="Palette JSON file")
    derive_parser.add_argument("--config", "-c", help="Layer settings JSON (saved project or 'layers' object)")
    derive_parser.add_argument("--road-weight", type=float, help="Road width multiplier")
    derive_parser.add_argument("--label-size", type=float, help="Label size multiplier")
    derive_parser.add_argument("--contour-density", type=int, help="Metres between contour lines")
    derive_parser.add_argument("--labels", action="store_true", help="Show labels")
    derive_parser.add_argument("--no-terrain-under-water", action="store_true",
                               help="Hide underwater terrain")

    check_parser = subparsers.add_parser("check", help="Check a derived style")
    check_parser.add_argument("style_json", help="Derived style JSON file")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "styles":
        return cmd_styles(args)
    elif args.command == "palettes":
        return cmd_palettes(args)
    elif args.command == "base":
        return cmd_base(args)
    elif args.command == "derive":
        return cmd_derive(args)
    elif args.command == "check":
        return cmd_check(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
