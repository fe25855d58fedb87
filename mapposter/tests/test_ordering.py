#!/usr/bin/env python3
"""Tests for hillshade/water render order normalization."""
from mapposter.style_engine.ordering import ensure_hillshade_below_water, is_water_fill


def _ids(layers):
    return [layer["id"] for layer in layers]


def _layers(*specs):
    return [{"id": layer_id, "type": layer_type, **extra} for layer_id, layer_type, extra in specs]


class TestIsWaterFill:
    """Tests for water fill detection."""

    def test_by_source_layer(self):
        """Test fill layers on the water source-layer are water."""
        assert is_water_fill({"id": "lake", "type": "fill", "source-layer": "water"})

    def test_by_id(self):
        """Test a fill layer with id 'water' is water."""
        assert is_water_fill({"id": "water", "type": "fill"})

    def test_lines_are_not_water_fills(self):
        """Test water outlines do not count as water fills."""
        assert not is_water_fill({"id": "water", "type": "line", "source-layer": "water"})


class TestEnsureHillshadeBelowWater:
    """Tests for moving the hillshade before the first water fill."""

    def test_moves_hillshade_before_water(self):
        """Test hillshade after water is moved right before it."""
        layers = _layers(
            ("background", "background", {}),
            ("water", "fill", {"source-layer": "water"}),
            ("hillshade", "hillshade", {}),
            ("road-motorway", "line", {}),
        )
        ensure_hillshade_below_water(layers)
        assert _ids(layers) == ["background", "hillshade", "water", "road-motorway"]

    def test_correct_order_unchanged(self):
        """Test an already correct order is kept."""
        layers = _layers(
            ("background", "background", {}),
            ("hillshade", "hillshade", {}),
            ("park", "fill", {}),
            ("water", "fill", {"source-layer": "water"}),
        )
        ensure_hillshade_below_water(layers)
        assert _ids(layers) == ["background", "hillshade", "park", "water"]

    def test_idempotent(self):
        """Test running twice gives the same order as running once."""
        layers = _layers(
            ("water", "fill", {"source-layer": "water"}),
            ("park", "fill", {}),
            ("hillshade", "hillshade", {}),
        )
        once = _ids(ensure_hillshade_below_water(layers))
        twice = _ids(ensure_hillshade_below_water(layers))
        assert once == twice == ["hillshade", "water", "park"]

    def test_without_hillshade_or_water(self):
        """Test styles without a hillshade or without water are unchanged."""
        no_hillshade = _layers(("water", "fill", {"source-layer": "water"}), ("park", "fill", {}))
        no_water = _layers(("park", "fill", {}), ("hillshade", "hillshade", {}))
        assert _ids(ensure_hillshade_below_water(no_hillshade)) == ["water", "park"]
        assert _ids(ensure_hillshade_below_water(no_water)) == ["park", "hillshade"]

    def test_water_line_is_ignored(self):
        """Test water outlines before the hillshade do not trigger a move."""
        layers = _layers(
            ("water-outline", "line", {"source-layer": "water"}),
            ("hillshade", "hillshade", {}),
            ("water", "fill", {"source-layer": "water"}),
        )
        ensure_hillshade_below_water(layers)
        assert _ids(layers) == ["water-outline", "hillshade", "water"]
