#!/usr/bin/env python3
"""Tests for expression scaling and filter evaluation."""
import copy
import logging

import pytest

from mapposter.style_engine.expressions import evaluate, evaluate_filter, scale_expression


class TestScaleExpression:
    """Tests for scaling numeric paint and layout values."""

    def test_plain_number(self):
        """Test plain numbers are multiplied."""
        assert scale_expression(2, 1.5) == 3.0

    def test_interpolate_scales_outputs_only(self):
        """Test interpolate keeps zoom stops and scales outputs."""
        value = ["interpolate", ["linear"], ["zoom"], 10, 2, 14, 4]
        assert scale_expression(value, 2.0) == ["interpolate", ["linear"], ["zoom"], 10, 4.0, 14, 8.0]

    def test_step_scales_default_and_outputs(self):
        """Test step scales its default and every output, not thresholds."""
        value = ["step", ["zoom"], 1, 10, 2, 14, 3]
        assert scale_expression(value, 2.0) == ["step", ["zoom"], 2.0, 10, 4.0, 14, 6.0]

    def test_legacy_stops(self):
        """Test legacy stop functions scale values and keep other keys."""
        value = {"base": 1.2, "stops": [[10, 1], [14, 4]]}
        assert scale_expression(value, 0.5) == {"base": 1.2, "stops": [[10, 0.5], [14, 2.0]]}

    def test_nested_output_expression(self):
        """Test outputs that are expressions are scaled recursively."""
        value = ["interpolate", ["linear"], ["zoom"], 10, 1, 14, ["step", ["zoom"], 2, 16, 3]]
        scaled = scale_expression(value, 2.0)
        assert scaled[-1] == ["step", ["zoom"], 4.0, 16, 6.0]

    @pytest.mark.parametrize("value", [
        "butt",
        ["get", "width"],
        ["case", ["has", "w"], 1, 2],
        {"type": "identity", "property": "w"},
        None,
        True,
    ])
    def test_unknown_shapes_pass_through(self, value):
        """Test unscalable values are returned unchanged."""
        assert scale_expression(value, 3.0) == value

    @pytest.mark.parametrize("value", [
        4,
        ["interpolate", ["exponential", 1.5], ["zoom"], 5, 0.5, 10, 1, 15, 2.5],
        ["step", ["zoom"], 1, 12, 2],
        {"stops": [[0, 1], [20, 10]]},
    ])
    def test_identity_factor(self, value):
        """Test a factor of 1.0 gives back an equal value."""
        assert scale_expression(value, 1.0) == value

    def test_composition_for_numbers(self):
        """Test scaling twice equals scaling once by the product."""
        assert scale_expression(scale_expression(3, 1.5), 2.0) == pytest.approx(scale_expression(3, 3.0))

    def test_composition_for_interpolate(self):
        """Test composed scaling of interpolate outputs within tolerance."""
        value = ["interpolate", ["linear"], ["zoom"], 10, 0.3, 14, 1.7]
        twice = scale_expression(scale_expression(value, 0.8), 1.3)
        once = scale_expression(value, 0.8 * 1.3)
        assert twice[4] == pytest.approx(once[4])
        assert twice[6] == pytest.approx(once[6])

    def test_input_not_mutated(self):
        """Test the input expression is left untouched."""
        value = ["interpolate", ["linear"], ["zoom"], 10, 2, 14, 4]
        original = copy.deepcopy(value)
        scale_expression(value, 2.0)
        assert value == original


class TestEvaluateFilter:
    """Tests for filter evaluation."""

    def test_missing_filter_accepts(self):
        """Test a missing filter accepts every feature."""
        assert evaluate_filter(None, {}) is True

    def test_equality_on_property(self):
        """Test == against a feature property."""
        expression = ["==", ["get", "class"], "primary"]
        assert evaluate_filter(expression, {"class": "primary"})
        assert not evaluate_filter(expression, {"class": "service"})

    def test_in_literal(self):
        """Test membership in a literal list."""
        expression = ["in", ["get", "class"], ["literal", ["motorway", "trunk"]]]
        assert evaluate_filter(expression, {"class": "trunk"})
        assert not evaluate_filter(expression, {"class": "primary"})

    def test_has_and_not(self):
        """Test has and negation."""
        assert evaluate_filter(["has", "height"], {"height": 100})
        assert evaluate_filter(["!", ["has", "height"]], {})

    def test_modulo(self):
        """Test modulo comparisons used by contour filters."""
        expression = ["==", ["%", ["get", "height"], 50], 0]
        assert evaluate_filter(expression, {"height": 250})
        assert not evaluate_filter(expression, {"height": 260})

    def test_missing_property_comparison_is_false(self):
        """Test ordered comparisons with a missing property reject."""
        assert not evaluate_filter([">", ["get", "height"], 0], {})

    def test_zoom_step(self):
        """Test a top-level zoom step selects the band for the zoom."""
        expression = ["step", ["zoom"], ["==", ["get", "rank"], 1], 10, True]
        assert not evaluate_filter(expression, {"rank": 5}, zoom=8)
        assert evaluate_filter(expression, {"rank": 5}, zoom=10)

    def test_geometry_type(self):
        """Test geometry-type comparisons."""
        expression = ["==", ["geometry-type"], "Polygon"]
        assert evaluate_filter(expression, {}, geometry_type="Polygon")
        assert not evaluate_filter(expression, {}, geometry_type="Point")

    def test_coalesce(self):
        """Test coalesce returns the first present value."""
        assert evaluate(["coalesce", ["get", "name:en"], ["get", "name"]], {"name": "Zürich"}) == "Zürich"

    def test_unsupported_operator_rejects_and_warns(self, caplog):
        """Test unsupported operators evaluate to False with a warning."""
        with caplog.at_level(logging.WARNING, logger="mapposter.style_engine.expressions"):
            assert not evaluate_filter(["within", {"type": "Polygon"}], {})
        assert "within" in caplog.text
