#!/usr/bin/env python3
"""Tests for the command-line interface."""
import json

import pytest

from mapposter.style_engine.cli import _has_nested_zoom, check_style, main


@pytest.fixture(autouse=True)
def maptiler_key(monkeypatch):
    """Run the CLI with a contour provider configured."""
    monkeypatch.setenv("MAPTILER_KEY", "test-key")


def _read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class TestListing:
    """Tests for the listing commands."""

    def test_styles(self, capsys):
        """Test all built-in styles are listed."""
        assert main(["styles"]) == 0
        out = capsys.readouterr().out
        assert "topographic" in out
        assert "default: minimal-ink" in out

    def test_palettes(self, capsys):
        """Test the palettes of a style are listed."""
        assert main(["palettes", "dark-mode"]) == 0
        assert "dark-neon" in capsys.readouterr().out

    def test_palettes_unknown_style(self, capsys):
        """Test an unknown style fails with a message."""
        assert main(["palettes", "watercolor"]) == 1
        assert "✗ Unknown style" in capsys.readouterr().out

    def test_no_command(self, capsys):
        """Test help is printed without a command."""
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestBase:
    """Tests for writing base styles."""

    def test_writes_base_style(self, temp_dir):
        """Test the raw base style is written, creating parent directories."""
        output = temp_dir / "out" / "base.json"
        assert main(["base", "minimal", str(output)]) == 0
        style = _read(output)
        assert style["version"] == 8
        assert style["layers"][0]["id"] == "background"


class TestDerive:
    """Tests for deriving styles."""

    def test_derive_with_options(self, temp_dir, capsys):
        """Test palette and overrides reach the derived style."""
        output = temp_dir / "style.json"
        code = main([
            "derive", "minimal", str(output),
            "--palette", "minimal-navy", "--road-weight", "2", "--no-terrain-under-water",
        ])
        assert code == 0
        style = _read(output)
        layers = {layer["id"]: layer for layer in style["layers"]}
        assert layers["bathymetry-detail"]["layout"]["visibility"] == "none"
        assert layers["water"]["paint"]["fill-opacity"] == 1.0
        assert "✓ Derived 'minimal' with palette 'minimal-navy'" in capsys.readouterr().out

    def test_derive_with_files(self, temp_dir, palette_dict):
        """Test palette and saved project files are read."""
        palette_file = temp_dir / "palette.json"
        config_file = temp_dir / "project.json"
        palette_file.write_text(json.dumps(palette_dict), encoding="utf-8")
        config_file.write_text(json.dumps({"layers": {"parks": False, "contours": True}}), encoding="utf-8")
        output = temp_dir / "style.json"

        code = main([
            "derive", "topographic", str(output),
            "--palette-file", str(palette_file), "--config", str(config_file),
        ])
        assert code == 0
        layers = {layer["id"]: layer for layer in _read(output)["layers"]}
        assert layers["background"]["paint"]["background-color"] == palette_dict["background"]
        assert layers["park"]["layout"]["visibility"] == "none"
        assert layers["contours-index"]["layout"]["visibility"] == "visible"

    def test_derive_custom_palette_file(self, temp_dir, road_ramp):
        """Test a generated palette without an id is completed."""
        palette_file = temp_dir / "custom.json"
        palette_file.write_text(json.dumps({
            "background": "#101010",
            "text": "#EEEEEE",
            "water": "#203040",
            "greenSpace": "#203020",
            "roads": road_ramp,
        }), encoding="utf-8")
        output = temp_dir / "style.json"
        assert main(["derive", "dark-mode", str(output), "--palette-file", str(palette_file)]) == 0

    def test_unknown_palette(self, temp_dir, capsys):
        """Test an unknown palette id fails without writing output."""
        output = temp_dir / "style.json"
        assert main(["derive", "minimal", str(output), "--palette", "sepia"]) == 1
        assert not output.exists()
        assert "✗ Unknown palette" in capsys.readouterr().out

    def test_invalid_palette_file(self, temp_dir, capsys):
        """Test a palette file lacking slots is reported."""
        palette_file = temp_dir / "palette.json"
        palette_file.write_text(json.dumps({"id": "broken", "background": "#000"}), encoding="utf-8")
        assert main(["derive", "minimal", str(temp_dir / "s.json"), "--palette-file", str(palette_file)]) == 1
        assert "missing required slot" in capsys.readouterr().out

    def test_invalid_contour_density(self, temp_dir, capsys):
        """Test an out-of-range density is reported without writing output."""
        output = temp_dir / "style.json"
        assert main(["derive", "topographic", str(output), "--contour-density", "0"]) == 1
        assert not output.exists()
        assert "✗ contour_density" in capsys.readouterr().out

    def test_missing_config_file(self, temp_dir, capsys):
        """Test an unreadable config file is reported."""
        code = main(["derive", "minimal", str(temp_dir / "s.json"), "--config", str(temp_dir / "none.json")])
        assert code == 1
        assert "Could not read input" in capsys.readouterr().out


class TestCheck:
    """Tests for checking derived styles."""

    def test_derived_style_passes(self, temp_dir, capsys):
        """Test a freshly derived style passes every check."""
        output = temp_dir / "style.json"
        main(["derive", "topographic", str(output), "--contour-density", "20"])
        capsys.readouterr()
        assert main(["check", str(output)]) == 0
        assert "layers OK" in capsys.readouterr().out

    def test_base_style_fails(self, temp_dir, base_style, capsys):
        """Test an underived base style is flagged."""
        output = temp_dir / "base.json"
        output.write_text(json.dumps(base_style), encoding="utf-8")
        assert main(["check", str(output)]) == 1
        out = capsys.readouterr().out
        assert "renders above water" in out
        assert "fill-opacity 0.6" in out

    def test_unreadable_style(self, temp_dir, capsys):
        """Test a missing file is reported."""
        assert main(["check", str(temp_dir / "missing.json")]) == 1
        assert "Could not read style" in capsys.readouterr().out


class TestCheckStyle:
    """Tests for the individual checks."""

    def test_nested_zoom(self):
        """Test zoom steps are only allowed at the top of a filter."""
        top = ["step", ["zoom"], False, 10, True]
        nested = ["all", ["has", "name"], top]
        assert not _has_nested_zoom(top)
        assert _has_nested_zoom(nested)

    def test_overlapping_contours(self):
        """Test an elevation selected by both contour lines is reported."""
        style = {"layers": [
            {"id": "contours-regular", "type": "line", "filter": ["==", ["%", ["get", "height"], 10], 0]},
            {"id": "contours-index", "type": "line", "filter": ["==", ["%", ["get", "height"], 50], 0]},
        ]}
        problems = check_style(style)
        assert any("drawn twice" in problem for problem in problems)

    def test_missing_source(self):
        """Test layers referencing absent sources are reported."""
        style = {"sources": {}, "layers": [{"id": "road-primary", "type": "line", "source": "openmaptiles"}]}
        assert check_style(style) == ["layer 'road-primary' references missing source 'openmaptiles'"]
