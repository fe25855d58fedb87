#!/usr/bin/env python3
"""Tests for the built-in base styles."""
import logging

import pytest

from mapposter.style_engine.cli import check_style
from mapposter.style_engine.config import TileSourceConfig, VisibilityConfig
from mapposter.style_engine.derive import derive_style
from mapposter.styles import (
    STYLE_DEFINITIONS,
    build_layer_toggles,
    get_palette,
    get_style,
    list_styles,
    load_palettes,
)

STYLE_IDS = sorted(STYLE_DEFINITIONS)


@pytest.fixture
def tiles():
    """Tile context with a MapTiler key, so contour layers are kept."""
    return TileSourceConfig(maptiler_key="test-key")


class TestGetStyle:
    """Tests for building base styles."""

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_builds(self, style_id, tiles):
        """Test every style builds a version 8 style with unique layer ids."""
        style = get_style(style_id, tiles)
        assert style.map_style["version"] == 8
        assert len(style.layer_ids) == len(set(style.layer_ids))
        assert style.default_palette == style.palettes[0]

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_rendering_order(self, style_id, tiles):
        """Test background first, hillshade below water and labels above roads."""
        ids = get_style(style_id, tiles).layer_ids
        assert ids[0] == "background"
        assert ids.index("hillshade") < ids.index("water")
        assert ids.index("road-motorway") < ids.index("labels-city")
        assert ids.index("road-service") < ids.index("road-motorway")

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_toggles_reference_existing_layers(self, style_id, tiles, caplog):
        """Test no toggle names a layer the style does not have."""
        with caplog.at_level(logging.WARNING, logger="mapposter.styles.toggles"):
            style = get_style(style_id, tiles)
        assert not caplog.records
        layer_ids = set(style.layer_ids)
        for toggle in style.layer_toggles:
            assert set(toggle.layer_ids) <= layer_ids

    def test_contour_source_without_key(self, monkeypatch):
        """Test the contour source URL is empty without a key."""
        monkeypatch.delenv("MAPTILER_KEY", raising=False)
        style = get_style("topographic")
        assert style.map_style["sources"]["contours"]["url"] == ""

    def test_topographic_detail(self, tiles):
        """Test the topographic style carries detailed contours and depth bands."""
        style = get_style("topographic", tiles)
        assert "contours-index" in style.layer_ids
        assert "bathymetry-volumetric-200" in style.layer_ids
        assert "contours" not in style.layer_ids

    def test_dark_mode_glow(self, tiles):
        """Test dark mode draws a road glow below the roads."""
        style = get_style("dark-mode", tiles)
        streets = next(t for t in style.layer_toggles if t.id == "streets")
        assert streets.layer_ids[0] == "road-glow"
        assert "bridge-motorway" in streets.layer_ids

    def test_streets_off_hides_bridges(self, tiles):
        """Test the minimal style hides its bridges along with the streets."""
        style = get_style("minimal", tiles)
        derived = derive_style(style.map_style, style.default_palette, VisibilityConfig(streets=False),
                               style.layer_toggles, contour_url_resolver=tiles.contour_tilejson_url)
        layers = {layer["id"]: layer for layer in derived["layers"]}
        for layer_id in ("road-motorway", "bridge-motorway-casing", "bridge-motorway"):
            assert layers[layer_id]["layout"]["visibility"] == "none"

    def test_road_classes_lowest_first(self, tiles):
        """Test road layers are stacked from service up to motorway."""
        ids = get_style("minimal", tiles).layer_ids
        roads = [layer_id for layer_id in ids if layer_id.startswith("road-")]
        assert roads == [
            "road-service", "road-residential", "road-tertiary", "road-secondary",
            "road-primary", "road-trunk", "road-motorway",
        ]
        assert ids.index("road-motorway") < ids.index("bridge-motorway-casing")

    def test_blueprint_water_toggle(self, tiles):
        """Test the blueprint water toggle only owns the water fill."""
        style = get_style("blueprint", tiles)
        water = next(t for t in style.layer_toggles if t.id == "water")
        assert water.layer_ids == ("water",)

    def test_unknown_style(self):
        """Test unknown ids list the available styles."""
        with pytest.raises(ValueError, match="Unknown style"):
            get_style("watercolor")

    def test_to_dict(self, tiles):
        """Test serialization uses camelCase keys."""
        data = get_style("minimal", tiles).to_dict()
        assert data["defaultPalette"]["id"] == "minimal-ink"
        assert data["layerToggles"][0]["layerIds"]
        assert data["mapStyle"]["layers"][0]["id"] == "background"


class TestPalettes:
    """Tests for built-in palettes."""

    def test_list_styles(self):
        """Test all definitions are listed."""
        assert [d.id for d in list_styles()] == list(STYLE_DEFINITIONS)

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_palettes_load(self, style_id):
        """Test every palette has its required slots."""
        palettes = load_palettes(style_id)
        assert palettes
        assert len({p.id for p in palettes}) == len(palettes)

    def test_get_palette_default(self):
        """Test the first palette is the default."""
        assert get_palette("minimal").id == "minimal-ink"

    def test_get_palette_by_id(self):
        """Test palettes are found by id."""
        assert get_palette("topographic", "topo-night").id == "topo-night"

    def test_unknown_palette(self):
        """Test unknown palette ids list the available ones."""
        with pytest.raises(ValueError, match="minimal-ink"):
            get_palette("minimal", "sepia")

    def test_unknown_style_palettes(self):
        """Test palettes of an unknown style are rejected."""
        with pytest.raises(ValueError, match="Unknown style"):
            load_palettes("watercolor")


class TestDeriveBuiltInStyles:
    """Derivation of every built-in style with every palette."""

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_derived_styles_pass_checks(self, style_id, tiles):
        """Test derived styles keep water opaque, hillshade low and contours disjoint."""
        style = get_style(style_id, tiles)
        config = VisibilityConfig(contours=True, labels=True, contour_density=20)
        for palette in style.palettes:
            derived = derive_style(
                style.map_style, palette, config, style.layer_toggles,
                contour_url_resolver=tiles.contour_tilejson_url,
            )
            assert check_style(derived) == []

    @pytest.mark.parametrize("style_id", STYLE_IDS)
    def test_derived_without_contours(self, style_id, monkeypatch):
        """Test styles derive cleanly without a contour provider."""
        monkeypatch.delenv("MAPTILER_KEY", raising=False)
        style = get_style(style_id)
        derived = derive_style(style.map_style, style.default_palette, VisibilityConfig(),
                               style.layer_toggles, contour_url_resolver=lambda: None)
        ids = [layer["id"] for layer in derived["layers"]]
        assert not [i for i in ids if "contour" in i or "bathymetry" in i]
        assert check_style(derived) == []


class TestBuildLayerToggles:
    """Tests for the toggle catalog builder."""

    def test_default_catalog(self):
        """Test the default catalog has one entry per poster toggle."""
        toggles = build_layer_toggles()
        assert [t.id for t in toggles] == [
            "streets", "buildings", "buildings3D", "water", "terrainUnderWater", "parks",
            "terrain", "contours", "population", "pois", "labels-admin", "boundaries",
            "labels-cities",
        ]

    def test_bridges_join_streets(self):
        """Test bridge layers belong to the streets toggle with or without the glow."""
        streets = build_layer_toggles(include_bridges=True)[0]
        assert streets.layer_ids[-2:] == ("bridge-motorway-casing", "bridge-motorway")
        assert "road-glow" not in streets.layer_ids
        assert "bridge-motorway" not in build_layer_toggles()[0].layer_ids

    def test_missing_ids_logged(self, caplog):
        """Test toggles naming absent layers are reported."""
        with caplog.at_level(logging.WARNING, logger="mapposter.styles.toggles"):
            build_layer_toggles(all_layer_ids=["background"])
        assert "non-existent layer ids" in caplog.text
