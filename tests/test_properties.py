#!/usr/bin/env python3
"""
Tests for chemical presets, carrier property resolution and the lookup omnitools.
"""

import json
import pytest

import utils.import_helpers as import_helpers
from omnitools.help_resources import help_resources
from omnitools.properties import properties
from tools.fluid_properties import get_chemical_properties, list_available_chemicals
from utils.chemical_presets import (
    CHEMICAL_PRESETS,
    get_chemical_preset,
    list_chemical_presets,
    map_chemical_name,
)
from utils.input_resolver import InputResolver


class TestChemicalPresets:
    """Preset table and alias mapping."""

    @pytest.mark.parametrize("name, key", [
        ("ferric", "ferric"),
        ("FeCl3", "ferric"),
        ("Ferric Chloride", "ferric"),
        ("ferric_chloride", "ferric"),
        ("Aluminium Sulphate", "alum"),
        ("NaOCl", "hypo"),
        ("bleach", "hypo"),
        ("Milk of Lime", "lime"),
        ("water", "custom"),
        ("Sodium Hypochlorite (15%)", "hypo"),
    ])
    def test_alias_mapping(self, name, key):
        assert map_chemical_name(name) == key

    def test_unknown_name(self):
        assert map_chemical_name("unobtainium") is None
        assert get_chemical_preset("unobtainium") is None
        assert map_chemical_name("") is None

    def test_preset_values(self):
        ferric = get_chemical_preset("ferric")
        assert ferric.density == 1450
        assert ferric.viscosity == 0.015

        assert CHEMICAL_PRESETS["alum"].density == 1320
        assert CHEMICAL_PRESETS["hypo"].viscosity == 0.003
        assert CHEMICAL_PRESETS["lime"].density == 1070
        assert CHEMICAL_PRESETS["custom"].viscosity == 0.001

    def test_listing_includes_aliases(self):
        presets = {p["key"]: p for p in list_chemical_presets()}
        assert set(presets) == {"ferric", "alum", "hypo", "lime", "custom"}
        assert "fecl3" in presets["ferric"]["aliases"]
        assert "bleach" in presets["hypo"]["aliases"]


class TestInputResolver:
    """Preset and carrier property resolution with logging."""

    def test_preset_fills_missing_values_only(self):
        resolver = InputResolver("test")
        resolved = resolver.resolve_chemical(chemical_preset="hypo", chemical_viscosity=0.004)

        assert resolved["chemical_density"] == 1210
        assert resolved["chemical_viscosity"] == 0.004
        assert resolved["chemical_type"] == "Sodium Hypochlorite (15%)"
        assert any("hypo" in line for line in resolver.get_logs()["log"])

    def test_unknown_preset_logged_as_error(self):
        resolver = InputResolver("test")
        resolved = resolver.resolve_chemical(chemical_preset="nope", chemical_density=1100)

        assert resolved["chemical_density"] == 1100
        assert resolver.get_logs()["errors"]

    def test_direct_carrier_properties(self):
        resolver = InputResolver("test")
        resolved = resolver.resolve_carrier(density=998, viscosity=0.0011)
        assert resolved == {"density": 998, "viscosity": 0.0011}
        assert resolver.get_logs()["errors"] == []

    def test_carrier_from_temperature(self, monkeypatch):
        monkeypatch.setattr(import_helpers, "get_water_properties", lambda t, *a, **k: {
            "density_kgm3": 999.1, "viscosity_pas": 0.00114, "kinematic_viscosity_m2s": 1.14e-6,
        })
        resolver = InputResolver("test")
        resolved = resolver.resolve_carrier(water_temperature=15)

        assert resolved["density"] == 999.1
        assert resolved["viscosity"] == 0.00114
        assert any("15" in line for line in resolver.get_logs()["log"])

    def test_explicit_density_kept_with_temperature(self, monkeypatch):
        monkeypatch.setattr(import_helpers, "get_water_properties", lambda t, *a, **k: {
            "density_kgm3": 999.1, "viscosity_pas": 0.00114, "kinematic_viscosity_m2s": 1.14e-6,
        })
        resolved = InputResolver("test").resolve_carrier(density=1005, water_temperature=15)
        assert resolved["density"] == 1005
        assert resolved["viscosity"] == 0.00114

    def test_carrier_falls_back_to_reference_water(self, monkeypatch):
        """Without CoolProp the carrier is 1000 kg/m³, 0.001 Pa·s."""
        monkeypatch.setattr(import_helpers, "get_water_properties", lambda *a, **k: None)
        resolver = InputResolver("test")
        resolved = resolver.resolve_carrier(water_temperature=20)

        assert resolved == {"density": 1000.0, "viscosity": 0.001}
        assert any("water defaults" in line for line in resolver.get_logs()["log"])


class TestWaterProperties:
    """CoolProp water lookup."""

    def test_water_at_15c(self):
        props = import_helpers.get_water_properties(15)
        if props is None:
            pytest.skip("CoolProp not available")

        assert props["density_kgm3"] == pytest.approx(999.1, abs=0.5)
        assert props["viscosity_pas"] == pytest.approx(0.001138, rel=2e-2)
        assert props["kinematic_viscosity_m2s"] == pytest.approx(
            props["viscosity_pas"] / props["density_kgm3"])

    def test_warm_water_less_viscous(self):
        cold = import_helpers.get_water_properties(5)
        warm = import_helpers.get_water_properties(30)
        if cold is None or warm is None:
            pytest.skip("CoolProp not available")
        assert warm["viscosity_pas"] < cold["viscosity_pas"]


class TestPropertiesOmnitool:
    """Test the unified omnitool interface."""

    def test_water_lookup(self):
        result = json.loads(properties(lookup_type="water", temperature_c=15))
        if "error" in result and "CoolProp" in result["error"]:
            pytest.skip("CoolProp not available")

        assert result["fluid_name"] == "Water"
        assert result["density_kg_m3"] == pytest.approx(999.1, abs=0.5)

    def test_water_requires_temperature(self):
        result = json.loads(properties(lookup_type="water"))
        assert "error" in result

    def test_chemical_lookup(self):
        result = json.loads(properties(lookup_type="chemical", chemical_name="Alum"))
        assert result["key"] == "alum"
        assert result["density_kg_m3"] == 1320
        assert result["dynamic_viscosity_pa_s"] == 0.025

    def test_unknown_chemical(self):
        result = json.loads(get_chemical_properties("kryptonite"))
        assert "error" in result
        assert "ferric" in result["available_chemicals"]

    def test_list_chemicals(self):
        result = json.loads(properties(lookup_type="list_chemicals"))
        assert result["total_count"] == 5
        assert result == json.loads(list_available_chemicals())

    def test_invalid_lookup_type(self):
        result = json.loads(properties(lookup_type="gas"))
        assert "error" in result


class TestHelpResources:
    """Resource listings."""

    def test_all(self):
        result = json.loads(help_resources())
        assert {"mixer_models", "regimes", "chemical_presets", "notes"} <= set(result)

    def test_mixers(self):
        result = json.loads(help_resources(resource_type="mixers"))
        models = {m["name"]: m for m in result["mixer_models"]}

        assert set(models) == {"NONE", "KENICS_KM", "HEV", "STM"}
        assert models["KENICS_KM"]["friction_factor"] == 1.8
        assert "0.38" in models["KENICS_KM"]["cov_formula"]
        assert models["NONE"]["friction_factor"] == 0.02
        assert "chemical_presets" not in result

    def test_regimes(self):
        result = json.loads(help_resources(resource_type="regimes"))
        regimes = result["regimes"]
        assert set(regimes["momentum_regime"]) == {"Low", "Intermediate", "High"}
        assert regimes["downstream_decay_per_Dh"]["CHANNEL"] == 0.6

    def test_chemicals(self):
        result = json.loads(help_resources(resource_type="chemicals"))
        assert len(result["chemical_presets"]) == 5

    def test_invalid_resource_type(self):
        result = json.loads(help_resources(resource_type="pumps"))
        assert "error" in result
