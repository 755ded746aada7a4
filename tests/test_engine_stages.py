#!/usr/bin/env python3
"""
Tests for the individual calculation stages.

Each stage is checked against hand calculations:
- Conduit geometry (area, hydraulic diameter)
- Flow characterization (velocity, Reynolds number, dilution ratio)
- Injection blending (linear density, log-scale viscosity)
- Mixer correlations and CoV clamping
- Headloss and G-value
- Distance/time to target CoV
- Jet momentum ratio and regime
"""

import math
import pytest

from tools.conduit_geometry import resolve_geometry
from tools.flow_characterization import characterize_flow, classify_flow_regime
from tools.hydraulic_performance import hydraulic_performance
from tools.injection_blend import blend_injection
from tools.mixer_correlations import (
    MIXER_CORRELATIONS,
    clamp_cov,
    element_mixing_cov,
    mixer_performance,
    natural_mixing_cov,
)
from tools.mixing_distance import solve_mixing_distance
from tools.momentum_ratio import MomentumRegime, classify_momentum_regime, jet_momentum
from utils.constants import CHANNEL_DECAY_RATE, PIPE_DECAY_RATE
from utils.input_resolver import ConduitShape, ConduitType, InjectionType, MixerModel


class TestConduitGeometry:
    """Test area and hydraulic diameter for each conduit form."""

    def test_circular_pipe(self):
        """0.8 m pipe: A = π·0.16, Dh = d exactly."""
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 0.6)
        assert g.area == pytest.approx(math.pi * 0.16, rel=1e-12)
        assert g.area == pytest.approx(0.502655, rel=1e-6)
        assert g.hydraulic_diameter == 0.8

    def test_rectangular_duct(self):
        """Full duct 1.0 x 0.5 m: Dh = 2·w·h/(w+h)."""
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.RECTANGULAR, 1.0, 0.5)
        assert g.area == pytest.approx(0.5)
        assert g.hydraulic_diameter == pytest.approx(2 * 1.0 * 0.5 / 1.5)

    def test_open_channel_excludes_free_surface(self):
        """Channel 2.0 m wide, 0.5 m deep: P = 2 + 2·0.5 = 3 m."""
        g = resolve_geometry(ConduitType.CHANNEL, ConduitShape.RECTANGULAR, 2.0, 0.5)
        assert g.area == pytest.approx(1.0)
        assert g.hydraulic_diameter == pytest.approx(4 * 1.0 / 3.0)


class TestFlowCharacterization:
    """Test velocity, Reynolds number and dilution ratio."""

    def test_velocity_and_reynolds(self):
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 0.6)
        flow = characterize_flow(1500, g, 1000, 0.001, 210)

        assert flow.flow_rate_m3s == pytest.approx(1500 / 3600)
        assert flow.velocity == pytest.approx(0.8289, rel=1e-3)
        assert flow.reynolds_number == pytest.approx(1000 * flow.velocity * 0.8 / 0.001)
        assert flow.flow_regime == "turbulent"

    def test_dilution_ratio(self):
        """α = carrier L/h over injected L/h."""
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 0.6)
        flow = characterize_flow(1500, g, 1000, 0.001, 210)
        assert flow.dilution_ratio == pytest.approx(1500 * 1000 / 210)

    def test_dilution_ratio_with_no_injection(self):
        """Zero injected flow is floored to 1 L/h."""
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.CIRCULAR, 0.1, 0.6)
        flow = characterize_flow(10, g, 1000, 0.001, 0)
        assert flow.dilution_ratio == pytest.approx(10000)

    @pytest.mark.parametrize("re, regime", [
        (100, "laminar"),
        (2299.9, "laminar"),
        (2300, "transitional"),
        (3999, "transitional"),
        (4000, "turbulent"),
    ])
    def test_flow_regime_boundaries(self, re, regime):
        assert classify_flow_regime(re) == regime


class TestInjectionBlend:
    """Test the combined chemical + dilution water stream."""

    def test_ferric_with_dilution_water(self):
        """10 L/h ferric (1450 kg/m³, 0.015 Pa·s) + 200 L/h water."""
        s = blend_injection(10, 1450, 0.015, 200)

        assert s.total_flow_lh == 210
        assert s.total_flow_m3s == pytest.approx(210 / 3.6e6)
        assert s.density == pytest.approx(1021.43, rel=1e-4)

        expected_mu = math.exp((10 * math.log(0.015) + 200 * math.log(0.001)) / 210)
        assert s.viscosity == pytest.approx(expected_mu)
        assert s.viscosity == pytest.approx(0.00114, rel=5e-3)

    def test_undiluted_chemical(self):
        """Chemical only: blend equals the chemical."""
        s = blend_injection(25, 1320, 0.025, 0)
        assert s.density == pytest.approx(1320)
        assert s.viscosity == pytest.approx(0.025)

    def test_no_injection_is_finite(self):
        s = blend_injection(0, 1000, 0.001, 0)
        assert s.total_flow_lh == 0
        assert math.isfinite(s.density)
        assert math.isfinite(s.viscosity)

    def test_log_rule_below_linear_average(self):
        """Log blending gives less than the flow-weighted arithmetic mean."""
        s = blend_injection(50, 1450, 0.015, 50)
        assert s.viscosity < (0.015 + 0.001) / 2
        assert s.viscosity == pytest.approx(math.sqrt(0.015 * 0.001))


class TestMixerCorrelations:
    """Test CoV, friction factor and mixing length per mixer model."""

    RE = 663147.0
    DH = 0.8

    def test_kenics_single_injection(self):
        perf = mixer_performance(MixerModel.KENICS_KM, InjectionType.SINGLE, 4,
                                 self.RE, self.DH, 10, 7142.9)
        expected = 0.96 * self.RE ** -0.1 * 4 ** -1.9
        assert perf.cov == pytest.approx(expected)
        assert perf.cov == pytest.approx(0.01804, rel=1e-3)
        assert perf.friction_factor == 1.8
        assert perf.mixing_length == pytest.approx(1.5 * 4 * self.DH)

    def test_kenics_twin_injection_uses_lower_coefficient(self):
        single = mixer_performance(MixerModel.KENICS_KM, InjectionType.SINGLE, 4,
                                   self.RE, self.DH, 10, 1000)
        twin = mixer_performance(MixerModel.KENICS_KM, InjectionType.TWIN, 4,
                                 self.RE, self.DH, 10, 1000)
        assert twin.cov == pytest.approx(single.cov * 0.38 / 0.96)

    def test_hev(self):
        perf = mixer_performance(MixerModel.HEV, InjectionType.SINGLE, 2,
                                 self.RE, self.DH, 10, 1000)
        assert perf.raw_cov == pytest.approx(31.5 * self.RE ** -0.2 * 2 ** -1.7)
        assert perf.friction_factor == 0.6
        assert perf.mixing_length == pytest.approx(2 * self.DH)

    def test_stm(self):
        perf = mixer_performance(MixerModel.STM, InjectionType.TWIN, 3,
                                 self.RE, self.DH, 10, 1000)
        assert perf.raw_cov == pytest.approx(0.29 * self.RE ** -0.2 * 3 ** -0.6)
        assert perf.friction_factor == 4.15
        assert perf.mixing_length == pytest.approx(0.8 * 3 * self.DH)

    def test_natural_mixing(self):
        raw = natural_mixing_cov(7142.9, 10, 0.8)
        expected = 2 * math.sqrt(7142.9) * math.exp(-0.75 * math.sqrt(0.02) * 12.5)
        assert raw == pytest.approx(expected)

        perf = mixer_performance(MixerModel.NONE, InjectionType.SINGLE, 0,
                                 self.RE, 0.8, 10, 7142.9)
        assert perf.cov == 1.0
        assert perf.friction_factor == 0.02
        assert perf.mixing_length == 10

    def test_zero_elements_clamps_to_one(self):
        """No elements gives an unbounded raw CoV, clamped to 1.0."""
        for model in MIXER_CORRELATIONS:
            perf = mixer_performance(model, InjectionType.SINGLE, 0, self.RE, self.DH, 10, 1000)
            assert perf.cov == 1.0
            assert perf.mixing_length == 0

    def test_zero_reynolds_is_floored(self):
        c = MIXER_CORRELATIONS[MixerModel.STM]
        raw = element_mixing_cov(c, InjectionType.SINGLE, 0.0, 2)
        assert math.isfinite(raw)

    def test_clamp_bounds(self):
        assert clamp_cov(5.0) == 1.0
        assert clamp_cov(1e-9) == 0.0001
        assert clamp_cov(0.03) == 0.03
        assert clamp_cov(math.inf) == 1.0


class TestHydraulicPerformance:
    """Test headloss and G-value."""

    def test_natural_mixing_headloss(self):
        v = (1500 / 3600) / (math.pi * 0.16)
        h = hydraulic_performance(0.02, 10, v, 0.8, 1000, 0.001, 1500 / 3600, math.pi * 0.16)

        assert h.headloss_m == pytest.approx(0.00876, rel=1e-3)
        assert h.headloss_kpa == pytest.approx(h.headloss_m * 1000 * 9.81 / 1000)
        assert h.headloss_kpa == pytest.approx(0.0859, rel=1e-3)

        power = h.headloss_kpa * 1000 * 1500 / 3600
        assert h.dissipated_power_w == pytest.approx(power)
        assert h.g_value == pytest.approx(math.sqrt(power / (0.001 * math.pi * 0.16 * 10)))

    def test_zero_mixing_length(self):
        """No mixing length: no headloss, finite G-value."""
        h = hydraulic_performance(1.8, 0.0, 1.0, 0.5, 1000, 0.001, 0.2, 0.2)
        assert h.headloss_m == 0
        assert h.g_value == 0


class TestMixingDistance:
    """Test distance and time to reach the target CoV."""

    def test_compliant_mixer_needs_only_its_length(self):
        d = solve_mixing_distance(ConduitType.PIPE, 0.02, 0.05, 4.8, 0.8, 0.83, 10)
        assert d.is_compliant
        assert d.distance == 4.8
        assert d.time == pytest.approx(4.8 / 0.83)
        assert d.is_time_compliant

    def test_pipe_decay_extrapolation(self):
        d = solve_mixing_distance(ConduitType.PIPE, 1.0, 0.05, 10, 0.8, 0.8289, 10)
        assert d.decay_rate == pytest.approx(PIPE_DECAY_RATE)
        assert d.distance == pytest.approx(10 + math.log(20) / PIPE_DECAY_RATE * 0.8)
        assert d.distance == pytest.approx(32.6, rel=1e-3)
        assert d.time == pytest.approx(39.3, rel=2e-3)
        assert not d.is_compliant
        assert not d.is_time_compliant

    def test_channel_decays_faster(self):
        pipe = solve_mixing_distance(ConduitType.PIPE, 0.5, 0.05, 0, 1.0, 1.0, 10)
        channel = solve_mixing_distance(ConduitType.CHANNEL, 0.5, 0.05, 0, 1.0, 1.0, 10)
        assert channel.decay_rate == CHANNEL_DECAY_RATE
        assert channel.distance < pipe.distance


class TestMomentumRatio:
    """Test jet momentum ratio and regime classification."""

    def test_ferric_scenario_is_low(self):
        g = resolve_geometry(ConduitType.PIPE, ConduitShape.CIRCULAR, 0.8, 0.6)
        injected = blend_injection(10, 1450, 0.015, 200)
        flow = characterize_flow(1500, g, 1000, 0.001, injected.total_flow_lh)
        jet = jet_momentum(injected, InjectionType.SINGLE, 1000, flow.velocity, 0.8)

        assert jet.momentum_ratio == pytest.approx(0.0045, rel=2e-2)
        assert jet.regime == MomentumRegime.LOW

    def test_twin_halves_jet_velocity(self):
        injected = blend_injection(100, 1200, 0.003, 500)
        single = jet_momentum(injected, InjectionType.SINGLE, 1000, 0.5, 0.3)
        twin = jet_momentum(injected, InjectionType.TWIN, 1000, 0.5, 0.3)
        assert twin.jet_velocity == pytest.approx(single.jet_velocity / 2)
        assert twin.momentum_ratio == pytest.approx(single.momentum_ratio / 2)

    @pytest.mark.parametrize("ratio, regime", [
        (0.0, MomentumRegime.LOW),
        (0.1599, MomentumRegime.LOW),
        (0.16, MomentumRegime.INTERMEDIATE),
        (0.20, MomentumRegime.INTERMEDIATE),
        (0.24, MomentumRegime.INTERMEDIATE),
        (0.2401, MomentumRegime.HIGH),
        (5.0, MomentumRegime.HIGH),
    ])
    def test_regime_boundaries(self, ratio, regime):
        assert classify_momentum_regime(ratio) == regime
