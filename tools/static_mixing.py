"""
Static mixing performance calculation.

evaluate() is the calculation engine: it sanitizes one MixingInputs record and runs
the geometry, flow, injection blend, mixer correlation, hydraulic and distance /
momentum stages in order. It holds no state and never raises for physical inputs.

calculate_static_mixing() and static_mixing_sweep() are the JSON tools built on it.
"""

import json
import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from utils.constants import (
    DISSOLVED_AT_TARGET, DISTANCE_TO_95_DISSOLUTION, LIME_SATURATION_LIMIT,
    MANUFACTURER_NOTES, SUGGESTED_ORIFICE_DIAMETER, TIME_TO_95_DISSOLUTION,
)
from utils.input_resolver import InputResolver, MixingInputs, sanitize_inputs
from utils.json_helpers import safe_json_dumps
from .conduit_geometry import resolve_geometry
from .flow_characterization import characterize_flow
from .hydraulic_performance import hydraulic_performance
from .injection_blend import blend_injection
from .mixer_correlations import mixer_performance
from .mixing_distance import solve_mixing_distance
from .momentum_ratio import MomentumRegime, jet_momentum

# Configure logging
logger = logging.getLogger("mixing-mcp.static_mixing")

# Numeric MixingInputs fields that can be swept
SWEEPABLE_VARIABLES = (
    "flow_rate", "dimension", "depth", "available_length", "density", "viscosity",
    "chemical_flow", "chemical_density", "chemical_viscosity", "dilution_water_flow",
    "num_elements", "target_cov", "target_mixing_time",
)


class CalculationResults(BaseModel):
    """Derived performance of one dosing/mixing scenario."""

    model_config = ConfigDict(frozen=True)

    # Flow
    velocity: float
    reynolds_number: float
    flow_regime: str
    dilution_ratio: float

    # Injection
    momentum_ratio: float
    momentum_regime: MomentumRegime
    injected_viscosity: float
    injected_density: float
    viscosity_ratio: float
    total_injection_flow: float

    # Mixing
    mixer_cov: float
    friction_factor: float
    effective_mixing_length: float
    is_compliant: bool
    is_time_compliant: bool
    mixing_distance_needed: float
    mixing_time_needed: float

    # Hydraulics
    headloss: float          # kPa
    headloss_meters: float
    g_value: float
    hydraulic_diameter: float
    wetted_area: float

    # Placeholders for dissolution chemistry
    lime_saturation_limit: float = LIME_SATURATION_LIMIT
    dissolved_at_target: float = DISSOLVED_AT_TARGET
    time_to_95_dissolution: float = TIME_TO_95_DISSOLUTION
    distance_to_95_dissolution: float = DISTANCE_TO_95_DISSOLUTION
    suggested_orifice_diameter: float = SUGGESTED_ORIFICE_DIAMETER
    manufacturer_notes: str = MANUFACTURER_NOTES


def evaluate(inputs: MixingInputs) -> CalculationResults:
    """Evaluate mixing performance for one scenario.

    Args:
        inputs: Scenario record; never modified

    Returns:
        A new CalculationResults
    """
    s = sanitize_inputs(inputs)

    geometry = resolve_geometry(s.conduit_type, s.conduit_shape, s.dimension, s.depth)
    injected = blend_injection(s.chemical_flow, s.chemical_density, s.chemical_viscosity,
                               s.dilution_water_flow)
    flow = characterize_flow(s.flow_rate, geometry, s.density, s.viscosity, injected.total_flow_lh)

    mixer = mixer_performance(
        mixer_model=s.mixer_model,
        injection_type=s.injection_type,
        num_elements=s.num_elements,
        reynolds_number=flow.reynolds_number,
        hydraulic_diameter=geometry.hydraulic_diameter,
        available_length=s.available_length,
        dilution_ratio=flow.dilution_ratio,
    )

    hydraulics = hydraulic_performance(
        friction_factor=mixer.friction_factor,
        mixing_length=mixer.mixing_length,
        velocity=flow.velocity,
        hydraulic_diameter=geometry.hydraulic_diameter,
        density=s.density,
        viscosity=s.viscosity,
        flow_rate_m3s=flow.flow_rate_m3s,
        area=geometry.area,
    )

    distance = solve_mixing_distance(
        conduit_type=s.conduit_type,
        mixer_cov=mixer.cov,
        target_cov=s.target_cov,
        mixing_length=mixer.mixing_length,
        hydraulic_diameter=geometry.hydraulic_diameter,
        velocity=flow.velocity,
        target_mixing_time=s.target_mixing_time,
    )

    jet = jet_momentum(injected, s.injection_type, s.density, flow.velocity,
                       geometry.hydraulic_diameter)

    return CalculationResults(
        velocity=flow.velocity,
        reynolds_number=flow.reynolds_number,
        flow_regime=flow.flow_regime,
        dilution_ratio=flow.dilution_ratio,
        momentum_ratio=jet.momentum_ratio,
        momentum_regime=jet.regime,
        injected_viscosity=injected.viscosity,
        injected_density=injected.density,
        viscosity_ratio=injected.viscosity / s.viscosity,
        total_injection_flow=injected.total_flow_lh,
        mixer_cov=mixer.cov,
        friction_factor=mixer.friction_factor,
        effective_mixing_length=mixer.mixing_length,
        is_compliant=distance.is_compliant,
        is_time_compliant=distance.is_time_compliant,
        mixing_distance_needed=distance.distance,
        mixing_time_needed=distance.time,
        headloss=hydraulics.headloss_kpa,
        headloss_meters=hydraulics.headloss_m,
        g_value=hydraulics.g_value,
        hydraulic_diameter=geometry.hydraulic_diameter,
        wetted_area=geometry.area,
    )


def build_mixing_inputs(
    conduit_type: str = "PIPE",
    conduit_shape: Optional[str] = None,
    dimension: Optional[float] = None,
    depth: Optional[float] = None,
    available_length: Optional[float] = None,
    flow_rate: Optional[float] = None,
    density: Optional[float] = None,
    viscosity: Optional[float] = None,
    chemical_preset: Optional[str] = None,
    chemical_type: Optional[str] = None,
    chemical_flow: Optional[float] = None,
    chemical_density: Optional[float] = None,
    chemical_viscosity: Optional[float] = None,
    chemical_dose: Optional[float] = None,
    dilution_water_flow: Optional[float] = None,
    water_temperature: Optional[float] = None,
    mixer_model: str = "NONE",
    num_elements: Optional[int] = None,
    injection_type: str = "SINGLE",
    pitch_ratio: str = "PR_1_5",
    target_cov: Optional[float] = None,
    target_mixing_time: Optional[float] = None,
    resolver: Optional[InputResolver] = None,
) -> MixingInputs:
    """Resolve presets and carrier properties, then build a MixingInputs record.

    Raises:
        pydantic.ValidationError: for unrecognised enum names
    """
    resolver = resolver or InputResolver("static_mixing")

    chemical = resolver.resolve_chemical(
        chemical_preset=chemical_preset,
        chemical_type=chemical_type,
        chemical_density=chemical_density,
        chemical_viscosity=chemical_viscosity,
    )
    carrier = resolver.resolve_carrier(
        density=density,
        viscosity=viscosity,
        water_temperature=water_temperature,
    )

    return MixingInputs(
        conduit_type=conduit_type,
        conduit_shape=conduit_shape,
        dimension=dimension,
        depth=depth,
        available_length=available_length,
        flow_rate=flow_rate,
        density=carrier["density"],
        viscosity=carrier["viscosity"],
        chemical_flow=chemical_flow,
        chemical_density=chemical["chemical_density"],
        chemical_viscosity=chemical["chemical_viscosity"],
        chemical_dose=chemical_dose,
        chemical_type=chemical["chemical_type"],
        dilution_water_flow=dilution_water_flow,
        water_temperature=water_temperature,
        mixer_model=mixer_model,
        num_elements=num_elements,
        injection_type=injection_type,
        pitch_ratio=pitch_ratio,
        target_cov=target_cov,
        target_mixing_time=target_mixing_time,
    )


def format_validation_error(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
    )


def calculate_static_mixing(
    # --- Conduit ---
    conduit_type: str = "PIPE",              # PIPE or CHANNEL
    conduit_shape: Optional[str] = None,     # CIRCULAR or RECTANGULAR
    dimension: Optional[float] = None,       # Diameter or width in m
    depth: Optional[float] = None,           # Depth / duct height in m
    available_length: Optional[float] = None,  # Straight length in m

    # --- Carrier fluid ---
    flow_rate: Optional[float] = None,       # m³/h
    density: Optional[float] = None,         # kg/m³
    viscosity: Optional[float] = None,       # Pa·s

    # --- Chemical stream ---
    chemical_preset: Optional[str] = None,   # e.g. "ferric", "alum", "hypo", "lime"
    chemical_type: Optional[str] = None,
    chemical_flow: Optional[float] = None,   # L/h
    chemical_density: Optional[float] = None,
    chemical_viscosity: Optional[float] = None,
    chemical_dose: Optional[float] = None,
    dilution_water_flow: Optional[float] = None,  # L/h
    water_temperature: Optional[float] = None,    # °C

    # --- Mixer ---
    mixer_model: str = "NONE",               # NONE, KENICS_KM, HEV, STM
    num_elements: Optional[int] = None,
    injection_type: str = "SINGLE",          # SINGLE or TWIN
    pitch_ratio: str = "PR_1_5",

    # --- Targets ---
    target_cov: Optional[float] = None,
    target_mixing_time: Optional[float] = None,
) -> str:
    """Calculate blending performance of a chemical injection into a pipe or channel.

    Args:
        conduit_type: PIPE or CHANNEL
        conduit_shape: CIRCULAR or RECTANGULAR (default by conduit type)
        dimension: Pipe diameter or channel width in m
        depth: Channel water depth or duct height in m (default 0.6)
        available_length: Straight length available for mixing in m
        flow_rate: Carrier flow rate in m³/h
        density: Carrier density in kg/m³ (looked up from water_temperature if omitted)
        viscosity: Carrier viscosity in Pa·s (looked up from water_temperature if omitted)
        chemical_preset: Preset name for chemical properties (ferric, alum, hypo, lime, custom)
        chemical_type: Chemical label
        chemical_flow: Neat chemical flow in L/h
        chemical_density: Chemical density in kg/m³
        chemical_viscosity: Chemical viscosity in Pa·s
        chemical_dose: Chemical dose (informational)
        dilution_water_flow: Dilution/carrier water flow in L/h
        water_temperature: Water temperature in °C
        mixer_model: NONE, KENICS_KM, HEV or STM
        num_elements: Number of mixer elements
        injection_type: SINGLE or TWIN
        pitch_ratio: PR_1_0, PR_1_5 or PR_2_0
        target_cov: Target CoV (default 0.05)
        target_mixing_time: Target mixing time in s

    Returns:
        JSON string with resolved inputs and calculation results
    """
    resolver = InputResolver("static_mixing")
    params = locals().copy()
    params.pop("resolver")

    try:
        inputs = build_mixing_inputs(resolver=resolver, **params)
    except ValidationError as e:
        logs = resolver.get_logs()
        return json.dumps({"error": f"Invalid input: {format_validation_error(e)}", "log": logs["log"]})

    try:
        results = evaluate(inputs)
        logs = resolver.get_logs()
        output = {
            "inputs_resolved": logs["log"],
            "warnings": logs["errors"] or None,
            "inputs": inputs,
            "results": results,
        }
        if not output["warnings"]:
            del output["warnings"]
        return safe_json_dumps(output)

    except Exception as e:
        logger.error(f"Error in calculate_static_mixing: {e}", exc_info=True)
        return json.dumps({"error": f"Calculation error: {str(e)}", "log": resolver.get_logs()["log"]})


def static_mixing_sweep(
    variable: str,
    start: float,
    stop: float,
    n: int,
    **base_params,
) -> str:
    """Parameter sweep for static mixing performance.

    Sweeps one numeric input while keeping the others constant.

    Args:
        variable: Input to sweep (see SWEEPABLE_VARIABLES)
        start: Start value for sweep
        stop: Stop value for sweep
        n: Number of points in sweep
        **base_params: All other parameters accepted by calculate_static_mixing

    Returns:
        JSON string with sweep results as list of dictionaries
    """
    import numpy as np

    if variable not in SWEEPABLE_VARIABLES:
        return json.dumps({
            "error": f"Cannot sweep '{variable}'. Choose one of: {', '.join(SWEEPABLE_VARIABLES)}"
        })
    if n < 1:
        return json.dumps({"error": "n must be at least 1"})

    resolver = InputResolver("static_mixing_sweep")
    base_params = {k: v for k, v in base_params.items() if v is not None}
    base_params.pop(variable, None)

    try:
        base_inputs = build_mixing_inputs(resolver=resolver, **base_params)
    except ValidationError as e:
        return json.dumps({"error": f"Invalid input: {format_validation_error(e)}"})

    base_record = base_inputs.model_dump()
    results = []

    for value in np.linspace(start, stop, n):
        value = int(round(value)) if variable == "num_elements" else float(value)
        try:
            record = dict(base_record)
            record[variable] = value
            r = evaluate(MixingInputs(**record))
            results.append({
                variable: value,
                "mixer_cov": r.mixer_cov,
                "headloss_meters": r.headloss_meters,
                "headloss_kpa": r.headloss,
                "g_value": r.g_value,
                "mixing_distance_needed": r.mixing_distance_needed,
                "mixing_time_needed": r.mixing_time_needed,
                "momentum_ratio": r.momentum_ratio,
                "momentum_regime": r.momentum_regime,
                "is_compliant": r.is_compliant,
                "is_time_compliant": r.is_time_compliant,
            })
        except Exception as e:
            logger.error(f"Sweep point {variable}={value} failed: {e}", exc_info=True)
            results.append({variable: value, "error": str(e)})

    return safe_json_dumps({
        "sweep_variable": variable,
        "sweep_range": {"start": start, "stop": stop, "n": n},
        "inputs_resolved": resolver.get_logs()["log"],
        "results": results,
        "summary": {
            "total_points": len(results),
            "successful_points": len([r for r in results if "error" not in r]),
            "failed_points": len([r for r in results if "error" in r])
        }
    })
