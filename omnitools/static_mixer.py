"""Unified static mixing evaluation and parameter sweep."""

from typing import Optional, Literal
import inspect
from tools.static_mixing import calculate_static_mixing, static_mixing_sweep


def static_mixer(
    mode: Literal["evaluate", "sweep"] = "evaluate",

    # Conduit
    conduit_type: Literal["PIPE", "CHANNEL"] = "PIPE",
    conduit_shape: Optional[Literal["CIRCULAR", "RECTANGULAR"]] = None,
    dimension: Optional[float] = None,
    depth: Optional[float] = None,
    available_length: Optional[float] = None,

    # Carrier fluid
    flow_rate: Optional[float] = None,
    density: Optional[float] = None,
    viscosity: Optional[float] = None,
    water_temperature: Optional[float] = None,

    # Chemical stream
    chemical_preset: Optional[str] = None,
    chemical_type: Optional[str] = None,
    chemical_flow: Optional[float] = None,
    chemical_density: Optional[float] = None,
    chemical_viscosity: Optional[float] = None,
    chemical_dose: Optional[float] = None,
    dilution_water_flow: Optional[float] = None,

    # Mixer
    mixer_model: Literal["NONE", "KENICS_KM", "HEV", "STM"] = "NONE",
    num_elements: Optional[int] = None,
    injection_type: Literal["SINGLE", "TWIN"] = "SINGLE",
    pitch_ratio: Literal["PR_1_0", "PR_1_5", "PR_2_0"] = "PR_1_5",

    # Targets
    target_cov: Optional[float] = None,
    target_mixing_time: Optional[float] = None,

    # Sweep parameters
    variable: Optional[str] = None,
    start: Optional[float] = None,
    stop: Optional[float] = None,
    n: Optional[int] = None,
) -> str:
    """
    Chemical injection blending and static mixer performance.

    - mode='evaluate': Velocity, Reynolds number, achieved CoV, headloss, G-value,
      distance/time to target CoV and injection momentum ratio for one scenario
    - mode='sweep': Repeat the evaluation while sweeping one numeric input

    Args:
        mode: "evaluate" or "sweep"

        Conduit:
            conduit_type: PIPE (full bore) or CHANNEL (open channel)
            conduit_shape: CIRCULAR or RECTANGULAR (default by conduit type)
            dimension: Diameter or width in m
            depth: Water depth / duct height in m (default 0.6)
            available_length: Straight length available for mixing in m

        Carrier fluid:
            flow_rate: Flow rate in m³/h
            density: Density in kg/m³ (looked up from water_temperature if omitted)
            viscosity: Dynamic viscosity in Pa·s (looked up from water_temperature if omitted)
            water_temperature: Water temperature in °C

        Chemical stream:
            chemical_preset: ferric, alum, hypo, lime or custom
            chemical_type: Chemical label
            chemical_flow: Neat chemical flow in L/h
            chemical_density: Density in kg/m³
            chemical_viscosity: Viscosity in Pa·s
            chemical_dose: Dose (informational)
            dilution_water_flow: Dilution water flow in L/h

        Mixer:
            mixer_model: NONE, KENICS_KM, HEV or STM
            num_elements: Number of mixer elements
            injection_type: SINGLE or TWIN quill
            pitch_ratio: Element pitch ratio (informational)

        Targets:
            target_cov: Target coefficient of variation (default 0.05)
            target_mixing_time: Target mixing time in s

        Sweep parameters:
            variable: Input to sweep (e.g. "available_length", "num_elements", "flow_rate")
            start, stop, n: Sweep range and number of points

    Returns:
        JSON string with calculation results

    Examples:
        >>> static_mixer(flow_rate=1500, dimension=0.8, available_length=10,
        ...              density=1000, viscosity=0.001, chemical_preset="ferric",
        ...              chemical_flow=10, dilution_water_flow=200, target_mixing_time=10)

        >>> static_mixer(mode="sweep", variable="num_elements", start=1, stop=12, n=12,
        ...              mixer_model="KENICS_KM", flow_rate=1500, dimension=0.8,
        ...              water_temperature=15, chemical_preset="alum", chemical_flow=10)
    """
    params = locals().copy()
    params.pop("mode")

    if mode == "evaluate":
        fn = calculate_static_mixing
        for key in ("variable", "start", "stop", "n"):
            params.pop(key)
    elif mode == "sweep":
        if variable is None or start is None or stop is None or n is None:
            return '{"error": "variable, start, stop and n are required for mode=\'sweep\'"}'
        fn = static_mixing_sweep
    else:
        return f'{{"error": "Invalid mode: {mode}. Must be \'evaluate\' or \'sweep\'"}}'

    forwarded = {k: v for k, v in params.items() if v is not None}
    if fn is calculate_static_mixing:
        allowed = set(inspect.signature(fn).parameters.keys())
        forwarded = {k: v for k, v in forwarded.items() if k in allowed}

    return fn(**forwarded)
