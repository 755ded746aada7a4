"""
Bulk flow characterization: velocity, Reynolds number and dilution ratio.
"""

import logging
from dataclasses import dataclass

import fluids.core

from utils.constants import (
    M3H_to_LH, M3H_to_M3S, MIN_AREA, MIN_INJECTION_FLOW, MIN_VISCOSITY,
    RE_LAMINAR_LIMIT, RE_TURBULENT_LIMIT,
)
from .conduit_geometry import ConduitGeometry

logger = logging.getLogger("mixing-mcp.flow_characterization")


@dataclass(frozen=True)
class FlowConditions:
    flow_rate_m3s: float
    velocity: float          # m/s
    reynolds_number: float
    flow_regime: str
    dilution_ratio: float    # carrier flow / injected flow


def classify_flow_regime(reynolds_number: float) -> str:
    if reynolds_number < RE_LAMINAR_LIMIT:
        return "laminar"
    elif reynolds_number < RE_TURBULENT_LIMIT:
        return "transitional"
    return "turbulent"


def characterize_flow(flow_rate_m3h: float, geometry: ConduitGeometry, density: float,
                      viscosity: float, total_injection_lh: float) -> FlowConditions:
    """Velocity and Reynolds number of the carrier, plus the dilution ratio α.

    Args:
        flow_rate_m3h: Carrier flow in m³/h
        geometry: Resolved conduit geometry
        density: Carrier density in kg/m³
        viscosity: Carrier dynamic viscosity in Pa·s
        total_injection_lh: Chemical + dilution water flow in L/h

    Returns:
        FlowConditions
    """
    flow_rate_m3s = flow_rate_m3h * M3H_to_M3S
    velocity = flow_rate_m3s / max(geometry.area, MIN_AREA)
    Re = fluids.core.Reynolds(V=velocity, D=geometry.hydraulic_diameter,
                              rho=density, mu=max(viscosity, MIN_VISCOSITY))
    alpha = (flow_rate_m3h * M3H_to_LH) / max(total_injection_lh, MIN_INJECTION_FLOW)

    return FlowConditions(
        flow_rate_m3s=flow_rate_m3s,
        velocity=velocity,
        reynolds_number=Re,
        flow_regime=classify_flow_regime(Re),
        dilution_ratio=alpha,
    )
