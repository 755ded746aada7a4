"""
Hydraulic cost of the mixing section: headloss and mixing intensity (G-value).
"""

import math
from dataclasses import dataclass

import fluids.core

from utils.constants import G_GRAVITY, MIN_G_VALUE_DENOMINATOR, PA_to_KPA


@dataclass(frozen=True)
class HydraulicPerformance:
    headloss_m: float
    headloss_kpa: float
    dissipated_power_w: float
    g_value: float  # s⁻¹


def hydraulic_performance(friction_factor: float, mixing_length: float, velocity: float,
                          hydraulic_diameter: float, density: float, viscosity: float,
                          flow_rate_m3s: float, area: float) -> HydraulicPerformance:
    """Darcy-Weisbach style headloss over the effective mixing length and the
    velocity gradient G = √(P / (μ·V)) it sustains in the volume V = A·Lm.

    Args:
        friction_factor: Mixer (or natural mixing) friction factor FD
        mixing_length: Effective mixing length Lm in m
        velocity: Carrier velocity in m/s
        hydraulic_diameter: Hydraulic diameter in m
        density: Carrier density in kg/m³
        viscosity: Carrier dynamic viscosity in Pa·s
        flow_rate_m3s: Carrier flow in m³/s
        area: Wetted area in m²
    """
    headloss_m = (friction_factor * mixing_length * velocity ** 2) / (2 * G_GRAVITY * hydraulic_diameter)
    headloss_kpa = fluids.core.P_from_head(head=headloss_m, rho=density, g=G_GRAVITY) * PA_to_KPA

    power = headloss_kpa / PA_to_KPA * flow_rate_m3s
    g_value = math.sqrt(power / max(viscosity * area * mixing_length, MIN_G_VALUE_DENOMINATOR))

    return HydraulicPerformance(
        headloss_m=headloss_m,
        headloss_kpa=headloss_kpa,
        dissipated_power_w=power,
        g_value=g_value,
    )
