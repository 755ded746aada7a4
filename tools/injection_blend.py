"""
Properties of the injected stream (neat chemical + dilution/carrier water).

Density blends linearly by flow; viscosity blends on a log scale (Arrhenius-type
rule), which keeps a small fraction of a viscous product from dominating the mix.
"""

import math
from dataclasses import dataclass

from utils.constants import LH_to_M3S, MIN_INJECTION_FLOW, WATER_DENSITY, WATER_VISCOSITY


@dataclass(frozen=True)
class InjectedStream:
    total_flow_lh: float
    total_flow_m3s: float
    density: float     # kg/m³
    viscosity: float   # Pa·s


def blend_injection(chemical_flow: float, chemical_density: float, chemical_viscosity: float,
                    dilution_water_flow: float) -> InjectedStream:
    """Blend the chemical and dilution water streams into one injected stream.

    With no injection flow at all the weights collapse to zero and the blend reports
    zero density and a viscosity of 1 Pa·s (exp(0)); downstream stages only use these
    through floored ratios.
    """
    total_lh = chemical_flow + dilution_water_flow
    weight = total_lh if total_lh > 0 else MIN_INJECTION_FLOW

    density = (chemical_flow * chemical_density + dilution_water_flow * WATER_DENSITY) / weight
    viscosity = math.exp(
        (chemical_flow * math.log(chemical_viscosity)
         + dilution_water_flow * math.log(WATER_VISCOSITY)) / weight
    )

    return InjectedStream(
        total_flow_lh=total_lh,
        total_flow_m3s=total_lh * LH_to_M3S,
        density=density,
        viscosity=viscosity,
    )
