"""
Injection jet momentum ratio and penetration regime.

    u_jet = Q_inj / (n_quills · π · r_ref²)
    M     = √(ρ_inj / ρ) · (u_jet · d_ref) / (u · Dh)

M < 0.16 is an under-penetrating (wall-hugging) jet, M > 0.24 over-penetrates
to the far wall, anything between is well placed.
"""

import math
from dataclasses import dataclass
from enum import Enum

from utils.constants import (
    MIN_MOMENTUM_DENOMINATOR, MOMENTUM_RATIO_HIGH, MOMENTUM_RATIO_LOW,
    REFERENCE_JET_DIAMETER, REFERENCE_ORIFICE_RADIUS,
)
from utils.input_resolver import InjectionType
from .injection_blend import InjectedStream


class MomentumRegime(str, Enum):
    LOW = "Low"
    INTERMEDIATE = "Intermediate"
    HIGH = "High"


@dataclass(frozen=True)
class JetMomentum:
    jet_velocity: float  # m/s per quill
    momentum_ratio: float
    regime: MomentumRegime


def classify_momentum_regime(momentum_ratio: float) -> MomentumRegime:
    """Low below 0.16, High above 0.24; both boundaries are Intermediate."""
    if momentum_ratio < MOMENTUM_RATIO_LOW:
        return MomentumRegime.LOW
    if momentum_ratio > MOMENTUM_RATIO_HIGH:
        return MomentumRegime.HIGH
    return MomentumRegime.INTERMEDIATE


def jet_momentum(injected: InjectedStream, injection_type: InjectionType, carrier_density: float,
                 velocity: float, hydraulic_diameter: float) -> JetMomentum:
    quills = 2 if injection_type == InjectionType.TWIN else 1
    jet_velocity = (injected.total_flow_m3s / quills) / (math.pi * REFERENCE_ORIFICE_RADIUS ** 2)

    ratio = math.sqrt(injected.density / carrier_density) * (
        jet_velocity * REFERENCE_JET_DIAMETER
        / max(velocity * hydraulic_diameter, MIN_MOMENTUM_DENOMINATOR)
    )

    return JetMomentum(
        jet_velocity=jet_velocity,
        momentum_ratio=ratio,
        regime=classify_momentum_regime(ratio),
    )
