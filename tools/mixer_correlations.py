"""
Empirical static-mixer correlations.

Each in-line mixer model carries its own coefficient set for

    CoV = k · Re^a · n^b        (k depends on single/twin injection for the Kenics KM)
    Lm  = c · n · Dh            (effective mixing length)

with a fixed Darcy-type friction factor FD for the headloss estimate. Without an
in-line mixer, natural mixing over the available straight length is used instead:

    CoV = 2 · √α · exp(−0.75 · √FD · L/Dh),   FD = 0.02,   Lm = L

The raw CoV is always clamped to [0.0001, 1.0].

References:
- Manufacturer design guides for Kenics KM, Chemineer HEV and Statiflo STM mixers
- BHR Group, Design guide for static mixers in water treatment
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict

from utils.constants import (
    COV_MAX, COV_MIN, MIN_REYNOLDS, NATURAL_MIXING_COV_COEFFICIENT,
    NATURAL_MIXING_DECAY_COEFFICIENT, NATURAL_MIXING_FRICTION_FACTOR,
)
from utils.input_resolver import InjectionType, MixerModel

logger = logging.getLogger("mixing-mcp.mixer_correlations")


@dataclass(frozen=True)
class MixerCorrelation:
    model: MixerModel
    description: str
    single_coefficient: float
    twin_coefficient: float
    reynolds_exponent: float
    elements_exponent: float
    friction_factor: float
    length_per_element: float  # hydraulic diameters per element

    def coefficient(self, injection_type: InjectionType) -> float:
        if injection_type == InjectionType.TWIN:
            return self.twin_coefficient
        return self.single_coefficient


MIXER_CORRELATIONS: Dict[MixerModel, MixerCorrelation] = {
    MixerModel.KENICS_KM: MixerCorrelation(
        model=MixerModel.KENICS_KM,
        description="Kenics KM helical element mixer",
        single_coefficient=0.96,
        twin_coefficient=0.38,
        reynolds_exponent=-0.1,
        elements_exponent=-1.9,
        friction_factor=1.8,
        length_per_element=1.5,
    ),
    MixerModel.HEV: MixerCorrelation(
        model=MixerModel.HEV,
        description="Chemineer HEV high-efficiency vortex mixer",
        single_coefficient=31.5,
        twin_coefficient=31.5,
        reynolds_exponent=-0.2,
        elements_exponent=-1.7,
        friction_factor=0.6,
        length_per_element=1.0,
    ),
    MixerModel.STM: MixerCorrelation(
        model=MixerModel.STM,
        description="Statiflo STM mixer",
        single_coefficient=0.29,
        twin_coefficient=0.29,
        reynolds_exponent=-0.2,
        elements_exponent=-0.6,
        friction_factor=4.15,
        length_per_element=0.8,
    ),
}


@dataclass(frozen=True)
class MixerPerformance:
    mixer_model: MixerModel
    raw_cov: float
    cov: float
    friction_factor: float
    mixing_length: float  # m


def clamp_cov(cov: float) -> float:
    return min(COV_MAX, max(COV_MIN, cov))


def natural_mixing_cov(dilution_ratio: float, available_length: float,
                       hydraulic_diameter: float) -> float:
    """Unclamped CoV after natural mixing over the available straight length."""
    length_ratio = available_length / hydraulic_diameter
    return (NATURAL_MIXING_COV_COEFFICIENT * math.sqrt(dilution_ratio)
            * math.exp(-NATURAL_MIXING_DECAY_COEFFICIENT
                       * math.sqrt(NATURAL_MIXING_FRICTION_FACTOR) * length_ratio))


def element_mixing_cov(correlation: MixerCorrelation, injection_type: InjectionType,
                       reynolds_number: float, num_elements: int) -> float:
    """Unclamped CoV leaving an in-line mixer; unbounded when there are no elements."""
    if num_elements <= 0:
        return math.inf
    Re = max(reynolds_number, MIN_REYNOLDS)
    return (correlation.coefficient(injection_type)
            * Re ** correlation.reynolds_exponent
            * num_elements ** correlation.elements_exponent)


def mixer_performance(mixer_model: MixerModel, injection_type: InjectionType,
                      num_elements: int, reynolds_number: float, hydraulic_diameter: float,
                      available_length: float, dilution_ratio: float) -> MixerPerformance:
    """CoV, friction factor and effective mixing length for the selected mixer.

    Args:
        mixer_model: NONE for natural mixing, otherwise an in-line mixer model
        injection_type: SINGLE or TWIN injection quill
        num_elements: Number of mixer elements
        reynolds_number: Carrier Reynolds number
        hydraulic_diameter: Conduit hydraulic diameter in m
        available_length: Straight length available for mixing in m
        dilution_ratio: Carrier flow / injected flow

    Returns:
        MixerPerformance with the CoV clamped to [0.0001, 1.0]
    """
    if mixer_model == MixerModel.NONE:
        raw_cov = natural_mixing_cov(dilution_ratio, available_length, hydraulic_diameter)
        friction_factor = NATURAL_MIXING_FRICTION_FACTOR
        mixing_length = available_length
    else:
        correlation = MIXER_CORRELATIONS[mixer_model]
        raw_cov = element_mixing_cov(correlation, injection_type, reynolds_number, num_elements)
        friction_factor = correlation.friction_factor
        mixing_length = num_elements * correlation.length_per_element * hydraulic_diameter

    cov = clamp_cov(raw_cov)
    if cov != raw_cov:
        logger.debug(f"{mixer_model.value}: CoV {raw_cov:.4g} clamped to {cov}")

    return MixerPerformance(
        mixer_model=mixer_model,
        raw_cov=raw_cov,
        cov=cov,
        friction_factor=friction_factor,
        mixing_length=mixing_length,
    )
