"""
Distance and time needed to reach the target CoV.

Downstream of the mixer, non-uniformity is assumed to keep decaying exponentially
per hydraulic diameter travelled:

    CoV(x) = CoV_mixer · exp(−k · x / Dh)

with k = 0.75·√0.02 in pipes and k = 0.6 in open channels (free-surface turbulence).
"""

import math
from dataclasses import dataclass

from utils.constants import CHANNEL_DECAY_RATE, MIN_VELOCITY, PIPE_DECAY_RATE
from utils.input_resolver import ConduitType


@dataclass(frozen=True)
class MixingDistance:
    decay_rate: float
    distance: float      # m
    time: float          # s
    is_compliant: bool
    is_time_compliant: bool


def decay_rate_for(conduit_type: ConduitType) -> float:
    return PIPE_DECAY_RATE if conduit_type == ConduitType.PIPE else CHANNEL_DECAY_RATE


def solve_mixing_distance(conduit_type: ConduitType, mixer_cov: float, target_cov: float,
                          mixing_length: float, hydraulic_diameter: float, velocity: float,
                          target_mixing_time: float) -> MixingDistance:
    """Extrapolate from the mixer outlet to the point where CoV reaches target_cov."""
    decay = decay_rate_for(conduit_type)

    if mixer_cov <= target_cov:
        distance = mixing_length
    else:
        distance = mixing_length + (math.log(mixer_cov / target_cov) / decay) * hydraulic_diameter

    time = distance / max(velocity, MIN_VELOCITY)

    return MixingDistance(
        decay_rate=decay,
        distance=distance,
        time=time,
        is_compliant=mixer_cov <= target_cov,
        is_time_compliant=time <= target_mixing_time,
    )
