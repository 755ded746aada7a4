"""Help resources omnitool - lists mixer models, correlations, regimes and chemical presets."""

import json
import logging
from typing import Literal

from tools.mixer_correlations import MIXER_CORRELATIONS
from utils.chemical_presets import list_chemical_presets
from utils.constants import (
    CHANNEL_DECAY_RATE, MOMENTUM_RATIO_HIGH, MOMENTUM_RATIO_LOW,
    NATURAL_MIXING_FRICTION_FACTOR, PIPE_DECAY_RATE, RE_LAMINAR_LIMIT, RE_TURBULENT_LIMIT,
)

logger = logging.getLogger("mixing-mcp.help_resources")


def get_mixer_models() -> list:
    """Correlation coefficients for every mixer model, natural mixing first."""
    models = [{
        "name": "NONE",
        "description": "Natural mixing over the available straight length (no in-line mixer)",
        "cov_formula": "2*sqrt(alpha)*exp(-0.75*sqrt(FD)*L/Dh)",
        "friction_factor": NATURAL_MIXING_FRICTION_FACTOR,
        "mixing_length": "available_length",
    }]
    for model, c in MIXER_CORRELATIONS.items():
        if c.single_coefficient == c.twin_coefficient:
            k = f"{c.single_coefficient}"
        else:
            k = f"{c.single_coefficient} (single) / {c.twin_coefficient} (twin)"
        models.append({
            "name": model.value,
            "description": c.description,
            "cov_formula": f"k*Re^{c.reynolds_exponent}*n^{c.elements_exponent}, k={k}",
            "friction_factor": c.friction_factor,
            "mixing_length": f"{c.length_per_element}*n*Dh",
        })
    return models


REGIMES = {
    "momentum_regime": {
        "Low": f"momentum ratio < {MOMENTUM_RATIO_LOW}: jet under-penetrates and hugs the wall",
        "Intermediate": f"{MOMENTUM_RATIO_LOW} <= momentum ratio <= {MOMENTUM_RATIO_HIGH}: well placed jet",
        "High": f"momentum ratio > {MOMENTUM_RATIO_HIGH}: jet over-penetrates to the far wall",
    },
    "flow_regime": {
        "laminar": f"Re < {RE_LAMINAR_LIMIT:g}",
        "transitional": f"{RE_LAMINAR_LIMIT:g} <= Re < {RE_TURBULENT_LIMIT:g}",
        "turbulent": f"Re >= {RE_TURBULENT_LIMIT:g}",
    },
    "downstream_decay_per_Dh": {
        "PIPE": PIPE_DECAY_RATE,
        "CHANNEL": CHANNEL_DECAY_RATE,
    },
}


def help_resources(
    resource_type: Literal["mixers", "regimes", "chemicals", "all"] = "all",
) -> str:
    """
    List available resources for static mixing calculations.

    Args:
        resource_type: Type of resources to list
            - "mixers": Mixer models with their CoV, friction and length correlations
            - "regimes": Momentum and flow regime thresholds, downstream decay rates
            - "chemicals": Dosing chemical presets with aliases
            - "all": Everything

    Returns:
        JSON string with requested resource information

    Examples:
        >>> help_resources(resource_type="mixers")
        >>> help_resources(resource_type="chemicals")
    """
    result = {}

    if resource_type in ("mixers", "all"):
        result["mixer_models"] = get_mixer_models()

    if resource_type in ("regimes", "all"):
        result["regimes"] = REGIMES

    if resource_type in ("chemicals", "all"):
        result["chemical_presets"] = list_chemical_presets()

    if not result:
        return json.dumps({"error": f"Invalid resource_type: {resource_type}"})

    if resource_type == "all":
        result["notes"] = {
            "units": "flow_rate m3/h, chemical and dilution flows L/h, lengths m, viscosity Pa.s",
            "clamping": "Missing or invalid numbers are treated as zero and clamped; CoV is limited to [0.0001, 1.0]",
            "pitch_ratio": "Accepted and reported but not used by the current correlations",
        }

    return json.dumps(result, indent=2)
