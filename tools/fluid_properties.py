"""
Fluid property tools.

Carrier water properties at temperature (CoolProp) and dosing chemical presets.
"""

import json
import logging

from utils.chemical_presets import get_chemical_preset, list_chemical_presets
from utils.import_helpers import COOLPROP_AVAILABLE, get_water_properties

# Configure logging
logger = logging.getLogger("mixing-mcp.fluid_properties")


def get_carrier_water_properties(
    temperature_c: float,        # Water temperature in degrees Celsius
    pressure_bar: float = 1.01325,  # Absolute pressure in bar
) -> str:
    """Retrieve density and viscosity of water at the given temperature.

    Args:
        temperature_c: Temperature in degrees Celsius
        pressure_bar: Absolute pressure in bar (default: 1 atm)

    Returns:
        JSON string with density, dynamic and kinematic viscosity
    """
    if not COOLPROP_AVAILABLE:
        return json.dumps({
            "error": "Water property lookup is not available. The CoolProp package is not installed."
        })

    props = get_water_properties(temperature_c, pressure_pa=pressure_bar * 1e5)
    if props is None:
        return json.dumps({
            "error": f"Could not evaluate water properties at {temperature_c} °C and {pressure_bar} bar"
        })

    return json.dumps({
        "fluid_name": "Water",
        "temperature_c": temperature_c,
        "pressure_bar": pressure_bar,
        "density_kg_m3": props["density_kgm3"],
        "dynamic_viscosity_pa_s": props["viscosity_pas"],
        "kinematic_viscosity_m2_s": props["kinematic_viscosity_m2s"],
    })


def get_chemical_properties(chemical_name: str) -> str:
    """Look up the preset density and viscosity of a dosing chemical.

    Args:
        chemical_name: Preset key, chemical name or alias (e.g. "ferric", "FeCl3", "bleach")

    Returns:
        JSON string with the preset properties
    """
    preset = get_chemical_preset(chemical_name)
    if preset is None:
        return json.dumps({
            "error": f"Chemical '{chemical_name}' not found",
            "available_chemicals": [p["key"] for p in list_chemical_presets()],
            "note": "Use lookup_type='list_chemicals' for names and aliases."
        })

    return json.dumps({
        "key": preset.key,
        "chemical_name": preset.name,
        "density_kg_m3": preset.density,
        "dynamic_viscosity_pa_s": preset.viscosity,
    })


def list_available_chemicals() -> str:
    """List the dosing chemical presets with their aliases."""
    presets = list_chemical_presets()
    return json.dumps({
        "available_chemicals": presets,
        "total_count": len(presets),
        "usage_example": "Pass chemical_preset='ferric' to static_mixer to fill density and viscosity",
    })
