"""Unified property lookup for carrier water and dosing chemicals."""

from typing import Optional, Literal
from tools.fluid_properties import (
    get_carrier_water_properties, get_chemical_properties, list_available_chemicals,
)


def properties(
    lookup_type: Literal["water", "chemical", "list_chemicals"] = "water",

    # Water parameters
    temperature_c: Optional[float] = None,
    pressure_bar: Optional[float] = 1.01325,

    # Chemical parameters
    chemical_name: Optional[str] = None,
) -> str:
    """Unified property lookup for carrier water and dosing chemicals.

    - lookup_type='water': Water density and viscosity at temperature (CoolProp)
    - lookup_type='chemical': Preset density and viscosity of a dosing chemical
    - lookup_type='list_chemicals': List all chemical presets and aliases

    Args:
        lookup_type: Type of property lookup
        temperature_c: Water temperature in Celsius
        pressure_bar: Absolute pressure in bar (default: 1 atm)
        chemical_name: Chemical preset, name or alias (e.g. "ferric", "NaOCl")

    Returns:
        JSON string with property data

    Examples:
        >>> properties(lookup_type="water", temperature_c=15)
        >>> properties(lookup_type="chemical", chemical_name="alum")
    """
    if lookup_type == "water":
        if temperature_c is None:
            return '{"error": "temperature_c required for water lookup"}'
        return get_carrier_water_properties(
            temperature_c=temperature_c,
            pressure_bar=pressure_bar if pressure_bar is not None else 1.01325,
        )

    elif lookup_type == "chemical":
        if not chemical_name:
            return '{"error": "chemical_name required for chemical lookup"}'
        return get_chemical_properties(chemical_name)

    elif lookup_type == "list_chemicals":
        return list_available_chemicals()

    else:
        return f'{{"error": "Invalid lookup_type: {lookup_type}"}}'
