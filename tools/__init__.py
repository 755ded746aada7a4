"""
Tools package for Mixing MCP server.

This package contains the calculation stages and the JSON tools built on them.
"""

# Calculation engine and JSON tools
from .static_mixing import (
    CalculationResults, calculate_static_mixing, evaluate, static_mixing_sweep,
)
from .fluid_properties import (
    get_carrier_water_properties, get_chemical_properties, list_available_chemicals,
)

# Narrative collaborator
from .design_audit import extract_guide_data, get_ai_recommendations

__all__ = [
    'CalculationResults',
    'evaluate',
    'calculate_static_mixing',
    'static_mixing_sweep',
    'get_carrier_water_properties',
    'get_chemical_properties',
    'list_available_chemicals',
    'get_ai_recommendations',
    'extract_guide_data',
]
