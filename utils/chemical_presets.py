"""
Dosing chemical presets and name aliases.

Typical neat-product properties for the reagents dosed in water and wastewater
plants, used when the caller names a chemical instead of supplying its density
and viscosity.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

logger = logging.getLogger("mixing-mcp.chemical_presets")


@dataclass(frozen=True)
class ChemicalPreset:
    key: str
    name: str
    density: float    # kg/m³
    viscosity: float  # Pa·s


CHEMICAL_PRESETS: Dict[str, ChemicalPreset] = {
    "ferric": ChemicalPreset("ferric", "Ferric Chloride (40%)", 1450.0, 0.015),
    "alum": ChemicalPreset("alum", "Alum (Aluminium Sulphate)", 1320.0, 0.025),
    "hypo": ChemicalPreset("hypo", "Sodium Hypochlorite (15%)", 1210.0, 0.003),
    "lime": ChemicalPreset("lime", "Lime Slurry (10%)", 1070.0, 0.005),
    "custom": ChemicalPreset("custom", "Custom Fluid", 1000.0, 0.001),
}

# Mapping of common aliases to preset keys
CHEMICAL_NAME_MAP = {
    # Ferric chloride
    'ferric chloride': 'ferric',
    'ferric_chloride': 'ferric',
    'fecl3': 'ferric',

    # Aluminium sulphate
    'aluminium sulphate': 'alum',
    'aluminum sulfate': 'alum',
    'aluminium sulfate': 'alum',
    'al2(so4)3': 'alum',

    # Hypochlorite
    'sodium hypochlorite': 'hypo',
    'hypochlorite': 'hypo',
    'naocl': 'hypo',
    'bleach': 'hypo',

    # Lime
    'lime slurry': 'lime',
    'milk of lime': 'lime',
    'ca(oh)2': 'lime',
    'hydrated lime': 'lime',

    # Water-like
    'water': 'custom',
}


def normalize_chemical_name(name: str) -> str:
    """Lower-case and collapse whitespace/underscores for alias lookup."""
    if not name:
        return name
    return " ".join(name.lower().replace("_", " ").split())


def map_chemical_name(name: str) -> Optional[str]:
    """
    Map a chemical name or alias to a preset key.

    Args:
        name: Preset key, chemical name or alias

    Returns:
        Preset key, or None if the name is not recognised
    """
    if not name:
        return None

    normalized = normalize_chemical_name(name)
    if normalized in CHEMICAL_PRESETS:
        return normalized
    if normalized in CHEMICAL_NAME_MAP:
        return CHEMICAL_NAME_MAP[normalized]

    # Preset display names, e.g. "Ferric Chloride (40%)"
    for preset in CHEMICAL_PRESETS.values():
        if normalize_chemical_name(preset.name) == normalized:
            return preset.key

    logger.warning(f"No chemical preset matches '{name}'")
    return None


def get_chemical_preset(name: str) -> Optional[ChemicalPreset]:
    key = map_chemical_name(name)
    return CHEMICAL_PRESETS.get(key) if key else None


def list_chemical_presets() -> List[Dict[str, object]]:
    """List presets with their aliases, for help and property lookups."""
    return [
        {
            "key": preset.key,
            "name": preset.name,
            "density_kg_m3": preset.density,
            "viscosity_pa_s": preset.viscosity,
            "aliases": sorted(a for a, k in CHEMICAL_NAME_MAP.items() if k == preset.key),
        }
        for preset in CHEMICAL_PRESETS.values()
    ]
