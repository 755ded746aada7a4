"""
Import helpers for optional dependencies.

CoolProp is only needed for carrier-water property lookups; the calculation engine
itself runs without it.
"""

import logging

from .constants import DEG_C_to_K, P_ATM
from .json_helpers import is_valid_number

logger = logging.getLogger("mixing-mcp.imports")

# CoolProp availability check
COOLPROP_AVAILABLE = False
CP = None

try:
    import CoolProp.CoolProp as _CP
    COOLPROP_AVAILABLE = True
    CP = _CP
    logger.info("CoolProp package successfully imported")
except ImportError:
    logger.warning("CoolProp module not available. Water property lookups will be disabled.")


def get_water_properties(temperature_c, pressure_pa=P_ATM):
    """Look up liquid water density and viscosity with CoolProp.

    Args:
        temperature_c: Water temperature in Celsius
        pressure_pa: Absolute pressure in Pa (default: 1 atm)

    Returns:
        Dictionary of water properties or None if lookup failed
    """
    if not COOLPROP_AVAILABLE:
        logger.warning("Cannot lookup water properties: CoolProp package not available")
        return None

    try:
        T_K = float(temperature_c) + DEG_C_to_K
        rho = CP.PropsSI("D", "T", T_K, "P", pressure_pa, "Water")
        mu = CP.PropsSI("V", "T", T_K, "P", pressure_pa, "Water")
        if not (is_valid_number(rho) and is_valid_number(mu)):
            logger.error("CoolProp returned invalid water properties at %s °C", temperature_c)
            return None

        return {
            "name": "Water",
            "temperature_c": float(temperature_c),
            "pressure_pa": pressure_pa,
            "density_kgm3": float(rho),
            "viscosity_pas": float(mu),
            "kinematic_viscosity_m2s": float(mu) / float(rho),
        }
    except Exception as e:
        logger.error("Error getting water properties at %s °C: %s", temperature_c, e)
        return None
