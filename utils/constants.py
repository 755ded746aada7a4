"""
Constants used across the Mixing MCP server.

This module defines unit conversion factors, reference fluid properties, numerical floors
and the empirical coefficients behind the mixing correlations.
"""

import math

# Conversion factors for unit flexibility
M3H_to_M3S = 1.0 / 3600.0     # m³/h to m³/s
M3H_to_LH = 1000.0            # m³/h to L/h
LH_to_M3S = 1.0 / 3600000.0   # L/h to m³/s
PA_to_KPA = 0.001             # Pascal to kilopascal
DEG_C_to_K = 273.15           # Celsius to Kelvin (offset)
P_ATM = 101325.0              # Atmospheric pressure, Pa

# Physical constants
G_GRAVITY = 9.81              # Gravity used by the headloss correlations, m/s²

# Reference water properties (dilution water and fallback carrier)
WATER_DENSITY = 1000.0        # kg/m³
WATER_VISCOSITY = 0.001       # Pa·s
DEFAULT_CHEMICAL_DENSITY = 1000.0  # kg/m³, used when chemical density is zero/absent

# Input defaults
DEFAULT_DEPTH = 0.6           # m
DEFAULT_TARGET_COV = 0.05     # fraction

# Numerical floors (no stage divides by exact zero)
MIN_DIMENSION = 0.001         # m, width/diameter and depth
MIN_FLOW_RATE = 1.0           # m³/h, carrier flow
MIN_AREA = 1e-6               # m²
MIN_VISCOSITY = 1e-6          # Pa·s
MIN_DENSITY = 1e-6            # kg/m³
MIN_REYNOLDS = 1e-6
MIN_INJECTION_FLOW = 1.0      # L/h, denominator for blending and dilution ratio
MIN_MOMENTUM_DENOMINATOR = 1e-6
MIN_G_VALUE_DENOMINATOR = 1e-9
MIN_VELOCITY = 1e-9           # m/s, denominator for mixing time
MIN_TARGET_COV = 1e-9         # smallest positive target CoV

# Numerical ceilings (keep every stage finite for extreme inputs)
MAX_DIMENSION = 1000.0        # m, width/diameter and depth
MAX_FLOW_RATE = 1e7           # m³/h, carrier flow
MAX_LENGTH = 1e5              # m, available straight length
MAX_INJECTION_FLOW = 1e9      # L/h, chemical and dilution water flows
MAX_DENSITY = 1e5             # kg/m³
MAX_VISCOSITY = 1e3           # Pa·s
MAX_NUM_ELEMENTS = 1000

# Mixer CoV clamp
COV_MIN = 0.0001
COV_MAX = 1.0

# Natural (open-conduit) mixing correlation, CoV = 2·√α·exp(−0.75·√FD·L/Dh).
# Coefficients have no stated derivation; pending review by a mixing specialist.
NATURAL_MIXING_COV_COEFFICIENT = 2.0
NATURAL_MIXING_DECAY_COEFFICIENT = 0.75
NATURAL_MIXING_FRICTION_FACTOR = 0.02

# Downstream decay of non-uniformity, per hydraulic diameter
PIPE_DECAY_RATE = NATURAL_MIXING_DECAY_COEFFICIENT * math.sqrt(NATURAL_MIXING_FRICTION_FACTOR)
CHANNEL_DECAY_RATE = 0.6

# Injection quill reference geometry for the momentum ratio; also pending review
REFERENCE_ORIFICE_RADIUS = 0.0125   # m
REFERENCE_JET_DIAMETER = 0.025      # m

# Momentum regime thresholds
MOMENTUM_RATIO_LOW = 0.16
MOMENTUM_RATIO_HIGH = 0.24

# Flow regime thresholds (pipe flow)
RE_LAMINAR_LIMIT = 2300.0
RE_TURBULENT_LIMIT = 4000.0

# Placeholder chemistry outputs reserved for future dissolution modelling
LIME_SATURATION_LIMIT = 1500.0     # mg/L
DISSOLVED_AT_TARGET = 100.0        # %
TIME_TO_95_DISSOLUTION = 5.0       # s
DISTANCE_TO_95_DISSOLUTION = 5.0   # m
SUGGESTED_ORIFICE_DIAMETER = 15.0  # mm
MANUFACTURER_NOTES = "Standard BHR quill recommendations."

# External collaborator retry policy
RETRY_MAX_ATTEMPTS = 3
RETRY_BASE_DELAY_S = 1.0
RETRY_BACKOFF_FACTOR = 2.0
HTTP_TOO_MANY_REQUESTS = 429

# Narrative (AI audit) service configuration
NARRATIVE_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
NARRATIVE_API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")
NARRATIVE_MODEL_ENV_VAR = "MIXING_MCP_NARRATIVE_MODEL"
DEFAULT_NARRATIVE_MODEL = "gemini-3-flash-preview"
NARRATIVE_TIMEOUT_S = 60.0

# Report export configuration
REPORT_DIR_ENV_VAR = "MIXING_MCP_REPORT_DIR"
DEFAULT_REPORT_DIR = "reports/output"
