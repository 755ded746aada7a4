"""
Shared input models and resolution for the mixing tools.

MixingInputs is the record handed to the calculation engine. Numeric fields never
reject a value: anything missing or unparseable becomes 0.0 and is clamped once by
sanitize_inputs() before the engine stages run. InputResolver fills the gaps the
tool layer is allowed to fill (chemical presets, carrier properties from
temperature) and keeps a log of where every value came from.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import (
    DEFAULT_CHEMICAL_DENSITY, DEFAULT_DEPTH, DEFAULT_TARGET_COV,
    MAX_DENSITY, MAX_DIMENSION, MAX_FLOW_RATE, MAX_INJECTION_FLOW, MAX_LENGTH,
    MAX_NUM_ELEMENTS, MAX_VISCOSITY, MIN_DENSITY, MIN_DIMENSION, MIN_FLOW_RATE,
    MIN_TARGET_COV, MIN_VISCOSITY, WATER_DENSITY, WATER_VISCOSITY,
)

logger = logging.getLogger("mixing-mcp.input_resolver")


class ConduitType(str, Enum):
    PIPE = "PIPE"
    CHANNEL = "CHANNEL"


class ConduitShape(str, Enum):
    CIRCULAR = "CIRCULAR"
    RECTANGULAR = "RECTANGULAR"


class MixerModel(str, Enum):
    NONE = "NONE"
    KENICS_KM = "KENICS_KM"
    HEV = "HEV"
    STM = "STM"


class InjectionType(str, Enum):
    SINGLE = "SINGLE"
    TWIN = "TWIN"


class PitchRatio(str, Enum):
    """Element pitch (length/diameter). Carried for future correlations."""
    PR_1_0 = "PR_1_0"
    PR_1_5 = "PR_1_5"
    PR_2_0 = "PR_2_0"


def coerce_number(value: Any) -> float:
    """Convert a user-supplied value to a finite float, or 0.0 when that is not possible."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class MixingInputs(BaseModel):
    """One dosing scenario: conduit, carrier, chemical stream, mixer and targets."""

    model_config = ConfigDict(frozen=True)

    # Conduit
    conduit_type: ConduitType = Field(ConduitType.PIPE, description="PIPE or CHANNEL")
    conduit_shape: Optional[ConduitShape] = Field(
        None, description="CIRCULAR or RECTANGULAR; defaults by conduit type")
    dimension: float = Field(0.0, description="Pipe diameter or channel/duct width in m")
    depth: float = Field(DEFAULT_DEPTH, description="Water depth or duct height in m")
    available_length: float = Field(0.0, description="Straight length available for mixing in m")

    # Carrier fluid
    flow_rate: float = Field(0.0, description="Carrier flow rate in m³/h")
    density: float = Field(0.0, description="Carrier density in kg/m³")
    viscosity: float = Field(0.0, description="Carrier dynamic viscosity in Pa·s")

    # Chemical stream
    chemical_flow: float = Field(0.0, description="Neat chemical flow in L/h")
    chemical_density: float = Field(0.0, description="Chemical density in kg/m³")
    chemical_viscosity: float = Field(0.0, description="Chemical dynamic viscosity in Pa·s")
    chemical_dose: float = Field(0.0, description="Chemical dose (label units, informational)")
    chemical_type: str = Field("", description="Chemical name (label only)")
    dilution_water_flow: float = Field(0.0, description="Carrier/dilution water flow in L/h")
    water_temperature: float = Field(0.0, description="Water temperature in °C (informational)")

    # Mixer configuration
    mixer_model: MixerModel = Field(MixerModel.NONE, description="In-line mixer model")
    num_elements: int = Field(0, description="Number of mixer elements")
    injection_type: InjectionType = Field(InjectionType.SINGLE, description="SINGLE or TWIN quill")
    pitch_ratio: PitchRatio = Field(PitchRatio.PR_1_5, description="Mixer element pitch ratio")

    # Targets
    target_cov: float = Field(DEFAULT_TARGET_COV, description="Target coefficient of variation")
    target_mixing_time: float = Field(0.0, description="Target mixing time in s")

    @field_validator("conduit_type", "conduit_shape", "mixer_model",
                     "injection_type", "pitch_ratio", mode="before")
    @classmethod
    def normalize_enum_name(cls, v):
        if isinstance(v, Enum):
            return v
        if isinstance(v, str):
            return v.strip().upper().replace("-", "_").replace(" ", "_")
        return v

    @field_validator("dimension", "available_length", "flow_rate", "density", "viscosity",
                     "chemical_flow", "chemical_density", "chemical_viscosity", "chemical_dose",
                     "dilution_water_flow", "water_temperature", "target_mixing_time",
                     mode="before")
    @classmethod
    def absent_number_is_zero(cls, v):
        return coerce_number(v)

    @field_validator("depth", mode="before")
    @classmethod
    def absent_depth_is_default(cls, v):
        return DEFAULT_DEPTH if v is None else coerce_number(v)

    @field_validator("target_cov", mode="before")
    @classmethod
    def absent_target_is_default(cls, v):
        return DEFAULT_TARGET_COV if v is None else coerce_number(v)

    @field_validator("num_elements", mode="before")
    @classmethod
    def whole_elements(cls, v):
        return int(coerce_number(v))

    @field_validator("chemical_type", mode="before")
    @classmethod
    def label_or_blank(cls, v):
        return "" if v is None else str(v)


@dataclass(frozen=True)
class SanitizedInputs:
    """Clamped snapshot of MixingInputs consumed by every engine stage."""
    conduit_type: ConduitType
    conduit_shape: ConduitShape
    dimension: float
    depth: float
    available_length: float
    flow_rate: float
    density: float
    viscosity: float
    chemical_flow: float
    chemical_density: float
    chemical_viscosity: float
    dilution_water_flow: float
    mixer_model: MixerModel
    num_elements: int
    injection_type: InjectionType
    target_cov: float
    target_mixing_time: float


def _clamp(value, low, high):
    return min(high, max(low, value))


def sanitize_inputs(inputs: MixingInputs) -> SanitizedInputs:
    """Apply every floor, ceiling and default once, so the stages can divide freely."""
    if inputs.conduit_shape is not None:
        shape = inputs.conduit_shape
    elif inputs.conduit_type == ConduitType.PIPE:
        shape = ConduitShape.CIRCULAR
    else:
        shape = ConduitShape.RECTANGULAR

    chemical_density = inputs.chemical_density if inputs.chemical_density > 0 else DEFAULT_CHEMICAL_DENSITY

    return SanitizedInputs(
        conduit_type=inputs.conduit_type,
        conduit_shape=shape,
        dimension=_clamp(inputs.dimension, MIN_DIMENSION, MAX_DIMENSION),
        depth=_clamp(inputs.depth, MIN_DIMENSION, MAX_DIMENSION),
        available_length=_clamp(inputs.available_length, 0.0, MAX_LENGTH),
        flow_rate=_clamp(inputs.flow_rate, MIN_FLOW_RATE, MAX_FLOW_RATE),
        density=_clamp(inputs.density, MIN_DENSITY, MAX_DENSITY),
        viscosity=_clamp(inputs.viscosity, MIN_VISCOSITY, MAX_VISCOSITY),
        chemical_flow=_clamp(inputs.chemical_flow, 0.0, MAX_INJECTION_FLOW),
        chemical_density=min(chemical_density, MAX_DENSITY),
        chemical_viscosity=_clamp(inputs.chemical_viscosity, MIN_VISCOSITY, MAX_VISCOSITY),
        dilution_water_flow=_clamp(inputs.dilution_water_flow, 0.0, MAX_INJECTION_FLOW),
        mixer_model=inputs.mixer_model,
        num_elements=_clamp(inputs.num_elements, 0, MAX_NUM_ELEMENTS),
        injection_type=inputs.injection_type,
        target_cov=max(inputs.target_cov, MIN_TARGET_COV) if inputs.target_cov > 0 else DEFAULT_TARGET_COV,
        target_mixing_time=max(inputs.target_mixing_time, 0.0),
    )


class InputResolver:
    """
    Tool-level input resolution with consistent logging.

    Fills chemical properties from presets and carrier properties from temperature
    before a MixingInputs record is built.
    """

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        self.results_log: List[str] = []
        self.error_log: List[str] = []

    def resolve_chemical(self, chemical_preset: Optional[str] = None,
                         chemical_type: Optional[str] = None,
                         chemical_density: Optional[float] = None,
                         chemical_viscosity: Optional[float] = None) -> Dict[str, Any]:
        """Resolve chemical label, density and viscosity, preferring explicit values."""
        from .chemical_presets import get_chemical_preset

        resolved = {
            "chemical_type": chemical_type,
            "chemical_density": chemical_density,
            "chemical_viscosity": chemical_viscosity,
        }
        if chemical_preset is None:
            if chemical_density is not None or chemical_viscosity is not None:
                self.results_log.append("Chemical properties: direct input")
            return resolved

        preset = get_chemical_preset(chemical_preset)
        if preset is None:
            self.error_log.append(f"Unknown chemical preset '{chemical_preset}'")
            return resolved

        if chemical_type is None:
            resolved["chemical_type"] = preset.name
        if chemical_density is None:
            resolved["chemical_density"] = preset.density
        if chemical_viscosity is None:
            resolved["chemical_viscosity"] = preset.viscosity
        self.results_log.append(f"Chemical properties: preset '{preset.key}' ({preset.name})")
        return resolved

    def resolve_carrier(self, density: Optional[float] = None,
                        viscosity: Optional[float] = None,
                        water_temperature: Optional[float] = None) -> Dict[str, Optional[float]]:
        """Resolve carrier density/viscosity; missing values come from water at temperature."""
        resolved = {"density": density, "viscosity": viscosity}
        if density is not None and viscosity is not None:
            self.results_log.append("Carrier properties: direct input")
            return resolved
        if water_temperature is None:
            missing = [k for k, v in resolved.items() if v is None]
            self.error_log.append(
                f"Missing carrier {' and '.join(missing)} with no water_temperature for lookup")
            return resolved

        from .import_helpers import get_water_properties

        props = get_water_properties(water_temperature)
        if props is None:
            props = {"density_kgm3": WATER_DENSITY, "viscosity_pas": WATER_VISCOSITY}
            self.results_log.append(
                f"Carrier properties: CoolProp unavailable, using water defaults "
                f"({WATER_DENSITY} kg/m³, {WATER_VISCOSITY} Pa·s)")
            logger.warning("Water property lookup unavailable; using reference water properties")
        else:
            self.results_log.append(f"Carrier properties: water at {water_temperature} °C (CoolProp)")

        if density is None:
            resolved["density"] = props["density_kgm3"]
        if viscosity is None:
            resolved["viscosity"] = props["viscosity_pas"]
        return resolved

    def get_logs(self) -> Dict[str, List[str]]:
        """Get accumulated logs."""
        return {
            "log": self.results_log.copy(),
            "errors": self.error_log.copy()
        }
