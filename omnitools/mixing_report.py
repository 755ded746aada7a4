"""Markdown report of a static mixing scenario."""

import json
import logging
from typing import Optional, Literal

from pydantic import ValidationError

from tools.static_mixing import build_mixing_inputs, evaluate, format_validation_error
from utils.input_resolver import InputResolver
from reports import MixingReportBuilder

logger = logging.getLogger("mixing-mcp.mixing_report")


def mixing_report(
    # Conduit
    conduit_type: Literal["PIPE", "CHANNEL"] = "PIPE",
    conduit_shape: Optional[Literal["CIRCULAR", "RECTANGULAR"]] = None,
    dimension: Optional[float] = None,
    depth: Optional[float] = None,
    available_length: Optional[float] = None,

    # Carrier fluid
    flow_rate: Optional[float] = None,
    density: Optional[float] = None,
    viscosity: Optional[float] = None,
    water_temperature: Optional[float] = None,

    # Chemical stream
    chemical_preset: Optional[str] = None,
    chemical_type: Optional[str] = None,
    chemical_flow: Optional[float] = None,
    chemical_density: Optional[float] = None,
    chemical_viscosity: Optional[float] = None,
    chemical_dose: Optional[float] = None,
    dilution_water_flow: Optional[float] = None,

    # Mixer
    mixer_model: Literal["NONE", "KENICS_KM", "HEV", "STM"] = "NONE",
    num_elements: Optional[int] = None,
    injection_type: Literal["SINGLE", "TWIN"] = "SINGLE",
    pitch_ratio: Literal["PR_1_0", "PR_1_5", "PR_2_0"] = "PR_1_5",

    # Targets
    target_cov: Optional[float] = None,
    target_mixing_time: Optional[float] = None,

    # Report
    narrative: Optional[str] = None,
    project_name: str = "Mixing_Audit",
    output_dir: Optional[str] = None,
) -> str:
    """
    Evaluate a scenario and write it to a Markdown report.

    Args:
        (scenario parameters as for static_mixer)
        narrative: Audit text to include (e.g. from design_audit)
        project_name: Report title and file name prefix
        output_dir: Report directory (default: MIXING_MCP_REPORT_DIR or reports/output)

    Returns:
        JSON string with the report path

    Example:
        >>> mixing_report(flow_rate=1500, dimension=0.8, available_length=10,
        ...               water_temperature=15, chemical_preset="ferric", chemical_flow=10,
        ...               project_name="Inlet_Works_Ferric")
    """
    resolver = InputResolver("mixing_report")
    try:
        inputs = build_mixing_inputs(
            conduit_type=conduit_type, conduit_shape=conduit_shape, dimension=dimension,
            depth=depth, available_length=available_length, flow_rate=flow_rate,
            density=density, viscosity=viscosity, water_temperature=water_temperature,
            chemical_preset=chemical_preset, chemical_type=chemical_type,
            chemical_flow=chemical_flow, chemical_density=chemical_density,
            chemical_viscosity=chemical_viscosity, chemical_dose=chemical_dose,
            dilution_water_flow=dilution_water_flow, mixer_model=mixer_model,
            num_elements=num_elements, injection_type=injection_type, pitch_ratio=pitch_ratio,
            target_cov=target_cov, target_mixing_time=target_mixing_time,
            resolver=resolver,
        )
    except ValidationError as e:
        return json.dumps({"error": f"Invalid input: {format_validation_error(e)}"})

    results = evaluate(inputs)

    try:
        report = MixingReportBuilder(output_dir).generate(
            inputs, results, narrative or "", project_name)
    except OSError as e:
        logger.error(f"Report generation failed: {e}", exc_info=True)
        return json.dumps({"error": f"Report generation failed: {str(e)}"})

    report["inputs_resolved"] = resolver.get_logs()["log"]
    report["mixer_cov"] = results.mixer_cov
    report["is_compliant"] = results.is_compliant
    return json.dumps(report)
