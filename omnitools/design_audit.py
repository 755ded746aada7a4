"""AI engineering audit of a mixing scenario and design-guide extraction."""

import asyncio
import base64
import json
import logging
from pathlib import Path
from typing import Optional, Literal

from pydantic import ValidationError

from tools.design_audit import extract_guide_data, get_ai_recommendations
from tools.static_mixing import build_mixing_inputs, evaluate, format_validation_error
from utils.input_resolver import InputResolver
from utils.json_helpers import safe_json_dumps
from reports import MixingReportBuilder

logger = logging.getLogger("mixing-mcp.design_audit")


async def design_audit(
    task: Literal["audit", "extract_guide"] = "audit",

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

    # Audit options
    guide_context: Optional[str] = None,
    write_report: bool = False,
    project_name: str = "Mixing_Audit",

    # Guide extraction
    document_path: Optional[str] = None,
    document_base64: Optional[str] = None,
    mime_type: str = "application/pdf",
) -> str:
    """
    Narrative engineering review backed by an external language model.

    - task='audit': Evaluate the scenario, then ask for a written audit of the
      momentum regime, density risks and element efficiency. Optionally write a
      Markdown report with the results and the audit.
    - task='extract_guide': Pull CoV, momentum ratio and headloss coefficients out of
      a static mixer design guide; pass the text back as guide_context on later audits.

    The narrative service is optional: without an API key (GEMINI_API_KEY or API_KEY)
    or when it fails, the audit text is a fixed message and the calculated results are
    still returned.

    Args:
        task: "audit" or "extract_guide"
        (scenario parameters as for static_mixer)
        guide_context: Text previously returned by task='extract_guide'
        write_report: Also write a Markdown report (task='audit')
        project_name: Report title and file name prefix
        document_path: Path to a design guide document (task='extract_guide')
        document_base64: Base64-encoded design guide, instead of document_path
        mime_type: Document MIME type

    Returns:
        JSON string with results and narrative text
    """
    if task == "extract_guide":
        if document_path:
            path = Path(document_path)
            if not path.is_file():
                return json.dumps({"error": f"Document not found: {document_path}"})
            document = await asyncio.to_thread(path.read_bytes)
        elif document_base64:
            try:
                base64.b64decode(document_base64, validate=True)
            except ValueError:
                return json.dumps({"error": "document_base64 is not valid base64"})
            document = document_base64
        else:
            return json.dumps({"error": "document_path or document_base64 required for task='extract_guide'"})

        guide = await extract_guide_data(document, mime_type=mime_type)
        return json.dumps({"task": task, "guide_context": guide})

    elif task != "audit":
        return json.dumps({"error": f"Invalid task: {task}. Must be 'audit' or 'extract_guide'"})

    resolver = InputResolver("design_audit")
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
    narrative = await get_ai_recommendations(inputs, results, guide_context=guide_context)

    output = {
        "task": task,
        "inputs_resolved": resolver.get_logs()["log"],
        "inputs": inputs,
        "results": results,
        "narrative": narrative,
    }

    if write_report:
        try:
            output["report"] = MixingReportBuilder().generate(inputs, results, narrative, project_name)
        except OSError as e:
            logger.error(f"Report generation failed: {e}", exc_info=True)
            output["report"] = {"status": "error", "error": str(e)}

    return safe_json_dumps(output)
