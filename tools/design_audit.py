"""
AI narrative audit and design-guide extraction.

Both calls go to a Gemini generateContent endpoint over httpx. They are optional
add-ons to the calculation: failures never raise to the caller, they come back as a
fixed message instead. Rate-limited calls (HTTP 429) are retried with exponential
backoff; anything else fails on the first attempt.
"""

import asyncio
import base64
import logging
import os
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

import httpx

from utils.constants import (
    DEFAULT_NARRATIVE_MODEL, HTTP_TOO_MANY_REQUESTS, NARRATIVE_API_BASE,
    NARRATIVE_API_KEY_ENV_VARS, NARRATIVE_MODEL_ENV_VAR, NARRATIVE_TIMEOUT_S,
)
from utils.input_resolver import MixingInputs
from utils.retry import CollaboratorError, RateLimitedError, call_with_retry, is_rate_limited
from .static_mixing import CalculationResults

logger = logging.getLogger("mixing-mcp.design_audit")

AUDIT_FAILED = "Audit generation failed."
AUDIT_EMPTY = "No audit available."
EXTRACTION_FAILED = "Extraction failed."
EXTRACTION_EMPTY = "Guide synced."

GUIDE_EXTRACTION_PROMPT = (
    "Analyze the attached static mixer design guide. "
    "Extract the key coefficients for CoV formulas, momentum ratio guidelines "
    "and headloss constants. "
    "Do not use dollar signs ($) for math or units. Use plain text."
)


def _api_key_from_env() -> Optional[str]:
    for name in NARRATIVE_API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


class NarrativeClient:
    """Minimal async client for the generateContent REST call."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 base_url: str = NARRATIVE_API_BASE,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = NARRATIVE_TIMEOUT_S):
        self.api_key = api_key if api_key is not None else _api_key_from_env()
        self.model = model or os.environ.get(NARRATIVE_MODEL_ENV_VAR) or DEFAULT_NARRATIVE_MODEL
        self.base_url = base_url.rstrip("/")
        self.transport = transport
        self.timeout = timeout

    async def generate(self, parts: List[Dict[str, Any]]) -> str:
        """Send one generateContent request and return the concatenated text parts.

        Raises:
            RateLimitedError: on HTTP 429
            CollaboratorError: when no API key is configured
            httpx.HTTPError: on any other transport or HTTP failure
        """
        if not self.api_key:
            raise CollaboratorError(
                f"No API key configured (set one of {', '.join(NARRATIVE_API_KEY_ENV_VARS)})")

        async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport,
                                     timeout=self.timeout) as client:
            response = await client.post(
                f"/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json={"contents": [{"parts": parts}]},
            )
            if response.status_code == HTTP_TOO_MANY_REQUESTS:
                raise RateLimitedError(f"Narrative service rate limited (HTTP {response.status_code})")
            response.raise_for_status()
            data = response.json()

        return response_text(data)


def response_text(data: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate; empty string if there are none."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)


def build_audit_prompt(inputs: MixingInputs, results: CalculationResults,
                       guide_context: Optional[str] = None) -> str:
    """Plain-text audit prompt describing the scenario and its key results."""
    depth = f"{inputs.depth}m" if inputs.depth else "N/A"
    lines = [
        "Act as a lead fluid dynamics engineer. Provide a technical audit of this "
        "chemical dosing and static mixing design.",
        "",
        "FORMATTING RULES:",
        "- Do not use dollar signs ($) for any reason.",
        "- Do not use LaTeX formatting or currency symbols.",
        "- Use plain text units: m, m/s, kPa, s-1, kg/m3.",
        "",
        "SCENARIO:",
        f"- Conduit: {inputs.conduit_type.value} ({inputs.dimension}m x {depth})",
        f"- Flow: {inputs.flow_rate} m3/h",
        f"- Chemical: {inputs.chemical_type or 'unspecified'} at {inputs.chemical_flow} L/h "
        f"with {inputs.dilution_water_flow} L/h dilution water",
        f"- Mixer: {inputs.mixer_model.value} ({inputs.num_elements} elements, "
        f"{inputs.injection_type.value} injection)",
        f"- Results: CoV {results.mixer_cov:.4f} (target {inputs.target_cov}), "
        f"Headloss {results.headloss_meters:.3f} m, MR {results.momentum_ratio:.3f}, "
        f"G {results.g_value:.1f} s-1, distance to target {results.mixing_distance_needed:.2f} m",
        "",
        f"TASK: Assess the momentum regime ({results.momentum_regime.value}), density "
        f"difference risks (injected {results.injected_density:.1f} kg/m3 vs carrier) and "
        "element efficiency. Format in professional engineering Markdown (bold and lists).",
    ]
    if guide_context:
        lines += ["", "REFERENCE DATA EXTRACTED FROM THE DESIGN GUIDE:", guide_context]
    return "\n".join(lines)


async def get_ai_recommendations(
    inputs: MixingInputs,
    results: CalculationResults,
    guide_context: Optional[str] = None,
    client: Optional[NarrativeClient] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> str:
    """Narrative audit of a calculated scenario, or a fixed message on failure."""
    client = client or NarrativeClient()
    prompt = build_audit_prompt(inputs, results, guide_context)

    try:
        text = await call_with_retry(lambda: client.generate([{"text": prompt}]),
                                     is_retryable=is_rate_limited, sleep=sleep)
    except Exception as e:
        logger.error(f"Audit generation failed: {e}", exc_info=True)
        return AUDIT_FAILED

    return text or AUDIT_EMPTY


async def extract_guide_data(
    document: Union[bytes, str],
    client: Optional[NarrativeClient] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    mime_type: str = "application/pdf",
) -> str:
    """Extract reference coefficients from a design guide document.

    Args:
        document: Raw document bytes, or an already base64-encoded string
        client: Narrative client (default: configured from the environment)
        sleep: Awaitable sleep used between retries
        mime_type: Document MIME type
    """
    client = client or NarrativeClient()
    if isinstance(document, bytes):
        payload = base64.b64encode(document).decode("ascii")
    else:
        payload = document

    parts = [
        {"inline_data": {"mime_type": mime_type, "data": payload}},
        {"text": GUIDE_EXTRACTION_PROMPT},
    ]

    try:
        text = await call_with_retry(lambda: client.generate(parts),
                                     is_retryable=is_rate_limited, sleep=sleep)
    except Exception as e:
        logger.error(f"Guide extraction failed: {e}", exc_info=True)
        return EXTRACTION_FAILED

    return text or EXTRACTION_EMPTY
