"""Markdown report generation with a Jinja2 template."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from utils.constants import DEFAULT_REPORT_DIR, REPORT_DIR_ENV_VAR
from utils.input_resolver import MixingInputs
from utils.json_helpers import sanitize_for_json

logger = logging.getLogger("mixing-mcp.mixing_report")

REPORT_TEMPLATE = """\
---
title: {{ title }}
generated: {{ generated }}
chemical: {{ inputs.chemical_type or "unspecified" }}
mixer_model: {{ inputs.mixer_model }}
compliant: {{ results.is_compliant and results.is_time_compliant }}
---

# {{ title }}

Generated: {{ generated }}

## Scenario

| Parameter | Value |
|---|---|
| Conduit | {{ inputs.conduit_type }}{% if inputs.conduit_shape %} ({{ inputs.conduit_shape }}){% endif %} |
| Width / diameter | {{ inputs.dimension | fmt(3) }} m |
| Depth | {{ inputs.depth | fmt(3) }} m |
| Available length | {{ inputs.available_length | fmt(2) }} m |
| Carrier flow | {{ inputs.flow_rate | fmt(1) }} m3/h |
| Chemical flow | {{ inputs.chemical_flow | fmt(2) }} L/h |
| Chemical dose | {{ inputs.chemical_dose | fmt(2) }} |
| Dilution water | {{ inputs.dilution_water_flow | fmt(2) }} L/h |
| Mixer | {{ inputs.mixer_model }} ({{ inputs.num_elements }} elements, {{ inputs.injection_type }} injection) |
| Pitch ratio | {{ inputs.pitch_ratio }} |
| Target CoV | {{ inputs.target_cov | fmt(3) }} |
| Target mixing time | {{ inputs.target_mixing_time | fmt(1) }} s |

## Results

| Metric | Value |
|---|---|
| Velocity | {{ results.velocity | fmt(3) }} m/s |
| Reynolds number | {{ results.reynolds_number | fmt(0) }} ({{ results.flow_regime }}) |
| Achieved CoV | {{ results.mixer_cov | fmt(4) }} ({{ "target met" if results.is_compliant else "fail" }}) |
| Distance to target CoV | {{ results.mixing_distance_needed | fmt(2) }} m |
| Time to target CoV | {{ results.mixing_time_needed | fmt(1) }} s ({{ "within target" if results.is_time_compliant else "exceeds target" }}) |
| Headloss | {{ results.headloss_meters | fmt(3) }} m / {{ results.headloss | fmt(2) }} kPa |
| G-value | {{ results.g_value | fmt(1) }} s-1 |
| Momentum ratio | {{ results.momentum_ratio | fmt(4) }} ({{ results.momentum_regime }}) |
| Injected density | {{ results.injected_density | fmt(1) }} kg/m3 |
| Injected viscosity | {{ results.injected_viscosity | fmt(5) }} Pa.s |
| Hydraulic diameter | {{ results.hydraulic_diameter | fmt(3) }} m |
| Wetted area | {{ results.wetted_area | fmt(4) }} m2 |

## Engineering Audit

{{ narrative if narrative else "No audit available." }}
"""


def _format_value(value, precision=1, default='-'):
    """Format numeric values with precision, or show default for missing."""
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return f"{value:.{precision}f}"
    return str(value)


class MixingReportBuilder:
    """Renders calculation results and audit text into a Markdown report file."""

    def __init__(self, output_dir: Optional[str] = None):
        self.output_dir = Path(output_dir or os.environ.get(REPORT_DIR_ENV_VAR) or DEFAULT_REPORT_DIR)
        self._env = None

    @property
    def env(self):
        """Lazy-load Jinja2 environment."""
        if self._env is None:
            from jinja2 import Environment

            self._env = Environment(trim_blocks=True, lstrip_blocks=True)
            self._env.filters['fmt'] = _format_value
        return self._env

    def render(self, inputs: MixingInputs, results, narrative: str = "",
               title: str = "Static Mixing Engineering Report") -> str:
        """Render the report as a Markdown string."""
        template = self.env.from_string(REPORT_TEMPLATE)
        return template.render(
            title=title,
            generated=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            inputs=sanitize_for_json(inputs),
            results=sanitize_for_json(results),
            narrative=(narrative or "").strip(),
        )

    def generate(self, inputs: MixingInputs, results, narrative: str = "",
                 project_name: str = "Mixing_Audit") -> Dict[str, str]:
        """Write the report to the output directory.

        Returns:
            Dict with path to generated report file
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        safe_name = project_name.replace(' ', '_').replace('/', '_').replace('\\', '_').replace(':', '-')
        md_path = self.output_dir / f"{safe_name}_{timestamp}.md"

        content = self.render(inputs, results, narrative, title=project_name.replace('_', ' '))
        with open(md_path, "w", encoding='utf-8') as f:
            f.write(content)

        logger.info(f"Report written to {md_path}")
        return {"markdown": str(md_path), "status": "success"}
