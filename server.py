"""
MCP Server for chemical injection blending and static mixer calculations.

This server evaluates dosing of a treatment chemical into a pipe or open channel:
achieved coefficient of variation, mixing distance, headloss, G-value and injection
momentum ratio, with optional parameter sweeps, narrative audits and Markdown reports.
"""

import logging
from mcp.server.fastmcp import FastMCP

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("mixing-mcp")

# Initialize the MCP server
mcp = FastMCP("mixing-calculator")

# Import omnitools (consolidated tools)
from omnitools.static_mixer import static_mixer
from omnitools.properties import properties
from omnitools.design_audit import design_audit
from omnitools.mixing_report import mixing_report
from omnitools.help_resources import help_resources

# Register omnitools with MCP
mcp.tool()(static_mixer)
mcp.tool()(properties)
mcp.tool()(design_audit)
mcp.tool()(mixing_report)
mcp.tool()(help_resources)

# Log information about available dependencies
from utils.import_helpers import COOLPROP_AVAILABLE


def main():
    logger.info("Starting Mixing MCP server...")
    logger.info("CoolProp available: %s", COOLPROP_AVAILABLE)

    # Log which omnitools are registered
    logger.info("Registered omnitools:")
    logger.info("  - static_mixer: Mixing performance evaluation and parameter sweeps")
    logger.info("  - properties: Carrier water and dosing chemical properties")
    logger.info("  - design_audit: Narrative engineering audit and design-guide extraction")
    logger.info("  - mixing_report: Markdown report of a scenario")
    logger.info("  - help_resources: Mixer models, regimes and chemical presets")

    # Start the server
    mcp.run()


if __name__ == "__main__":
    main()
