"""FastMCP server initialization and tool registration."""

import logging

from mcp.server.fastmcp import FastMCP

from date_tags.constants import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

mcp = FastMCP("date_tags")

# Tool modules are imported in date_tags/tools/__init__.py to register @mcp.tool() functions


def run_server():
    """Start the MCP server with stdio transport."""
    from date_tags import tools  # noqa: F401

    logger.info("Starting date tags MCP server")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
