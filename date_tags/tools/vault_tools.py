"""MCP tools for vault discovery."""

import logging
from typing import Any

from date_tags.config import get_configuration
from date_tags.models import ListVaultsInput
from date_tags.server import mcp

logger = logging.getLogger(__name__)


@mcp.tool()
async def list_vaults(input: ListVaultsInput) -> dict[str, Any]:
    """List configured vaults and the effective date tag settings.

    Returns:
        {
            "default": str,
            "vaults": [{"name": str, "path": str, "description": str, "exists": bool}],
            "settings": dict
        }

    Error Handling:
        - Config file missing → Error with expected config path
        - Invalid config format → Error describing expected YAML structure
    """
    return get_configuration().as_payload()
