"""MCP tool definitions.

Importing this package registers every @mcp.tool() decorated function.
"""

from date_tags.tools import date_tag_tools
from date_tags.tools import vault_tools

__all__ = [
    "date_tag_tools",
    "vault_tools",
]
