"""Date tag MCP tools.

All tools delegate to :mod:`date_tags.operations`.
"""
from __future__ import annotations

from typing import Any

from date_tags.config import get_configuration, resolve_vault
from date_tags.models import AddTodayTagInput, ProcessNoteInput, ReadDateHistoryInput
from date_tags.operations import add_today_tag, process_note, read_date_history
from date_tags.server import mcp


@mcp.tool()
async def add_today_date_tag(input: AddTodayTagInput) -> dict[str, Any]:
    """Add today's date tag (e.g. ``date/2025/10/27``) to a note.

    Only the tag list changes; timestamps and type are left alone. The tag is
    not added twice on the same day.

    Returns:
        {
            "vault": str,
            "note": str,
            "kind": "add_today_tag",
            "status": "updated" | "unchanged" | "error",
            "fields_updated": list[str],
            "error": str  # only when status is "error"
        }
    """
    configuration = get_configuration()
    vault = resolve_vault(input.vault, configuration)
    return add_today_tag(vault, input.title, configuration.settings)


@mcp.tool()
async def process_note_dates(input: ProcessNoteInput) -> dict[str, Any]:
    """Apply created/modified/type maintenance and date tags to a note.

    ``kind`` selects the context: ``new_document`` fills missing timestamps
    and type, ``user_edit`` refreshes ``modified``, ``template_expansion_complete``
    only maintains tags.

    Returns:
        Same payload as add_today_date_tag, with ``kind`` set to the context.
    """
    configuration = get_configuration()
    vault = resolve_vault(input.vault, configuration)
    return process_note(vault, input.title, input.kind, configuration.settings)


@mcp.tool()
async def read_note_date_history(input: ReadDateHistoryInput) -> dict[str, Any]:
    """Read a note's timestamps and the list of days it was edited.

    Returns:
        {
            "vault": str,
            "note": str,
            "created": str | None,
            "modified": str | None,
            "type": str | None,
            "tags": list,
            "visited": list[str],  # ISO dates, oldest first
            "has_frontmatter": bool
        }

    Error Handling:
        - Note not found → FileNotFoundError
        - Broken header block → MetadataParseError with the parser detail
    """
    configuration = get_configuration()
    vault = resolve_vault(input.vault, configuration)
    return read_date_history(vault, input.title, configuration.settings)
