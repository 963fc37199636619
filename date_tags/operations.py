"""Vault-level operations shared by the MCP tools and the CLI."""

from __future__ import annotations

import logging
from typing import Any, Optional

from date_tags.constants import CREATED_KEY, MODIFIED_KEY, TAGS_KEY, TYPE_KEY
from date_tags.core.metadata_document import MetadataDocument
from date_tags.core.tag_operations import TagsField, visited_dates
from date_tags.core.time_source import TimeSource
from date_tags.data_models import EventKind, NoteEvent, VaultMetadata
from date_tags.dispatch import NoteEventDispatcher, Notifier
from date_tags.errors import MetadataParseError
from date_tags.settings import DateTagSettings
from date_tags.storage import VaultStorage

logger = logging.getLogger(__name__)


def build_dispatcher(
    vault: VaultMetadata,
    settings: DateTagSettings,
    time_source: Optional[TimeSource] = None,
    notifier: Optional[Notifier] = None,
) -> NoteEventDispatcher:
    return NoteEventDispatcher(
        VaultStorage(vault),
        settings,
        time_source=time_source,
        notifier=notifier,
    )


def process_note(
    vault: VaultMetadata,
    document_id: str,
    kind: EventKind,
    settings: DateTagSettings,
    time_source: Optional[TimeSource] = None,
    notifier: Optional[Notifier] = None,
) -> dict[str, Any]:
    """Run one processing context against a note, bypassing the change gate.

    Failures are reported through ``notifier`` and the returned payload rather
    than raised.
    """
    dispatcher = build_dispatcher(vault, settings, time_source, notifier)
    result = dispatcher.process(NoteEvent(document_id, kind))
    return {"vault": vault.name, **result}


def add_today_tag(
    vault: VaultMetadata,
    document_id: str,
    settings: DateTagSettings,
    time_source: Optional[TimeSource] = None,
    notifier: Optional[Notifier] = None,
) -> dict[str, Any]:
    """Add today's date tag to a note without touching any other field."""
    return process_note(vault, document_id, EventKind.ADD_TODAY_TAG, settings, time_source, notifier)


def read_date_history(
    vault: VaultMetadata,
    document_id: str,
    settings: DateTagSettings,
) -> dict[str, Any]:
    """Report a note's timestamps and the days it was visited.

    Raises:
        FileNotFoundError: If the note does not exist.
        MetadataParseError: If the note's header block is broken.
    """
    storage = VaultStorage(vault)
    raw_text = storage.read_text(document_id)
    try:
        document = MetadataDocument.parse(raw_text)
    except MetadataParseError as exc:
        exc.path = document_id
        raise

    days = visited_dates(document, settings.base_tag)
    logger.info("Read date history for '%s' in vault '%s' (%d days)", document_id, vault.name, len(days))
    return {
        "vault": vault.name,
        "note": document_id,
        "created": _as_text(document.header.get(CREATED_KEY)),
        "modified": _as_text(document.header.get(MODIFIED_KEY)),
        "type": _as_text(document.header.get(TYPE_KEY)),
        "tags": TagsField.classify(document.header.get(TAGS_KEY)).normalized(),
        "visited": [day.isoformat() for day in days],
        "has_frontmatter": document.has_header,
    }


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
