"""Route note events through the gate, the update policy and storage.

This is the only layer that catches errors: every failure in the
read-plan-write pipeline becomes one user notification plus one log line and
is never re-raised into the event source.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional, Protocol

from date_tags.constants import NOTIFICATION_PREFIX
from date_tags.core.time_source import TimeSource
from date_tags.core.update_policy import plan_for_text
from date_tags.data_models import EventKind, NoteEvent
from date_tags.errors import MetadataParseError
from date_tags.gate import ChangeGate
from date_tags.settings import DateTagSettings

logger = logging.getLogger(__name__)

_FAILURE_LABELS = {
    EventKind.NEW_DOCUMENT: "Failed to process new file",
    EventKind.USER_EDIT: "Failed to process file edit",
    EventKind.TEMPLATE_EXPANSION_COMPLETE: "Failed to process template completion",
    EventKind.ADD_TODAY_TAG: "Failed to add today's tag manually",
}


class NoteStorage(Protocol):
    def read_text(self, document_id: str) -> str: ...

    def write_text(self, document_id: str, text: str) -> None: ...


Notifier = Callable[[str], None]


def format_notification(message: str, document_id: Optional[str] = None) -> str:
    if document_id:
        return f"{NOTIFICATION_PREFIX}: {message} (File: {document_id})"
    return f"{NOTIFICATION_PREFIX}: {message}"


class NoteEventDispatcher:
    """Runs one event at a time from any event source.

    Args:
        storage: Full-text note reader/writer.
        settings: Effective engine settings.
        gate: Change gate; a fresh one is created when omitted.
        time_source: Clock used for timestamps and date tags.
        notifier: Receives the user-facing error message.
        sleep: Called with seconds before template-completion processing.
    """

    def __init__(
        self,
        storage: NoteStorage,
        settings: DateTagSettings,
        gate: Optional[ChangeGate] = None,
        time_source: Optional[TimeSource] = None,
        notifier: Optional[Notifier] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.storage = storage
        self.settings = settings
        self.gate = gate or ChangeGate(settings)
        self.time_source = time_source or TimeSource()
        self.notifier = notifier
        self._sleep = sleep
        self._lock = threading.Lock()

    def dispatch(self, event: NoteEvent) -> dict[str, Any]:
        """Gate ``event`` and process it when admitted."""
        if not self.gate.admit(event):
            return {"note": event.document_id, "kind": event.kind.value, "status": "skipped"}
        return self.process(event)

    def process(self, event: NoteEvent) -> dict[str, Any]:
        """Read, plan and (when needed) write one note, reporting any failure.

        Returns:
            ``{"note", "kind", "status", "fields_updated"}`` where status is
            ``"updated"``, ``"unchanged"`` or ``"error"``; errors add ``"error"``.
        """
        with self._lock:
            try:
                return self._process(event)
            except Exception as exc:
                if isinstance(exc, MetadataParseError) and exc.path is None:
                    exc.path = event.document_id
                message = format_notification(f"{_FAILURE_LABELS[event.kind]}: {exc}", event.document_id)
                self.notify(message)
                return {
                    "note": event.document_id,
                    "kind": event.kind.value,
                    "status": "error",
                    "fields_updated": [],
                    "error": message,
                }

    def notify(self, message: str) -> None:
        logger.error(message)
        if self.notifier is not None:
            self.notifier(message)

    def _process(self, event: NoteEvent) -> dict[str, Any]:
        if event.kind is EventKind.TEMPLATE_EXPANSION_COMPLETE and self.settings.templater_delay_ms:
            self._sleep(self.settings.templater_delay_ms / 1000)

        raw_text = self.storage.read_text(event.document_id)
        plan = plan_for_text(event.kind, raw_text, self.settings, self.time_source.now_instant())

        if not plan.apply_needed:
            logger.debug("No changes needed for '%s' (%s)", event.document_id, event.kind.value)
            return {
                "note": event.document_id,
                "kind": event.kind.value,
                "status": "unchanged",
                "fields_updated": [],
            }

        with self.gate.writing(event.document_id):
            self.storage.write_text(event.document_id, plan.text)

        logger.info(
            "Updated '%s' after %s (fields=%s)",
            event.document_id,
            event.kind.value,
            ", ".join(plan.changed_fields) or "none",
        )
        return {
            "note": event.document_id,
            "kind": event.kind.value,
            "status": "updated",
            "fields_updated": plan.changed_fields,
        }
