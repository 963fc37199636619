"""Decide whether an incoming note event should reach the engine at all."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from date_tags.constants import NOTE_EXTENSION
from date_tags.data_models import EventKind, NoteEvent
from date_tags.settings import DateTagSettings

logger = logging.getLogger(__name__)


class ChangeGate:
    """Scope, debounce and self-write filtering for note events.

    Holds the only mutable timing state in the system: the last time each
    note was processed and whether the engine is currently writing. The core
    engine never sees this object.

    Args:
        settings: Effective engine settings.
        clock: Monotonic clock in seconds; injectable for tests.
    """

    def __init__(
        self,
        settings: DateTagSettings,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.settings = settings
        self._clock = clock or time.monotonic
        self.last_processed: dict[str, float] = {}
        self.is_writing = False

    def is_in_scope(self, document_id: str) -> bool:
        """Return True for Markdown notes under one of the scope folders."""
        if not document_id or not document_id.lower().endswith(NOTE_EXTENSION):
            return False
        if not self.settings.scope_folders:
            return True
        return any(document_id.startswith(folder) for folder in self.settings.scope_folders)

    def expects_template(self, document_id: str) -> bool:
        """Return True when a template plugin will populate this new note."""
        return any(
            document_id.startswith(folder.rstrip("/") + "/") for folder in self.settings.template_folders
        )

    def admit(self, event: NoteEvent) -> bool:
        """Return True when ``event`` should be processed now.

        Edits are dropped while the engine is writing and when the same note was
        processed less than ``debounce_ms`` ago. Admitted edits refresh the
        debounce timestamp.
        """
        if not self.is_in_scope(event.document_id):
            logger.debug("Skipping '%s': out of scope", event.document_id)
            return False

        if event.kind is EventKind.NEW_DOCUMENT and self.expects_template(event.document_id):
            logger.debug("Skipping '%s': template expansion pending", event.document_id)
            return False

        if event.kind is EventKind.USER_EDIT:
            if self.is_writing:
                logger.debug("Skipping '%s': triggered by our own write", event.document_id)
                return False
            now = self._clock()
            last = self.last_processed.get(event.document_id)
            if last is not None and (now - last) * 1000 < self.settings.debounce_ms:
                logger.debug("Skipping '%s': debounced", event.document_id)
                return False
            self.last_processed[event.document_id] = now

        return True

    def mark_processed(self, document_id: str) -> None:
        self.last_processed[document_id] = self._clock()

    @contextmanager
    def writing(self, document_id: str) -> Iterator[None]:
        """Flag the engine's own write so the echoed modify event is ignored."""
        self.is_writing = True
        try:
            yield
        finally:
            self.is_writing = False
            self.mark_processed(document_id)
