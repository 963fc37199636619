"""Filesystem event source for the dispatcher.

Maps watchdog notifications onto note events:
- created ``.md`` file -> NEW_DOCUMENT
- modified ``.md`` file -> USER_EDIT
- moved into the vault -> NEW_DOCUMENT
- temp file renamed over a note -> USER_EDIT

Scope, debounce and self-write filtering happen in the dispatcher's
:class:`~date_tags.gate.ChangeGate`; this module only translates paths.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import (
    FileCreatedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from date_tags.data_models import EventKind, NoteEvent, VaultMetadata
from date_tags.dispatch import NoteEventDispatcher
from date_tags.storage import document_id_for

logger = logging.getLogger(__name__)


class NoteEventHandler(FileSystemEventHandler):
    """Forwards relevant file events to a :class:`NoteEventDispatcher`.

    Hidden files and directories (``.obsidian``, ``.trash``, ...) are ignored.
    """

    def __init__(
        self,
        vault: VaultMetadata,
        dispatcher: NoteEventDispatcher,
        on_result: Optional[Callable[[dict], None]] = None,
    ):
        super().__init__()
        self.vault = vault
        self.dispatcher = dispatcher
        self.on_result = on_result

    def _document_id(self, path: str) -> Optional[str]:
        try:
            document_id = document_id_for(self.vault, Path(path))
        except ValueError:
            return None
        if any(part.startswith(".") for part in Path(document_id).parts):
            return None
        return document_id

    def _emit(self, path: str, kind: EventKind) -> None:
        document_id = self._document_id(path)
        if document_id is None:
            return
        result = self.dispatcher.dispatch(NoteEvent(document_id, kind))
        if self.on_result and result["status"] != "skipped":
            self.on_result(result)

    def on_created(self, event: FileCreatedEvent) -> None:
        if event.is_directory:
            return
        self._emit(event.src_path, EventKind.NEW_DOCUMENT)

    def on_modified(self, event: FileModifiedEvent) -> None:
        if event.is_directory:
            return
        self._emit(event.src_path, EventKind.USER_EDIT)

    def on_moved(self, event: FileMovedEvent) -> None:
        if event.is_directory:
            return
        source = self._document_id(event.src_path)
        if source is None:
            self._emit(event.dest_path, EventKind.NEW_DOCUMENT)
        elif not source.lower().endswith(".md"):
            # Atomic save: temp file renamed over the note.
            self._emit(event.dest_path, EventKind.USER_EDIT)


def watch_vault(
    vault: VaultMetadata,
    dispatcher: NoteEventDispatcher,
    on_result: Optional[Callable[[dict], None]] = None,
    recursive: bool = True,
) -> tuple[Observer, NoteEventHandler]:
    """Start watching a vault.

    Returns:
        Tuple of (observer, handler); call ``observer.stop()`` to stop watching.
    """
    handler = NoteEventHandler(vault, dispatcher, on_result=on_result)

    observer = Observer()
    observer.schedule(handler, str(vault.path), recursive=recursive)
    observer.start()
    logger.info("Watching vault '%s' at %s", vault.name, vault.path)

    return observer, handler


def run_watch_loop(
    vault: VaultMetadata,
    dispatcher: NoteEventDispatcher,
    on_result: Optional[Callable[[dict], None]] = None,
) -> None:
    """Watch until interrupted. Blocking."""
    observer, _ = watch_vault(vault, dispatcher, on_result=on_result)

    try:
        while True:
            time.sleep(0.5)
    except KeyboardInterrupt:
        observer.stop()

    observer.join()
