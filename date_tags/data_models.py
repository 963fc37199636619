"""Data models for vaults, note events and date keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from date_tags.settings import DateTagSettings


@dataclass(frozen=True)
class VaultMetadata:
    """Normalized metadata describing an Obsidian vault."""

    name: str
    path: Path
    description: str
    exists: bool

    def as_payload(self) -> dict[str, Any]:
        """Return a serializable payload representation."""
        return {
            "name": self.name,
            "path": str(self.path),
            "description": self.description,
            "exists": self.path.is_dir(),
        }


class VaultConfiguration:
    """Holds vault metadata, the default vault and the engine settings.

    Provides vault lookup by name and payload serialization for MCP responses.
    """

    def __init__(
        self,
        default_vault: str,
        vaults: dict[str, VaultMetadata],
        settings: DateTagSettings | None = None,
    ) -> None:
        self.default_vault = default_vault
        self.vaults = vaults
        self.settings = settings or DateTagSettings()

    def get(self, name: str) -> VaultMetadata:
        """Get vault metadata by name.

        Raises:
            ValueError: If the vault name is not found in configuration.
        """
        try:
            return self.vaults[name]
        except KeyError as exc:
            raise ValueError(f"Unknown vault '{name}'") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "default": self.default_vault,
            "vaults": [vault.as_payload() for vault in self.vaults.values()],
            "settings": self.settings.model_dump(),
        }


class EventKind(str, Enum):
    """Context in which a note is being processed."""

    NEW_DOCUMENT = "new_document"
    USER_EDIT = "user_edit"
    TEMPLATE_EXPANSION_COMPLETE = "template_expansion_complete"
    ADD_TODAY_TAG = "add_today_tag"


@dataclass(frozen=True)
class NoteEvent:
    """A create / edit / template-complete notification for one note.

    ``document_id`` is the note path relative to the vault root, using
    forward slashes and including the ``.md`` extension.
    """

    document_id: str
    kind: EventKind


@dataclass(frozen=True, eq=False)
class DateKey:
    """Hierarchical ``base/YYYY/MM/DD`` key used as a tag.

    Two keys are equal when their rendered tags are equal.
    """

    base: str
    year: int
    month: int
    day: int
    _tag: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tag", f"{self.base}/{self.year:04d}/{self.month:02d}/{self.day:02d}")

    @property
    def tag(self) -> str:
        return self._tag

    def __str__(self) -> str:
        return self._tag

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DateKey):
            return self._tag == other._tag
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tag)
