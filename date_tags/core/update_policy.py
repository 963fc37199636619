"""Decide which header and tag mutations a note needs.

Every planner is a pure function of ``(document, settings, now)``: it never
touches storage and never mutates the document it was given. The resulting
:class:`UpdatePlan` carries the ordered mutations, the mutated copy and its
serialized text, so the caller only has to decide whether to write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable

from date_tags.constants import CREATED_KEY, MODIFIED_KEY, TAGS_KEY, TYPE_KEY
from date_tags.core.metadata_document import MetadataDocument
from date_tags.core.tag_operations import add_tag, ensure_tag_at_front
from date_tags.core.time_source import build_date_key, format_timestamp, parse_timestamp
from date_tags.data_models import EventKind
from date_tags.settings import DateTagSettings

logger = logging.getLogger(__name__)


class MutationOp(Enum):
    SET = "set"
    SET_IF_ABSENT = "set_if_absent"
    ADD_TAG = "add_tag"
    ENSURE_TAG_AT_FRONT = "ensure_tag_at_front"


@dataclass(frozen=True)
class Mutation:
    """One header or tag operation. ``key`` is unused for tag operations."""

    op: MutationOp
    value: Any
    key: str = ""

    def apply(self, document: MetadataDocument) -> bool:
        if self.op is MutationOp.SET:
            return document.set(self.key, self.value)
        if self.op is MutationOp.SET_IF_ABSENT:
            return document.set_if_absent(self.key, self.value)
        if self.op is MutationOp.ADD_TAG:
            return add_tag(document, self.value)
        return ensure_tag_at_front(document, self.value)


@dataclass(frozen=True)
class UpdatePlan:
    """Outcome of planning one invocation."""

    kind: EventKind
    mutations: tuple[Mutation, ...]
    applied: tuple[Mutation, ...]
    document: MetadataDocument
    original_text: str
    text: str
    always_apply: bool = False

    @property
    def apply_needed(self) -> bool:
        """Whether the note must be rewritten.

        New documents are always written; other contexts only when a mutation
        changed the header. Formatting differences alone never trigger a write.
        """
        return self.always_apply or bool(self.applied)

    @property
    def changed_fields(self) -> list[str]:
        """Header keys touched by mutations that actually changed something."""
        return sorted({m.key or TAGS_KEY for m in self.applied})


# ==============================================================================
# PLANNERS
# ==============================================================================


def _creation_tag_mutations(document: MetadataDocument, settings: DateTagSettings) -> list[Mutation]:
    if not settings.preserve_creation_tag:
        return []
    created = parse_timestamp(document.header.get(CREATED_KEY))
    if created is None:
        logger.debug("No parseable '%s' value; creation tag left alone", CREATED_KEY)
        return []
    return [Mutation(MutationOp.ENSURE_TAG_AT_FRONT, build_date_key(settings.base_tag, created).tag)]


def _today_mutation(settings: DateTagSettings, now: datetime) -> Mutation:
    # Suppressed when today's tag is already present: one date tag per day.
    return Mutation(MutationOp.ADD_TAG, build_date_key(settings.base_tag, now).tag)


def new_document_mutations(
    document: MetadataDocument, settings: DateTagSettings, now: datetime
) -> list[Mutation]:
    timestamp = format_timestamp(now)
    mutations = [
        Mutation(MutationOp.SET_IF_ABSENT, timestamp, CREATED_KEY),
        Mutation(MutationOp.SET_IF_ABSENT, timestamp, MODIFIED_KEY),
    ]
    if settings.add_type_if_missing:
        mutations.append(Mutation(MutationOp.SET_IF_ABSENT, settings.type_value, TYPE_KEY))
    mutations.append(_today_mutation(settings, now))
    return mutations


def user_edit_mutations(
    document: MetadataDocument, settings: DateTagSettings, now: datetime
) -> list[Mutation]:
    mutations = []
    if settings.update_modified_on_edit and not settings.delegate_modified_to_linter:
        mutations.append(Mutation(MutationOp.SET, format_timestamp(now), MODIFIED_KEY))
    mutations.extend(_creation_tag_mutations(document, settings))
    mutations.append(_today_mutation(settings, now))
    return mutations


def template_complete_mutations(
    document: MetadataDocument, settings: DateTagSettings, now: datetime
) -> list[Mutation]:
    return [*_creation_tag_mutations(document, settings), _today_mutation(settings, now)]


def add_today_tag_mutations(
    document: MetadataDocument, settings: DateTagSettings, now: datetime
) -> list[Mutation]:
    return [_today_mutation(settings, now)]


PLANNERS: dict[EventKind, Callable[[MetadataDocument, DateTagSettings, datetime], list[Mutation]]] = {
    EventKind.NEW_DOCUMENT: new_document_mutations,
    EventKind.USER_EDIT: user_edit_mutations,
    EventKind.TEMPLATE_EXPANSION_COMPLETE: template_complete_mutations,
    EventKind.ADD_TODAY_TAG: add_today_tag_mutations,
}


def plan_update(
    kind: EventKind,
    document: MetadataDocument,
    settings: DateTagSettings,
    now: datetime,
    original_text: str | None = None,
) -> UpdatePlan:
    """Compute and apply the mutations for ``kind`` on a copy of ``document``.

    Args:
        kind: Processing context.
        document: Parsed note. Left untouched.
        settings: Effective engine settings.
        now: Instant used for timestamps and today's tag.
        original_text: Text the document was parsed from. Defaults to the
            document's own serialization.

    Returns:
        The :class:`UpdatePlan`; check ``apply_needed`` before writing.

    Raises:
        MetadataParseError: If the mutated header cannot be serialized.
    """
    if original_text is None:
        original_text = document.serialize(settings.indent_width)

    mutations = tuple(PLANNERS[kind](document, settings, now))
    updated = document.copy()
    applied = tuple(mutation for mutation in mutations if mutation.apply(updated))

    return UpdatePlan(
        kind=kind,
        mutations=mutations,
        applied=applied,
        document=updated,
        original_text=original_text,
        text=updated.serialize(settings.indent_width),
        always_apply=kind is EventKind.NEW_DOCUMENT,
    )


def plan_for_text(
    kind: EventKind,
    raw_text: str,
    settings: DateTagSettings,
    now: datetime,
) -> UpdatePlan:
    """Parse ``raw_text`` and plan ``kind`` against it.

    Raises:
        MetadataParseError: If the header block is structurally broken.
    """
    return plan_update(kind, MetadataDocument.parse(raw_text), settings, now, original_text=raw_text)
