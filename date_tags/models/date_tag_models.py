"""Pydantic input models for the date tag tools."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from date_tags.data_models import EventKind

from .base import BaseNoteInput


class ListVaultsInput(BaseModel):
    """Input model for list_vaults. Takes no parameters."""

    model_config = ConfigDict(json_schema_extra={"examples": [{}]})


class AddTodayTagInput(BaseNoteInput):
    """Input model for add_today_date_tag.

    Examples:
        >>> AddTodayTagInput(title="Daily Notes/2025-10-27")
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"title": "Daily Notes/2025-10-27", "vault": None},
                {"title": "Projects/Alpha", "vault": "work"},
            ]
        }
    )


class ProcessNoteInput(BaseNoteInput):
    """Input model for process_note_dates.

    Runs one processing context against a note on demand.
    """

    kind: EventKind = Field(
        EventKind.USER_EDIT,
        description=(
            "Processing context: 'new_document', 'user_edit', "
            "'template_expansion_complete' or 'add_today_tag'."
        ),
    )

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"title": "Inbox/Idea", "kind": "new_document"},
                {"title": "Projects/Alpha", "kind": "user_edit", "vault": "work"},
            ]
        }
    )


class ReadDateHistoryInput(BaseNoteInput):
    """Input model for read_note_date_history."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"title": "Projects/Alpha", "vault": None}]}
    )
