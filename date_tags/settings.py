"""Validated engine settings.

Every field is optional. Invalid values never raise: they fall back to the
field default at this boundary so the engine only ever sees usable settings.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

logger = logging.getLogger(__name__)

MIN_DEBOUNCE_MS = 100


def _default_for(info: ValidationInfo) -> Any:
    return DateTagSettings.model_fields[info.field_name].default


class DateTagSettings(BaseModel):
    """User-facing options for timestamp and date tag maintenance."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    base_tag: str = Field("date", description="Prefix for date tags, e.g. 'date' -> date/YYYY/MM/DD.")
    scope_folders: list[str] = Field(
        default_factory=list,
        description="Folder prefixes to monitor. Empty means the whole vault.",
    )
    update_modified_on_edit: bool = Field(True, description="Rewrite 'modified' on every user edit.")
    delegate_modified_to_linter: bool = Field(
        False, description="Leave 'modified' to an external formatter instead."
    )
    add_type_if_missing: bool = Field(True, description="Add a 'type' field to new notes.")
    type_value: str = Field("note", description="Value written to the 'type' field.")
    debounce_ms: int = Field(1500, description="Minimum gap between two edit passes on one note.")
    preserve_creation_tag: bool = Field(True, description="Keep the creation date tag first.")
    templater_delay_ms: int = Field(100, description="Wait before reading a note after template expansion.")
    indent_width: int = Field(2, description="Indentation width for the rendered header.")
    template_folders: list[str] = Field(
        default_factory=list,
        description="Folders whose new notes are populated by a template plugin.",
    )

    @field_validator("base_tag", "type_value", mode="before")
    @classmethod
    def _non_empty_text(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str) and v.strip():
            return v.strip()
        logger.debug("Setting '%s' is empty or invalid (%r); using default", info.field_name, v)
        return _default_for(info)

    @field_validator("scope_folders", "template_folders", mode="before")
    @classmethod
    def _folder_list(cls, v: Any, info: ValidationInfo) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple)):
            logger.debug("Setting '%s' is not a folder list (%r); using default", info.field_name, v)
            return []
        return [str(folder).strip() for folder in v if str(folder).strip()]

    @field_validator(
        "update_modified_on_edit",
        "delegate_modified_to_linter",
        "add_type_if_missing",
        "preserve_creation_tag",
        mode="before",
    )
    @classmethod
    def _flag(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, bool):
            return v
        logger.debug("Setting '%s' is not a boolean (%r); using default", info.field_name, v)
        return _default_for(info)

    @field_validator("debounce_ms", "templater_delay_ms", "indent_width", mode="before")
    @classmethod
    def _bounded_int(cls, v: Any, info: ValidationInfo) -> Any:
        minimum = {"debounce_ms": MIN_DEBOUNCE_MS, "templater_delay_ms": 0, "indent_width": 1}[info.field_name]
        try:
            number = int(v)
        except (TypeError, ValueError):
            number = None
        if isinstance(v, bool) or number is None or number < minimum:
            logger.debug("Setting '%s' is out of range (%r); using default", info.field_name, v)
            return _default_for(info)
        return number
