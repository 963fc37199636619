"""Pydantic input models for MCP tool validation.

Architecture:
- base: BaseNoteInput with note identifier and vault validation
- date_tag_models: inputs for the date tag tools
"""

from .base import BaseNoteInput
from .date_tag_models import (
    AddTodayTagInput,
    ListVaultsInput,
    ProcessNoteInput,
    ReadDateHistoryInput,
)

__all__ = [
    "BaseNoteInput",
    "AddTodayTagInput",
    "ListVaultsInput",
    "ProcessNoteInput",
    "ReadDateHistoryInput",
]
