"""Date tags

Keeps created/modified timestamps, a type marker and daily date tags in the
YAML frontmatter of Markdown notes.
"""

from date_tags.core import (
    MetadataDocument,
    TimeSource,
    UpdatePlan,
    add_tag,
    ensure_tag_at_front,
    plan_for_text,
    plan_update,
)
from date_tags.data_models import DateKey, EventKind, NoteEvent, VaultConfiguration, VaultMetadata
from date_tags.errors import DateTagsError, MetadataParseError, WriteFailure
from date_tags.settings import DateTagSettings

__version__ = "0.3.0"
__all__ = [
    "MetadataDocument",
    "TimeSource",
    "UpdatePlan",
    "add_tag",
    "ensure_tag_at_front",
    "plan_for_text",
    "plan_update",
    "DateKey",
    "EventKind",
    "NoteEvent",
    "VaultConfiguration",
    "VaultMetadata",
    "DateTagsError",
    "MetadataParseError",
    "WriteFailure",
    "DateTagSettings",
]
