"""Stateless engine: time source, header model, tag operations, update policy."""

from date_tags.core.metadata_document import MetadataDocument
from date_tags.core.tag_operations import (
    TagsField,
    TagsShape,
    add_tag,
    ensure_tag_at_front,
    visited_dates,
)
from date_tags.core.time_source import TimeSource, build_date_key, format_timestamp, parse_timestamp
from date_tags.core.update_policy import Mutation, MutationOp, UpdatePlan, plan_for_text, plan_update

__all__ = [
    "MetadataDocument",
    "TagsField",
    "TagsShape",
    "add_tag",
    "ensure_tag_at_front",
    "visited_dates",
    "TimeSource",
    "build_date_key",
    "format_timestamp",
    "parse_timestamp",
    "Mutation",
    "MutationOp",
    "UpdatePlan",
    "plan_for_text",
    "plan_update",
]
