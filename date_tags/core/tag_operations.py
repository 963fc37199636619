"""Operations over the header's ``tags`` list."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any

from date_tags.constants import TAGS_KEY
from date_tags.core.metadata_document import MetadataDocument


class TagsShape(Enum):
    ABSENT = "absent"
    SINGLE = "single"
    LIST = "list"
    OTHER = "other"


@dataclass(frozen=True)
class TagsField:
    """Classified view of whatever the header stores under ``tags``."""

    shape: TagsShape
    value: Any = None

    @classmethod
    def classify(cls, raw: Any) -> "TagsField":
        if raw is None or raw == "":
            return cls(TagsShape.ABSENT)
        if isinstance(raw, str):
            return cls(TagsShape.SINGLE, raw)
        if isinstance(raw, list):
            return cls(TagsShape.LIST, raw)
        return cls(TagsShape.OTHER, raw)

    def normalized(self) -> list[Any]:
        """Return the tag list this field stands for.

        ``Other`` shapes (numbers, mappings, ...) are discarded, not merged.
        """
        if self.shape is TagsShape.SINGLE:
            return [self.value]
        if self.shape is TagsShape.LIST:
            return list(self.value)
        return []


def normalize_tags(document: MetadataDocument) -> list[Any]:
    """Normalize ``tags`` in place and return the live list."""
    tags = TagsField.classify(document.header.get(TAGS_KEY)).normalized()
    document.header[TAGS_KEY] = tags
    return tags


def add_tag(document: MetadataDocument, tag: str) -> bool:
    """Append ``tag`` unless an identical tag is already present.

    Returns:
        True when the list (or its shape) changed.
    """
    before = document.header.get(TAGS_KEY)
    tags = normalize_tags(document)
    if tag not in tags:
        tags.append(tag)
        return True
    return before != tags


def ensure_tag_at_front(document: MetadataDocument, tag: str) -> bool:
    """Move the first occurrence of ``tag`` to index 0, inserting it if missing.

    Later duplicates of ``tag`` stay where they are.

    Returns:
        True when the list (or its shape) changed.
    """
    before = document.header.get(TAGS_KEY)
    tags = normalize_tags(document)
    if tag in tags:
        tags.remove(tag)
    tags.insert(0, tag)
    return before != tags


def visited_dates(document: MetadataDocument, base: str) -> list[date]:
    """Return the distinct days recorded by ``base/YYYY/MM/DD`` tags, oldest first."""
    pattern = re.compile(rf"^{re.escape(base)}/(\d{{4}})/(\d{{2}})/(\d{{2}})$")
    raw = TagsField.classify(document.header.get(TAGS_KEY)).normalized()

    days: set[date] = set()
    for tag in raw:
        match = pattern.match(str(tag))
        if not match:
            continue
        try:
            days.add(date(*(int(part) for part in match.groups())))
        except ValueError:
            continue
    return sorted(days)
