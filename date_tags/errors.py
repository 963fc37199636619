"""Exception types raised by the date tags engine."""

from __future__ import annotations


class DateTagsError(Exception):
    """Base class for engine failures that are reported to the user."""


class MetadataParseError(DateTagsError):
    """A header block is present but structurally broken.

    Carries the offending document path (when known) and the underlying
    detail so the dispatcher can build a single notification.
    """

    def __init__(self, detail: str, path: str | None = None) -> None:
        self.detail = detail
        self.path = path
        super().__init__(f"Failed to parse frontmatter: {detail}")


class WriteFailure(DateTagsError):
    """Storage rejected a write; the note is left in its pre-write state."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Failed to write note: {detail}")
