"""Front-matter header plus body model for a single note."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any, Optional

import frontmatter
import yaml

from date_tags.errors import MetadataParseError

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2
DELIMITER = "---"
LF = "\n"
CRLF = "\r\n"

_HANDLER = frontmatter.YAMLHandler()


class _BlockDumper(yaml.SafeDumper):
    """Safe dumper that indents sequences nested under a mapping key.

    PyYAML renders ``tags:`` followed by ``- item`` at the key's column by
    default; Obsidian writes ``  - item``.
    """

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def _represent_empty(dumper: yaml.SafeDumper, _value: None) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


# `aliases:` stays `aliases:` rather than `aliases: null`.
_BlockDumper.add_representer(type(None), _represent_empty)


# ==============================================================================
# HELPER FUNCTIONS
# ==============================================================================


def _is_boundary(line: str) -> bool:
    return bool(_HANDLER.FM_BOUNDARY.match(line))


def _opens_header(line: str) -> bool:
    # Exactly three dashes; `----` is a thematic break, not a header.
    return line.rstrip() == DELIMITER


def _line_ending(line: str) -> str:
    if line.endswith(CRLF):
        return CRLF
    return LF if line.endswith(LF) else ""


def _split_header(text: str) -> tuple[Optional[str], str, str, str]:
    """Split raw text into ``(header_yaml, body, newline, closing_newline)``.

    The body keeps every byte that followed the closing delimiter line.
    ``newline`` is the opening line's ending; ``closing_newline`` is whatever
    ended the closing delimiter line (empty at end of file).

    Returns:
        ``(None, text, LF, LF)`` when the text does not open with a header block.

    Raises:
        MetadataParseError: If an opening delimiter has no closing delimiter.
    """
    lines = text.splitlines(keepends=True)
    if not lines or not _opens_header(lines[0]):
        return None, text, LF, LF

    newline = _line_ending(lines[0]) or LF
    for index in range(1, len(lines)):
        if _is_boundary(lines[index]):
            header = "".join(lines[1:index])
            return header, "".join(lines[index + 1:]), newline, _line_ending(lines[index])

    raise MetadataParseError("header block is not terminated by a closing '---' line")


def _load_header(header_text: str) -> dict[str, Any]:
    try:
        loaded = _HANDLER.load(header_text)
    except yaml.YAMLError as exc:
        raise MetadataParseError(f"frontmatter contains invalid YAML: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, Mapping):
        raise MetadataParseError(
            f"frontmatter must be a mapping of key/value pairs, got {type(loaded).__name__}"
        )
    return dict(loaded)


# ==============================================================================
# DOCUMENT MODEL
# ==============================================================================


class MetadataDocument:
    """In-memory "header + body" view of a note.

    Built fresh from raw text for every invocation and discarded after
    serialization. Unknown header keys and value shapes pass through untouched.
    """

    def __init__(
        self,
        header: Optional[dict[str, Any]] = None,
        body: str = "",
        has_header: bool = False,
        newline: str = LF,
        closing_newline: str = LF,
    ) -> None:
        self.post = frontmatter.Post(body, handler=_HANDLER)
        self.post.metadata.update(header or {})
        self.has_header = has_header
        self.newline = newline
        self.closing_newline = closing_newline

    @property
    def header(self) -> dict[str, Any]:
        return self.post.metadata

    @property
    def body(self) -> str:
        return self.post.content

    @classmethod
    def parse(cls, raw_text: str) -> "MetadataDocument":
        """Parse raw note text.

        A note without a header block is a valid parse with an empty header and
        the full text as body.

        Raises:
            MetadataParseError: If a header block is present but unterminated,
                not valid YAML, or not a key/value mapping.
        """
        header_text, body, newline, closing_newline = _split_header(raw_text)
        if header_text is None:
            return cls({}, body, has_header=False)
        return cls(_load_header(header_text), body, True, newline, closing_newline)

    def serialize(self, indent_width: int = DEFAULT_INDENT) -> str:
        """Render the header as a block-style YAML section followed by the body.

        Key order is preserved, long values are never wrapped and collections
        are always written in indented block form. The line ending read from
        the source is reused for the header lines.
        """
        if not self.header and not self.has_header:
            return self.body
        closing = f"{DELIMITER}{self.closing_newline}"
        if not self.header:
            return f"{DELIMITER}{self.newline}{closing}{self.body}"

        try:
            rendered = _HANDLER.export(
                self.header,
                Dumper=_BlockDumper,
                sort_keys=False,
                indent=indent_width,
                width=float("inf"),
            )
        except yaml.YAMLError as exc:
            raise MetadataParseError(f"frontmatter cannot be serialized to YAML: {exc}") from exc

        if self.newline != LF:
            rendered = rendered.replace(LF, self.newline)
        return f"{DELIMITER}{self.newline}{rendered}{self.newline}{closing}{self.body}"

    def set_if_absent(self, key: str, value: Any) -> bool:
        """Set ``header[key]`` unless it already holds a value.

        Missing keys, ``None`` and empty strings count as absent.

        Returns:
            True when the header changed.
        """
        current = self.header.get(key)
        if current is not None and current != "":
            return False
        self.header[key] = value
        return True

    def set(self, key: str, value: Any) -> bool:
        """Unconditionally overwrite ``header[key]``; returns True if it differed."""
        changed = key not in self.header or self.header[key] != value
        self.header[key] = value
        return changed

    def copy(self) -> "MetadataDocument":
        return MetadataDocument(
            copy.deepcopy(self.header), self.body, self.has_header, self.newline, self.closing_newline
        )

    def __repr__(self) -> str:
        return f"MetadataDocument(header={self.header!r}, body={self.body[:40]!r}, has_header={self.has_header})"
