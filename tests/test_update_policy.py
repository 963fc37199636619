"""Tests for the per-context update planners."""

from datetime import datetime

import pytest

from conftest import CREATED_AT, EDITED_AT
from date_tags import EventKind, MetadataDocument, MetadataParseError, plan_for_text, plan_update
from date_tags.core.update_policy import MutationOp
from date_tags.settings import DateTagSettings

EXISTING_NOTE = (
    "---\n"
    "created: '2025-10-19 16:55:00'\n"
    "modified: '2025-10-19 16:55:00'\n"
    "tags:\n"
    "  - date/2025/10/19\n"
    "---\n"
    "Body\n"
)


def _header(plan):
    return MetadataDocument.parse(plan.text).header


class TestNewDocument:
    def test_plain_text_gets_full_header(self, settings):
        plan = plan_for_text(EventKind.NEW_DOCUMENT, "Hello world", settings, CREATED_AT)

        assert plan.apply_needed
        assert plan.document.header == {
            "created": "2025-10-19 16:55:00",
            "modified": "2025-10-19 16:55:00",
            "type": "note",
            "tags": ["date/2025/10/19"],
        }
        assert list(plan.document.header) == ["created", "modified", "type", "tags"]
        assert plan.document.body == "Hello world"
        assert _header(plan) == plan.document.header
        assert plan.text.endswith("---\nHello world")

    def test_created_equals_modified(self, settings):
        plan = plan_for_text(EventKind.NEW_DOCUMENT, "---\ntitle: T\n---\n", settings, CREATED_AT)
        header = plan.document.header
        assert header["created"] == header["modified"] == "2025-10-19 16:55:00"
        assert list(header) == ["title", "created", "modified", "type", "tags"]

    def test_existing_values_are_kept(self, settings):
        text = "---\ncreated: '2024-01-01 08:00:00'\ntype: meeting\n---\nBody"
        plan = plan_for_text(EventKind.NEW_DOCUMENT, text, settings, CREATED_AT)
        header = plan.document.header
        assert header["created"] == "2024-01-01 08:00:00"
        assert header["modified"] == "2025-10-19 16:55:00"
        assert header["type"] == "meeting"

    def test_type_is_skipped_when_disabled(self):
        settings = DateTagSettings(add_type_if_missing=False)
        plan = plan_for_text(EventKind.NEW_DOCUMENT, "Hello", settings, CREATED_AT)
        assert "type" not in plan.document.header

    def test_custom_type_and_base(self):
        settings = DateTagSettings(type_value="journal", base_tag="visited")
        plan = plan_for_text(EventKind.NEW_DOCUMENT, "Hello", settings, CREATED_AT)
        assert plan.document.header["type"] == "journal"
        assert plan.document.header["tags"] == ["visited/2025/10/19"]

    def test_apply_is_always_needed(self, settings):
        first = plan_for_text(EventKind.NEW_DOCUMENT, "Hello", settings, CREATED_AT)
        second = plan_for_text(EventKind.NEW_DOCUMENT, first.text, settings, CREATED_AT)
        assert second.text == first.text
        assert second.apply_needed

    def test_input_document_is_not_mutated(self, settings):
        document = MetadataDocument.parse("Hello")
        plan_update(EventKind.NEW_DOCUMENT, document, settings, CREATED_AT)
        assert document.header == {}


class TestUserEdit:
    def test_next_day_edit(self, settings):
        """Creation tag stays first; today's tag is appended once."""
        plan = plan_for_text(EventKind.USER_EDIT, EXISTING_NOTE, settings, EDITED_AT)

        header = _header(plan)
        assert header["created"] == "2025-10-19 16:55:00"
        assert header["modified"] == "2025-10-20 09:30:15"
        assert header["tags"] == ["date/2025/10/19", "date/2025/10/20"]
        assert plan.document.body == "Body\n"
        assert plan.apply_needed

    def test_same_day_edit_does_not_duplicate_todays_tag(self):
        """Only one date tag per day: an existing tag for today suppresses the append.

        The documented product intent of appending a fresh tag on every edit
        conflicts with the add-if-absent helper; this engine suppresses.
        """
        settings = DateTagSettings(update_modified_on_edit=False)
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - date/2025/10/19\n  - date/2025/10/20\n")
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)

        assert plan.document.header["tags"] == ["date/2025/10/19", "date/2025/10/20"]
        assert not plan.apply_needed

    def test_stale_today_duplicates_are_left_alone(self, settings):
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - date/2025/10/19\n  - x\n  - date/2025/10/19\n")
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == [
            "date/2025/10/19",
            "x",
            "date/2025/10/19",
            "date/2025/10/20",
        ]

    def test_creation_tag_is_moved_to_front(self, settings):
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - project\n  - date/2025/10/19\n")
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["date/2025/10/19", "project", "date/2025/10/20"]

    def test_creation_tag_is_restored_when_missing(self, settings):
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - project\n")
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["date/2025/10/19", "project", "date/2025/10/20"]

    def test_creation_on_same_day_is_not_duplicated(self, settings):
        text = "---\ncreated: '2025-10-20 08:00:00'\ntags:\n  - project\n---\n"
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["date/2025/10/20", "project"]

    def test_front_ordering_runs_before_add_today(self, settings):
        mutations = plan_for_text(EventKind.USER_EDIT, EXISTING_NOTE, settings, EDITED_AT).mutations
        assert [m.op for m in mutations] == [
            MutationOp.SET,
            MutationOp.ENSURE_TAG_AT_FRONT,
            MutationOp.ADD_TAG,
        ]

    def test_unquoted_created_timestamp_is_understood(self, settings):
        text = "---\ncreated: 2025-10-19 16:55:00\ntags:\n  - other\n---\n"
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["created"] == datetime(2025, 10, 19, 16, 55)
        assert plan.document.header["tags"][0] == "date/2025/10/19"

    def test_unparseable_created_skips_front_ordering(self, settings):
        text = "---\ncreated: sometime last week\ntags:\n  - other\n---\n"
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["other", "date/2025/10/20"]

    def test_preserve_creation_tag_disabled(self):
        settings = DateTagSettings(preserve_creation_tag=False)
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - project\n")
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["project", "date/2025/10/20"]

    @pytest.mark.parametrize(
        "overrides",
        [{"update_modified_on_edit": False}, {"delegate_modified_to_linter": True}],
    )
    def test_modified_left_alone_when_disabled_or_delegated(self, overrides):
        settings = DateTagSettings(**overrides)
        plan = plan_for_text(EventKind.USER_EDIT, EXISTING_NOTE, settings, EDITED_AT)
        assert plan.document.header["modified"] == "2025-10-19 16:55:00"
        assert all(m.op is not MutationOp.SET for m in plan.mutations)

    def test_user_edit_never_adds_created_or_type(self, settings):
        plan = plan_for_text(EventKind.USER_EDIT, "Just text", settings, EDITED_AT)
        assert "created" not in plan.document.header
        assert "type" not in plan.document.header
        assert plan.document.header == {
            "modified": "2025-10-20 09:30:15",
            "tags": ["date/2025/10/20"],
        }

    def test_bare_string_tags_are_normalized(self, settings):
        text = "---\ncreated: '2025-10-19 16:55:00'\ntags: misc\n---\nBody"
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.document.header["tags"] == ["date/2025/10/19", "misc", "date/2025/10/20"]

    def test_bare_string_tags_without_created(self, settings):
        plan = plan_for_text(EventKind.USER_EDIT, "---\ntags: misc\n---\n", settings, EDITED_AT)
        assert plan.document.header["tags"] == ["misc", "date/2025/10/20"]

    def test_repeated_edit_at_same_instant_keeps_creation_tag_first(self, settings):
        text = EXISTING_NOTE.replace("  - date/2025/10/19\n", "  - project\n")
        first = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        second = plan_for_text(EventKind.USER_EDIT, first.text, settings, EDITED_AT)

        assert first.document.header["tags"][0] == "date/2025/10/19"
        assert second.document.header["tags"][0] == "date/2025/10/19"
        assert second.text == first.text
        assert not second.apply_needed

    def test_no_op_set_does_not_force_rewrite(self):
        settings = DateTagSettings()
        text = (
            "---\n"
            "created: '2025-10-19 16:55:00'\n"
            "modified: '2025-10-20 09:30:15'\n"
            "tags:\n"
            "  - date/2025/10/19\n"
            "  - date/2025/10/20\n"
            "---\n"
            "Body\n"
        )
        plan = plan_for_text(EventKind.USER_EDIT, text, settings, EDITED_AT)
        assert plan.text == text
        assert not plan.apply_needed
        assert plan.changed_fields == []

    def test_changed_fields_reports_effective_mutations(self, settings):
        plan = plan_for_text(EventKind.USER_EDIT, EXISTING_NOTE, settings, EDITED_AT)
        assert plan.changed_fields == ["modified", "tags"]

    def test_malformed_header_raises(self, settings):
        with pytest.raises(MetadataParseError):
            plan_for_text(EventKind.USER_EDIT, "---\ntitle: x\nno end\n", settings, EDITED_AT)


class TestTemplateExpansionComplete:
    def test_only_tags_change(self, settings):
        text = "---\ncreated: '2025-10-19 16:55:00'\nmodified: '2025-10-19 16:55:00'\n---\nFrom template\n"
        plan = plan_for_text(EventKind.TEMPLATE_EXPANSION_COMPLETE, text, settings, EDITED_AT)

        header = plan.document.header
        assert header["modified"] == "2025-10-19 16:55:00"
        assert "type" not in header
        assert header["tags"] == ["date/2025/10/19", "date/2025/10/20"]

    def test_without_created(self, settings):
        plan = plan_for_text(EventKind.TEMPLATE_EXPANSION_COMPLETE, "---\ntitle: T\n---\n", settings, EDITED_AT)
        assert plan.document.header == {"title": "T", "tags": ["date/2025/10/20"]}

    def test_nothing_to_do(self, settings):
        text = "---\ncreated: '2025-10-20 08:00:00'\ntags:\n  - date/2025/10/20\n---\n"
        plan = plan_for_text(EventKind.TEMPLATE_EXPANSION_COMPLETE, text, settings, EDITED_AT)
        assert not plan.apply_needed


class TestAddTodayTag:
    def test_only_today_tag_is_added(self, settings):
        plan = plan_for_text(EventKind.ADD_TODAY_TAG, EXISTING_NOTE, settings, EDITED_AT)
        header = plan.document.header
        assert header["modified"] == "2025-10-19 16:55:00"
        assert header["tags"] == ["date/2025/10/19", "date/2025/10/20"]
        assert [m.op for m in plan.mutations] == [MutationOp.ADD_TAG]

    def test_already_tagged_today(self, settings):
        plan = plan_for_text(EventKind.ADD_TODAY_TAG, EXISTING_NOTE, settings, CREATED_AT)
        assert not plan.apply_needed


class TestSourceFormatting:
    def test_leading_thematic_break_is_treated_as_body(self, settings):
        text = "----\nJust a rule at the top\n"
        plan = plan_for_text(EventKind.NEW_DOCUMENT, text, settings, CREATED_AT)

        assert plan.apply_needed
        assert plan.text.startswith("---\ncreated: '2025-10-19 16:55:00'\n")
        assert plan.text.endswith("---\n" + text)

    @pytest.mark.parametrize(
        "text",
        [
            EXISTING_NOTE.replace("\n", "\r\n"),
            EXISTING_NOTE.replace("tags:", "aliases:\ntags:"),
            EXISTING_NOTE[: -len("Body\n")].rstrip("\n"),
        ],
        ids=["crlf", "empty-value", "closing-at-eof"],
    )
    @pytest.mark.parametrize("kind", [EventKind.ADD_TODAY_TAG, EventKind.TEMPLATE_EXPANSION_COMPLETE])
    def test_unchanged_header_is_not_rewritten(self, settings, text, kind):
        plan = plan_for_text(kind, text, settings, CREATED_AT)

        assert not plan.apply_needed
        assert plan.text == text

    def test_crlf_note_keeps_crlf_when_tagged(self, settings):
        text = EXISTING_NOTE.replace("\n", "\r\n")
        plan = plan_for_text(EventKind.ADD_TODAY_TAG, text, settings, EDITED_AT)

        assert plan.apply_needed
        assert plan.text == text.replace(
            "  - date/2025/10/19\r\n", "  - date/2025/10/19\r\n  - date/2025/10/20\r\n"
        )
