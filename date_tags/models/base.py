"""Base Pydantic model shared by every note-targeting tool input."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class BaseNoteInput(BaseModel):
    """Base model for note operations with common validation.

    Provides standard validation for note identifiers and vault names.
    """

    title: str = Field(
        min_length=1,
        description=(
            "Note identifier (path relative to the vault, .md optional). "
            "Examples: 'Daily Notes/2025-10-27', 'Projects/New Project.md'."
        ),
        examples=["Daily Notes/2025-10-27", "Projects/New Project", "README"],
    )

    vault: Optional[str] = Field(
        None,
        description="Vault name (omit to use the default vault from date_tags.yaml).",
    )

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Normalize the note title to a vault-relative ``.md`` document id.

        Raises:
            ValueError: If the title is empty, absolute, or contains '.'/'..'
                path segments.
        """
        cleaned = v.strip().replace("\\", "/")

        if not cleaned:
            raise ValueError(
                "Note title cannot be empty. "
                "Provide a valid note identifier like 'Daily Notes/2025-10-27'."
            )

        if cleaned.startswith("/"):
            raise ValueError(
                "Note title must be a relative path within the vault. "
                f"Invalid title: '{cleaned}'"
            )

        parts = cleaned.split("/")
        if any(part in {".", ".."} for part in parts):
            raise ValueError(
                "Note title cannot contain '.' or '..' path segments. "
                f"Invalid title: '{cleaned}'"
            )

        if cleaned.lower().endswith(".md"):
            cleaned = cleaned[:-3]
        if not cleaned or cleaned.endswith("/"):
            raise ValueError("Note title cannot be just '.md'. Provide a valid note name.")

        return f"{cleaned}.md"

    @field_validator("vault")
    @classmethod
    def validate_vault(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError(
                "Vault name cannot be empty. "
                "Either omit the vault parameter or provide a name from list_vaults()."
            )
        return v.strip() if v else None
