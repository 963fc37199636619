"""Full-text read/write access to notes inside a vault."""

from __future__ import annotations

import logging
from pathlib import Path

from date_tags.constants import NOTE_EXTENSION
from date_tags.data_models import VaultMetadata
from date_tags.errors import WriteFailure

logger = logging.getLogger(__name__)


def ensure_vault_ready(vault: VaultMetadata) -> None:
    """Ensure the target vault directory is accessible before performing operations.

    Raises:
        FileNotFoundError: If the vault path does not exist or is not a directory.
    """
    if not vault.path.is_dir():
        raise FileNotFoundError(f"Vault '{vault.name}' is not accessible at {vault.path}")


def construct_note_path(identifier: str) -> Path:
    """Construct a relative note path from a pre-validated note identifier.

    The identifier may omit the ``.md`` extension.

    Examples:
        >>> construct_note_path("My Note")
        PosixPath('My Note.md')
        >>> construct_note_path("Folder/My Note.md")
        PosixPath('Folder/My Note.md')
    """
    parts = identifier.split("/")
    leaf = parts[-1]
    if not leaf.lower().endswith(NOTE_EXTENSION):
        leaf = f"{leaf}{NOTE_EXTENSION}"

    if len(parts) == 1:
        return Path(leaf)
    return Path(*parts[:-1]) / leaf


def document_id_for(vault: VaultMetadata, path: Path) -> str:
    """Convert an absolute note path into a forward-slash document id."""
    relative = Path(path).resolve(strict=False).relative_to(vault.path.resolve(strict=False))
    return relative.as_posix()


class VaultStorage:
    """Reads and writes whole notes addressed by vault-relative document ids."""

    def __init__(self, vault: VaultMetadata) -> None:
        self.vault = vault

    def resolve(self, document_id: str) -> Path:
        """Resolve a document id to an absolute path inside the vault.

        Raises:
            ValueError: If the resolved path escapes the vault root.
        """
        candidate = (self.vault.path / construct_note_path(document_id)).resolve(strict=False)
        vault_root = self.vault.path.resolve(strict=False)
        if not candidate.is_relative_to(vault_root):
            raise ValueError("Note path escapes the configured vault.")
        return candidate

    def read_text(self, document_id: str) -> str:
        """Return the full note text.

        Raises:
            FileNotFoundError: If the note does not exist.
            ValueError: If the note is not UTF-8 encoded.
        """
        ensure_vault_ready(self.vault)
        target = self.resolve(document_id)
        if not target.is_file():
            raise FileNotFoundError(f"Note '{document_id}' not found in vault '{self.vault.name}'.")
        try:
            return target.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"Note '{document_id}' is not UTF-8 encoded and cannot be processed.") from exc

    def write_text(self, document_id: str, text: str) -> None:
        """Replace the full note text.

        Raises:
            WriteFailure: If the filesystem rejects the write.
        """
        target = self.resolve(document_id)
        try:
            target.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise WriteFailure(document_id, str(exc)) from exc
        logger.info("Wrote note '%s' in vault '%s'", document_id, self.vault.name)
