"""Shared fixtures: fixed clocks, settings, a temporary vault and fake storage."""

from datetime import datetime
from pathlib import Path

import pytest

from date_tags.core.time_source import TimeSource
from date_tags.data_models import VaultMetadata
from date_tags.settings import DateTagSettings

CREATED_AT = datetime(2025, 10, 19, 16, 55, 0)
EDITED_AT = datetime(2025, 10, 20, 9, 30, 15)


class FakeClock:
    """Monotonic clock in seconds that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class MemoryStorage:
    """In-memory note store recording every write."""

    def __init__(self, notes=None, fail_writes: bool = False) -> None:
        self.notes = dict(notes or {})
        self.writes = []
        self.fail_writes = fail_writes
        self.on_write = None

    def read_text(self, document_id: str) -> str:
        if document_id not in self.notes:
            raise FileNotFoundError(f"Note '{document_id}' not found")
        return self.notes[document_id]

    def write_text(self, document_id: str, text: str) -> None:
        if self.on_write is not None:
            self.on_write(document_id)
        if self.fail_writes:
            from date_tags.errors import WriteFailure

            raise WriteFailure(document_id, "read-only file system")
        self.notes[document_id] = text
        self.writes.append((document_id, text))


@pytest.fixture
def settings() -> DateTagSettings:
    return DateTagSettings()


@pytest.fixture
def created_clock() -> TimeSource:
    return TimeSource(lambda: CREATED_AT)


@pytest.fixture
def edited_clock() -> TimeSource:
    return TimeSource(lambda: EDITED_AT)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vault(tmp_path: Path) -> VaultMetadata:
    vault_path = (tmp_path / "vault").resolve()
    vault_path.mkdir()
    return VaultMetadata(name="test", path=vault_path, description="test vault", exists=True)
