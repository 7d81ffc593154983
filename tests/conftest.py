"""Shared fixtures: a scriptable in-memory SyncBackend."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest
import structlog

from oversync.core.exceptions import BackendError
from oversync.core.models import FileActivityEntry, GithubConfig, SyncStatus

NOW = datetime(2026, 2, 21, 12, 0, tzinfo=UTC)


def make_entry(path: str = "notes/a.md", size: int = 100) -> FileActivityEntry:
    return FileActivityEntry(
        path=path, size=size, content_hash=bytes(range(32)), last_modified=NOW
    )


class FakeBackend:
    """SyncBackend whose replies and failures are set per test.

    Each operation records its calls.  Setting a ``*_gate`` event makes the
    operation wait for it, which lets tests hold a call in flight.
    """

    def __init__(self) -> None:
        self.status = SyncStatus(is_syncing=False, last_sync=NOW, peers_connected=1)
        self.activity: list[FileActivityEntry] = [make_entry()]
        self.ticket = "ticket-local-001"

        self.probe_error: str | None = None
        self.status_error: str | None = None
        self.activity_error: str | None = None
        self.initialize_error: str | None = None
        self.ticket_error: str | None = None
        self.connect_error: str | None = None

        self.status_gate: asyncio.Event | None = None
        self.activity_gate: asyncio.Event | None = None
        self.initialize_gate: asyncio.Event | None = None
        self.ticket_gate: asyncio.Event | None = None
        self.connect_gate: asyncio.Event | None = None

        self.probe_calls = 0
        self.status_calls = 0
        self.activity_calls = 0
        self.initialize_calls: list[tuple[str, GithubConfig | None, str]] = []
        self.ticket_calls = 0
        self.connect_calls: list[str] = []
        self.closed = False

    @staticmethod
    async def _wait(gate: asyncio.Event | None) -> None:
        if gate is not None:
            await gate.wait()

    async def probe_status(self) -> SyncStatus:
        self.probe_calls += 1
        if self.probe_error:
            raise BackendError(self.probe_error)
        return self.status

    async def fetch_status(self) -> SyncStatus:
        self.status_calls += 1
        await self._wait(self.status_gate)
        if self.status_error:
            raise BackendError(self.status_error)
        return self.status

    async def fetch_activity(self) -> list[FileActivityEntry]:
        self.activity_calls += 1
        await self._wait(self.activity_gate)
        if self.activity_error:
            raise BackendError(self.activity_error)
        return list(self.activity)

    async def initialize(
        self, vault_path: str, github_config: GithubConfig | None, encryption_key: str
    ) -> None:
        self.initialize_calls.append((vault_path, github_config, encryption_key))
        await self._wait(self.initialize_gate)
        if self.initialize_error:
            raise BackendError(self.initialize_error)

    async def generate_pairing_ticket(self) -> str:
        self.ticket_calls += 1
        await self._wait(self.ticket_gate)
        if self.ticket_error:
            raise BackendError(self.ticket_error)
        return self.ticket

    async def connect_peer(self, ticket: str) -> None:
        self.connect_calls.append(ticket)
        await self._wait(self.connect_gate)
        if self.connect_error:
            raise BackendError(self.connect_error)

    async def aclose(self) -> None:
        self.closed = True


class FakePicker:
    def __init__(self, result: str | None) -> None:
        self.result = result
        self.calls = 0

    async def select_directory(self) -> str | None:
        self.calls += 1
        return self.result


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def backend_factory():
    return FakeBackend


@pytest.fixture()
def picker() -> FakePicker:
    return FakePicker("/vault")


@pytest.fixture()
def cancelled_picker() -> FakePicker:
    return FakePicker(None)


@pytest.fixture()
def entry_factory():
    return make_entry


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep config/log lookups out of the real home directory."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    for var in (
        "OVERSYNC_CONFIG",
        "OVERSYNC_BACKEND_URL",
        "OVERSYNC_LOG_LEVEL",
        "OVERSYNC_POLL_INTERVAL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """CLI tests bind structlog to CliRunner's streams; undo that after each test."""
    yield
    structlog.reset_defaults()
