"""
In-memory sync engine for ``oversync ui --demo``.

No engine wiring.  Canned status and activity so the shell can be driven end
to end without a running engine.  Starts uninitialized, so the onboarding
wizard is shown first.
"""

from __future__ import annotations

import asyncio
import hashlib
import secrets
from datetime import UTC, datetime, timedelta

import structlog

from oversync.core.exceptions import BackendError
from oversync.core.models import FileActivityEntry, GithubConfig, SyncStatus

logger = structlog.get_logger()

TICKET_PREFIX = "oversync-ticket-"

_SEED_FILES = [
    ("Projects/Obsidian/Roadmap.md", 4_812, timedelta(minutes=2)),
    ("Archive/OldNotes.zip", 2_306_114, timedelta(minutes=15)),
    ("DailyNotes/2026-02-21.md", 1_204, timedelta(hours=1)),
]


def seed_activity(now: datetime | None = None) -> list[FileActivityEntry]:
    now = now or datetime.now(UTC)
    return [
        FileActivityEntry(
            path=path,
            size=size,
            content_hash=hashlib.sha256(path.encode()).digest(),
            last_modified=now - age,
        )
        for path, size, age in _SEED_FILES
    ]


class DemoBackend:
    """SyncBackend with canned data and a configurable artificial latency."""

    def __init__(self, *, initialized: bool = False, latency: float = 0.2) -> None:
        self._initialized = initialized
        self._latency = latency
        self._peers = 0
        self._last_sync: datetime | None = datetime.now(UTC) if initialized else None
        self._issued: set[str] = set()
        self._consumed: set[str] = set()
        self.vault_path = ""
        self.github_config: GithubConfig | None = None

    async def _pause(self) -> None:
        if self._latency:
            await asyncio.sleep(self._latency)

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise BackendError("Sync engine not initialized")

    async def probe_status(self) -> SyncStatus:
        return await self.fetch_status()

    async def fetch_status(self) -> SyncStatus:
        await self._pause()
        self._require_initialized()
        return SyncStatus(
            is_syncing=False, last_sync=self._last_sync, peers_connected=self._peers
        )

    async def fetch_activity(self) -> list[FileActivityEntry]:
        await self._pause()
        self._require_initialized()
        return seed_activity()

    async def initialize(
        self,
        vault_path: str,
        github_config: GithubConfig | None,
        encryption_key: str,
    ) -> None:
        await self._pause()
        if not vault_path:
            raise BackendError("Vault path is required")
        if not encryption_key:
            raise BackendError("Encryption key is required")
        if github_config is not None and not (github_config.owner and github_config.repo):
            raise BackendError("GitHub owner and repository are required when a token is set")
        self.vault_path = vault_path
        self.github_config = github_config
        self._initialized = True
        self._last_sync = datetime.now(UTC)
        logger.info("demo_engine_initialized", vault_path=vault_path, github=bool(github_config))

    async def generate_pairing_ticket(self) -> str:
        await self._pause()
        self._require_initialized()
        ticket = TICKET_PREFIX + secrets.token_hex(16)
        self._issued.add(ticket)
        return ticket

    async def connect_peer(self, ticket: str) -> None:
        await self._pause()
        self._require_initialized()
        ticket = ticket.strip()
        if not ticket.startswith(TICKET_PREFIX):
            raise BackendError("Invalid ticket: not an OverSync pairing ticket")
        if ticket in self._issued:
            raise BackendError("Cannot pair with this device's own ticket")
        if ticket in self._consumed:
            raise BackendError("Ticket expired: it has already been used")
        self._consumed.add(ticket)
        self._peers += 1
        self._last_sync = datetime.now(UTC)
