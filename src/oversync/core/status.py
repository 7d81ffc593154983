"""Status client — thin wrapper over the engine's read-only status queries."""

from __future__ import annotations

import asyncio

from oversync.core.backend import SyncBackend
from oversync.core.models import FileActivityEntry, SyncStatus


class StatusClient:
    """Stateless facade over the status/activity operations of a SyncBackend."""

    def __init__(self, backend: SyncBackend) -> None:
        self._backend = backend

    async def probe(self) -> SyncStatus:
        """Raises BackendError when the engine is uninitialized or unreachable."""
        return await self._backend.probe_status()

    async def status(self) -> SyncStatus:
        return await self._backend.fetch_status()

    async def activity(self) -> list[FileActivityEntry]:
        return await self._backend.fetch_activity()

    async def snapshot(self) -> tuple[SyncStatus, list[FileActivityEntry]]:
        """Fetch status and activity concurrently.

        Returns only when both succeed; the first failure is raised.
        """
        status, activity = await asyncio.gather(self.status(), self.activity())
        return status, activity
