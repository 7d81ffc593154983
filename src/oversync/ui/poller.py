"""
Dashboard poller — periodic status + activity refresh.

Each tick fetches status and recent activity concurrently and, only if both
succeed, swaps in a new :class:`DashboardView`.  A failed tick is logged and
the previous view is kept; the next tick tries again.  There is no backoff.

Every start/stop bumps a generation counter.  A tick captures the generation
when it begins and discards its result if the counter has moved by the time
the responses arrive, so nothing written after ``stop()`` can reach the view.
Within a generation, requests are numbered and a reply older than the view
already applied is dropped, so an overlapping ``refresh()`` cannot be undone
by a slower loop tick.  A listener that raises is logged and skipped.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime

import structlog

from oversync.core.config import DEFAULT_POLL_INTERVAL
from oversync.core.status import StatusClient
from oversync.ui.state import DashboardView

logger = structlog.get_logger()

ViewListener = Callable[[DashboardView], None]


class DashboardPoller:
    def __init__(
        self,
        status_client: StatusClient,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._status = status_client
        self._interval = interval
        self._view = DashboardView()
        self._generation = 0
        self._request_seq = 0
        self._applied_seq = 0
        self._task: asyncio.Task[None] | None = None
        self._listeners: list[ViewListener] = []

    @property
    def view(self) -> DashboardView:
        return self._view

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin polling.  The first tick runs immediately."""
        if self.running:
            return
        self._generation += 1
        self._task = asyncio.create_task(self._loop(self._generation))
        logger.debug("dashboard_poller_started", interval=self._interval)

    async def stop(self) -> None:
        """Cancel the loop and invalidate any in-flight tick.  Idempotent."""
        self._generation += 1
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        except Exception as exc:  # noqa: BLE001
            logger.warning("dashboard_poller_crashed", error=str(exc))
        logger.debug("dashboard_poller_stopped")

    async def _loop(self, generation: int) -> None:
        while generation == self._generation:
            await self._tick(generation)
            await asyncio.sleep(self._interval)

    # ------------------------------------------------------------------
    # Ticks
    # ------------------------------------------------------------------

    async def refresh(self) -> bool:
        """Run one out-of-band tick under the current generation.

        A no-op unless the loop is running.
        """
        if not self.running:
            return False
        return await self._tick(self._generation)

    async def _tick(self, generation: int) -> bool:
        self._request_seq += 1
        seq = self._request_seq
        try:
            status, activity = await self._status.snapshot()
        except Exception as exc:  # noqa: BLE001
            logger.warning("dashboard_poll_failed", error=str(exc))
            return False

        if generation != self._generation:
            logger.debug("dashboard_poll_stale", generation=generation)
            return False
        # A later request already landed; an older reply must not overwrite it.
        if seq < self._applied_seq:
            logger.debug("dashboard_poll_superseded", request=seq)
            return False

        self._applied_seq = seq
        self._view = DashboardView(
            status=status,
            activity=tuple(activity),
            refreshed_at=datetime.now(UTC),
        )
        for listener in list(self._listeners):
            try:
                listener(self._view)
            except Exception as exc:  # noqa: BLE001
                logger.warning("dashboard_listener_failed", error=str(exc))
        return True
