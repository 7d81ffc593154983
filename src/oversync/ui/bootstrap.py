"""
Bootstrap controller — owns the top-level AppPhase.

On start it probes the engine once.  A successful probe means the engine is
initialized (``READY``); any failure means it is not (``NEEDS_ONBOARDING``).
The failure is not an error from the user's point of view and is not retried.

The phase is held here and nowhere else.  Views subscribe to changes::

    controller = BootstrapController(StatusClient(backend))
    unsubscribe = controller.subscribe(on_phase)
    await controller.start()
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from oversync.core.exceptions import PhaseTransitionError
from oversync.core.status import StatusClient
from oversync.ui.state import VALID_PHASE_TRANSITIONS, AppPhase

logger = structlog.get_logger()

PhaseListener = Callable[[AppPhase], None]


class BootstrapController:
    def __init__(self, status_client: StatusClient) -> None:
        self._status = status_client
        self._phase = AppPhase.UNKNOWN
        self._started = False
        self._listeners: list[PhaseListener] = []

    @property
    def phase(self) -> AppPhase:
        return self._phase

    def subscribe(self, listener: PhaseListener) -> Callable[[], None]:
        """Register *listener* for phase changes; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def start(self) -> AppPhase:
        """Probe the engine once and resolve the phase.  Later calls are no-ops."""
        if self._started:
            return self._phase
        self._started = True

        try:
            await self._status.probe()
        except Exception as exc:  # noqa: BLE001
            logger.info("bootstrap_probe_failed", error=str(exc))
            self._transition(AppPhase.NEEDS_ONBOARDING)
        else:
            self._transition(AppPhase.READY)
        return self._phase

    def complete_onboarding(self) -> None:
        """Called once the wizard's initialize call has succeeded."""
        if self._phase is not AppPhase.NEEDS_ONBOARDING:
            raise PhaseTransitionError(
                f"Invalid transition {self._phase.name} -> READY (onboarding not active)"
            )
        self._transition(AppPhase.READY)

    def _transition(self, target: AppPhase) -> None:
        if target not in VALID_PHASE_TRANSITIONS[self._phase]:
            raise PhaseTransitionError(
                f"Invalid transition {self._phase.name} -> {target.name}"
            )
        logger.info("app_phase_changed", old=self._phase.name, new=target.name)
        self._phase = target
        for listener in list(self._listeners):
            listener(target)
