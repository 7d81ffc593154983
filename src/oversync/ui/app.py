"""
OverSync UI — Textual application shell.

Launched by ``oversync`` (no args) or ``oversync ui``.  The app owns the
BootstrapController; screens are switched in response to its phase changes.
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding

from oversync import __version__
from oversync.core.backend import DirectoryPicker, SyncBackend, close_backend
from oversync.core.config import DEFAULT_POLL_INTERVAL
from oversync.core.status import StatusClient
from oversync.ui.bootstrap import BootstrapController
from oversync.ui.state import AppPhase


class OverSyncApp(App):  # type: ignore[type-arg]
    """OverSync interactive terminal UI."""

    TITLE = f"OverSync {__version__}"
    CSS_PATH = str(Path(__file__).parent / "css" / "oversync.tcss")

    BINDINGS = [
        Binding("ctrl+c", "app.quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self,
        backend: SyncBackend,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        picker: DirectoryPicker | None = None,
    ) -> None:
        super().__init__()
        self.backend = backend
        self.status_client = StatusClient(backend)
        self.bootstrap = BootstrapController(self.status_client)
        self.poll_interval = poll_interval
        self._picker = picker

    @property
    def picker(self) -> DirectoryPicker:
        if self._picker is None:
            from oversync.ui.screens.directory import TextualDirectoryPicker

            self._picker = TextualDirectoryPicker(self)
        return self._picker

    def compose(self) -> ComposeResult:
        # Screens are pushed in on_mount; compose yields nothing here.
        return iter([])

    def on_mount(self) -> None:
        from oversync.ui.screens.loading import LoadingScreen

        self.bootstrap.subscribe(self._on_phase_changed)
        self.push_screen(LoadingScreen())
        self.run_worker(self.bootstrap.start(), group="bootstrap")

    def _on_phase_changed(self, phase: AppPhase) -> None:
        if phase is AppPhase.NEEDS_ONBOARDING:
            from oversync.ui.onboarding import OnboardingWizard
            from oversync.ui.screens.onboarding import OnboardingScreen

            wizard = OnboardingWizard(self.backend, on_complete=self.bootstrap.complete_onboarding)
            self.switch_screen(OnboardingScreen(wizard, self.picker))
        elif phase is AppPhase.READY:
            from oversync.ui.poller import DashboardPoller
            from oversync.ui.screens.dashboard import DashboardScreen

            poller = DashboardPoller(self.status_client, interval=self.poll_interval)
            self.switch_screen(DashboardScreen(poller))

    async def on_unmount(self) -> None:
        await close_backend(self.backend)


def run(backend: SyncBackend, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
    """Entry point called from the CLI."""
    OverSyncApp(backend, poll_interval=poll_interval).run()
