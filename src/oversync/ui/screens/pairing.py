"""
PairingScreen — modal dialog for pairing a new device.

Widget tree::

    #pairing-dialog  (Container)
      #pairing-title      (Label)
      #local-ticket       (Static — this device's ticket)
      #btn-copy           (Button)
      #remote-ticket      (Input)
      #btn-connect        (Button)
      #pairing-error      (Label)
      #btn-done           (Button)

The screen owns one PairingCoordinator for its whole lifetime; every exit
goes through ``coordinator.close()``, which dismisses the dialog.
"""

from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from oversync.core.backend import SyncBackend
from oversync.ui.pairing import PairingCoordinator

COPIED_RESET_SECONDS = 2.0


class PairingScreen(ModalScreen[None]):
    BINDINGS = [
        Binding("escape", "close", "Close", show=True),
    ]

    def __init__(self, backend: SyncBackend) -> None:
        super().__init__()
        self._coordinator = PairingCoordinator(backend, on_close=self._on_session_closed)

    @property
    def coordinator(self) -> PairingCoordinator:
        return self._coordinator

    def compose(self) -> ComposeResult:
        with Container(id="pairing-dialog"):
            yield Label("Pair New Device", id="pairing-title")
            yield Label("Your Pairing Ticket", classes="section-title")
            yield Static("Generating ticket…", id="local-ticket")
            yield Button("Copy", id="btn-copy", disabled=True)
            yield Static(
                "Copy this ticket and enter it on the other device to establish a direct P2P link.",
                classes="hint",
            )
            yield Label("Connect to Remote Device", classes="section-title")
            with Horizontal(id="connect-row"):
                yield Input(placeholder="Paste remote ticket here...", id="remote-ticket")
                yield Button("Connect", id="btn-connect", variant="primary", disabled=True)
            yield Label("", id="pairing-error", classes="wizard-error")
            yield Button("Done", id="btn-done")

    def on_mount(self) -> None:
        self._open_session()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_session(self) -> None:
        session = self._coordinator.session
        if session is None:
            return
        if session.local_ticket:
            self.query_one("#local-ticket", Static).update(session.local_ticket)
        elif session.last_error and not session.connecting:
            self.query_one("#local-ticket", Static).update("No ticket available")
        copy_btn = self.query_one("#btn-copy", Button)
        copy_btn.disabled = not session.local_ticket
        copy_btn.label = "Copied" if session.copied else "Copy"

        connect_btn = self.query_one("#btn-connect", Button)
        connect_btn.disabled = not self._coordinator.can_connect
        connect_btn.label = "Connecting…" if session.connecting else "Connect"
        self.query_one("#pairing-error", Label).update(session.last_error or "")

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    @work(group="pairing-ticket")
    async def _open_session(self) -> None:
        await self._coordinator.open()
        self._render_session()

    @work(group="pairing-connect")
    async def _connect(self) -> None:
        self.query_one("#btn-connect", Button).disabled = True
        await self._coordinator.connect()
        self._render_session()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "remote-ticket":
            self._coordinator.set_remote_ticket(event.value)
            self._render_session()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "remote-ticket" and self._coordinator.can_connect:
            self._connect()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id
        if bid == "btn-connect":
            if self._coordinator.can_connect:
                self._connect()
        elif bid == "btn-copy":
            if self._coordinator.copy_ticket(self.app.copy_to_clipboard):
                self._render_session()
                self.set_timer(COPIED_RESET_SECONDS, self._reset_copied)
        elif bid == "btn-done":
            self.action_close()

    def _reset_copied(self) -> None:
        self._coordinator.clear_copied()
        self._render_session()

    def action_close(self) -> None:
        self._coordinator.close()

    def _on_session_closed(self) -> None:
        self.dismiss(None)
