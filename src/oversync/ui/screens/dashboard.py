"""
DashboardScreen — live sync status, fed by a DashboardPoller.

Widget tree::

    Header
    #dashboard-root  (Vertical)
      #brand-header    (Label)
      #badges          (Horizontal — P2P / sync badges)
      #stat-cards      (Horizontal — state, last update, peers)
      #activity-title  (Label)
      #activity-table  (DataTable)
    Footer

The poll loop is started on mount and stopped on unmount, so it never
outlives this screen.

Keybindings:
  p — pair a new device
  r — refresh now
  q — quit
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Label, Static

from oversync.ui.poller import DashboardPoller
from oversync.ui.state import (
    DashboardView,
    dashboard_summary,
    format_size,
    humanize_ago,
    short_hash,
)


class DashboardScreen(Screen):  # type: ignore[type-arg]
    BINDINGS = [
        Binding("p", "pair", "Pair device", show=True),
        Binding("r", "refresh", "Refresh", show=True),
        Binding("q", "app.quit", "Quit", show=True),
    ]

    def __init__(self, poller: DashboardPoller) -> None:
        super().__init__()
        self._poller = poller
        self._unsubscribe = None

    @property
    def poller(self) -> DashboardPoller:
        return self._poller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="dashboard-root"):
            yield Label("OverSync", id="brand-header")
            with Horizontal(id="badges"):
                yield Label("", id="badge-p2p", classes="badge")
                yield Label("", id="badge-sync", classes="badge")
            with Horizontal(id="stat-cards"):
                yield Static("", id="card-sync", classes="stat-card")
                yield Static("", id="card-last", classes="stat-card")
                yield Static("", id="card-peers", classes="stat-card")
            yield Label("Recent Activity", id="activity-title")
            yield DataTable(id="activity-table", cursor_type="row")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#activity-table", DataTable)
        table.add_columns("File", "Size", "Hash", "Modified")
        self._render_view(self._poller.view)
        self._unsubscribe = self._poller.subscribe(self._render_view)
        self._poller.start()

    async def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        await self._poller.stop()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_view(self, view: DashboardView) -> None:
        summary = dashboard_summary(view)
        p2p = self.query_one("#badge-p2p", Label)
        p2p.update(summary["p2p"])
        p2p.set_class(view.status is not None and view.status.peers_connected > 0, "-active")
        self.query_one("#badge-sync", Label).update(summary["sync"])

        self.query_one("#card-sync", Static).update(f"Sync State\n{summary['sync']}")
        self.query_one("#card-last", Static).update(
            f"Last Update\n{summary['last_update']}\n{summary['files']}"
        )
        self.query_one("#card-peers", Static).update(f"Active Peers\n{summary['peers']}")

        table = self.query_one("#activity-table", DataTable)
        table.clear()
        for entry in view.activity:
            table.add_row(
                entry.path,
                format_size(entry.size),
                short_hash(entry.content_hash),
                humanize_ago(entry.last_modified),
            )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def action_pair(self) -> None:
        from oversync.ui.screens.pairing import PairingScreen

        backend = self.app.backend  # type: ignore[attr-defined]
        self.app.push_screen(PairingScreen(backend), callback=self._on_pairing_closed)

    def _on_pairing_closed(self, _result: object) -> None:
        self.run_worker(self._poller.refresh(), group="refresh")

    def action_refresh(self) -> None:
        self.run_worker(self._poller.refresh(), group="refresh")
