"""LoadingScreen — shown while the startup probe is outstanding."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, LoadingIndicator


class LoadingScreen(Screen):  # type: ignore[type-arg]
    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="loading-root"):
            yield LoadingIndicator(id="loading-indicator")
            yield Label("Connecting to sync engine…", id="loading-label")
        yield Footer()
