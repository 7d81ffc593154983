"""
DirectoryPickerScreen — modal directory chooser used by the onboarding wizard.

Widget tree::

    #picker-dialog  (Container)
      #picker-title     (Label)
      #picker-tree      (DirectoryTree)
      #picker-selected  (Label)
      .picker-nav       (Horizontal — Select / Cancel)

Dismisses with the chosen path, or None when cancelled.
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, DirectoryTree, Label


class DirectoryPickerScreen(ModalScreen[str | None]):
    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    def __init__(self, start: Path | None = None) -> None:
        super().__init__()
        self._start = start or Path.home()
        self._selected: str | None = None

    def compose(self) -> ComposeResult:
        with Container(id="picker-dialog"):
            yield Label("Select your Vault Directory", id="picker-title")
            yield DirectoryTree(str(self._start), id="picker-tree")
            yield Label("No directory selected", id="picker-selected")
            with Horizontal(classes="picker-nav"):
                yield Button("Cancel", id="btn-picker-cancel")
                yield Button("Select", id="btn-picker-select", variant="primary", disabled=True)

    def on_directory_tree_directory_selected(self, event: DirectoryTree.DirectorySelected) -> None:
        self._selected = str(event.path)
        self.query_one("#picker-selected", Label).update(self._selected)
        self.query_one("#btn-picker-select", Button).disabled = False

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-picker-select":
            self.dismiss(self._selected)
        elif event.button.id == "btn-picker-cancel":
            self.dismiss(None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TextualDirectoryPicker:
    """DirectoryPicker backed by DirectoryPickerScreen.  Call from a worker."""

    def __init__(self, app: App, start: Path | None = None) -> None:  # type: ignore[type-arg]
        self._app = app
        self._start = start

    async def select_directory(self) -> str | None:
        return await self._app.push_screen_wait(DirectoryPickerScreen(self._start))
