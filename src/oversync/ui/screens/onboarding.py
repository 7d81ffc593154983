"""
OnboardingScreen — renders the OnboardingWizard.

Widget tree::

    Header
    #wizard-root  (Container)
      #wizard-title     (Label)
      #wizard-progress  (Label — step dots)
      #wizard-steps     (ContentSwitcher — one Vertical per WizardStep)
      #wizard-error     (Label)
      .wizard-nav       (Horizontal — Back / Next)
    Footer

All state lives in the wizard; this screen re-renders after every action.
"""

from __future__ import annotations

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, ContentSwitcher, Footer, Header, Input, Label, Static

from oversync.core.backend import DirectoryPicker
from oversync.ui.onboarding import OnboardingWizard
from oversync.ui.state import WIZARD_STEPS

_INPUT_FIELDS = {
    "gh-token": "token",
    "gh-owner": "owner",
    "gh-repo": "repo",
    "gh-branch": "branch",
}


class OnboardingScreen(Screen):  # type: ignore[type-arg]
    BINDINGS = [
        Binding("escape", "back", "Back", show=True),
    ]

    def __init__(self, wizard: OnboardingWizard, picker: DirectoryPicker) -> None:
        super().__init__()
        self._wizard = wizard
        self._picker = picker

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="wizard-root"):
            yield Label("OverSync Setup", id="wizard-title")
            yield Label("", id="wizard-progress")
            with ContentSwitcher(initial="welcome", id="wizard-steps"):
                with Vertical(id="welcome"):
                    yield Label("Welcome to OverSync", classes="step-title")
                    yield Static(
                        "Private, fast peer-to-peer sync for your personal vaults and notes.\n\n"
                        "Setup takes a minute:\n"
                        "  1) Choose the vault directory to keep in sync\n"
                        "  2) Optionally mirror it to a private GitHub repository\n"
                        "  3) Set the master encryption key",
                        classes="step-body",
                    )
                with Vertical(id="vault"):
                    yield Label("Local Vault", classes="step-title")
                    yield Static("Choose the directory you want to keep in sync.", classes="step-body")
                    yield Button("Choose directory…", id="btn-choose-vault")
                    yield Label("No directory selected", id="vault-path")
                with Vertical(id="github"):
                    yield Label("GitHub Sync", classes="step-title")
                    yield Static(
                        "Optional: sync your encrypted vault to a private GitHub repository.\n"
                        "Leave the token empty to skip.",
                        classes="step-body",
                    )
                    yield Input(placeholder="Personal access token", password=True, id="gh-token")
                    with Horizontal(classes="gh-row"):
                        yield Input(placeholder="Owner", id="gh-owner")
                        yield Input(placeholder="Repo name", id="gh-repo")
                    yield Input(value="main", placeholder="Branch", id="gh-branch")
                with Vertical(id="encryption"):
                    yield Label("Security", classes="step-title")
                    yield Static(
                        "Your files are encrypted before leaving this device. "
                        "Set a strong master key.",
                        classes="step-body",
                    )
                    yield Input(
                        placeholder="Minimum 32 characters recommended",
                        password=True,
                        id="enc-key",
                    )
                    yield Label("", id="key-hint")
            yield Label("", id="wizard-error", classes="wizard-error")
            with Horizontal(classes="wizard-nav"):
                yield Button("Back", id="btn-back")
                yield Button("Get Started", id="btn-next", variant="primary")
        yield Footer()

    def on_mount(self) -> None:
        self._render_wizard()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_wizard(self) -> None:
        w = self._wizard
        if w.completed:
            return
        self.query_one("#wizard-steps", ContentSwitcher).current = w.step.value
        dots = " ".join("●" if i == w.step_index else "○" for i in range(len(WIZARD_STEPS)))
        self.query_one("#wizard-progress", Label).update(
            f"{dots}   Step {w.step_index + 1} of {len(WIZARD_STEPS)}"
        )

        draft = w.draft
        if draft is not None:
            self.query_one("#vault-path", Label).update(
                draft.vault_path or "No directory selected"
            )
        self.query_one("#key-hint", Label).update(w.key_hint)
        self.query_one("#wizard-error", Label).update(w.error)

        next_btn = self.query_one("#btn-next", Button)
        next_btn.label = w.forward_label
        next_btn.disabled = not w.can_advance
        self.query_one("#btn-back", Button).disabled = not w.can_go_back

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        bid = event.button.id
        if bid == "btn-next":
            self._advance()
        elif bid == "btn-back":
            self.action_back()
        elif bid == "btn-choose-vault":
            self._choose_vault()

    def on_input_changed(self, event: Input.Changed) -> None:
        iid = event.input.id or ""
        if iid in _INPUT_FIELDS:
            self._wizard.set_github_field(_INPUT_FIELDS[iid], event.value)
        elif iid == "enc-key":
            self._wizard.set_encryption_key(event.value)
        self._render_wizard()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self._advance()

    def action_back(self) -> None:
        if self._wizard.back():
            self._render_wizard()

    def _advance(self) -> None:
        if not self._wizard.can_advance:
            return
        self._run_next()

    @work(group="wizard")
    async def _run_next(self) -> None:
        # Forward stays disabled until the step (or initialize call) resolves.
        self.query_one("#btn-next", Button).disabled = True
        await self._wizard.next()
        self._render_wizard()

    @work(exclusive=True, group="picker")
    async def _choose_vault(self) -> None:
        await self._wizard.choose_vault(self._picker)
        self._render_wizard()
