"""
Onboarding wizard — collects the engine configuration and initializes it.

Steps are strictly linear::

    WELCOME -> VAULT -> GITHUB -> ENCRYPTION -> (submitting)

Forward guards:
  - VAULT requires a vault path (chosen through the DirectoryPicker).
  - ENCRYPTION requires a non-empty key; advancing from it submits.
  - GITHUB is optional as a group: an empty token means "skip GitHub sync"
    and is sent to the engine as ``None``.

A blocked guard leaves the step unchanged; it is not an error.  The draft is
only ever submitted whole, at most once per attempt, and is discarded after a
successful initialize.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog

from oversync.core.backend import DirectoryPicker, SyncBackend
from oversync.ui.state import (
    RECOMMENDED_KEY_BYTES,
    WIZARD_STEPS,
    WIZARD_TOTAL,
    OnboardingDraft,
    WizardStep,
)

logger = structlog.get_logger()

_GITHUB_FIELDS = {
    "token": "github_token",
    "owner": "github_owner",
    "repo": "github_repo",
    "branch": "github_branch",
}


class OnboardingWizard:
    def __init__(
        self,
        backend: SyncBackend,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._backend = backend
        self._on_complete = on_complete
        self._index = 0
        self._draft: OnboardingDraft | None = OnboardingDraft()
        self.submitting = False
        self.completed = False
        self.error = ""

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def step(self) -> WizardStep:
        return WIZARD_STEPS[self._index]

    @property
    def step_index(self) -> int:
        return self._index

    @property
    def draft(self) -> OnboardingDraft | None:
        """The collected configuration; None once initialization succeeded."""
        return self._draft

    @property
    def is_first_step(self) -> bool:
        return self._index == 0

    @property
    def is_last_step(self) -> bool:
        return self._index == WIZARD_TOTAL - 1

    @property
    def progress(self) -> float:
        """0.0 – 1.0 progress through the wizard."""
        return self._index / max(WIZARD_TOTAL - 1, 1)

    @property
    def can_advance(self) -> bool:
        """Whether the forward action is enabled on the current step."""
        if self._draft is None or self.submitting or self.completed:
            return False
        if self.step is WizardStep.VAULT:
            return bool(self._draft.vault_path)
        if self.step is WizardStep.ENCRYPTION:
            return bool(self._draft.encryption_key)
        return True

    @property
    def can_go_back(self) -> bool:
        return not self.is_first_step and not self.submitting and not self.completed

    @property
    def forward_label(self) -> str:
        if self.step is WizardStep.WELCOME:
            return "Get Started"
        if self.step is WizardStep.GITHUB and self._draft and not self._draft.github_token:
            return "Skip for now"
        if self.step is WizardStep.ENCRYPTION:
            return "Initializing…" if self.submitting else "Initialize"
        return "Continue"

    @property
    def key_hint(self) -> str:
        """Non-blocking advice about the encryption key length."""
        if self._draft is None or not self._draft.encryption_key:
            return ""
        n = len(self._draft.encryption_key.encode("utf-8"))
        if n < RECOMMENDED_KEY_BYTES:
            return f"Minimum {RECOMMENDED_KEY_BYTES} characters recommended"
        if n > RECOMMENDED_KEY_BYTES:
            return f"Only the first {RECOMMENDED_KEY_BYTES} bytes of the key are used"
        return ""

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_vault_path(self, path: str | None) -> None:
        """Record a selected directory.  None (selection cancelled) is ignored."""
        if self._draft is None or not path:
            return
        self._draft.vault_path = path
        self.error = ""

    async def choose_vault(self, picker: DirectoryPicker) -> str | None:
        """Ask *picker* for a directory and record it."""
        try:
            path = await picker.select_directory()
        except Exception as exc:  # noqa: BLE001
            logger.warning("directory_picker_failed", error=str(exc))
            return None
        self.set_vault_path(path)
        return path

    def set_github_field(self, name: str, value: str) -> None:
        if self._draft is None:
            return
        try:
            attr = _GITHUB_FIELDS[name]
        except KeyError:
            raise ValueError(f"Unknown GitHub field: {name!r}") from None
        setattr(self._draft, attr, value)
        self.error = ""

    def set_encryption_key(self, key: str) -> None:
        if self._draft is None:
            return
        self._draft.encryption_key = key
        self.error = ""

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def back(self) -> bool:
        """Retreat one step.  Entered fields are kept.  Returns True if moved."""
        if not self.can_go_back:
            return False
        self._index -= 1
        self.error = ""
        return True

    async def next(self) -> bool:
        """Advance one step, or submit from the last step.

        Returns True if the step changed or initialization succeeded.
        """
        if not self.can_advance:
            return False
        if self.is_last_step:
            return await self.submit()
        self._index += 1
        self.error = ""
        return True

    async def submit(self) -> bool:
        """Call initialize once with the whole draft."""
        draft = self._draft
        if draft is None or self.submitting or self.completed:
            return False
        if not draft.vault_path or not draft.encryption_key:
            return False

        self.submitting = True
        self.error = ""
        github = draft.github_config()
        logger.info(
            "onboarding_submit", vault_path=draft.vault_path, github=github is not None
        )
        try:
            await self._backend.initialize(draft.vault_path, github, draft.encryption_key)
        except Exception as exc:  # noqa: BLE001
            logger.warning("onboarding_initialize_failed", error=str(exc))
            self.error = str(exc)
            return False
        finally:
            self.submitting = False

        self._draft = None
        self.completed = True
        logger.info("onboarding_complete")
        if self._on_complete is not None:
            self._on_complete()
        return True
