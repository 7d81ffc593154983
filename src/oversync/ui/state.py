"""
UI state types — pure Python dataclasses, no Textual imports.

These can be constructed and tested without a running Textual app.  The
controllers in ``oversync.ui`` own and mutate them; screens only read them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, auto

from oversync.core.models import FileActivityEntry, GithubConfig, SyncStatus


class AppPhase(Enum):
    UNKNOWN = auto()
    NEEDS_ONBOARDING = auto()
    READY = auto()


VALID_PHASE_TRANSITIONS: dict[AppPhase, set[AppPhase]] = {
    AppPhase.UNKNOWN: {AppPhase.NEEDS_ONBOARDING, AppPhase.READY},
    AppPhase.NEEDS_ONBOARDING: {AppPhase.READY},
    AppPhase.READY: set(),
}


# ---------------------------------------------------------------------------
# Onboarding wizard
# ---------------------------------------------------------------------------


class WizardStep(Enum):
    WELCOME = "welcome"
    VAULT = "vault"
    GITHUB = "github"
    ENCRYPTION = "encryption"


WIZARD_STEPS = [WizardStep.WELCOME, WizardStep.VAULT, WizardStep.GITHUB, WizardStep.ENCRYPTION]
WIZARD_TOTAL = len(WIZARD_STEPS)

RECOMMENDED_KEY_BYTES = 32


@dataclass
class OnboardingDraft:
    """Configuration collected by the wizard.  Never partially submitted."""

    vault_path: str | None = None
    github_token: str = ""
    github_owner: str = ""
    github_repo: str = ""
    github_branch: str = "main"
    encryption_key: str = ""

    def github_config(self) -> GithubConfig | None:
        """The GitHub group, or None when no token was entered (sync skipped)."""
        if not self.github_token.strip():
            return None
        return GithubConfig(
            token=self.github_token.strip(),
            owner=self.github_owner.strip(),
            repo=self.github_repo.strip(),
            branch=self.github_branch.strip() or "main",
        )


# ---------------------------------------------------------------------------
# Pairing
# ---------------------------------------------------------------------------


@dataclass
class PairingSession:
    """State of one pairing dialog.  Discarded when the dialog closes."""

    local_ticket: str | None = None
    remote_ticket_input: str = ""
    connecting: bool = False
    last_error: str | None = None
    copied: bool = False


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DashboardView:
    """One consistent snapshot of status + activity, swapped in whole per tick."""

    status: SyncStatus | None = None
    activity: tuple[FileActivityEntry, ...] = field(default_factory=tuple)
    refreshed_at: datetime | None = None

    @property
    def loaded(self) -> bool:
        return self.status is not None


def humanize_ago(ts: datetime | None, now: datetime | None = None) -> str:
    """Render *ts* relative to *now*: "Just now", "2 mins ago", "1 hour ago"."""
    if ts is None:
        return "Never"
    now = now or datetime.now(UTC)
    seconds = int((now - ts).total_seconds())
    if seconds < 60:
        return "Just now"
    for unit, size in (("day", 86_400), ("hour", 3_600), ("min", 60)):
        if seconds >= size:
            n = seconds // size
            return f"{n} {unit}{'s' if n != 1 else ''} ago"
    return "Just now"


def format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{int(value)} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def short_hash(content_hash: bytes, length: int = 8) -> str:
    return content_hash.hex()[: length * 2] if content_hash else "-"


def dashboard_summary(view: DashboardView, now: datetime | None = None) -> dict[str, str]:
    """Labels for the dashboard badges and stat cards."""
    if view.status is None:
        return {
            "p2p": "Connecting…",
            "sync": "—",
            "last_update": "—",
            "peers": "—",
            "files": "—",
        }
    status = view.status
    changed = len(view.activity)
    return {
        "p2p": "P2P Online" if status.peers_connected > 0 else "P2P Offline",
        "sync": "Syncing" if status.is_syncing else "Idle",
        "last_update": humanize_ago(status.last_sync, now),
        "peers": str(status.peers_connected),
        "files": f"{changed} file{'s' if changed != 1 else ''} changed",
    }


__all__ = [
    "AppPhase",
    "DashboardView",
    "OnboardingDraft",
    "PairingSession",
    "RECOMMENDED_KEY_BYTES",
    "VALID_PHASE_TRANSITIONS",
    "WIZARD_STEPS",
    "WIZARD_TOTAL",
    "WizardStep",
    "dashboard_summary",
    "format_size",
    "humanize_ago",
    "short_hash",
]
