"""Unit tests for oversync.ui.state — pure types and display helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from oversync.core.models import FileActivityEntry, SyncStatus
from oversync.ui.state import (
    WIZARD_STEPS,
    DashboardView,
    OnboardingDraft,
    WizardStep,
    dashboard_summary,
    format_size,
    humanize_ago,
    short_hash,
)

NOW = datetime(2026, 2, 21, 12, 0, tzinfo=UTC)


def make_entry(path: str = "notes/a.md") -> FileActivityEntry:
    return FileActivityEntry(path=path, size=1, content_hash=b"\x01", last_modified=NOW)


class TestWizardSteps:
    def test_order(self) -> None:
        assert WIZARD_STEPS == [
            WizardStep.WELCOME,
            WizardStep.VAULT,
            WizardStep.GITHUB,
            WizardStep.ENCRYPTION,
        ]


class TestOnboardingDraft:
    def test_defaults(self) -> None:
        draft = OnboardingDraft()
        assert draft.vault_path is None
        assert draft.github_branch == "main"
        assert draft.github_config() is None

    def test_blank_branch_defaults_to_main(self) -> None:
        draft = OnboardingDraft(github_token="t", github_branch="  ")
        assert draft.github_config().branch == "main"


class TestHumanizeAgo:
    @pytest.mark.parametrize(
        ("delta", "text"),
        [
            (timedelta(seconds=5), "Just now"),
            (timedelta(minutes=1), "1 min ago"),
            (timedelta(minutes=2), "2 mins ago"),
            (timedelta(hours=1), "1 hour ago"),
            (timedelta(hours=5, minutes=3), "5 hours ago"),
            (timedelta(days=3), "3 days ago"),
        ],
    )
    def test_relative(self, delta: timedelta, text: str) -> None:
        assert humanize_ago(NOW - delta, NOW) == text

    def test_never(self) -> None:
        assert humanize_ago(None, NOW) == "Never"

    def test_future_timestamp(self) -> None:
        assert humanize_ago(NOW + timedelta(minutes=5), NOW) == "Just now"


class TestFormatting:
    @pytest.mark.parametrize(
        ("size", "text"),
        [(0, "0 B"), (1023, "1023 B"), (4812, "4.7 KB"), (2_306_114, "2.2 MB")],
    )
    def test_format_size(self, size: int, text: str) -> None:
        assert format_size(size) == text

    def test_short_hash(self) -> None:
        assert short_hash(bytes(range(32))) == "0001020304050607"
        assert short_hash(b"") == "-"


class TestDashboardSummary:
    def test_unloaded(self) -> None:
        summary = dashboard_summary(DashboardView())
        assert summary["p2p"] == "Connecting…"
        assert summary["peers"] == "—"

    def test_online_idle(self) -> None:
        view = DashboardView(
            status=SyncStatus(
                is_syncing=False, last_sync=NOW - timedelta(minutes=2), peers_connected=2
            ),
            activity=(make_entry(), make_entry("b.md")),
        )
        assert dashboard_summary(view, NOW) == {
            "p2p": "P2P Online",
            "sync": "Idle",
            "last_update": "2 mins ago",
            "peers": "2",
            "files": "2 files changed",
        }

    def test_offline_syncing(self) -> None:
        view = DashboardView(
            status=SyncStatus(is_syncing=True, last_sync=None, peers_connected=0),
            activity=(make_entry(),),
        )
        summary = dashboard_summary(view, NOW)
        assert summary["p2p"] == "P2P Offline"
        assert summary["sync"] == "Syncing"
        assert summary["last_update"] == "Never"
        assert summary["files"] == "1 file changed"
