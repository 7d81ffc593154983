"""Unit tests for engine payload decoding."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from oversync.core.models import FileActivityEntry, GithubConfig, SyncStatus


class TestSyncStatus:
    def test_from_dict_with_rfc3339(self) -> None:
        status = SyncStatus.from_dict(
            {"is_syncing": True, "last_sync": "2026-02-21T10:00:00Z", "peers_connected": 2}
        )
        assert status.is_syncing is True
        assert status.last_sync == datetime(2026, 2, 21, 10, 0, tzinfo=UTC)
        assert status.peers_connected == 2

    def test_null_last_sync(self) -> None:
        status = SyncStatus.from_dict(
            {"is_syncing": False, "last_sync": None, "peers_connected": 0}
        )
        assert status.last_sync is None

    def test_negative_peers_rejected(self) -> None:
        with pytest.raises(ValueError):
            SyncStatus(peers_connected=-1)

    def test_missing_field_raises(self) -> None:
        with pytest.raises(KeyError):
            SyncStatus.from_dict({"is_syncing": False})


class TestFileActivityEntry:
    def test_from_engine_payload(self) -> None:
        entry = FileActivityEntry.from_dict(
            {
                "path": "Projects/Roadmap.md",
                "size": 4812,
                "hash": list(range(32)),
                "last_modified": 1_771_668_000,
            }
        )
        assert entry.path == "Projects/Roadmap.md"
        assert entry.size == 4812
        assert entry.content_hash == bytes(range(32))
        assert entry.last_modified == datetime.fromtimestamp(1_771_668_000, tz=UTC)

    def test_hex_hash_accepted(self) -> None:
        entry = FileActivityEntry.from_dict(
            {"path": "a", "size": 1, "hash": "ff00", "last_modified": 0}
        )
        assert entry.content_hash == b"\xff\x00"

    def test_missing_last_modified_rejected(self) -> None:
        with pytest.raises(ValueError):
            FileActivityEntry.from_dict(
                {"path": "a", "size": 1, "hash": [], "last_modified": None}
            )


class TestGithubConfig:
    def test_empty_token_not_provided(self) -> None:
        assert GithubConfig(token="  ", owner="me", repo="vault").is_provided is False

    def test_payload_defaults_branch(self) -> None:
        payload = GithubConfig(token="t", owner="o", repo="r", branch="").to_payload()
        assert payload == {"token": "t", "owner": "o", "repo": "r", "branch": "main"}
