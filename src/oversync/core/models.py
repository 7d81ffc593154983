"""
Value types exchanged with the sync engine.

All of these are immutable snapshots.  The engine produces them; the shell
only reads and replaces them wholesale.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


def _parse_timestamp(value: Any) -> datetime | None:
    """Accept RFC 3339 strings, Unix seconds, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, int | float) and not isinstance(value, bool):
        return datetime.fromtimestamp(value, tz=UTC)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed
    raise ValueError(f"Unsupported timestamp value: {value!r}")


@dataclass(frozen=True)
class SyncStatus:
    is_syncing: bool = False
    last_sync: datetime | None = None
    peers_connected: int = 0

    def __post_init__(self) -> None:
        if self.peers_connected < 0:
            raise ValueError(f"peers_connected must be >= 0, got {self.peers_connected}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SyncStatus:
        return cls(
            is_syncing=bool(data["is_syncing"]),
            last_sync=_parse_timestamp(data.get("last_sync")),
            peers_connected=int(data["peers_connected"]),
        )


@dataclass(frozen=True)
class FileActivityEntry:
    """One recently changed file in the vault, as indexed by the engine."""

    path: str
    size: int
    content_hash: bytes
    last_modified: datetime

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FileActivityEntry:
        raw_hash = data["hash"]
        if isinstance(raw_hash, str):
            content_hash = bytes.fromhex(raw_hash)
        else:
            content_hash = bytes(raw_hash)
        last_modified = _parse_timestamp(data["last_modified"])
        if last_modified is None:
            raise ValueError("last_modified is required")
        return cls(
            path=str(data["path"]),
            size=int(data["size"]),
            content_hash=content_hash,
            last_modified=last_modified,
        )


@dataclass(frozen=True)
class GithubConfig:
    """Remote-repository settings for the optional GitHub mirror."""

    token: str = ""
    owner: str = ""
    repo: str = ""
    branch: str = "main"

    @property
    def is_provided(self) -> bool:
        return bool(self.token.strip())

    def to_payload(self) -> dict[str, str]:
        return {
            "token": self.token,
            "owner": self.owner,
            "repo": self.repo,
            "branch": self.branch or "main",
        }


__all__ = [
    "FileActivityEntry",
    "GithubConfig",
    "SyncStatus",
]
