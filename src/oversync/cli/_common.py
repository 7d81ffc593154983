"""Helpers shared by the CLI commands."""

from __future__ import annotations

from oversync.core.backend import HttpBackend, SyncBackend, close_backend
from oversync.core.config import OverSyncConfig

__all__ = ["close_backend", "make_backend"]


def make_backend(config: OverSyncConfig, *, demo: bool = False) -> SyncBackend:
    if demo:
        from oversync.core.demo import DemoBackend

        return DemoBackend()
    return HttpBackend(config.backend.url, timeout=config.backend.timeout_seconds)
