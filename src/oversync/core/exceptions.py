"""OverSync exception hierarchy."""

from __future__ import annotations


class OverSyncError(Exception):
    """Base class for all OverSync errors."""


class BackendError(OverSyncError):
    """A sync-engine command failed.

    ``str(exc)`` is the engine's message, unmodified, so callers can surface
    it to the user as-is.
    """

    def __init__(self, message: str, *, command: str = "") -> None:
        super().__init__(message)
        self.command = command


class ConfigError(OverSyncError):
    """The config file exists but cannot be parsed or fails validation."""


class ConfigNotFoundError(ConfigError):
    """No config file at the expected location."""


class PhaseTransitionError(OverSyncError, ValueError):
    """An illegal AppPhase transition was requested."""
