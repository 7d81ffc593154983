"""
OverSync configuration — ``~/.oversync/config.toml``.

The file is optional: the shell runs with defaults when it is missing.  A file
that exists but does not parse, or carries out-of-range values, is an error.

Environment overrides (applied after the file is read)::

    OVERSYNC_CONFIG         path to the config file
    OVERSYNC_BACKEND_URL    backend.url
    OVERSYNC_LOG_LEVEL      logging.level
    OVERSYNC_POLL_INTERVAL  dashboard.poll_interval_seconds
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from oversync.core.exceptions import ConfigError, ConfigNotFoundError

CONFIG_VERSION = 1
CONFIG_FILENAME = "config.toml"
LOG_FILENAME = "oversync.log"

DEFAULT_BACKEND_URL = "http://127.0.0.1:7645"
DEFAULT_POLL_INTERVAL = 5.0

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_MIN_POLL_INTERVAL = 0.5
_MAX_POLL_INTERVAL = 3600.0


def oversync_dir() -> Path:
    """Return the per-user OverSync directory (``~/.oversync``)."""
    return Path.home() / ".oversync"


def config_path() -> Path:
    override = os.environ.get("OVERSYNC_CONFIG")
    if override:
        return Path(override).expanduser()
    return oversync_dir() / CONFIG_FILENAME


@dataclass
class BackendConfig:
    url: str = DEFAULT_BACKEND_URL
    timeout_seconds: float = 10.0


@dataclass
class DashboardConfig:
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = ""


@dataclass
class OverSyncConfig:
    config_version: int = CONFIG_VERSION
    backend: BackendConfig = field(default_factory=BackendConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_path(self) -> Path:
        if self.logging.file:
            return Path(self.logging.file).expanduser()
        return oversync_dir() / LOG_FILENAME

    def to_dict(self) -> dict[str, Any]:
        return {
            "config_version": self.config_version,
            "backend": {
                "url": self.backend.url,
                "timeout_seconds": self.backend.timeout_seconds,
            },
            "dashboard": {"poll_interval_seconds": self.dashboard.poll_interval_seconds},
            "logging": {"level": self.logging.level, "file": self.logging.file},
        }


# ---------------------------------------------------------------------------
# Parsing and validation
# ---------------------------------------------------------------------------


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        raise ConfigError(f"[{name}] must be a table")
    return value


def _as_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ConfigError(f"{key} must be a number, got {value!r}")
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc


def _from_dict(data: dict[str, Any]) -> OverSyncConfig:
    version = data.get("config_version", CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise ConfigError(f"Unsupported config_version {version!r} (expected {CONFIG_VERSION})")

    backend = _section(data, "backend")
    dashboard = _section(data, "dashboard")
    log = _section(data, "logging")

    return OverSyncConfig(
        config_version=version,
        backend=BackendConfig(
            url=str(backend.get("url", DEFAULT_BACKEND_URL)),
            timeout_seconds=_as_float(
                backend.get("timeout_seconds", 10.0), "backend.timeout_seconds"
            ),
        ),
        dashboard=DashboardConfig(
            poll_interval_seconds=_as_float(
                dashboard.get("poll_interval_seconds", DEFAULT_POLL_INTERVAL),
                "dashboard.poll_interval_seconds",
            ),
        ),
        logging=LoggingConfig(
            level=str(log.get("level", "INFO")),
            file=str(log.get("file", "")),
        ),
    )


def _apply_env_overrides(cfg: OverSyncConfig) -> None:
    url = os.environ.get("OVERSYNC_BACKEND_URL")
    if url:
        cfg.backend.url = url
    level = os.environ.get("OVERSYNC_LOG_LEVEL")
    if level:
        cfg.logging.level = level
    interval = os.environ.get("OVERSYNC_POLL_INTERVAL")
    if interval:
        cfg.dashboard.poll_interval_seconds = _as_float(interval, "OVERSYNC_POLL_INTERVAL")


def _validate(cfg: OverSyncConfig) -> None:
    cfg.logging.level = cfg.logging.level.upper()
    if cfg.logging.level not in _LOG_LEVELS:
        raise ConfigError(
            f"logging.level must be one of {sorted(_LOG_LEVELS)}, got {cfg.logging.level!r}"
        )
    interval = cfg.dashboard.poll_interval_seconds
    if not _MIN_POLL_INTERVAL <= interval <= _MAX_POLL_INTERVAL:
        raise ConfigError(
            f"dashboard.poll_interval_seconds must be between {_MIN_POLL_INTERVAL} "
            f"and {_MAX_POLL_INTERVAL}, got {interval}"
        )
    if cfg.backend.timeout_seconds <= 0:
        raise ConfigError("backend.timeout_seconds must be positive")
    if not cfg.backend.url.startswith(("http://", "https://")):
        raise ConfigError(f"backend.url must be an http(s) URL, got {cfg.backend.url!r}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: Path | None = None) -> OverSyncConfig:
    """Load, override and validate the config file.

    Raises ConfigNotFoundError when the file does not exist and ConfigError
    when it cannot be parsed or fails validation.
    """
    p = path or config_path()
    if not p.exists():
        raise ConfigNotFoundError(f"Config file not found: {p}")
    try:
        with p.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {p}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read {p}: {exc}") from exc

    cfg = _from_dict(data)
    _apply_env_overrides(cfg)
    _validate(cfg)
    return cfg


def load_config_or_default(path: Path | None = None) -> OverSyncConfig:
    """Like load_config(), but fall back to defaults when no file exists."""
    try:
        return load_config(path)
    except ConfigNotFoundError:
        cfg = OverSyncConfig()
        _apply_env_overrides(cfg)
        _validate(cfg)
        return cfg


def save_config(data: dict[str, Any], path: Path | None = None) -> Path:
    """Write *data* as TOML with 0600 permissions and return the path."""
    p = path or config_path()
    p.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    payload = {"config_version": CONFIG_VERSION, **data}

    tmp = p.with_suffix(".toml.tmp")
    fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "wb") as fh:
        tomli_w.dump(payload, fh)
    os.chmod(tmp, 0o600)
    tmp.replace(p)
    return p
