"""Unit tests for oversync.core.config — OverSyncConfig loading and validation."""

from __future__ import annotations

import stat
from pathlib import Path

import pytest

from oversync.core.config import (
    DEFAULT_BACKEND_URL,
    DEFAULT_POLL_INTERVAL,
    config_path,
    load_config,
    load_config_or_default,
    save_config,
)
from oversync.core.exceptions import ConfigError, ConfigNotFoundError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_config(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "config.toml"
    p.write_text(content)
    return p


MINIMAL_TOML = """
config_version = 1

[backend]
url = "http://127.0.0.1:9000"
"""


# ---------------------------------------------------------------------------
# Load config
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_minimal_valid(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML)
        cfg = load_config(p)
        assert cfg.config_version == 1
        assert cfg.backend.url == "http://127.0.0.1:9000"
        assert cfg.dashboard.poll_interval_seconds == DEFAULT_POLL_INTERVAL
        assert cfg.logging.level == "INFO"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "nonexistent.toml")

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, "this is not valid toml %%% [[[")
        with pytest.raises(ConfigError):
            load_config(p)

    def test_wrong_version_rejected(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, "config_version = 7\n")
        with pytest.raises(ConfigError, match="config_version"):
            load_config(p)

    def test_poll_interval_bounds(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + "\n[dashboard]\npoll_interval_seconds = 0.1\n")
        with pytest.raises(ConfigError, match="poll_interval"):
            load_config(p)

    def test_unknown_log_level_rejected(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + '\n[logging]\nlevel = "LOUD"\n')
        with pytest.raises(ConfigError, match="logging.level"):
            load_config(p)

    def test_log_level_normalised(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML + '\n[logging]\nlevel = "debug"\n')
        assert load_config(p).logging.level == "DEBUG"

    def test_non_http_url_rejected(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, '[backend]\nurl = "ftp://example.org"\n')
        with pytest.raises(ConfigError, match="backend.url"):
            load_config(p)

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, 'backend = "nope"\n')
        with pytest.raises(ConfigError, match=r"\[backend\]"):
            load_config(p)

    def test_env_override_log_level(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OVERSYNC_LOG_LEVEL", "DEBUG")
        p = _write_config(tmp_path, MINIMAL_TOML)
        cfg = load_config(p)
        assert cfg.logging.level == "DEBUG"

    def test_env_override_backend_url(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OVERSYNC_BACKEND_URL", "http://10.0.0.5:7645")
        p = _write_config(tmp_path, MINIMAL_TOML)
        assert load_config(p).backend.url == "http://10.0.0.5:7645"

    def test_env_override_poll_interval(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OVERSYNC_POLL_INTERVAL", "2.5")
        p = _write_config(tmp_path, MINIMAL_TOML)
        assert load_config(p).dashboard.poll_interval_seconds == 2.5

    def test_env_config_path(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        p = _write_config(tmp_path, MINIMAL_TOML)
        monkeypatch.setenv("OVERSYNC_CONFIG", str(p))
        assert config_path() == p
        assert load_config().backend.url == "http://127.0.0.1:9000"


class TestLoadConfigOrDefault:
    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        cfg = load_config_or_default(tmp_path / "absent.toml")
        assert cfg.backend.url == DEFAULT_BACKEND_URL
        assert cfg.dashboard.poll_interval_seconds == DEFAULT_POLL_INTERVAL

    def test_defaults_still_get_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OVERSYNC_BACKEND_URL", "http://localhost:1")
        cfg = load_config_or_default(tmp_path / "absent.toml")
        assert cfg.backend.url == "http://localhost:1"

    def test_broken_file_still_raises(self, tmp_path: Path) -> None:
        p = _write_config(tmp_path, "[[[")
        with pytest.raises(ConfigError):
            load_config_or_default(p)


# ---------------------------------------------------------------------------
# Save config
# ---------------------------------------------------------------------------


class TestSaveConfig:
    def test_saves_and_loads(self, tmp_path: Path) -> None:
        data = {"dashboard": {"poll_interval_seconds": 10.0}}
        path = save_config(data, tmp_path / "config.toml")
        cfg = load_config(path)
        assert cfg.dashboard.poll_interval_seconds == 10.0
        assert cfg.config_version == 1

    def test_secure_permissions(self, tmp_path: Path) -> None:
        path = save_config({"backend": {"url": DEFAULT_BACKEND_URL}}, tmp_path / "config.toml")
        mode = stat.S_IMODE(path.stat().st_mode)
        assert mode == 0o600, f"Expected 0600, got {oct(mode)}"

    def test_creates_parent_directory(self, tmp_path: Path) -> None:
        path = save_config({}, tmp_path / "nested" / "config.toml")
        assert path.exists()


class TestPaths:
    def test_default_log_path(self, tmp_path: Path) -> None:
        cfg = load_config(_write_config(tmp_path, MINIMAL_TOML))
        assert cfg.log_path.name == "oversync.log"

    def test_custom_log_path(self, tmp_path: Path) -> None:
        toml = MINIMAL_TOML + f'\n[logging]\nfile = "{tmp_path}/ui.log"\n'
        cfg = load_config(_write_config(tmp_path, toml))
        assert cfg.log_path == tmp_path / "ui.log"
