"""Tests for runtime config — env-driven settings."""

from __future__ import annotations

from pipelogs.config import LogsSettings


class TestLogsSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("PIPELOGS_NAMESPACE", raising=False)
        config = LogsSettings()
        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.namespace == "jx"

    def test_streaming_defaults(self):
        config = LogsSettings()
        assert config.poll_interval_seconds == 1.0
        assert config.stream_timeout_seconds is None
        assert config.max_idle_iterations == 30

    def test_bucket_timeout_default(self):
        assert LogsSettings().bucket_read_timeout_seconds == 20.0

    def test_is_production_false_by_default(self):
        config = LogsSettings()
        assert config.is_production is False

    def test_is_production_when_set(self):
        config = LogsSettings(environment="production")
        assert config.is_production is True

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PIPELOGS_NAMESPACE", "cd")
        monkeypatch.setenv("PIPELOGS_STREAM_TIMEOUT_SECONDS", "900")
        monkeypatch.setenv("PIPELOGS_COLOR", "false")
        config = LogsSettings()
        assert config.namespace == "cd"
        assert config.stream_timeout_seconds == 900.0
        assert config.color is False

    def test_dotenv_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("PIPELOGS_POLL_INTERVAL_SECONDS=2.5\n", encoding="utf-8")
        assert LogsSettings().poll_interval_seconds == 2.5
