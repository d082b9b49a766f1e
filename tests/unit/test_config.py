# tests/unit/test_config.py
"""
Unit tests for configuration loading (YAML defaults + environment overrides).
"""

import pytest
from pydantic import ValidationError

from src.meeting_intel.config import ConfigLoader, MeetingIntelConfig


def test_defaults_from_yaml(tmp_path, monkeypatch):
    (tmp_path / "default.yaml").write_text("timezone: Europe/Amsterdam\nupcoming_window_hours: 12\n")
    monkeypatch.setenv("MEETING_INTEL_ENV", "test")
    monkeypatch.delenv("MEETING_INTEL_TIMEZONE", raising=False)

    config = ConfigLoader(str(tmp_path)).get()

    assert config.timezone == "Europe/Amsterdam"
    assert config.upcoming_window_hours == 12
    assert config.dedup_window_hours == 24
    assert config.environment == "test"


def test_environment_file_overrides_defaults(tmp_path, monkeypatch):
    (tmp_path / "default.yaml").write_text("scheduler_enabled: false\n")
    (tmp_path / "production.yaml").write_text("environment: production\nscheduler_enabled: true\n")
    monkeypatch.setenv("MEETING_INTEL_ENV", "production")
    monkeypatch.delenv("MEETING_INTEL_SCHEDULER", raising=False)

    config = ConfigLoader(str(tmp_path)).get()

    assert config.scheduler_enabled is True
    assert config.environment == "production"


def test_environment_variables_win(tmp_path, monkeypatch):
    (tmp_path / "default.yaml").write_text("timezone: UTC\n")
    monkeypatch.setenv("MEETING_INTEL_ENV", "test")
    monkeypatch.setenv("MEETING_INTEL_TIMEZONE", "Europe/Amsterdam")
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "anon")
    monkeypatch.setenv("CRON_API_KEY", "secret")
    monkeypatch.setenv("MEETING_INTEL_API_PORT", "9000")

    config = ConfigLoader(str(tmp_path)).get()

    assert config.timezone == "Europe/Amsterdam"
    assert config.supabase_url == "https://example.supabase.co"
    assert config.cron_api_key == "secret"
    assert config.api_port == 9000


def test_missing_config_dir_uses_model_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("MEETING_INTEL_ENV", "test")
    monkeypatch.delenv("MEETING_INTEL_TIMEZONE", raising=False)

    config = ConfigLoader(str(tmp_path / "nope")).get()

    assert config.timezone == "UTC"
    assert config.deadline_sweep_schedule == "0 * * * *"


def test_unknown_timezone_fails_at_load(tmp_path, monkeypatch):
    (tmp_path / "default.yaml").write_text("timezone: Mars/Olympus\n")
    monkeypatch.setenv("MEETING_INTEL_ENV", "test")
    monkeypatch.delenv("MEETING_INTEL_TIMEZONE", raising=False)

    with pytest.raises(ValidationError):
        ConfigLoader(str(tmp_path))


def test_timezone_validator_accepts_iana_names():
    assert MeetingIntelConfig(timezone="Europe/Amsterdam").timezone == "Europe/Amsterdam"
    assert MeetingIntelConfig(timezone="utc").timezone == "utc"
