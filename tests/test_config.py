"""Tests for configuration loading."""

from pathlib import Path

import pytest

from config import BookingSettings, Config
from src.exceptions import ConfigurationError


class TestBookingSettings:
    """Tests for BookingSettings.from_env."""

    def test_reads_credentials(self):
        settings = BookingSettings.from_env({
            "WAYLEADR_USERNAME": "driver@example.com",
            "WAYLEADR_PASSWORD": "secret",
        })

        assert settings.credentials.username == "driver@example.com"
        assert settings.credentials.password == "secret"
        assert settings.bookings_file == Config.BOOKINGS_FILE
        assert settings.retention_days == Config.RETENTION_DAYS

    @pytest.mark.parametrize("env, missing", [
        ({}, ["WAYLEADR_USERNAME", "WAYLEADR_PASSWORD"]),
        ({"WAYLEADR_USERNAME": "driver@example.com"}, ["WAYLEADR_PASSWORD"]),
        ({"WAYLEADR_USERNAME": "  ", "WAYLEADR_PASSWORD": "secret"}, ["WAYLEADR_USERNAME"]),
    ])
    def test_missing_credentials(self, env, missing):
        with pytest.raises(ConfigurationError) as exc_info:
            BookingSettings.from_env(env)

        assert exc_info.value.details["missing"] == missing

    def test_overrides(self, tmp_path):
        settings = BookingSettings.from_env({
            "WAYLEADR_USERNAME": "driver@example.com",
            "WAYLEADR_PASSWORD": "secret",
            "BOOKINGS_FILE": str(tmp_path / "ledger.json"),
            "HEADLESS": "true",
            "RETENTION_DAYS": "3",
        })

        assert settings.bookings_file == Path(tmp_path / "ledger.json")
        assert settings.headless is True
        assert settings.retention_days == 3

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("WAYLEADR_USERNAME", "env@example.com")
        monkeypatch.setenv("WAYLEADR_PASSWORD", "from-env")

        assert BookingSettings.from_env().credentials.username == "env@example.com"

    def test_password_hidden_in_repr(self):
        settings = BookingSettings.from_env({
            "WAYLEADR_USERNAME": "driver@example.com",
            "WAYLEADR_PASSWORD": "secret",
        })

        assert "secret" not in repr(settings)


def test_error_to_dict():
    error = ConfigurationError("Credentials not set", details={"missing": ["WAYLEADR_PASSWORD"]})

    data = error.to_dict()

    assert data["error"] == "ConfigurationError"
    assert data["details"] == {"missing": ["WAYLEADR_PASSWORD"]}


def test_sign_in_url():
    assert Config.sign_in_url().endswith("/users/sign_in")
