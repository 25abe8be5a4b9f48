"""Tests for environment-driven settings."""

from pathlib import Path

from rms.infrastructure.config import Settings


def test_defaults(monkeypatch):
    for var in ("RMS_DATA_DIR", "RMS_LOG_LEVEL", "RMS_INVOICE_PREFIX", "RMS_INVOICE_NUMBER_ATTEMPTS"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.data_dir == Path("data")
    assert settings.invoice_prefix == "INV"
    assert settings.invoice_number_attempts == 5


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RMS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RMS_INVOICE_PREFIX", "RNT")
    monkeypatch.setenv("RMS_INVOICE_NUMBER_ATTEMPTS", "2")
    settings = Settings(_env_file=None)
    assert settings.data_dir == tmp_path
    assert settings.invoice_prefix == "RNT"
    assert settings.invoice_number_attempts == 2
