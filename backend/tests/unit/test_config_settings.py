"""Unit tests for application settings configuration."""

from pathlib import Path

from care_sync.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_settings_defaults_to_tokyo_facility_time():
    settings = Settings(_env_file=None)
    assert settings.facility_timezone == "Asia/Tokyo"
    assert settings.synthesize_future_dates is False


def test_unknown_facility_timezone_falls_back_to_utc():
    settings = Settings(_env_file=None, facility_timezone="Mars/Olympus_Mons")
    assert settings.facility_timezone == "UTC"


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "https://care.example.test/api")
    monkeypatch.setenv("SYNTHESIZE_FUTURE_DATES", "true")

    settings = Settings(_env_file=None)

    assert settings.api_base_url == "https://care.example.test/api"
    assert settings.synthesize_future_dates is True
