"""Tests for environment-driven configuration (vintel/settings.py)."""

import pytest
from pydantic import ValidationError

from vintel import settings as settings_module
from vintel.settings import VintelSettings, get_settings, reload_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "VINTEL_SEARCH_API_KEY", "TAVILY_API_KEY",
        "VINTEL_LLM_API_KEY", "OPENAI_API_KEY",
        "VINTEL_LLM_PROVIDER", "VINTEL_STRICT_VIN_CHECKSUM",
        "VINTEL_NHTSA_TIMEOUT", "VINTEL_SEARCH_MAX_RESULTS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_defaults(self, clean_env):
        s = VintelSettings(_env_file=None)
        assert s.nhtsa_base_url == "https://vpic.nhtsa.dot.gov/api/vehicles"
        assert s.nhtsa_timeout == 20.0
        assert s.search_api_key == ""
        assert s.search_max_results == 10
        assert s.llm_provider == "openai"
        assert s.llm_api_key == ""
        assert s.strict_vin_checksum is False
        assert s.log_level == "INFO"


class TestEnvironment:
    def test_prefixed_values(self, clean_env):
        clean_env.setenv("VINTEL_NHTSA_TIMEOUT", "5")
        clean_env.setenv("VINTEL_STRICT_VIN_CHECKSUM", "true")
        s = VintelSettings(_env_file=None)
        assert s.nhtsa_timeout == 5.0
        assert s.strict_vin_checksum is True

    def test_vendor_key_names(self, clean_env):
        clean_env.setenv("TAVILY_API_KEY", "tvly-vendor")
        clean_env.setenv("OPENAI_API_KEY", "sk-vendor")
        s = VintelSettings(_env_file=None)
        assert s.search_api_key == "tvly-vendor"
        assert s.llm_api_key == "sk-vendor"

    def test_prefixed_key_wins(self, clean_env):
        clean_env.setenv("VINTEL_SEARCH_API_KEY", "tvly-prefixed")
        clean_env.setenv("TAVILY_API_KEY", "tvly-vendor")
        assert VintelSettings(_env_file=None).search_api_key == "tvly-prefixed"

    def test_unknown_provider_rejected(self, clean_env):
        clean_env.setenv("VINTEL_LLM_PROVIDER", "anthropic")
        with pytest.raises(ValidationError):
            VintelSettings(_env_file=None)

    def test_max_results_bounded(self, clean_env):
        clean_env.setenv("VINTEL_SEARCH_MAX_RESULTS", "50")
        with pytest.raises(ValidationError):
            VintelSettings(_env_file=None)


class TestGlobalInstance:
    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setattr(settings_module, "_settings", None)
        assert get_settings() is get_settings()

    def test_reload_reads_environment_again(self, monkeypatch):
        monkeypatch.setattr(settings_module, "_settings", None)
        monkeypatch.setenv("VINTEL_LOG_LEVEL", "DEBUG")
        first = get_settings()
        monkeypatch.setenv("VINTEL_LOG_LEVEL", "WARNING")
        second = reload_settings()
        assert first is not second
        assert second.log_level == "WARNING"
