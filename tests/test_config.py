"""
Tests for configuration loading, logging setup and localization.
"""

import json
import logging
import pytest  # type: ignore
from unittest.mock import Mock

from src.agrimoga.core import Config, LoggerContext, setup_logger
from src.agrimoga.core.i18n import LocaleContext, LocalizedList, LocalizedText, translate


def write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestConfig:
    """Test cases for Config."""

    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = Config()

        assert config.weather_api_key is None
        assert config.weather_base_url == "https://api.openweathermap.org"
        assert config.api_timeout == 12
        assert config.api_max_retries == 2
        assert config.log_max_entries == 200
        assert config.default_language == "ar"
        assert config.irrigation_overrides == {}
        assert config.disease_catalogue_file is None

    def test_explicit_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config(str(tmp_path / "missing.json"))

    def test_file_merges_over_defaults(self, tmp_path):
        path = write_config(tmp_path / "config.json", {
            "weather": {"api_key": "abc123"},
            "storage": {"log_max_entries": 50},
            "irrigation": {"windy_kmh": 40},
        })
        config = Config(path)

        assert config.weather_api_key == "abc123"
        assert config.weather_base_url == "https://api.openweathermap.org"
        assert config.log_max_entries == 50
        assert config.irrigation_overrides == {"windy_kmh": 40}

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "config.json", {"weather": {"api_key": "from-file"}})
        monkeypatch.setenv("OWM_API_KEY", "from-env")
        monkeypatch.setenv("AGRIMOGA_STORAGE_DIR", str(tmp_path / "data"))
        monkeypatch.setenv("AGRIMOGA_LANG", "fr")
        monkeypatch.setenv("ENVIRONMENT", "test")

        config = Config(path)

        assert config.weather_api_key == "from-env"
        assert config.storage_directory == str(tmp_path / "data")
        assert config.default_language == "fr"
        assert config.get("environment") == "test"

    def test_config_file_from_environment(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "custom.json", {"locale": {"default": "en"}})
        monkeypatch.setenv("CONFIG_FILE", path)

        assert Config().default_language == "en"

    @pytest.mark.parametrize("data", [
        {"locale": {"default": "de"}},
        {"storage": {"log_max_entries": 20}},
        {"storage": {"log_max_entries": 500}},
        {"weather": {"timeout": 0}},
        {"irrigation": [1, 2]},
    ])
    def test_invalid_values_rejected(self, tmp_path, data):
        path = write_config(tmp_path / "config.json", data)

        with pytest.raises(ValueError, match="Invalid configuration"):
            Config(path)

    def test_dotted_get(self, tmp_path):
        config = Config(write_config(tmp_path / "config.json", {}))

        assert config.get("weather.timeout") == 12
        assert config.get("weather.nothing", "x") == "x"
        assert config.get("weather.timeout.deeper", 5) == 5


class TestLogging:
    """Test cases for logger setup and LoggerContext."""

    def test_setup_logger_writes_file(self, tmp_path):
        log_file = tmp_path / "logs" / "agrimoga.log"
        logger = setup_logger("agrimoga.test", log_file=str(log_file), log_level="DEBUG")

        logger.debug("hello")
        for handler in logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert logger.propagate is False
        assert "hello" in log_file.read_text(encoding="utf-8")

    def test_context_logs_failure_and_reraises(self):
        logger = Mock(spec=logging.Logger)

        with pytest.raises(RuntimeError):
            with LoggerContext(logger, "lookup"):
                raise RuntimeError("boom")

        logger.warning.assert_called_once()
        assert "lookup" in logger.warning.call_args[0][0]


class TestLocalization:
    """Test cases for LocaleContext and localized text."""

    def test_unsupported_language_falls_back_to_arabic(self):
        assert LocaleContext("de").lang == "ar"

    def test_direction(self):
        assert LocaleContext("ar").direction == "rtl"
        assert LocaleContext("fr").direction == "ltr"

    @pytest.mark.parametrize("lang,value,decimals,expected", [
        ("en", 1234567.891, 2, "1,234,567.89"),
        ("fr", 1234.5, 1, "1\u202f234,5"),
        ("ar", 1234, 0, "1.234"),
        ("en", float("nan"), 0, "0"),
        ("en", "abc", 0, "0"),
    ])
    def test_format_number(self, lang, value, decimals, expected):
        assert LocaleContext(lang).format_number(value, decimals) == expected

    def test_translate_fallbacks(self):
        assert translate("tier.high", "en") == "high"
        assert translate("tier.high", "de") == translate("tier.high", "ar")
        assert translate("no.such.key", "fr") == "no.such.key"

    def test_localized_text_fallbacks(self):
        assert LocalizedText.from_raw("Fraise").resolve("en") == "Fraise"
        assert LocalizedText.from_raw({"fr": "Fraise"}).resolve("en") == "Fraise"
        assert LocalizedText.from_raw({"ar": "فراولة", "fr": "Fraise"}).resolve("en") == "فراولة"
        assert LocalizedText.from_raw(None).resolve("en") == ""

    def test_localized_list(self):
        items = LocalizedList.from_raw({"ar": ["أ"], "en": ["a", "b"]})

        assert items.resolve("en") == ["a", "b"]
        assert items.resolve("fr") == ["أ"]
        assert LocalizedList.from_raw(["x"]).resolve("fr") == ["x"]
