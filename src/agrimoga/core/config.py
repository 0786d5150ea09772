"""
Configuration module for the Agrimoga advisory engine.

Loads configuration from a JSON file and environment variables.
"""

import copy
import json
import os
from typing import Dict, Any, Optional
from pathlib import Path

from . import constants


DEFAULT_CONFIG: Dict[str, Any] = {
    "weather": {
        "api_key": None,
        "base_url": "https://api.openweathermap.org",
        "fallback_geocoder_url": "https://nominatim.openstreetmap.org",
        "user_agent": "agrimoga-advisor",
        "timeout": constants.DEFAULT_TIMEOUT,
        "max_retries": constants.DEFAULT_MAX_RETRIES,
    },
    "storage": {
        "directory": ".agrimoga",
        "log_max_entries": constants.DEFAULT_LOG_MAX_ENTRIES,
    },
    "locale": {
        "default": constants.DEFAULT_LANGUAGE,
    },
    "irrigation": {},
    "diseases": {
        "file": None,
    },
}


class Config:
    """Configuration manager for the application."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration JSON file. If None, uses CONFIG_FILE env var
                        or defaults to 'config.json'. A missing default file falls back
                        to the built-in defaults.
        """
        self._explicit = bool(config_file or os.getenv("CONFIG_FILE"))
        self.config_file = config_file or os.getenv("CONFIG_FILE", "config.json")
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()
        self._override_from_env()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from JSON file and merge over defaults."""
        config_path = Path(self.config_file)
        if not config_path.exists():
            if self._explicit:
                raise FileNotFoundError(f"Configuration file not found: {self.config_file}")
            return

        with open(config_path, "r", encoding="utf-8") as f:
            loaded = json.load(f)

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self.config.get(section), dict):
                self.config[section].update(values)
            else:
                self.config[section] = values

    def _override_from_env(self) -> None:
        """Override configuration with environment variables."""
        if os.getenv("OWM_API_KEY"):
            self.config["weather"]["api_key"] = os.getenv("OWM_API_KEY")

        if os.getenv("OWM_BASE_URL"):
            self.config["weather"]["base_url"] = os.getenv("OWM_BASE_URL")

        if os.getenv("AGRIMOGA_STORAGE_DIR"):
            self.config["storage"]["directory"] = os.getenv("AGRIMOGA_STORAGE_DIR")

        if os.getenv("AGRIMOGA_LANG"):
            self.config["locale"]["default"] = os.getenv("AGRIMOGA_LANG")

        if os.getenv("ENVIRONMENT"):
            self.config["environment"] = os.getenv("ENVIRONMENT")

    def _validate_config(self) -> None:
        """Validate configuration values that would break the advisors."""
        errors = []

        language = self.get("locale.default")
        if language not in constants.SUPPORTED_LANGUAGES:
            errors.append(
                f"locale.default must be one of {', '.join(constants.SUPPORTED_LANGUAGES)}, "
                f"got {language!r}"
            )

        max_entries = self.get("storage.log_max_entries")
        if not isinstance(max_entries, int) or not (
            constants.MIN_LOG_MAX_ENTRIES <= max_entries <= constants.DEFAULT_LOG_MAX_ENTRIES
        ):
            errors.append(
                f"storage.log_max_entries must be an integer between "
                f"{constants.MIN_LOG_MAX_ENTRIES} and {constants.DEFAULT_LOG_MAX_ENTRIES}"
            )

        timeout = self.get("weather.timeout")
        if not isinstance(timeout, (int, float)) or timeout <= 0:
            errors.append("weather.timeout must be a positive number")

        if not isinstance(self.get("irrigation", {}), dict):
            errors.append("irrigation section must be an object")

        if errors:
            raise ValueError(f"Invalid configuration: {'; '.join(errors)}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key (supports dot notation).

        Args:
            key: Configuration key (e.g., 'weather.base_url')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self.config

        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default

        return value

    @property
    def weather_api_key(self) -> Optional[str]:
        """Get OpenWeatherMap API key (None disables fetching)."""
        return self.get("weather.api_key")

    @property
    def weather_base_url(self) -> str:
        """Get weather API base URL."""
        return self.get("weather.base_url", "")

    @property
    def fallback_geocoder_url(self) -> str:
        """Get alternate reverse-geocoding provider base URL."""
        return self.get("weather.fallback_geocoder_url", "")

    @property
    def user_agent(self) -> str:
        """Get User-Agent sent to geocoding providers."""
        return self.get("weather.user_agent", "agrimoga-advisor")

    @property
    def api_timeout(self) -> float:
        """Get boundary request timeout in seconds."""
        return self.get("weather.timeout", constants.DEFAULT_TIMEOUT)

    @property
    def api_max_retries(self) -> int:
        """Get maximum API retry attempts."""
        return self.get("weather.max_retries", constants.DEFAULT_MAX_RETRIES)

    @property
    def storage_directory(self) -> str:
        """Get local storage directory."""
        return self.get("storage.directory", ".agrimoga")

    @property
    def log_max_entries(self) -> int:
        """Get maximum retained advisory log entries."""
        return self.get("storage.log_max_entries", constants.DEFAULT_LOG_MAX_ENTRIES)

    @property
    def default_language(self) -> str:
        """Get default UI language."""
        return self.get("locale.default", constants.DEFAULT_LANGUAGE)

    @property
    def disease_catalogue_file(self) -> Optional[str]:
        """Get path of a JSON disease catalogue replacing the built-in one."""
        return self.get("diseases.file")

    @property
    def irrigation_overrides(self) -> Dict[str, float]:
        """Get overrides for the irrigation adjustment constants."""
        return self.get("irrigation", {})

    def __repr__(self) -> str:
        """String representation of config."""
        return f"Config(file={self.config_file}, env={self.get('environment')})"
