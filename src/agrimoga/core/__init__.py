"""
Core utilities for the Agrimoga advisory engine.

Provides configuration management, logging, localization and exceptions.
"""

from .config import Config
from .logger import setup_logger, LoggerContext
from . import constants
from .exceptions import ValidationError, WeatherFetchError
from .i18n import LocaleContext, LocalizedText, LocalizedList, translate

__all__ = [
    "Config",
    "setup_logger",
    "LoggerContext",
    "constants",
    "ValidationError",
    "WeatherFetchError",
    "LocaleContext",
    "LocalizedText",
    "LocalizedList",
    "translate",
]
