"""
Exception types raised by the advisory engine.
"""

from typing import Optional


class ValidationError(ValueError):
    """Raised for inputs that cannot be clamped into a usable range."""


class WeatherFetchError(RuntimeError):
    """
    Raised when a weather or geocoding lookup cannot produce a reading.

    The message key maps to a localized warning in the message catalogue.
    """

    def __init__(self, message_key: str, detail: Optional[str] = None):
        self.message_key = message_key
        self.detail = detail
        super().__init__(detail or message_key)
