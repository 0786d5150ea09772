"""
API layer for the weather and geocoding providers.
"""

from .client import APIClient
from .openweather import OpenWeatherAPI
from .nominatim import NominatimAPI

__all__ = [
    "APIClient",
    "OpenWeatherAPI",
    "NominatimAPI",
]
