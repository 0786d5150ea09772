"""
Services for persistence, weather acquisition, location lookup and sharing.

Services orchestrate API operations and provide higher-level functionality.
"""

from .storage import JSONStore, AdvisoryLog
from .geocoding import LocationResolver
from .weather_service import WeatherService, WeatherLookup
from . import sharing

__all__ = [
    "JSONStore",
    "AdvisoryLog",
    "LocationResolver",
    "WeatherService",
    "WeatherLookup",
    "sharing",
]
