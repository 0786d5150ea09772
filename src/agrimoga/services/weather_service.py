"""
Weather acquisition service.

Fetches the provider forecast, condenses it into an advisory reading and
degrades to a fallback reading when anything along the way fails.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests  # type: ignore

from ..api import OpenWeatherAPI, NominatimAPI
from ..core.config import Config
from ..core.exceptions import WeatherFetchError
from ..core.i18n import LocaleContext
from ..core.logger import LoggerContext
from ..models import ForecastSummary, WeatherReading
from ..processing import ForecastAggregator
from .geocoding import LocationResolver


@dataclass(frozen=True)
class WeatherLookup:
    """Outcome of a weather lookup."""

    reading: WeatherReading
    place: str = ""
    summary: Optional[ForecastSummary] = None
    warning: Optional[str] = None  # localized, set when the fallback was used
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def is_fallback(self) -> bool:
        return self.summary is None


class WeatherService:
    """Service to obtain a weather reading for a location."""

    def __init__(
        self,
        weather_api: Optional[OpenWeatherAPI],
        resolver: LocationResolver,
        aggregator: Optional[ForecastAggregator] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize weather service.

        Args:
            weather_api: Forecast client, None when no API key is configured
            resolver: Location resolver for place names and labels
            aggregator: Forecast aggregator
            logger: Logger instance
        """
        self.weather_api = weather_api
        self.resolver = resolver
        self.logger = logger or logging.getLogger(__name__)
        self.aggregator = aggregator or ForecastAggregator(self.logger)

    @classmethod
    def from_config(cls, config: Config, logger: Optional[logging.Logger] = None) -> "WeatherService":
        """Build the service and its provider clients from configuration."""
        logger = logger or logging.getLogger(__name__)
        client_options = {
            "timeout": config.api_timeout,
            "max_retries": config.api_max_retries,
            "user_agent": config.user_agent,
            "logger": logger,
        }

        weather_api = None
        if config.weather_api_key:
            weather_api = OpenWeatherAPI(
                base_url=config.weather_base_url,
                api_key=config.weather_api_key,
                **client_options
            )
        else:
            logger.warning("No weather API key configured, weather lookups will use manual values")

        fallback = NominatimAPI(base_url=config.fallback_geocoder_url, **client_options)
        resolver = LocationResolver(weather_api, fallback, logger)
        return cls(weather_api, resolver, logger=logger)

    def fetch_summary(self, latitude: float, longitude: float, lang: str = "en") -> ForecastSummary:
        """
        Fetch and summarize the forecast for a coordinate.

        Raises:
            WeatherFetchError: If no API key is configured, the request fails
                               or the forecast holds no usable samples
        """
        if self.weather_api is None:
            raise WeatherFetchError("missing_api_key")

        try:
            payload = self.weather_api.get_forecast(latitude, longitude, lang=lang)
        except (requests.exceptions.RequestException, ValueError) as e:
            raise WeatherFetchError("fetch_failed", str(e)) from e

        items = payload.get("list") if isinstance(payload, dict) else None
        if not items or not isinstance(items, list):
            raise WeatherFetchError("empty_forecast")

        city = payload.get("city")
        place = city.get("name") if isinstance(city, dict) else None
        summary = self.aggregator.summarize(items, place=place if isinstance(place, str) else "")
        if summary is None:
            raise WeatherFetchError("empty_forecast")
        return summary

    def resolve_reading(
        self,
        fallback: WeatherReading,
        locale: LocaleContext,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        place: Optional[str] = None
    ) -> WeatherLookup:
        """
        Obtain a reading for coordinates or a place name.

        Never raises: on any failure the fallback reading is returned with a
        localized warning.

        Args:
            fallback: Last known or manually entered reading
            locale: Language for the place label and warning
            latitude: Latitude in degrees (takes precedence over place)
            longitude: Longitude in degrees
            place: Free-text place name

        Returns:
            WeatherLookup
        """
        label = place or ""
        try:
            with LoggerContext(self.logger, "weather lookup"):
                if latitude is None or longitude is None:
                    if not place:
                        raise WeatherFetchError("place_not_found")
                    latitude, longitude, label = self.resolver.geocode(place)

                summary = self.fetch_summary(latitude, longitude, lang=locale.lang)
                label = (
                    self.resolver.reverse(latitude, longitude, locale.lang)
                    or summary.place
                    or label
                )
        except WeatherFetchError as e:
            self.logger.warning(f"Using fallback reading ({e.message_key})")
            return WeatherLookup(
                reading=fallback.clamped(),
                place=label,
                warning=locale.t(f"warning.{e.message_key}"),
                latitude=latitude,
                longitude=longitude,
            )

        reading = summary.to_reading().with_overrides(soil_is_wet=fallback.soil_is_wet)
        self.logger.info(
            f"Weather for {label or 'unnamed location'}: {reading.temperature_c:.0f}°C, "
            f"wind {reading.wind_kmh:.0f} km/h, rain {reading.rain_or_humidity_pct:.0f}%"
        )
        return WeatherLookup(
            reading=reading,
            place=label,
            summary=summary,
            latitude=latitude,
            longitude=longitude,
        )

    def close(self) -> None:
        """Close provider sessions."""
        for client in (self.weather_api, self.resolver.fallback):
            if client is not None:
                client.close()
