"""
Weather data models.

Contains DTOs for weather readings and forecast summaries.
"""

import math
from dataclasses import dataclass, replace, asdict
from typing import Optional, Dict, Any, Tuple

from ..core import constants


def clamp(value: Any, limits: Tuple[float, float]) -> float:
    """Clamp value into limits; NaN or non-numeric values become the minimum."""
    low, high = limits
    try:
        number = float(value)
    except (TypeError, ValueError):
        return low
    if math.isnan(number):
        return low
    return min(high, max(low, number))


@dataclass(frozen=True)
class WeatherReading:
    """Environmental reading used by the advisors."""

    temperature_c: float  # °C
    wind_kmh: float  # km/h
    rain_or_humidity_pct: float  # %
    rainy_tomorrow: bool = False
    soil_is_wet: bool = False
    humidity_pct: Optional[float] = None  # relative humidity (%)
    rain_prob_pct: Optional[float] = None  # precipitation probability (%)

    @property
    def humidity(self) -> float:
        if self.humidity_pct is None:
            return self.rain_or_humidity_pct
        return self.humidity_pct

    @property
    def rain_probability(self) -> float:
        if self.rain_prob_pct is None:
            return self.rain_or_humidity_pct
        return self.rain_prob_pct

    def clamped(self) -> "WeatherReading":
        """Return a copy with every value inside its physical range."""
        return WeatherReading(
            temperature_c=clamp(self.temperature_c, constants.TEMPERATURE_LIMITS),
            wind_kmh=clamp(self.wind_kmh, constants.WIND_LIMITS),
            rain_or_humidity_pct=clamp(self.rain_or_humidity_pct, constants.PERCENT_LIMITS),
            rainy_tomorrow=bool(self.rainy_tomorrow),
            soil_is_wet=bool(self.soil_is_wet),
            humidity_pct=(
                None if self.humidity_pct is None
                else clamp(self.humidity_pct, constants.PERCENT_LIMITS)
            ),
            rain_prob_pct=(
                None if self.rain_prob_pct is None
                else clamp(self.rain_prob_pct, constants.PERCENT_LIMITS)
            ),
        )

    def with_overrides(self, **overrides: Any) -> "WeatherReading":
        """Return a copy with manually entered fields replacing fetched ones."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherReading":
        """Build a reading from a persisted snapshot (camelCase keys accepted)."""
        return cls(
            temperature_c=data.get("temperature_c", data.get("tempC", 20)),
            wind_kmh=data.get("wind_kmh", data.get("windKmh", 0)),
            rain_or_humidity_pct=data.get("rain_or_humidity_pct", data.get("rainPct", 0)),
            rainy_tomorrow=bool(data.get("rainy_tomorrow", data.get("rainyTomorrow", False))),
            soil_is_wet=bool(data.get("soil_is_wet", data.get("soilIsWet", False))),
            humidity_pct=data.get("humidity_pct"),
            rain_prob_pct=data.get("rain_prob_pct"),
        ).clamped()


@dataclass(frozen=True)
class WeatherSample:
    """A single forecast sample as returned by the provider."""

    temperature_c: float
    wind_kmh: float
    humidity_pct: float
    precipitation_probability_pct: float


@dataclass(frozen=True)
class ForecastSummary:
    """Forecast condensed into now / today / tomorrow aggregates."""

    now: WeatherSample
    today: WeatherSample
    tomorrow: Optional[WeatherSample]
    rainy_tomorrow: bool
    place: str = ""

    def to_reading(self) -> WeatherReading:
        """
        Build the advisory reading: current temperature, wind and humidity,
        today's mean rain probability, tomorrow's rain flag.
        """
        return WeatherReading(
            temperature_c=round(self.now.temperature_c),
            wind_kmh=round(self.now.wind_kmh),
            rain_or_humidity_pct=round(self.today.precipitation_probability_pct),
            rainy_tomorrow=self.rainy_tomorrow,
            humidity_pct=round(self.now.humidity_pct),
            rain_prob_pct=round(self.today.precipitation_probability_pct),
        ).clamped()
