"""
Forecast aggregation module.

Condenses a 3-hourly forecast series into now / today / tomorrow figures.
"""

import logging
import math
import statistics
from dataclasses import astuple
from typing import Dict, Any, List, Optional

from ..core import constants
from ..models import ForecastSummary, WeatherSample
from .converter import UnitConverter


class ForecastAggregator:
    """Summarize provider forecast samples."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize forecast aggregator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.converter = UnitConverter(logger)

    def parse_sample(self, item: Dict[str, Any]) -> Optional[WeatherSample]:
        """
        Parse one OpenWeatherMap forecast item.

        Expected format:
        {
            "main": {"temp": 21.3, "humidity": 64},
            "wind": {"speed": 4.1},  # m/s
            "pop": 0.2               # 0..1
        }

        Returns:
            WeatherSample, or None when the item is malformed or the
            temperature is missing
        """
        if not isinstance(item, dict):
            self.logger.debug(f"Skipping non-object forecast item {item!r}")
            return None

        try:
            main = item.get("main") or {}
            temperature = main.get("temp")
            if temperature is None:
                return None

            wind_ms = (item.get("wind") or {}).get("speed") or 0.0
            sample = WeatherSample(
                temperature_c=float(temperature),
                wind_kmh=self.converter.ms_to_kmh(float(wind_ms)),
                humidity_pct=float(main.get("humidity") or 0.0),
                precipitation_probability_pct=self.converter.fraction_to_percent(item.get("pop")),
            )
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.debug(f"Skipping malformed forecast item: {e}")
            return None

        if not all(math.isfinite(value) for value in astuple(sample)):
            self.logger.debug(f"Skipping non-finite forecast item {item!r}")
            return None
        return sample

    def average(self, samples: List[WeatherSample]) -> Optional[WeatherSample]:
        """Average a window of samples field by field."""
        if not samples:
            return None
        return WeatherSample(
            temperature_c=statistics.mean(s.temperature_c for s in samples),
            wind_kmh=statistics.mean(s.wind_kmh for s in samples),
            humidity_pct=statistics.mean(s.humidity_pct for s in samples),
            precipitation_probability_pct=statistics.mean(
                s.precipitation_probability_pct for s in samples
            ),
        )

    def summarize(
        self,
        items: List[Dict[str, Any]],
        place: str = ""
    ) -> Optional[ForecastSummary]:
        """
        Summarize a forecast series.

        The first sample is "now", the next day-window (8 samples at 3h) is
        "today" and the following window is "tomorrow".

        Args:
            items: Raw forecast items in chronological order
            place: Place label returned by the provider

        Returns:
            ForecastSummary, or None when no usable sample is present
        """
        samples = [s for s in (self.parse_sample(item) for item in items) if s is not None]
        if not samples:
            self.logger.warning("Forecast contained no usable samples")
            return None

        window = constants.SAMPLES_PER_DAY
        today = self.average(samples[:window])
        tomorrow = self.average(samples[window:2 * window])

        rainy_tomorrow = (
            tomorrow is not None
            and tomorrow.precipitation_probability_pct >= constants.RAINY_TOMORROW_POP_PCT
        )

        self.logger.debug(
            f"Forecast summary - now: {samples[0].temperature_c:.1f}°C, "
            f"today pop: {today.precipitation_probability_pct:.0f}%, "
            f"tomorrow pop: "
            f"{tomorrow.precipitation_probability_pct if tomorrow else 0:.0f}%"
        )

        return ForecastSummary(
            now=samples[0],
            today=today,
            tomorrow=tomorrow,
            rainy_tomorrow=rainy_tomorrow,
            place=place,
        )
