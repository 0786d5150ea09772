"""
Irrigation advisor.

Turns crop demand, weather and plot hydraulics into a daily volume, a run time
and a qualitative decision. The adjustment chain is applied in a fixed order:

1. temperature band (hot / warm / cold, mutually exclusive)
2. wind boost
3. rain / humidity suppression (heavy / moderate, mutually exclusive)

The daily volume is capped at what the drip network can deliver in one hour.
"""

import logging
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Optional

from .. import catalogue
from ..core import constants
from ..core.i18n import LocaleContext
from ..models import AdvisoryDecision, DecisionKind, PlotConfiguration, WeatherReading
from ..processing import InputValidator


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def minutes_from_flow(total_liters: float, flow_lph: float) -> Optional[int]:
    """
    Run time needed to deliver total_liters at flow_lph.

    Returns:
        Minutes, or None when no flow is configured
    """
    if not flow_lph or flow_lph <= 0:
        return None
    return round_half_up(total_liters / flow_lph * 60)


@dataclass(frozen=True)
class IrrigationConstants:
    """Tunable thresholds and multipliers of the adjustment chain."""

    hot_temperature_c: float = constants.HOT_TEMPERATURE_C
    hot_multiplier: float = constants.HOT_MULTIPLIER
    warm_temperature_c: float = constants.WARM_TEMPERATURE_C
    warm_multiplier: float = constants.WARM_MULTIPLIER
    cold_temperature_c: float = constants.COLD_TEMPERATURE_C
    cold_multiplier: float = constants.COLD_MULTIPLIER
    windy_kmh: float = constants.WINDY_KMH
    wind_multiplier: float = constants.WIND_MULTIPLIER
    heavy_rain_pct: float = constants.HEAVY_RAIN_PCT
    heavy_rain_multiplier: float = constants.HEAVY_RAIN_MULTIPLIER
    moderate_rain_pct: float = constants.MODERATE_RAIN_PCT
    moderate_rain_multiplier: float = constants.MODERATE_RAIN_MULTIPLIER
    postpone_max_rain_pct: float = constants.POSTPONE_MAX_RAIN_PCT
    light_fraction: float = constants.LIGHT_FRACTION
    heavy_threshold_liters: float = constants.HEAVY_THRESHOLD_LITERS

    @classmethod
    def from_overrides(cls, overrides: Optional[Dict[str, Any]]) -> "IrrigationConstants":
        """
        Build constants from a configuration mapping.

        Raises:
            ValueError: On unknown keys or non-numeric values
        """
        if not overrides:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown irrigation constants: {', '.join(sorted(unknown))}")
        try:
            values = {k: float(v) for k, v in overrides.items()}
        except (TypeError, ValueError):
            raise ValueError(f"Irrigation constants must be numeric: {overrides!r}")
        return replace(cls(), **values)


class IrrigationAdvisor:
    """Recommend a daily irrigation volume and run time."""

    def __init__(
        self,
        settings: Optional[IrrigationConstants] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize irrigation advisor.

        Args:
            settings: Adjustment chain constants
            logger: Logger instance
        """
        self.settings = settings or IrrigationConstants()
        self.logger = logger or logging.getLogger(__name__)
        self.validator = InputValidator(self.logger)

    def adjustment_multiplier(self, reading: WeatherReading) -> float:
        """Combined weather multiplier for a clamped reading."""
        s = self.settings
        multiplier = 1.0

        if reading.temperature_c >= s.hot_temperature_c:
            multiplier *= s.hot_multiplier
        elif reading.temperature_c >= s.warm_temperature_c:
            multiplier *= s.warm_multiplier
        elif reading.temperature_c <= s.cold_temperature_c:
            multiplier *= s.cold_multiplier

        if reading.wind_kmh >= s.windy_kmh:
            multiplier *= s.wind_multiplier

        if reading.rain_or_humidity_pct >= s.heavy_rain_pct:
            multiplier *= s.heavy_rain_multiplier
        elif reading.rain_or_humidity_pct >= s.moderate_rain_pct:
            multiplier *= s.moderate_rain_multiplier

        return multiplier

    def should_postpone(self, reading: WeatherReading) -> bool:
        """Rain tomorrow on a dry day means the watering can wait."""
        return (
            reading.rainy_tomorrow
            and reading.rain_or_humidity_pct < self.settings.postpone_max_rain_pct
        )

    def recommend(
        self,
        crop: str,
        reading: WeatherReading,
        plot: PlotConfiguration,
        locale: Optional[LocaleContext] = None
    ) -> AdvisoryDecision:
        """
        Recommend today's irrigation.

        Args:
            crop: Crop key (unknown keys use strawberry)
            reading: Weather reading
            plot: Plot geometry and network
            locale: Language for the decision text

        Returns:
            AdvisoryDecision
        """
        locale = locale or LocaleContext()
        profile = catalogue.get_crop(crop)
        reading, _ = self.validator.sanitize_reading(reading)
        plot, _ = self.validator.sanitize_plot(plot)

        if plot.per_plant:
            units = plot.plant_count
            base_demand = profile.demand_per_plant
        else:
            units = plot.area_m2
            base_demand = profile.demand_per_m2

        multiplier = self.adjustment_multiplier(reading)
        per_unit = base_demand * multiplier
        uncapped = max(0, round_half_up(per_unit * units))

        # One hour of the emitters, or of the pump when no emitters are described
        capacity_lph = plot.emitter_flow_total_lph or plot.pump_flow_lph
        if capacity_lph > 0:
            quantity = min(uncapped, max(0, round_half_up(capacity_lph)))
        else:
            quantity = uncapped

        delivery_lph = plot.pump_flow_lph or plot.emitter_flow_total_lph
        duration = minutes_from_flow(quantity, delivery_lph)

        postpone = self.should_postpone(reading)
        s = self.settings

        if units <= 0:
            kind, reason_key = DecisionKind.LIGHT, "decision.light.empty"
            quantity, uncapped, duration = 0, 0, minutes_from_flow(0, delivery_lph)
        elif postpone:
            kind, reason_key = DecisionKind.POSTPONE, "decision.postpone.reason"
        elif quantity == 0 or quantity < s.light_fraction * uncapped:
            kind, reason_key = DecisionKind.LIGHT, "decision.light.reason"
        elif quantity > s.heavy_threshold_liters:
            kind, reason_key = DecisionKind.HEAVY, "decision.heavy.reason"
        else:
            kind, reason_key = DecisionKind.NORMAL, "decision.normal.reason"

        self.logger.debug(
            f"Irrigation for {profile.key}: base={base_demand} x{multiplier:.3f} "
            f"x{units} units -> {uncapped} L, capped {quantity} L, "
            f"decision={kind.value}"
        )

        return AdvisoryDecision(
            kind=kind,
            quantity=quantity,
            duration_minutes=duration,
            title=locale.t(f"decision.{kind.value}.title"),
            rationale=locale.t(reason_key),
            tip=locale.text(profile.tip),
            actionable=not (kind is DecisionKind.POSTPONE),
            uncapped_quantity=uncapped,
            per_plant=round(per_unit, 1) if plot.per_plant else None,
        )
