"""
Tests for the irrigation advisor.

Covers the weather adjustment chain, the network cap, run time and the
qualitative decision.
"""

import pytest  # type: ignore
from unittest.mock import Mock

from src.agrimoga import catalogue
from src.agrimoga.algorithms import (
    IrrigationAdvisor,
    IrrigationConstants,
    minutes_from_flow,
    round_half_up,
)
from src.agrimoga.core.i18n import LocaleContext
from src.agrimoga.models import DecisionKind, PlotConfiguration, WeatherReading


def weather(temp=20, wind=0, rain=0, rainy_tomorrow=False):
    return WeatherReading(
        temperature_c=temp,
        wind_kmh=wind,
        rain_or_humidity_pct=rain,
        rainy_tomorrow=rainy_tomorrow,
    )


class TestHelpers:
    """Test cases for rounding and run-time helpers."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (2.4999, 2),
        (0.5, 1),
        (-2.5, -3),
        (300.0, 300),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_minutes_from_flow(self):
        assert minutes_from_flow(250, 500) == 30
        assert minutes_from_flow(1600, 800) == 120

    def test_minutes_without_flow_is_none(self):
        assert minutes_from_flow(300, 0) is None
        assert minutes_from_flow(300, None) is None
        assert minutes_from_flow(300, -5) is None


class TestIrrigationAdvisor:
    """Test cases for IrrigationAdvisor.recommend."""

    @pytest.fixture
    def advisor(self):
        return IrrigationAdvisor(logger=Mock())

    @pytest.fixture
    def plot(self):
        return PlotConfiguration(area_m2=100)

    def test_warm_strawberry_plot(self, advisor, plot):
        """100 m² of strawberry at 32°C with no network: 2.5 x 1.2 x 100 L."""
        decision = advisor.recommend("strawberry", weather(temp=32, wind=15, rain=10), plot)

        assert decision.quantity == 300
        assert decision.duration_minutes is None
        assert decision.kind is DecisionKind.NORMAL
        assert decision.actionable is True
        assert decision.per_plant is None

    def test_hot_and_windy(self, advisor):
        decision = advisor.recommend(
            "strawberry", weather(temp=36, wind=40), PlotConfiguration(area_m2=10)
        )
        # 2.5 x 1.4 x 1.15 x 10 = 40.25
        assert decision.quantity == 40

    def test_cold_reduces_demand(self, advisor, plot):
        assert advisor.recommend("strawberry", weather(temp=5), plot).quantity == 200

    def test_wind_below_threshold_has_no_effect(self, advisor, plot):
        calm = advisor.recommend("strawberry", weather(wind=0), plot)
        breezy = advisor.recommend("strawberry", weather(wind=34), plot)
        assert calm.quantity == breezy.quantity == 250

    def test_crop_demand_differs(self, advisor, plot):
        assert advisor.recommend("raspberry", weather(), plot).quantity == 300
        assert advisor.recommend("avocado", weather(), plot).quantity == 450

    def test_quantity_never_increases_with_rain(self, advisor, plot):
        quantities = [
            advisor.recommend("strawberry", weather(temp=33, rain=rain), plot).quantity
            for rain in (0, 10, 29, 30, 45, 59, 60, 80, 100)
        ]
        assert quantities == sorted(quantities, reverse=True)

    def test_quantity_is_never_negative(self, advisor, plot):
        for temp in (-40, -5, 10, 25, 35, 60):
            for rain in (-10, 0, 50, 100, 200):
                decision = advisor.recommend("avocado", weather(temp=temp, rain=rain), plot)
                assert decision.quantity >= 0

    def test_postpone_when_rain_tomorrow_after_dry_day(self, advisor, plot):
        decision = advisor.recommend("strawberry", weather(rain=10, rainy_tomorrow=True), plot)

        assert decision.kind is DecisionKind.POSTPONE
        assert decision.actionable is False
        assert decision.quantity == 250

    def test_no_postpone_on_wet_day(self, advisor, plot):
        decision = advisor.recommend("strawberry", weather(rain=20, rainy_tomorrow=True), plot)

        assert decision.kind is DecisionKind.NORMAL
        assert decision.actionable is True

    def test_emitters_cap_one_hour_of_flow(self, advisor):
        plot = PlotConfiguration(area_m2=100, emitters_per_m2=1, emitter_flow_lph=2)
        decision = advisor.recommend("strawberry", weather(), plot)

        assert decision.uncapped_quantity == 250
        assert decision.quantity == 200
        assert decision.duration_minutes == 60
        assert decision.kind is DecisionKind.NORMAL

    def test_heavily_capped_is_light(self, advisor):
        plot = PlotConfiguration(area_m2=100, emitters_per_m2=0.5, emitter_flow_lph=2)
        decision = advisor.recommend("strawberry", weather(), plot)

        assert decision.quantity == 100
        assert decision.kind is DecisionKind.LIGHT

    def test_pump_flow_sets_duration(self, advisor):
        plot = PlotConfiguration(area_m2=100, pump_flow_lph=500)
        decision = advisor.recommend("strawberry", weather(), plot)

        assert decision.quantity == 250
        assert decision.duration_minutes == 30

    def test_large_volume_is_heavy(self, advisor):
        decision = advisor.recommend("strawberry", weather(), PlotConfiguration(area_m2=1000))

        assert decision.quantity == 2500
        assert decision.kind is DecisionKind.HEAVY

    def test_zone_preset_doses_per_plant(self, advisor):
        zone = catalogue.get_crop("strawberry").zones["Zone A (100 m²)"]
        plot = PlotConfiguration.from_zone(zone, pump_flow_lph=800)

        decision = advisor.recommend("strawberry", weather(), plot)

        assert decision.quantity == 1600
        assert decision.per_plant == 4.0
        assert decision.duration_minutes == 120
        assert decision.kind is DecisionKind.NORMAL

    @pytest.mark.parametrize("area", [0, -50])
    def test_empty_plot_is_light(self, advisor, area):
        decision = advisor.recommend(
            "strawberry", weather(), PlotConfiguration(area_m2=area), LocaleContext("en")
        )

        assert decision.quantity == 0
        assert decision.kind is DecisionKind.LIGHT
        assert decision.rationale == "No area or plants to water."

    def test_out_of_range_weather_is_clamped(self, advisor, plot):
        wild = advisor.recommend("strawberry", weather(temp=80, wind=500, rain=-20), plot)
        edge = advisor.recommend("strawberry", weather(temp=50, wind=90, rain=0), plot)
        assert wild == edge

        messages = [call[0][0] for call in advisor.logger.debug.call_args_list]
        assert any(m.startswith("Clamped weather reading") for m in messages)

    def test_decision_text_follows_locale(self, advisor, plot):
        decision = advisor.recommend("strawberry", weather(), plot, LocaleContext("fr"))

        assert decision.title == "Irrigation normale"
        assert decision.tip == catalogue.get_crop("strawberry").tip.resolve("fr")

    def test_unknown_crop_uses_strawberry(self, advisor, plot):
        assert advisor.recommend("kiwi", weather(), plot).quantity == 250

    def test_repeated_advice_is_identical(self, advisor, plot):
        reading = weather(temp=31, wind=36, rain=35)
        assert advisor.recommend("raspberry", reading, plot) == advisor.recommend("raspberry", reading, plot)


class TestIrrigationConstants:
    """Test cases for tunable adjustment constants."""

    def test_defaults(self):
        settings = IrrigationConstants()
        assert settings.windy_kmh == 35
        assert settings.warm_multiplier == 1.2

    def test_override_wind_threshold(self):
        settings = IrrigationConstants.from_overrides({"windy_kmh": 40})
        advisor = IrrigationAdvisor(settings, logger=Mock())

        assert advisor.adjustment_multiplier(weather(wind=38)) == 1.0
        assert IrrigationAdvisor(logger=Mock()).adjustment_multiplier(weather(wind=38)) == 1.15

    def test_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown irrigation constants"):
            IrrigationConstants.from_overrides({"gust_kmh": 50})

    def test_non_numeric_value_rejected(self):
        with pytest.raises(ValueError):
            IrrigationConstants.from_overrides({"windy_kmh": "strong"})

    def test_empty_overrides_give_defaults(self):
        assert IrrigationConstants.from_overrides(None) == IrrigationConstants()
        assert IrrigationConstants.from_overrides({}) == IrrigationConstants()
