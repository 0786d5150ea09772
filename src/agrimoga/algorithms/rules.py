"""
Threshold rule evaluation.

Scores a weather reading against a disease rule and maps the score to the
shared three-tier risk scale:

    score >= 4  -> high
    score >= 2  -> medium
    otherwise   -> low

Each defined threshold that holds adds one point. A rule flagged for soil
saturation adds two points when the soil is wet.
"""

from ..core import constants
from ..models import DiseaseRule, RiskTier, WeatherReading


class ThresholdRuleEvaluator:
    """Stateless scoring of disease rules."""

    @staticmethod
    def evaluate(rule: DiseaseRule, reading: WeatherReading) -> int:
        """
        Score a reading against a rule.

        Args:
            rule: Disease rule with optional thresholds
            reading: Weather reading (humidity and rain probability fall back
                     to the combined rain/humidity value)

        Returns:
            Non-negative integer score
        """
        score = 0
        temperature = reading.temperature_c
        humidity = reading.humidity
        rain_probability = reading.rain_probability

        if rule.temp_min is not None and temperature >= rule.temp_min:
            score += 1
        if rule.temp_max is not None and temperature <= rule.temp_max:
            score += 1

        if rule.humidity_min is not None and humidity >= rule.humidity_min:
            score += 1
        if rule.humidity_max is not None and humidity <= rule.humidity_max:
            score += 1

        if rule.rain_prob_min is not None and rain_probability >= rule.rain_prob_min:
            score += 1

        if rule.soil_wet_flag and reading.soil_is_wet:
            score += constants.SOIL_WET_WEIGHT

        return score

    @staticmethod
    def tier_for_score(score: int) -> RiskTier:
        """Map a score onto the risk tier scale."""
        if score >= constants.HIGH_RISK_SCORE:
            return RiskTier.HIGH
        if score >= constants.MEDIUM_RISK_SCORE:
            return RiskTier.MEDIUM
        return RiskTier.LOW

    @classmethod
    def evaluate_tier(cls, rule: DiseaseRule, reading: WeatherReading) -> RiskTier:
        return cls.tier_for_score(cls.evaluate(rule, reading))
