"""
Disease risk advisor.

Combines the per-disease rule scores of a crop into a single risk tier.
"""

import logging
from typing import Iterable, List, Optional

from .. import catalogue
from ..core.i18n import LocaleContext
from ..models import Disease, DiseaseScore, RiskAssessment, RiskTier, WeatherReading
from ..processing import InputValidator
from .rules import ThresholdRuleEvaluator


class DiseaseRiskAdvisor:
    """Assess the highest disease-risk tier for a crop."""

    def __init__(
        self,
        diseases: Optional[Iterable[Disease]] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize disease risk advisor.

        Args:
            diseases: Disease catalogue (defaults to the built-in catalogue)
            logger: Logger instance
        """
        self.diseases = tuple(diseases) if diseases is not None else catalogue.DISEASES
        self.logger = logger or logging.getLogger(__name__)
        self.validator = InputValidator(self.logger)

    def assess(
        self,
        crop: str,
        reading: WeatherReading,
        locale: Optional[LocaleContext] = None,
        include_breakdown: bool = True
    ) -> RiskAssessment:
        """
        Assess disease risk for a crop under a weather reading.

        Without a breakdown the evaluation stops at the first disease that
        reaches the high tier.

        Args:
            crop: Crop key
            reading: Weather reading (clamped before scoring)
            locale: Language used for disease names in the breakdown
            include_breakdown: Score every disease of the crop

        Returns:
            RiskAssessment with the highest tier observed
        """
        locale = locale or LocaleContext()
        reading, _ = self.validator.sanitize_reading(reading)
        scoped = catalogue.diseases_for(crop, self.diseases)

        top = RiskTier.LOW
        breakdown: List[DiseaseScore] = []

        for disease in scoped:
            score = ThresholdRuleEvaluator.evaluate(disease.rule, reading)
            tier = ThresholdRuleEvaluator.tier_for_score(score)

            if include_breakdown:
                breakdown.append(DiseaseScore(
                    disease_id=disease.id,
                    name=locale.text(disease.name),
                    score=score,
                    tier=tier,
                ))

            if tier.rank > top.rank:
                top = tier
            if top is RiskTier.HIGH and not include_breakdown:
                break

        self.logger.debug(
            f"Disease risk for {crop}: {top.value} "
            f"({len(scoped)} rules, temp={reading.temperature_c:.0f}°C, "
            f"humidity={reading.humidity:.0f}%)"
        )

        return RiskAssessment(tier=top, breakdown=tuple(breakdown))
