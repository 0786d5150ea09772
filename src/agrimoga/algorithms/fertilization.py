"""
Fertilization planner.

Splits a seasonal N/P/K target into equal doses. Values are not rounded;
callers round for display only.
"""

import logging
from datetime import date, timedelta
from typing import Any, Optional, Tuple

from .. import catalogue
from ..core import constants
from ..models import FertilizationPlan, NPK
from ..processing import InputValidator


class FertilizationPlanner:
    """Divide seasonal nutrient targets into per-application doses."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize fertilization planner.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.validator = InputValidator(logger)

    def plan(self, seasonal: NPK, dose_count: Any) -> FertilizationPlan:
        """
        Split a seasonal target into dose_count equal doses.

        Args:
            seasonal: Seasonal N/P/K target
            dose_count: Number of applications

        Returns:
            FertilizationPlan

        Raises:
            ValidationError: If dose_count is not a positive integer
        """
        doses = self.validator.validate_dose_count(dose_count)
        per_dose = NPK(
            n=seasonal.n / doses,
            p=seasonal.p / doses,
            k=seasonal.k / doses,
        )
        self.logger.debug(
            f"Fertilization plan: {doses} doses of "
            f"N {per_dose.n:.2f} / P {per_dose.p:.2f} / K {per_dose.k:.2f}"
        )
        return FertilizationPlan(dose_count=doses, per_dose=per_dose)

    def schedule(
        self,
        plan: FertilizationPlan,
        start: date,
        interval_days: int
    ) -> FertilizationPlan:
        """
        Attach application dates to a plan.

        The interval is raised to the minimum of 3 days when shorter.
        """
        interval = max(constants.MIN_DOSE_INTERVAL_DAYS, int(interval_days or 0))
        dates: Tuple[date, ...] = tuple(
            start + timedelta(days=i * interval) for i in range(plan.dose_count)
        )
        return FertilizationPlan(
            dose_count=plan.dose_count,
            per_dose=plan.per_dose,
            schedule=dates,
        )

    def default_target(self, crop: str) -> NPK:
        """Base seasonal target for a crop."""
        return catalogue.get_crop(crop).fertilization_target

    @staticmethod
    def format_dose(per_dose: NPK) -> str:
        """Display form of a dose, one decimal place."""
        return f"N {per_dose.n:.1f} / P {per_dose.p:.1f} / K {per_dose.k:.1f}"
