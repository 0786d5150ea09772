"""
Input validation module.

Clamps advisory inputs into their valid ranges. Only divisor parameters are
rejected outright.
"""

import logging
import math
from dataclasses import fields
from typing import Any, List, Optional, Tuple

from ..core.exceptions import ValidationError
from ..models import PlotConfiguration, WeatherReading


def to_number(value: Any, default: float = 0.0) -> float:
    """Coerce value to a finite float, or return default."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


class InputValidator:
    """Clamp and check advisory inputs."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize input validator.

        Args:
            logger: Logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def _changed_fields(self, before: Any, after: Any) -> List[str]:
        changed = []
        for f in fields(before):
            old, new = getattr(before, f.name), getattr(after, f.name)
            if old != new and not (old is None and new is None):
                changed.append(f"{f.name}: {old!r} -> {new!r}")
        return changed

    def sanitize_reading(self, reading: WeatherReading) -> Tuple[WeatherReading, List[str]]:
        """
        Clamp a weather reading into physical ranges.

        Returns:
            Tuple of (clamped_reading, list_of_adjustments)
        """
        clamped = reading.clamped()
        adjustments = self._changed_fields(reading, clamped)
        if adjustments:
            self.logger.debug(f"Clamped weather reading: {', '.join(adjustments)}")
        return clamped, adjustments

    def sanitize_plot(self, plot: PlotConfiguration) -> Tuple[PlotConfiguration, List[str]]:
        """
        Clamp plot geometry and network values.

        Returns:
            Tuple of (clamped_plot, list_of_adjustments)
        """
        clamped = plot.clamped()
        adjustments = self._changed_fields(plot, clamped)
        if adjustments:
            self.logger.debug(f"Clamped plot configuration: {', '.join(adjustments)}")
        return clamped, adjustments

    def validate_dose_count(self, dose_count: Any) -> int:
        """
        Check a fertilizer dose count.

        Raises:
            ValidationError: If dose_count is not a positive integer
        """
        if isinstance(dose_count, bool) or not isinstance(dose_count, int):
            if isinstance(dose_count, float) and dose_count.is_integer():
                dose_count = int(dose_count)
            else:
                raise ValidationError(f"Dose count must be a positive integer, got {dose_count!r}")
        if dose_count <= 0:
            raise ValidationError(f"Dose count must be a positive integer, got {dose_count!r}")
        return dose_count
