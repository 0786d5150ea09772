"""
Input processing for the Agrimoga advisory engine.

Provides forecast aggregation, unit conversion and input clamping.
"""

from .aggregator import ForecastAggregator
from .converter import UnitConverter
from .validator import InputValidator, to_number

__all__ = [
    "ForecastAggregator",
    "UnitConverter",
    "InputValidator",
    "to_number",
]
