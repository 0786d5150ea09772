"""
Advisory algorithms.

Provides the rule evaluator and the irrigation, disease, fertilization and
pricing advisors.
"""

from .rules import ThresholdRuleEvaluator
from .disease import DiseaseRiskAdvisor
from .irrigation import IrrigationAdvisor, IrrigationConstants, minutes_from_flow, round_half_up
from .fertilization import FertilizationPlanner
from .pricing import PricingCalculator
from . import harvest

__all__ = [
    "ThresholdRuleEvaluator",
    "DiseaseRiskAdvisor",
    "IrrigationAdvisor",
    "IrrigationConstants",
    "minutes_from_flow",
    "round_half_up",
    "FertilizationPlanner",
    "PricingCalculator",
    "harvest",
]
