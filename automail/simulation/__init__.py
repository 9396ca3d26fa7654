"""
Simulation module for Automail.

Provides the deterministic mail generator, the tick-driven simulation
engine and multi-seed evaluation.
"""

from automail.simulation.generator import MailGenerator
from automail.simulation.engine import (
    SimulationEngine,
    SimulationStatus,
    SimulationStatistics,
    delivery_score,
)
from automail.simulation.evaluation import (
    evaluate,
    EvaluationRun,
    EvaluationSummary,
)

__all__ = [
    "MailGenerator",
    "SimulationEngine",
    "SimulationStatus",
    "SimulationStatistics",
    "delivery_score",
    "evaluate",
    "EvaluationRun",
    "EvaluationSummary",
]
