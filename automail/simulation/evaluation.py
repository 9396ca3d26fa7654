"""
Multi-seed evaluation of a strategy configuration.

Runs one fresh engine per seed and aggregates the run statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

import numpy as np
from loguru import logger

from automail.core.config import SimulationConfig
from automail.core.errors import AutomailError
from automail.simulation.engine import SimulationEngine, SimulationStatistics

METRICS = ("total_score", "final_tick", "delivered")


@dataclass
class EvaluationRun:
    """Result from a single seeded run."""

    seed: int
    statistics: SimulationStatistics = field(default_factory=SimulationStatistics)
    success: bool = True
    error: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "seed": self.seed,
            "statistics": self.statistics.to_dict(),
            "success": self.success,
            "error": self.error,
        }


@dataclass
class EvaluationSummary:
    """Summary statistics over all runs."""

    num_runs: int
    successful_runs: int
    completed_runs: int
    runs: List[EvaluationRun] = field(default_factory=list)

    metrics_mean: Dict[str, float] = field(default_factory=dict)
    metrics_std: Dict[str, float] = field(default_factory=dict)
    metrics_min: Dict[str, float] = field(default_factory=dict)
    metrics_max: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "num_runs": self.num_runs,
            "successful_runs": self.successful_runs,
            "completed_runs": self.completed_runs,
            "metrics_mean": self.metrics_mean,
            "metrics_std": self.metrics_std,
            "metrics_min": self.metrics_min,
            "metrics_max": self.metrics_max,
            "runs": [run.to_dict() for run in self.runs],
        }


def run_seed(config: SimulationConfig, seed: int) -> EvaluationRun:
    """Run ``config`` once with ``seed``; core failures mark the run unsuccessful."""
    engine = SimulationEngine(config.with_overrides(seed=seed))
    try:
        statistics = engine.run()
    except AutomailError as e:
        return EvaluationRun(seed=seed, statistics=engine.statistics, success=False, error=str(e))
    return EvaluationRun(seed=seed, statistics=statistics)


def evaluate(config: SimulationConfig, seeds: Iterable[int]) -> EvaluationSummary:
    """
    Evaluate a configuration over several seeds.

    Args:
        config: Base configuration; its own seed is ignored
        seeds: One run per seed, in order

    Returns:
        Per-run results plus mean/std/min/max of each metric over the
        successful runs
    """
    runs = [run_seed(config, seed) for seed in seeds]
    successful = [run for run in runs if run.success]

    summary = EvaluationSummary(
        num_runs=len(runs),
        successful_runs=len(successful),
        completed_runs=sum(1 for run in successful if run.statistics.completed),
        runs=runs,
    )

    if not successful:
        logger.warning("No successful runs to summarize")
        return summary

    for key in METRICS:
        values = np.array([getattr(run.statistics, key) for run in successful], dtype=float)
        summary.metrics_mean[key] = float(np.mean(values))
        summary.metrics_std[key] = float(np.std(values))
        summary.metrics_min[key] = float(np.min(values))
        summary.metrics_max[key] = float(np.max(values))

    logger.info(f"Evaluation completed: {summary.successful_runs}/{summary.num_runs} successful")
    return summary
