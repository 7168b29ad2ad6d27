"""Monte Carlo bankroll simulation."""

from core.simulation.shoe import (
    OutcomeDistribution,
    RandomSource,
    RoundRecord,
    ShoeRunResult,
    ShoeSimulator,
    run_shoe,
)
from core.simulation.batch import BatchResult, BatchSimulator, aggregate, run_batch

__all__ = [
    "OutcomeDistribution",
    "RandomSource",
    "RoundRecord",
    "ShoeRunResult",
    "ShoeSimulator",
    "run_shoe",
    "BatchResult",
    "BatchSimulator",
    "aggregate",
    "run_batch",
]
