"""Outcome estimation: smoothed probabilities and next-hand prediction."""

from core.statistics.summary import (
    OutcomeSummary,
    alternation_rate,
    blend_with_prior,
    confidence_score,
    count_outcomes,
    laplace_smoothing,
    summarize,
)
from core.statistics.predictor import Prediction, predict

__all__ = [
    "OutcomeSummary",
    "alternation_rate",
    "blend_with_prior",
    "confidence_score",
    "count_outcomes",
    "laplace_smoothing",
    "summarize",
    "Prediction",
    "predict",
]
