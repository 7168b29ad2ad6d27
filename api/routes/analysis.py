"""Outcome analysis endpoints."""

from typing import Mapping, Sequence

from fastapi import APIRouter, HTTPException

from api.schemas import (
    CountsResponse,
    OutcomesRequest,
    PredictionResponse,
    ProbabilitiesResponse,
    SummaryResponse,
)
from config import config
from core.history import decode_run_length
from core.outcomes import HOUSE_EDGE, Outcome
from core.statistics import predict, summarize

router = APIRouter()


def _by_letter(values: Mapping[Outcome, float]) -> dict[str, float]:
    return {o.value: values[o] for o in Outcome}


def build_summary(outcomes: Sequence[Outcome]) -> SummaryResponse:
    """Run the estimator over outcomes and shape the response."""
    estimation = config.estimation
    summary = summarize(
        outcomes,
        alpha=estimation.alpha,
        empirical_weight=estimation.empirical_weight,
        prior_weight=estimation.prior_weight,
        confidence_scale=estimation.confidence_scale,
    )
    prediction = predict(summary.probabilities)
    return SummaryResponse(
        hands=summary.total,
        counts=CountsResponse(**{o.value: n for o, n in summary.counts.items()}),
        probabilities=ProbabilitiesResponse(**_by_letter(summary.probabilities)),
        confidence=summary.confidence,
        alternation_rate=summary.alt_rate,
        prediction=PredictionResponse(
            side=prediction.side.value,
            probability=prediction.probability,
            tie_probability=prediction.tie_probability,
        ),
        house_edge=ProbabilitiesResponse(**_by_letter(HOUSE_EDGE)),
    )


@router.post("/summary")
async def analyze(request: OutcomesRequest) -> SummaryResponse:
    """Summarize an outcome sequence supplied in the request."""
    try:
        outcomes = decode_run_length(request.outcomes, config.history.max_outcomes)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return build_summary(outcomes)
